"""
Wake-window analysis: the awake gaps between consecutive completed sessions.

Two views are exposed and used consistently:
- compute_wake_windows / compute_raw_average_wake_window are the raw history,
  one window per adjacent pair whatever its length.
- compute_average_wake_window is the filtered mean that feeds nap prediction;
  it ignores non-positive windows (out-of-order or overlapping entries) and
  windows above the plausibility cap.
"""

from typing import List

import numpy as np

from babysleep.core.analysis.sleep_metrics import completed_sessions
from babysleep.core.models.output_models import WakeWindow
from babysleep.utils.constants import default_values
from babysleep.utils.time_utils import minutes_between


def compute_wake_windows(sessions) -> List[WakeWindow]:
    """Every wake window between adjacent completed sessions, sorted by session start."""
    ordered = sorted(completed_sessions(sessions), key=lambda s: s.start_time)

    return [
        WakeWindow(
            start=current.end_time,
            end=following.start_time,
            duration_minutes=minutes_between(current.end_time, following.start_time)
        )
        for current, following in zip(ordered, ordered[1:])
    ]


def is_plausible_wake_window(duration_minutes, max_minutes=None) -> bool:
    max_minutes = default_values['max_wake_window_minutes'] if max_minutes is None else max_minutes
    return 0 < duration_minutes <= max_minutes


def compute_average_wake_window(sessions, max_minutes=None) -> float:
    """Mean of the plausible wake windows, 0.0 when none qualify."""
    durations = [
        w.duration_minutes for w in compute_wake_windows(sessions)
        if is_plausible_wake_window(w.duration_minutes, max_minutes)
    ]
    if not durations:
        return 0.0
    return float(np.mean(durations))


def compute_raw_average_wake_window(sessions) -> float:
    """Mean of all wake windows, 0.0 with fewer than two completed sessions."""
    durations = [w.duration_minutes for w in compute_wake_windows(sessions)]
    if not durations:
        return 0.0
    return float(np.mean(durations))
