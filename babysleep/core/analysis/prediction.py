"""
Module for predicting the next sleep event (wake-up or nap) for a child.

The prediction never fails: missing history degrades to the age-based
reference table, and no data at all yields the "ready to track" state.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

import numpy as np

from babysleep.core.analysis.guidelines import recommended_wake_window
from babysleep.core.analysis.sleep_metrics import compute_duration, most_recent_completed
from babysleep.core.analysis.wake_windows import compute_average_wake_window
from babysleep.core.models.data_models import SleepSession
from babysleep.core.models.output_models import NextEventBand, PredictedEvent, WakeWindowSource
from babysleep.utils.constants import default_values
from babysleep.utils.time_utils import as_utc, minutes_between

logger = logging.getLogger(__name__)


def predict_next_event(
    sessions,
    active_session: Optional[SleepSession],
    age_in_months: int,
    now: datetime,
    recent_session_count=None,
    due_soon_minutes=None,
    max_wake_window_minutes=None
) -> PredictedEvent:
    """
    Predict when the child will next wake up or need a nap.

    Args:
        sessions: Recent sessions for the child, in any order
        active_session: The open session if the child is asleep, else None
        age_in_months: Child's age, used when there is no wake-window history
        now: Current instant, passed in so results are reproducible

    Returns:
        PredictedEvent: Band plus the minute counts behind it
    """
    now = as_utc(now)
    sessions = list(sessions)
    recent_session_count = recent_session_count or default_values['recent_session_count']
    due_soon_minutes = default_values['due_soon_minutes'] if due_soon_minutes is None else due_soon_minutes

    if active_session is not None:
        return _predict_wake(sessions, active_session, now, recent_session_count)

    last_sessions = most_recent_completed(sessions, limit=1)
    if not last_sessions:
        return PredictedEvent(band=NextEventBand.READY_TO_TRACK)

    minutes_awake = math.floor(minutes_between(last_sessions[0].end_time, now))

    average_window = compute_average_wake_window(sessions, max_wake_window_minutes)
    if average_window > 0:
        window, source = average_window, WakeWindowSource.HISTORY
    else:
        window, source = float(recommended_wake_window(age_in_months)), WakeWindowSource.AGE_RECOMMENDATION

    minutes_until_next_nap = max(0.0, window - minutes_awake)

    if minutes_until_next_nap <= 0:
        band = NextEventBand.DUE_NOW
    elif minutes_until_next_nap <= due_soon_minutes:
        band = NextEventBand.DUE_SOON
    else:
        band = NextEventBand.NOT_YET

    return PredictedEvent(
        band=band,
        minutes_awake=minutes_awake,
        minutes_until_next_nap=minutes_until_next_nap,
        wake_window_minutes=window,
        wake_window_source=source
    )


def _predict_wake(sessions, active_session, now, recent_session_count):
    minutes_elapsed = math.floor(minutes_between(active_session.start_time, now))

    recent = most_recent_completed(
        [s for s in sessions if s.id != active_session.id],
        limit=recent_session_count
    )
    if not recent:
        return PredictedEvent(band=NextEventBand.SLEEPING, minutes_elapsed=minutes_elapsed)

    average_sleep = float(np.mean([compute_duration(s) for s in recent]))
    predicted_wake_time = active_session.start_time + timedelta(minutes=average_sleep)
    minutes_until_wake = math.floor(minutes_between(now, predicted_wake_time))

    if minutes_until_wake <= 0:
        # Already past the usual wake time; only the elapsed time is meaningful
        logger.debug(f"Session {active_session.id} is {-minutes_until_wake} minutes past its estimate")
        return PredictedEvent(band=NextEventBand.SLEEPING, minutes_elapsed=minutes_elapsed)

    return PredictedEvent(
        band=NextEventBand.SLEEPING,
        minutes_elapsed=minutes_elapsed,
        predicted_wake_time=predicted_wake_time,
        minutes_until_wake=minutes_until_wake,
        average_sleep_minutes=average_sleep
    )
