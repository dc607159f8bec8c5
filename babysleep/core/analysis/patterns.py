"""
Module for summarizing a period of sleep into the metrics shown on the
insights page and sent to the recommendation prompt.
"""

import logging

from babysleep.core.analysis.sleep_metrics import classify_night_day, summarize_period
from babysleep.core.analysis.wake_windows import compute_raw_average_wake_window
from babysleep.core.models.output_models import SleepMetrics

logger = logging.getLogger(__name__)


def analyze_sleep_patterns(sessions, tz=None, night_start_hour=None, night_end_hour=None):
    """
    Calculate the summary metrics for a period of sessions.

    The wake-window figure is the plain historical mean over all adjacent
    pairs, unfiltered.

    Args:
        sessions: Sessions in the period, open ones allowed
        tz: Caregiver's zone for the night/day split

    Returns:
        SleepMetrics: All zeros when nothing has been completed yet
    """
    sessions = list(sessions)
    summary = summarize_period(sessions)

    if summary.count == 0:
        return SleepMetrics()

    split = classify_night_day(sessions, tz, night_start_hour, night_end_hour)

    metrics = SleepMetrics(
        avg_duration_minutes=summary.avg_minutes,
        total_sessions=summary.count,
        avg_wake_window_minutes=compute_raw_average_wake_window(sessions),
        night_count=split.night,
        day_count=split.day
    )
    logger.debug(f"Analyzed {len(sessions)} sessions: {metrics}")
    return metrics
