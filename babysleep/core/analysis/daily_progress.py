"""
Module for day-level progress: today's goal, change versus yesterday, and the
headline insight comparing today with the recent daily average.
"""

from babysleep.core.analysis.guidelines import recommended_daily_sleep
from babysleep.core.analysis.sleep_metrics import (
    completed_sessions, compute_duration, most_recent_completed, summarize_period,
)
from babysleep.core.models.output_models import (
    DailyInsight, DailyTrend, GoalProgress, InsightBand, TrendDirection,
)
from babysleep.utils.constants import default_values
from babysleep.utils.math_utils import round_half_up


def calculate_daily_trend(today_sessions, yesterday_sessions, threshold_hours=None) -> DailyTrend:
    """
    Compare today's completed sleep with yesterday's.

    change_percent is 0 when yesterday has no completed sleep.
    """
    threshold_hours = default_values['trend_threshold_hours'] if threshold_hours is None else threshold_hours

    today_hours = summarize_period(today_sessions).total_minutes / 60
    yesterday_hours = summarize_period(yesterday_sessions).total_minutes / 60
    change = today_hours - yesterday_hours

    change_percent = round_half_up(change / yesterday_hours * 100) if yesterday_hours > 0 else 0

    if change > threshold_hours:
        direction = TrendDirection.UP
    elif change < -threshold_hours:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.FLAT

    return DailyTrend(
        today_hours=today_hours,
        yesterday_hours=yesterday_hours,
        change_hours=change,
        change_percent=change_percent,
        direction=direction
    )


def calculate_goal_progress(today_sessions, age_in_months) -> GoalProgress:
    """Today's completed sleep against the age-appropriate daily total, capped at 100%."""
    slept_hours = summarize_period(today_sessions).total_minutes / 60
    recommended_hours = recommended_daily_sleep(age_in_months)

    return GoalProgress(
        slept_hours=slept_hours,
        recommended_hours=recommended_hours,
        percent=min(100, round_half_up(slept_hours / recommended_hours * 100))
    )


def classify_daily_insight(today_sessions, recent_sessions) -> DailyInsight:
    """
    Pick the headline insight for today.

    The daily average is approximated from the most recent completed sessions
    by assuming a fixed number of sessions per day.
    """
    completed_today = completed_sessions(today_sessions)
    if not completed_today:
        return DailyInsight(band=InsightBand.NO_DATA)

    today_minutes = sum(compute_duration(s) for s in completed_today)

    recent = most_recent_completed(recent_sessions, limit=default_values['insight_window_sessions'])
    if recent:
        approx_days = max(1, len(recent) / default_values['sessions_per_day_estimate'])
        daily_average = sum(compute_duration(s) for s in recent) / approx_days
    else:
        daily_average = 0.0

    difference = today_minutes - daily_average

    if abs(difference) < default_values['consistent_margin_minutes']:
        band = InsightBand.CONSISTENT
    elif difference > default_values['notable_margin_minutes']:
        band = InsightBand.ABOVE_AVERAGE
    elif difference < -default_values['notable_margin_minutes']:
        band = InsightBand.BELOW_AVERAGE
    elif len(completed_today) >= default_values['well_tracked_session_count']:
        band = InsightBand.WELL_TRACKED
    else:
        band = InsightBand.ON_TRACK

    return DailyInsight(
        band=band,
        today_minutes=today_minutes,
        daily_average_minutes=daily_average,
        difference_minutes=difference,
        sessions_today=len(completed_today)
    )
