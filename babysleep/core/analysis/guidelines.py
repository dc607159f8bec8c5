"""
Age-based reference values used when a child's own history is too thin.
"""

import math
from datetime import date, datetime, time

from babysleep.utils.constants import (
    default_values, recommended_daily_sleep_hours, recommended_wake_window_minutes,
)
from babysleep.utils.time_utils import as_utc


def _step_lookup(table, age_in_months):
    if age_in_months is None or age_in_months < 0:
        raise ValueError(f"Age in months must be a non-negative number, got {age_in_months}")

    # Tables end with an unbounded threshold, so the scan always matches
    return next(value for threshold, value in table if age_in_months <= threshold)


def recommended_wake_window(age_in_months) -> int:
    """Recommended wake window in minutes for a child of the given age."""
    return _step_lookup(recommended_wake_window_minutes, age_in_months)


def recommended_daily_sleep(age_in_months) -> int:
    """Recommended total sleep in hours per day for a child of the given age."""
    return _step_lookup(recommended_daily_sleep_hours, age_in_months)


def age_in_months(birth_date, now: datetime) -> int:
    """
    Whole months between birth and `now`, using a fixed 30.44-day month.

    A bare date is read as midnight UTC on that day. Birth dates in the
    future give 0.
    """
    if isinstance(birth_date, datetime):
        born = as_utc(birth_date)
    elif isinstance(birth_date, date):
        born = as_utc(datetime.combine(birth_date, time.min))
    else:
        raise TypeError(f"birth_date must be a date or datetime, got {type(birth_date).__name__}")

    days = (as_utc(now) - born).total_seconds() / 86400
    return max(0, math.floor(days / default_values['days_per_month']))
