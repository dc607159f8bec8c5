"""
Module for calculating sleep metrics and statistics over a child's sleep sessions.

Every function here is pure: it reads a snapshot of sessions and returns
freshly built values. Open sessions and sessions whose end is not after their
start are left out of all aggregates.
"""

import logging
from typing import Iterable, List

import numpy as np
import pandas as pd

from babysleep.core.models.data_models import SleepSession
from babysleep.core.models.output_models import DailyTotal, NightDaySplit, PeriodSummary
from babysleep.utils.constants import default_values
from babysleep.utils.time_utils import minutes_between, to_local

logger = logging.getLogger(__name__)


def compute_duration(session: SleepSession) -> float:
    """
    Length of a finished session in minutes.

    Args:
        session: A session with both timestamps present

    Returns:
        float: Minutes asleep, never negative
    """
    if session.end_time is None:
        raise ValueError(f"Session {session.id} has no end time; filter open sessions first")
    return max(0.0, minutes_between(session.start_time, session.end_time))


def completed_sessions(sessions: Iterable[SleepSession]) -> List[SleepSession]:
    return [s for s in sessions if s.is_completed]


def most_recent_completed(sessions: Iterable[SleepSession], limit=None) -> List[SleepSession]:
    """Completed sessions, newest start first, optionally capped at `limit`."""
    ordered = sorted(completed_sessions(sessions), key=lambda s: s.start_time, reverse=True)
    return ordered[:limit] if limit is not None else ordered


def summarize_period(sessions: Iterable[SleepSession]) -> PeriodSummary:
    """
    Total and average sleep over the completed sessions of a period.

    Zero completed sessions is a valid "no data yet" state and yields zeros.
    """
    durations = [compute_duration(s) for s in completed_sessions(sessions)]

    if not durations:
        return PeriodSummary(total_minutes=0.0, avg_minutes=0.0, count=0)

    total_minutes = float(np.sum(durations))
    return PeriodSummary(
        total_minutes=total_minutes,
        avg_minutes=total_minutes / len(durations),
        count=len(durations)
    )


def is_night_hour(hour, night_start_hour=None, night_end_hour=None) -> bool:
    night_start_hour = default_values['night_start_hour'] if night_start_hour is None else night_start_hour
    night_end_hour = default_values['night_end_hour'] if night_end_hour is None else night_end_hour
    return hour >= night_start_hour or hour < night_end_hour


def classify_night_day(sessions, tz=None, night_start_hour=None, night_end_hour=None) -> NightDaySplit:
    """
    Bucket completed sessions into night or day by the local hour they started.

    Args:
        sessions: Sessions to classify; open ones are ignored
        tz: Caregiver's zone; None keeps each timestamp's own wall clock

    Returns:
        NightDaySplit: Counts that add up to the number of completed sessions
    """
    split = NightDaySplit()
    for session in completed_sessions(sessions):
        hour = to_local(session.start_time, tz).hour
        if is_night_hour(hour, night_start_hour, night_end_hour):
            split.night += 1
        else:
            split.day += 1
    return split


def sessions_to_dataframe(sessions, tz=None) -> pd.DataFrame:
    """
    Flatten completed sessions into one row each, with the local start date.
    """
    columns = ['id', 'start_time', 'end_time', 'local_date', 'duration_minutes']
    rows = [
        {
            'id': s.id,
            'start_time': s.start_time,
            'end_time': s.end_time,
            'local_date': to_local(s.start_time, tz).date(),
            'duration_minutes': compute_duration(s),
        }
        for s in completed_sessions(sessions)
    ]
    return pd.DataFrame(rows, columns=columns)


def calculate_daily_totals(sessions, tz=None, days=7) -> List[DailyTotal]:
    """
    Total sleep per local calendar day (by session start), oldest first.

    Args:
        sessions: Sessions for the child
        tz: Caregiver's zone used to pick each session's day
        days: Keep only the most recent `days` days that have data

    Returns:
        list: DailyTotal entries in ascending date order
    """
    data = sessions_to_dataframe(sessions, tz)
    if data.empty:
        return []

    daily = (
        data.groupby('local_date')
        .agg(total_minutes=('duration_minutes', 'sum'), session_count=('id', 'count'))
        .sort_index()
    )
    if days is not None:
        daily = daily.tail(days)

    return [
        DailyTotal(
            date=day,
            total_hours=float(row['total_minutes']) / 60,
            session_count=int(row['session_count'])
        )
        for day, row in daily.iterrows()
    ]
