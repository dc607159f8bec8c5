"""Tests for session durations, period summaries and the night/day split."""

from datetime import date, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from babysleep.core.analysis.patterns import analyze_sleep_patterns
from babysleep.core.analysis.sleep_metrics import (
    calculate_daily_totals,
    classify_night_day,
    compute_duration,
    most_recent_completed,
    summarize_period,
)
from babysleep.core.models.data_models import SleepSession
from tests.conftest import at


class TestComputeDuration:
    """Tests for compute_duration."""

    def test_duration_in_minutes(self, make_session):
        session = make_session(at(10, 8), at(10, 9, 30))
        assert compute_duration(session) == 90.0

    def test_overnight_duration(self, make_session):
        session = make_session(at(10, 19), at(11, 7))
        assert compute_duration(session) == 720.0

    def test_end_before_start_is_clamped_to_zero(self, make_session):
        session = make_session(at(10, 9), at(10, 8))
        assert compute_duration(session) == 0.0

    def test_open_session_raises(self, make_session):
        with pytest.raises(ValueError):
            compute_duration(make_session(at(10, 8)))

    def test_seconds_are_fractional_minutes(self, make_session):
        start = at(10, 8)
        session = make_session(start, start + timedelta(seconds=90))
        assert compute_duration(session) == pytest.approx(1.5)


class TestSessionModel:
    """Tests for SleepSession normalization."""

    def test_iso_strings_with_z_suffix_parse_as_utc(self):
        session = SleepSession(id=1, start_time='2024-05-10T08:00:00Z', end_time='2024-05-10T09:00:00Z')
        assert session.id == '1'
        assert session.start_time.tzinfo is not None
        assert session.is_completed

    def test_naive_timestamps_are_read_as_utc(self):
        session = SleepSession(id='a', start_time='2024-05-10T08:00:00')
        assert session.start_time.utcoffset() == timedelta(0)
        assert session.is_open
        assert not session.is_completed

    def test_zero_length_session_is_not_completed(self, make_session):
        assert not make_session(at(10, 8), at(10, 8)).is_completed


class TestSummarizePeriod:
    """Tests for summarize_period."""

    def test_no_sessions_returns_zeros(self):
        summary = summarize_period([])
        assert (summary.total_minutes, summary.avg_minutes, summary.count) == (0, 0, 0)

    def test_only_open_sessions_returns_zeros(self, make_session):
        summary = summarize_period([make_session(at(10, 8))])
        assert (summary.total_minutes, summary.avg_minutes, summary.count) == (0, 0, 0)

    def test_scenario_totals(self, scenario_sessions):
        summary = summarize_period(scenario_sessions)
        assert summary.count == 3
        assert summary.total_minutes == 870.0
        assert summary.avg_minutes == 290.0

    def test_open_and_inverted_sessions_are_excluded(self, scenario_sessions, make_session):
        sessions = scenario_sessions + [
            make_session(at(11, 9)),
            make_session(at(11, 10), at(11, 9)),
        ]
        summary = summarize_period(sessions)
        assert summary.count == 3
        assert summary.total_minutes == 870.0


class TestClassifyNightDay:
    """Tests for classify_night_day."""

    def test_scenario_split(self, scenario_sessions):
        split = classify_night_day(scenario_sessions)
        assert (split.night, split.day) == (1, 2)

    @pytest.mark.parametrize("hour,is_night", [
        (0, True), (6, True), (7, False), (12, False), (18, False), (19, True), (23, True),
    ])
    def test_boundaries(self, make_session, hour, is_night):
        start = at(10, hour)
        split = classify_night_day([make_session(start, start + timedelta(minutes=30))])
        assert (split.night, split.day) == ((1, 0) if is_night else (0, 1))

    def test_exhaustive_and_disjoint(self, make_session):
        sessions = [make_session(at(10, h), at(10, h, 45)) for h in range(24)]
        split = classify_night_day(sessions)
        assert split.night + split.day == 24
        assert split.night == 12

    def test_open_sessions_are_ignored(self, make_session):
        split = classify_night_day([make_session(at(10, 20))])
        assert (split.night, split.day) == (0, 0)

    def test_uses_caregiver_timezone(self, make_session):
        # 01:00 UTC is 21:00 the previous evening in New York
        session = make_session(at(10, 1), at(10, 2))
        assert classify_night_day([session]).night == 1
        assert classify_night_day([session], tz=ZoneInfo('America/New_York')).night == 1
        # 14:00 UTC is midnight in Sydney
        afternoon = make_session(at(10, 14), at(10, 15))
        assert classify_night_day([afternoon]).day == 1
        assert classify_night_day([afternoon], tz=ZoneInfo('Australia/Sydney')).night == 1


class TestAnalyzeSleepPatterns:
    """Tests for analyze_sleep_patterns."""

    def test_scenario_metrics(self, scenario_sessions):
        metrics = analyze_sleep_patterns(scenario_sessions)
        assert metrics.total_sessions == 3
        assert metrics.avg_duration_minutes == 290.0
        # Raw historical mean keeps the 420-minute window
        assert metrics.avg_wake_window_minutes == 255.0
        assert (metrics.night_count, metrics.day_count) == (1, 2)

    def test_empty_input_is_all_zero(self):
        metrics = analyze_sleep_patterns([])
        assert metrics.model_dump() == {
            'avg_duration_minutes': 0.0,
            'total_sessions': 0,
            'avg_wake_window_minutes': 0.0,
            'night_count': 0,
            'day_count': 0,
        }


class TestMostRecentCompleted:
    def test_newest_first_and_limited(self, scenario_sessions, make_session):
        sessions = list(reversed(scenario_sessions)) + [make_session(at(11, 9))]
        recent = most_recent_completed(sessions, limit=2)
        assert [s.start_time for s in recent] == [at(10, 19), at(10, 11)]


class TestDailyTotals:
    """Tests for calculate_daily_totals."""

    def test_groups_by_start_date(self, scenario_sessions, make_session):
        sessions = scenario_sessions + [make_session(at(11, 9), at(11, 10))]
        totals = calculate_daily_totals(sessions)
        assert [t.date for t in totals] == [date(2024, 5, 10), date(2024, 5, 11)]
        assert totals[0].total_hours == pytest.approx(870 / 60)
        assert totals[0].session_count == 3
        assert totals[1].total_hours == pytest.approx(1.0)

    def test_keeps_most_recent_days(self, make_session):
        sessions = [make_session(at(d, 13), at(d, 14)) for d in range(1, 11)]
        totals = calculate_daily_totals(sessions, days=7)
        assert len(totals) == 7
        assert totals[0].date == date(2024, 5, 4)
        assert totals[-1].date == date(2024, 5, 10)

    def test_empty(self):
        assert calculate_daily_totals([]) == []

    def test_timezone_moves_session_to_local_day(self, make_session):
        session = make_session(at(10, 2), at(10, 3))
        assert calculate_daily_totals([session])[0].date == date(2024, 5, 10)
        local = calculate_daily_totals([session], tz=ZoneInfo('America/Los_Angeles'))
        assert local[0].date == date(2024, 5, 9)

    def test_offset_timestamps(self, make_session):
        plus_two = timezone(timedelta(hours=2))
        start = at(10, 23).astimezone(plus_two)
        session = make_session(start, start + timedelta(hours=1))
        # Without tz the timestamp's own wall clock decides the day
        assert calculate_daily_totals([session])[0].date == date(2024, 5, 11)
