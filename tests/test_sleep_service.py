"""Tests for the SleepService facade over the store and analytics."""

import json
from datetime import date

import pytest

from babysleep.core.exceptions import ChildNotFoundError
from babysleep.core.models.output_models import (
    InsightBand, InsightsStatus, NextEventBand, TrendDirection, WakeWindowSource,
)
from babysleep.core.recommendation.recommendation_engine import SleepRecommendationEngine
from babysleep.core.services.sleep_service import SleepService
from tests.conftest import at


def _log(service, start, end):
    session = service.start_sleep(start)
    return service.end_sleep(end, session_id=session.id)


@pytest.fixture
def service(repository):
    repository.add_child('Ada', date(2024, 1, 1), at(1, 9))
    return SleepService(repository, SleepRecommendationEngine())


@pytest.fixture
def logged_day(service):
    """Two naps and a night's sleep on May 10th."""
    _log(service, at(10, 8), at(10, 9, 30))
    _log(service, at(10, 11), at(10, 12))
    _log(service, at(10, 19), at(11, 7))
    return service


class TestStartAndEnd:
    def test_defaults_to_latest_child(self, service):
        session = service.start_sleep(at(10, 8), sleep_type='nap')
        assert session.child_id == service.repository.get_latest_child().id

    def test_end_closes_open_session(self, service):
        service.start_sleep(at(10, 8))
        ended = service.end_sleep(at(10, 9))
        assert ended.end_time == at(10, 9)

    def test_end_without_open_session(self, service):
        assert service.end_sleep(at(10, 9)) is None

    def test_unknown_child(self, service):
        with pytest.raises(ChildNotFoundError):
            service.start_sleep(at(10, 8), child_id='missing')


class TestDashboard:
    """Tests for get_dashboard."""

    def test_awake_after_night(self, logged_day):
        dashboard = logged_day.get_dashboard(at(11, 8, 30))

        assert dashboard.age_in_months == 4
        # The night session started yesterday so today has nothing yet
        assert dashboard.sessions_today == 0
        assert dashboard.today_total_hours == 0.0
        assert dashboard.active_session is None
        assert dashboard.elapsed_minutes is None

        event = dashboard.next_event
        assert event.band == NextEventBand.DUE_NOW
        assert event.minutes_awake == 90
        assert event.wake_window_minutes == 90.0
        assert event.wake_window_source == WakeWindowSource.HISTORY

        assert dashboard.daily_trend.yesterday_hours == pytest.approx(14.5)
        assert dashboard.daily_trend.direction == TrendDirection.DOWN
        assert dashboard.daily_trend.change_percent == -100
        assert dashboard.goal_progress.recommended_hours == 14
        assert dashboard.goal_progress.percent == 0
        assert dashboard.daily_insight.band == InsightBand.NO_DATA

    def test_asleep(self, logged_day):
        logged_day.start_sleep(at(11, 8))
        dashboard = logged_day.get_dashboard(at(11, 8, 30))

        assert dashboard.active_session is not None
        assert dashboard.elapsed_minutes == 30
        assert dashboard.sessions_today == 1
        assert dashboard.today_total_hours == 0.0

        event = dashboard.next_event
        assert event.band == NextEventBand.SLEEPING
        assert event.minutes_elapsed == 30
        assert event.average_sleep_minutes == 290.0
        assert event.predicted_wake_time == at(11, 12, 50)
        assert event.minutes_until_wake == 260

    def test_new_child(self, service):
        dashboard = service.get_dashboard(at(10, 8))
        assert dashboard.next_event.band == NextEventBand.READY_TO_TRACK
        assert dashboard.daily_trend.direction == TrendDirection.FLAT

    def test_local_day_follows_configured_timezone(self, repository):
        repository.add_child('Ada', date(2024, 1, 1), at(1, 9))
        service = SleepService(repository, SleepRecommendationEngine(), {'timezone': 'America/New_York'})
        # 23:00 UTC on the 10th is 19:00 the same day in New York
        _log(service, at(10, 23), at(11, 1))

        dashboard = service.get_dashboard(at(11, 2))
        assert dashboard.sessions_today == 1
        assert dashboard.today_total_hours == pytest.approx(2.0)

    def test_invalid_timezone(self, repository):
        with pytest.raises(ValueError):
            SleepService(repository, SleepRecommendationEngine(), {'timezone': 'Mars/Olympus_Mons'})


class TestHistory:
    def test_history(self, logged_day):
        history = logged_day.get_history(at(11, 10))

        assert history.days == 7
        assert len(history.daily_totals) == 1
        assert history.daily_totals[0].date == date(2024, 5, 10)
        assert history.daily_totals[0].total_hours == pytest.approx(14.5)
        assert [w.duration_minutes for w in history.wake_windows] == [90.0, 420.0]
        assert history.average_wake_window_minutes == 255.0

    def test_window_excludes_old_sessions(self, logged_day):
        history = logged_day.get_history(at(30, 10), days=3)
        assert history.daily_totals == []
        assert history.wake_windows == []

    def test_wake_windows_use_two_week_lookback(self, service):
        for day in range(1, 11):
            _log(service, at(day, 13), at(day, 14))

        history = service.get_history(at(11, 10), days=7)

        # All ten naps fall inside the 14 day lookback
        assert len(history.wake_windows) == 9
        assert history.average_wake_window_minutes == 23 * 60
        # The chart keeps only the last seven days
        assert [t.date for t in history.daily_totals] == [date(2024, 5, d) for d in range(4, 11)]

    def test_lookback_is_configurable(self, repository):
        repository.add_child('Ada', date(2024, 1, 1), at(1, 9))
        service = SleepService(repository, SleepRecommendationEngine(), {'history_lookback_days': 7})
        for day in range(1, 11):
            _log(service, at(day, 13), at(day, 14))

        history = service.get_history(at(11, 10), days=7)
        assert len(history.wake_windows) == 6


class TestInsights:
    def test_statistics_without_ai(self, logged_day):
        report = logged_day.get_insights(at(11, 10))
        assert report.status == InsightsStatus.AI_NOT_CONFIGURED
        assert report.age_in_months == 4
        assert report.patterns.total_sessions == 3
        assert (report.patterns.night_count, report.patterns.day_count) == (1, 2)

    def test_with_model(self, repository, stub_client):
        reply = json.dumps([{"title": "Nap earlier", "description": "Try 90 minutes.", "confidence": "medium"}])
        repository.add_child('Ada', date(2024, 1, 1), at(1, 9))
        service = SleepService(repository, SleepRecommendationEngine(client=stub_client(reply=reply)))
        _log(service, at(10, 8), at(10, 9, 30))
        _log(service, at(10, 11), at(10, 12))
        _log(service, at(10, 19), at(11, 7))

        report = service.get_insights(at(11, 10))
        assert report.status == InsightsStatus.OK
        assert report.recommendations[0].title == "Nap earlier"

    def test_lookback_window(self, logged_day):
        report = logged_day.get_insights(at(20, 10))
        assert report.status == InsightsStatus.INSUFFICIENT_DATA
