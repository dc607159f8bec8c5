# babysleep/core/services/sleep_service.py
import logging
import math
from datetime import datetime, timedelta

from babysleep.core.analysis.daily_progress import (
    calculate_daily_trend, calculate_goal_progress, classify_daily_insight,
)
from babysleep.core.analysis.guidelines import age_in_months
from babysleep.core.analysis.prediction import predict_next_event
from babysleep.core.analysis.sleep_metrics import calculate_daily_totals, summarize_period
from babysleep.core.analysis.wake_windows import compute_raw_average_wake_window, compute_wake_windows
from babysleep.core.models.output_models import DashboardSummary, HistorySummary
from babysleep.utils.constants import default_values
from babysleep.utils.time_utils import as_utc, local_day_bounds, minutes_between, resolve_timezone

logger = logging.getLogger(__name__)


class SleepService:
    def __init__(self, repository, recommendation_engine, config=None):
        """
        Args:
            repository: Session store (SessionRepository or compatible)
            recommendation_engine: SleepRecommendationEngine
            config: Analytics settings (timezone, recent_session_count, ...)
        """
        self.repository = repository
        self.recommendation_engine = recommendation_engine
        self.config = dict(config or {})

        self.config.setdefault('timezone', None)
        self.config.setdefault('recent_session_count', None)
        self.config.setdefault('due_soon_minutes', None)
        self.config.setdefault('max_wake_window_minutes', None)
        self.config.setdefault('history_days', default_values['history_days'])
        self.config.setdefault('history_lookback_days', default_values['history_lookback_days'])
        self.tz = resolve_timezone(self.config['timezone'])

    def _resolve_child(self, child_id=None):
        if child_id is None:
            return self.repository.get_latest_child()
        return self.repository.get_child(child_id)

    def start_sleep(self, now: datetime, child_id=None, sleep_type=None):
        child = self._resolve_child(child_id)
        return self.repository.start_sleep(child.id, now, sleep_type=sleep_type)

    def end_sleep(self, now: datetime, session_id=None, child_id=None, wake_reason=None):
        """End the given session, or the child's open session when no id is given"""
        if session_id is None:
            child = self._resolve_child(child_id)
            active = self.repository.get_active_session(child.id)
            if active is None:
                return None
            session_id = active.id
        return self.repository.end_sleep(session_id, now, wake_reason=wake_reason)

    def get_dashboard(self, now: datetime, child_id=None) -> DashboardSummary:
        """Snapshot of today's progress and the next predicted event"""
        now = as_utc(now)
        child = self._resolve_child(child_id)
        age = age_in_months(child.birth_date, now)

        today_start, _ = local_day_bounds(now, self.tz)
        yesterday_start, yesterday_end = local_day_bounds(now, self.tz, days_ago=1)

        today_sessions = self.repository.get_sessions(child.id, since=today_start)
        yesterday_sessions = self.repository.get_sessions(child.id, since=yesterday_start, until=yesterday_end)
        recent_sessions = self.repository.get_sessions(
            child.id, since=now - timedelta(days=self.config['history_days'])
        )
        active_session = self.repository.get_active_session(child.id)

        next_event = predict_next_event(
            recent_sessions,
            active_session,
            age,
            now,
            recent_session_count=self.config['recent_session_count'],
            due_soon_minutes=self.config['due_soon_minutes'],
            max_wake_window_minutes=self.config['max_wake_window_minutes']
        )

        today_summary = summarize_period(today_sessions)

        return DashboardSummary(
            child_id=child.id,
            generated_at=now,
            age_in_months=age,
            today_total_hours=today_summary.total_minutes / 60,
            sessions_today=len(today_sessions),
            active_session=active_session,
            elapsed_minutes=(
                math.floor(minutes_between(active_session.start_time, now)) if active_session else None
            ),
            next_event=next_event,
            goal_progress=calculate_goal_progress(today_sessions, age),
            daily_trend=calculate_daily_trend(today_sessions, yesterday_sessions),
            daily_insight=classify_daily_insight(today_sessions, recent_sessions)
        )

    def get_history(self, now: datetime, child_id=None, days=None) -> HistorySummary:
        """
        Daily totals and wake windows for the history page.

        Wake windows cover the whole lookback (14 days by default); the daily
        totals keep only the last `days` days that have sleep.
        """
        now = as_utc(now)
        days = days or self.config['history_days']
        child = self._resolve_child(child_id)

        lookback_days = max(days, self.config['history_lookback_days'])
        sessions = self.repository.get_sessions(child.id, since=now - timedelta(days=lookback_days))

        return HistorySummary(
            child_id=child.id,
            generated_at=now,
            days=days,
            daily_totals=calculate_daily_totals(sessions, self.tz, days),
            wake_windows=compute_wake_windows(sessions),
            average_wake_window_minutes=compute_raw_average_wake_window(sessions)
        )

    def get_insights(self, now: datetime, child_id=None):
        """Pattern analysis and recommendations for the lookback period"""
        now = as_utc(now)
        child = self._resolve_child(child_id)
        age = age_in_months(child.birth_date, now)

        lookback_days = self.recommendation_engine.config['lookback_days']
        sessions = self.repository.get_sessions(child.id, since=now - timedelta(days=lookback_days))
        logger.info(f"Generating insights for child {child.id} from {len(sessions)} session(s)")

        return self.recommendation_engine.generate_insights(sessions, age, tz=self.tz)
