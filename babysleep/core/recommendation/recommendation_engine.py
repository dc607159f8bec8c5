# babysleep/core/recommendation/recommendation_engine.py

import logging

from babysleep.core.analysis.patterns import analyze_sleep_patterns
from babysleep.core.models.output_models import InsightsReport, InsightsStatus, Recommendation
from babysleep.core.recommendation.llm_client import LLMUnavailableError
from babysleep.core.recommendation.prompt_builder import build_prompt
from babysleep.core.recommendation.response_parser import parse_recommendations
from babysleep.utils.constants import (
    ai_not_configured_recommendation, ai_unavailable_recommendation,
    insight_defaults, insufficient_data_message,
)

logger = logging.getLogger(__name__)


class SleepRecommendationEngine:
    def __init__(self, config=None, client=None):
        """
        Initialize the recommendation engine.

        Args:
            config: Insights settings (min_sessions, lookback_days, ...)
            client: Completion client with a complete(prompt) method, or None
                when no API key is configured
        """
        self.config = dict(config or {})
        self.client = client

        # Set defaults for missing config values
        self.config.setdefault('min_sessions', insight_defaults['min_sessions'])
        self.config.setdefault('lookback_days', insight_defaults['lookback_days'])
        self.config.setdefault('night_start_hour', None)
        self.config.setdefault('night_end_hour', None)

    @property
    def ai_enabled(self):
        return self.client is not None

    def generate_insights(self, sessions, age_in_months, tz=None):
        """
        Analyze a period of sessions and attach recommendations.

        Args:
            sessions: Sessions from the lookback period, open ones included
            age_in_months: Child's age in whole months
            tz: Caregiver's zone for the night/day split

        Returns:
            InsightsReport: Never raises for missing data or model failures;
            those are reported through the status field
        """
        sessions = list(sessions)
        min_sessions = self.config['min_sessions']

        if len(sessions) < min_sessions:
            logger.info(f"Only {len(sessions)} session(s) in period, need {min_sessions} for insights")
            return InsightsReport(
                status=InsightsStatus.INSUFFICIENT_DATA,
                message=insufficient_data_message.format(min_sessions=min_sessions),
                age_in_months=age_in_months
            )

        patterns = analyze_sleep_patterns(
            sessions,
            tz=tz,
            night_start_hour=self.config['night_start_hour'],
            night_end_hour=self.config['night_end_hour']
        )

        if not self.ai_enabled:
            # Pattern analysis without AI recommendations
            return InsightsReport(
                status=InsightsStatus.AI_NOT_CONFIGURED,
                age_in_months=age_in_months,
                patterns=patterns,
                recommendations=[Recommendation(**ai_not_configured_recommendation)],
                ai_enabled=False
            )

        prompt = build_prompt(patterns, age_in_months, self.config['lookback_days'])

        try:
            reply = self.client.complete(prompt)
        except LLMUnavailableError as e:
            logger.warning(f"Falling back to statistics only: {e}")
            return InsightsReport(
                status=InsightsStatus.AI_UNAVAILABLE,
                message=ai_unavailable_recommendation['title'],
                age_in_months=age_in_months,
                patterns=patterns,
                recommendations=[Recommendation(**ai_unavailable_recommendation)],
                ai_enabled=False
            )

        parsed = parse_recommendations(reply)
        logger.info(f"Generated {len(parsed.recommendations)} recommendation(s) ({parsed.status.value})")

        return InsightsReport(
            status=InsightsStatus.OK,
            age_in_months=age_in_months,
            patterns=patterns,
            recommendations=parsed.recommendations,
            ai_enabled=True,
            parse_status=parsed.status
        )
