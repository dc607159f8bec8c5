"""
Recommendation module for baby sleep insights.

This module builds the consultant prompt from a period's metrics, calls the
completion service, and reads recommendations back out of its reply.
"""

from babysleep.core.recommendation.prompt_builder import build_prompt
from babysleep.core.recommendation.response_parser import parse_recommendations
from babysleep.core.recommendation.llm_client import AnthropicCompletionClient, LLMUnavailableError
from babysleep.core.recommendation.recommendation_engine import SleepRecommendationEngine

__all__ = [
    'build_prompt',
    'parse_recommendations',
    'AnthropicCompletionClient',
    'LLMUnavailableError',
    'SleepRecommendationEngine',
]
