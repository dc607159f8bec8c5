"""
Module for reading recommendations out of free-text model replies.

Parsing is two-stage: find the bracketed span, then parse and validate it
strictly. Anything that does not survive both stages is wrapped whole as a
single medium-confidence recommendation.
"""

import json
import logging
import re

from pydantic import ValidationError

from babysleep.core.models.output_models import (
    Confidence, ParsedRecommendations, ParseStatus, Recommendation,
)
from babysleep.utils.constants import fallback_recommendation_title

logger = logging.getLogger(__name__)

# Greedy: first '[' through last ']' across lines
JSON_ARRAY_PATTERN = re.compile(r'\[[\s\S]*\]')


def extract_json_array(text):
    """Return the bracketed span of `text`, or None when there is none."""
    match = JSON_ARRAY_PATTERN.search(text or '')
    return match.group(0) if match else None


def fallback_recommendations(text):
    return ParsedRecommendations(
        status=ParseStatus.FALLBACK,
        recommendations=[
            Recommendation(
                title=fallback_recommendation_title,
                description=text or '',
                confidence=Confidence.MEDIUM
            )
        ]
    )


def parse_recommendations(text):
    """
    Parse a model reply into recommendations.

    Args:
        text: Raw reply text, expected to contain a JSON array of
            {title, description, confidence} objects

    Returns:
        ParsedRecommendations: status PARSED with the items, or FALLBACK with
        the whole text as one item
    """
    candidate = extract_json_array(text)
    if candidate is None:
        logger.info("Model reply contained no JSON array, using fallback")
        return fallback_recommendations(text)

    try:
        items = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Could not parse JSON array from model reply: {e}")
        return fallback_recommendations(text)

    try:
        recommendations = [Recommendation.model_validate(item) for item in items]
    except ValidationError as e:
        logger.warning(f"Model reply did not match the recommendation format: {e.error_count()} error(s)")
        return fallback_recommendations(text)

    return ParsedRecommendations(status=ParseStatus.PARSED, recommendations=recommendations)
