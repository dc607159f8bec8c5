"""
Module for turning a numeric sleep summary into the recommendation prompt.
"""

from babysleep.utils.math_utils import round_half_up

PROMPT_TEMPLATE = """You are a pediatric sleep consultant. Analyze this baby's sleep data and provide 3-4 actionable, evidence-based recommendations.

Child Age: {age_in_months} months old
Sleep Data (Past {lookback_days} days):
- Average sleep duration per session: {avg_duration} minutes
- Total sleep sessions: {total_sessions}
- Average wake window: {avg_wake_window} minutes
- Night sessions: {night_count}, Day sessions: {day_count}

Please provide recommendations in this exact JSON format:
[
  {{
    "title": "Brief recommendation title",
    "description": "Detailed explanation and action steps",
    "confidence": "high|medium|low"
  }}
]

Focus on: wake windows, nap timing, bedtime optimization, and age-appropriate sleep patterns. Be specific and actionable."""


def build_prompt(metrics, age_in_months, lookback_days=7):
    """
    Fill the consultant prompt with the period's metrics.

    Args:
        metrics: SleepMetrics for the lookback period
        age_in_months: Child's age in whole months
        lookback_days: Length of the period the metrics cover

    Returns:
        str: Prompt text ready to send to the model
    """
    return PROMPT_TEMPLATE.format(
        age_in_months=age_in_months,
        lookback_days=lookback_days,
        avg_duration=round_half_up(metrics.avg_duration_minutes),
        total_sessions=metrics.total_sessions,
        avg_wake_window=round_half_up(metrics.avg_wake_window_minutes),
        night_count=metrics.night_count,
        day_count=metrics.day_count
    )
