"""
Analysis module for baby sleep insights.

This module contains the pure functions that turn a snapshot of sleep
sessions into metrics, wake windows, age-based targets and predictions.
"""

from babysleep.core.analysis.sleep_metrics import (
    calculate_daily_totals, classify_night_day, compute_duration, summarize_period,
)
from babysleep.core.analysis.wake_windows import (
    compute_average_wake_window, compute_raw_average_wake_window, compute_wake_windows,
)
from babysleep.core.analysis.guidelines import age_in_months, recommended_daily_sleep, recommended_wake_window
from babysleep.core.analysis.patterns import analyze_sleep_patterns
from babysleep.core.analysis.prediction import predict_next_event
from babysleep.core.analysis.daily_progress import (
    calculate_daily_trend, calculate_goal_progress, classify_daily_insight,
)

__all__ = [
    'compute_duration', 'summarize_period', 'classify_night_day', 'calculate_daily_totals',
    'compute_wake_windows', 'compute_average_wake_window', 'compute_raw_average_wake_window',
    'recommended_wake_window', 'recommended_daily_sleep', 'age_in_months',
    'analyze_sleep_patterns', 'predict_next_event',
    'calculate_daily_trend', 'calculate_goal_progress', 'classify_daily_insight',
]
