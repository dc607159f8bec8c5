"""
Constants used throughout the Baby Sleep Insights app.
This includes age-bracket reference tables, default values, and message text.
"""

import math

# Recommended wake window (minutes) by age in months.
# Ordered (threshold_inclusive, value) pairs, scanned until the age fits.
recommended_wake_window_minutes = [
    (1, 45),         # newborns
    (3, 75),         # 1h 15m for 2-3 months
    (6, 105),        # 1h 45m for 4-6 months
    (9, 150),        # 2h 30m for 7-9 months
    (math.inf, 180), # 3h for 10+ months
]

# Recommended total daily sleep (hours) by age in months
recommended_daily_sleep_hours = [
    (1, 16),         # 14-17 hours for newborns
    (3, 15),         # 14-17 hours for 1-3 months
    (6, 14),         # 12-16 hours for 4-6 months
    (12, 13),        # 12-15 hours for 6-12 months
    (math.inf, 12),  # 11-14 hours for 12+ months
]

# Default values for session analysis
default_values = {
    'night_start_hour': 19,            # Sessions starting at or after 19:00 are night sleep
    'night_end_hour': 7,               # ... as are sessions starting before 07:00
    'max_wake_window_minutes': 300,    # Longer windows are treated as data-entry anomalies
    'recent_session_count': 10,        # Completed sessions used for the wake-time estimate
    'due_soon_minutes': 15,            # Nap is "due soon" at or below this many minutes
    'days_per_month': 30.44,           # Fixed month length used for age in months
    'trend_threshold_hours': 0.5,      # Day-over-day change considered up/down
    'insight_window_sessions': 30,     # Completed sessions used for the daily average
    'sessions_per_day_estimate': 4,    # Approximate sessions per day for the daily average
    'consistent_margin_minutes': 30,   # |today - average| below this is "consistent"
    'notable_margin_minutes': 60,      # |today - average| above this is above/below average
    'well_tracked_session_count': 3,   # Completed sessions today to count as well tracked
    'history_days': 7,                 # Days shown in the history chart and dashboard lookback
    'history_lookback_days': 14,       # Days of sessions loaded for history wake windows
}

# Defaults for the AI recommendation run
insight_defaults = {
    'min_sessions': 3,
    'lookback_days': 7,
    'model': 'claude-3-5-sonnet-20241022',
    'max_tokens': 1024,
    'timeout_seconds': 30.0,
    'api_key_env': 'ANTHROPIC_API_KEY',
    'api_key_placeholder': 'your-anthropic-api-key',
}

# Recommendation text used when the model output cannot be used directly
fallback_recommendation_title = 'AI Analysis'

ai_not_configured_recommendation = {
    'title': 'Configure AI for Personalized Insights',
    'description': (
        "Add your Anthropic API key to the environment to get AI-powered "
        "recommendations based on your baby's sleep patterns."
    ),
    'confidence': 'high',
}

ai_unavailable_recommendation = {
    'title': 'AI unavailable, statistics only',
    'description': (
        'Personalized recommendations could not be generated right now. '
        'The sleep statistics above are still up to date.'
    ),
    'confidence': 'low',
}

insufficient_data_message = 'Need at least {min_sessions} sleep sessions to generate insights'
