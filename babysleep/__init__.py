"""
Core modules for the Baby Sleep Insights app.

This package contains the functionality for:
- Sleep session analytics (durations, wake windows, night/day split)
- Age-based sleep guidelines and next-nap prediction
- AI-generated recommendations
- A CSV-backed session store and the command line
"""

__version__ = "0.1.0"
