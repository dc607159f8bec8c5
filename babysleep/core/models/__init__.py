"""
Data models for sleep sessions and the values derived from them.
"""

from babysleep.core.models.data_models import ChildProfile, SleepSession, SleepType

__all__ = ['ChildProfile', 'SleepSession', 'SleepType']
