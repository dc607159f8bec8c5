"""Shared fixtures for the babysleep tests."""

from datetime import datetime, timezone

import pytest

from babysleep.core.models.data_models import SleepSession
from babysleep.core.recommendation.llm_client import LLMUnavailableError
from babysleep.core.repositories.data_repository import SessionRepository

UTC = timezone.utc


def at(day, hour, minute=0):
    """Timestamp on 2024-05-<day> at hour:minute UTC."""
    return datetime(2024, 5, day, hour, minute, tzinfo=UTC)


@pytest.fixture
def make_session():
    counter = {'n': 0}

    def _make(start, end=None, **kwargs):
        counter['n'] += 1
        return SleepSession(id=kwargs.pop('id', f"s{counter['n']}"), start_time=start, end_time=end, **kwargs)

    return _make


@pytest.fixture
def scenario_sessions(make_session):
    """Morning nap, midday nap and a night sleep running into the next day."""
    return [
        make_session(at(10, 8), at(10, 9, 30)),
        make_session(at(10, 11), at(10, 12)),
        make_session(at(10, 19), at(11, 7)),
    ]


@pytest.fixture
def repository(tmp_path):
    return SessionRepository(data_dir=str(tmp_path / 'data'))


class StubCompletionClient:
    """Stands in for AnthropicCompletionClient; records prompts and replays a reply."""

    def __init__(self, reply='', error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise LLMUnavailableError(self.error)
        return self.reply


@pytest.fixture
def stub_client():
    return StubCompletionClient

