"""Shared fakes and fixtures."""

import json
from types import SimpleNamespace

import pytest

from palm_oracle.config import Settings

VALID_READING = {
    "heartLine": {"observation": "Deep and curved", "meaning": "You love openly."},
    "headLine": {"observation": "Long and straight", "meaning": "You think clearly."},
    "lifeLine": {"observation": "Wide arc", "meaning": "You have great vitality."},
    "fateLine": None,
    "overallReading": "Your palm shows balance. Good things approach.",
    "advice": "Trust yourself.",
}

TINY_IMAGE = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQ=="


def make_settings(api_key="sk-test", **overrides) -> Settings:
    values = dict(
        api_key=api_key,
        reading_model="test-vision",
        chat_model="test-chat",
        max_attempts=2,
        retry_delay=0.0,
        request_timeout=5.0,
        db_path=":memory:",
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


class FakeCompletions:
    """Plays back a scripted list of outcomes: strings are replies, exceptions are raised."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        message = SimpleNamespace(content=outcome)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, outcomes):
        self.completions = FakeCompletions(outcomes)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


@pytest.fixture
def valid_reading_json():
    return json.dumps(VALID_READING)


@pytest.fixture
def fixed_clock():
    return lambda: 1_700_000_123_456


@pytest.fixture
def waits():
    """Collects requested sleep durations instead of sleeping."""
    return []
