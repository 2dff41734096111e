import json
from types import SimpleNamespace

import pytest

from services.hospital_state import HospitalState


@pytest.fixture
def state():
    """Fresh seeded in-memory store per test."""
    s = HospitalState.create(seed=True)
    yield s
    s.dispose()


@pytest.fixture
def empty_state():
    s = HospitalState.create(seed=False)
    yield s
    s.dispose()


@pytest.fixture
def db(state):
    with state.session() as session:
        yield session


class FakeCompletions:
    """Stands in for client.chat.completions; records each request."""

    def __init__(self, reply=None, error=None, refusal=None):
        self.reply = reply
        self.error = error
        self.refusal = refusal
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.reply if isinstance(self.reply, str) or self.reply is None else json.dumps(self.reply)
        message = SimpleNamespace(content=content, refusal=self.refusal)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, reply=None, error=None, refusal=None):
        self.completions = FakeCompletions(reply=reply, error=error, refusal=refusal)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls

    def last_prompt(self):
        return self.calls[-1]["messages"][-1]["content"]

    def last_schema(self):
        return self.calls[-1]["response_format"]["json_schema"]["schema"]


@pytest.fixture
def fake_client():
    return FakeClient
