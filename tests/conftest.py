"""Shared fixtures: in-memory ports and a controllable clock."""
from types import SimpleNamespace

import pytest

from clipboard import BrowserClipboard
from config import StaticCredentialSource
from profile_store import InMemoryProfileStore
from session_controller import CoverLetterSession


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubGenerator:
    """Stands in for generate_cover_letter; records every call."""

    def __init__(self, text: str = "Dear Hiring Manager,\n\nBody.\n\nSincerely,\nJane", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = []

    def __call__(self, inputs, config):
        self.calls.append((inputs, config))
        if self.error is not None:
            raise self.error
        return self.text


class FakeGeminiModel:
    """Mimics GenerativeModel.generate_content."""

    def __init__(self, text: str | None = "Generated letter", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, prompt, generation_config=None):
        self.calls.append({"prompt": prompt, "generation_config": generation_config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryProfileStore()


@pytest.fixture
def clipboard():
    return BrowserClipboard()


@pytest.fixture
def stub_generator():
    return StubGenerator()


@pytest.fixture
def make_session(store, clipboard, clock, stub_generator):
    def _make(**overrides):
        kwargs = dict(
            profile_store=store,
            clipboard=clipboard,
            credentials=StaticCredentialSource("test-key"),
            generate_fn=stub_generator,
            pdf_exporter=lambda text, path: True,
            clock=clock,
            flash_seconds=2.0,
        )
        kwargs.update(overrides)
        return CoverLetterSession(**kwargs)

    return _make


@pytest.fixture
def filled_session(make_session):
    session = make_session()
    session.update({
        "name": "Jane Doe",
        "recentPosition": "Data Analyst",
        "background": "Five years of analytics in retail.",
        "companyName": "Acme Corp",
        "targetPosition": "Senior Analyst",
        "jobDescription": "Own the reporting stack and mentor analysts.",
    })
    return session
