"""Shared pytest fixtures for the sentiment gateway test suite."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from sentiment_gateway.interfaces.sentiment_provider import ISentimentProvider
from sentiment_gateway.models.sentiment import Sentence, SentimentResult
from sentiment_gateway.utils.errors import ProviderError

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeSentimentProvider(ISentimentProvider):
    """In-memory provider that returns a canned result and records calls.

    ``delay`` makes each call sleep first so timeout and cancellation paths
    can be exercised (``cancelled`` counts calls abandoned mid-flight);
    ``error`` makes every call fail.
    """

    def __init__(
        self,
        result: SentimentResult | None = None,
        *,
        delay: float = 0.0,
        error: ProviderError | None = None,
    ) -> None:
        self.result = result if result is not None else SentimentResult()
        self.delay = delay
        self.error = error
        self.calls: list[str] = []
        self.cancelled = 0
        self.closed = False

    async def analyze(self, text: str) -> SentimentResult:
        self.calls.append(text)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled += 1
                raise
        if self.error is not None:
            raise self.error
        return self.result

    def get_provider_name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True


class FakeTimer:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_sentences() -> list[Sentence]:
    """Five sentences with two equal top scores, in provider order."""
    return [
        Sentence(text="word1", score=0.8, magnitude=3.0),
        Sentence(text="word2", score=0.8, magnitude=1.0),
        Sentence(text="word3", score=0.2, magnitude=2.2),
        Sentence(text="word4", score=-0.8, magnitude=1.0),
        Sentence(text="word5", score=0.0, magnitude=1.0),
    ]


@pytest.fixture
def sample_result(sample_sentences: list[Sentence]) -> SentimentResult:
    return SentimentResult(
        sentences=sample_sentences,
        document_score=0.2,
        document_magnitude=8.2,
        language="en",
    )


@pytest.fixture
def fake_provider(sample_result: SentimentResult) -> FakeSentimentProvider:
    return FakeSentimentProvider(sample_result)


@pytest.fixture
def fake_timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def mock_cache_provider() -> Any:
    """Return a MagicMock(spec=ICacheProvider) with AsyncMock methods."""
    from sentiment_gateway.interfaces.cache_provider import ICacheProvider

    mock = MagicMock(spec=ICacheProvider)
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=None)
    mock.exists = AsyncMock(return_value=False)
    mock.clear = AsyncMock(return_value=None)
    return mock
