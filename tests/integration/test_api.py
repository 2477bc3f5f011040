"""Integration tests for the HTTP API using FastAPI's TestClient.

The app is assembled the way main.create_app() does it (same router, same
middleware stack) but with a fake provider and an in-memory cache placed
on app.state directly, so no lifespan or network access is involved.
"""

from __future__ import annotations

import json

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sentiment_gateway.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from sentiment_gateway.api.routes import router as api_router
from sentiment_gateway.config.settings import Settings
from sentiment_gateway.interfaces.sentiment_provider import ISentimentProvider
from sentiment_gateway.models.sentiment import SentimentResult
from sentiment_gateway.pipeline.orchestrator import SentimentPipeline
from sentiment_gateway.providers.cache.memory_cache import MemoryCacheProvider
from sentiment_gateway.providers.sentiment.google_language_provider import (
    GoogleLanguageProvider,
)
from sentiment_gateway.utils.errors import ProviderError
from tests.conftest import FakeSentimentProvider

_ALL_DESC = [
    {"word1": 0.8},
    {"word2": 0.8},
    {"word3": 0.2},
    {"word5": 0.0},
    {"word4": -0.8},
]
_INTERNAL_ERROR = {"error": "internal_error", "detail": "Internal error"}
_BAD_REQUEST = {"error": "bad_request", "detail": "Bad request"}


def _create_test_app(provider: ISentimentProvider, request_deadline: float | None = 5.0) -> FastAPI:
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)

    app.state.provider = provider
    app.state.cache = MemoryCacheProvider(max_size_mb=1, ttl=600.0)
    app.state.pipeline = SentimentPipeline(
        provider=provider, cache=app.state.cache, request_timeout=1.0
    )
    app.state.request_deadline = request_deadline
    return app


@pytest.fixture
def app(fake_provider: FakeSentimentProvider) -> FastAPI:
    return _create_test_app(fake_provider)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _post(client: TestClient, query: str = "", content: str = "Hello") -> httpx.Response:
    return client.post(f"/api{query}", json={"content": content})


# ======================================================================
# POST /api
# ======================================================================


class TestAnalyzeEndpoint:
    def test_default_order_is_ascending(self, client: TestClient) -> None:
        response = _post(client)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == [
            {"word4": -0.8},
            {"word5": 0.0},
            {"word3": 0.2},
            {"word1": 0.8},
            {"word2": 0.8},
        ]

    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("?order=asc&limit=3", [{"word4": -0.8}, {"word5": 0.0}, {"word3": 0.2}]),
            ("?order=desc&limit=3", _ALL_DESC[:3]),
            ("?order=DESC&limit=6", _ALL_DESC),
            ("?order=desc", _ALL_DESC),
            ("?order=desc&limit=-1", _ALL_DESC),
            ("?order=desc&limit=0", []),
            ("?order=sideways&limit=1", [{"word4": -0.8}]),
        ],
        ids=["asc_3", "desc_3", "limit_past_end", "no_limit", "negative_limit", "zero_limit", "unknown_order"],
    )
    def test_order_and_limit(self, client: TestClient, query: str, expected: list) -> None:
        response = _post(client, query)
        assert response.status_code == 200
        assert response.json() == expected

    @pytest.mark.parametrize("limit", ["abc", "1.5", "3x", ""])
    def test_unparsable_limit_means_no_limit(self, client: TestClient, limit: str) -> None:
        response = _post(client, f"?order=desc&limit={limit}")
        assert response.status_code == 200
        assert response.json() == _ALL_DESC

    def test_repeated_request_served_from_cache(
        self, client: TestClient, fake_provider: FakeSentimentProvider
    ) -> None:
        first = _post(client, "?order=desc&limit=3", content="Hello")
        second = _post(client, "?order=asc&limit=1", content="  HELLO ")

        assert first.json() == _ALL_DESC[:3]
        assert second.json() == [{"word4": -0.8}]
        assert fake_provider.calls == ["Hello"]

    def test_missing_content_is_analyzed_as_empty(self) -> None:
        provider = FakeSentimentProvider(SentimentResult())
        client = TestClient(_create_test_app(provider))

        response = client.post("/api", json={"other": "field"})

        assert response.status_code == 200
        assert response.json() == []
        assert provider.calls == [""]

    @pytest.mark.parametrize(
        "body",
        [b"null", b'{"content": null}', b" null "],
        ids=["null_body", "null_content", "padded_null_body"],
    )
    def test_null_is_analyzed_as_empty(self, body: bytes) -> None:
        provider = FakeSentimentProvider(SentimentResult())
        client = TestClient(_create_test_app(provider))

        response = client.post("/api", content=body, headers={"content-type": "application/json"})

        assert response.status_code == 200
        assert response.json() == []
        assert provider.calls == [""]


# ======================================================================
# Error responses
# ======================================================================


class TestErrorResponses:
    @pytest.mark.parametrize(
        "body",
        [b"not json", b'{"content": ', b'{"content": 42}', b"[1, 2]", b""],
        ids=["garbage", "truncated", "wrong_type", "not_object", "empty"],
    )
    def test_malformed_body_is_400(
        self, client: TestClient, fake_provider: FakeSentimentProvider, body: bytes
    ) -> None:
        response = client.post("/api", content=body, headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json() == _BAD_REQUEST
        assert fake_provider.calls == []

    def test_get_on_api_is_405(self, client: TestClient) -> None:
        assert client.get("/api").status_code == 405

    def test_provider_failure_is_opaque_500(self) -> None:
        provider = FakeSentimentProvider(
            error=ProviderError("quota exhausted for key abc123", provider_name="google_language")
        )
        client = TestClient(_create_test_app(provider))

        response = _post(client)

        assert response.status_code == 500
        assert response.json() == _INTERNAL_ERROR
        assert "abc123" not in response.text

    def test_provider_failure_is_not_cached(self) -> None:
        provider = FakeSentimentProvider(error=ProviderError("boom"))
        client = TestClient(_create_test_app(provider))

        _post(client)
        _post(client)

        assert len(provider.calls) == 2

    def test_request_deadline_is_opaque_500(self, sample_result: SentimentResult) -> None:
        provider = FakeSentimentProvider(sample_result, delay=0.5)
        client = TestClient(_create_test_app(provider, request_deadline=0.05))

        response = _post(client)

        assert response.status_code == 500
        assert json.loads(response.text) == _INTERNAL_ERROR

    def test_malformed_upstream_body_is_opaque_500(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"sentences": 5}))
        provider = GoogleLanguageProvider(
            http_client=httpx.AsyncClient(transport=transport),
            settings=Settings(google_api_key="test-key"),
        )
        client = TestClient(_create_test_app(provider))

        response = _post(client)

        assert response.status_code == 500
        assert response.json() == _INTERNAL_ERROR


# ======================================================================
# /status
# ======================================================================


class TestStatusEndpoint:
    def test_get(self, client: TestClient) -> None:
        response = client.get("/status")
        assert response.status_code == 200
        assert response.content == b""

    def test_head(self, client: TestClient) -> None:
        assert client.head("/status").status_code == 200

    def test_post_not_allowed(self, client: TestClient) -> None:
        assert client.post("/status").status_code == 405
