"""Unit tests for the factory functions in sentiment_gateway/main.py.

Covers cache selection, the full component assembly, and the create_app
factory including its lifespan.  No network calls are made: the provider
is only constructed, never invoked.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sentiment_gateway.config.settings import Settings
from sentiment_gateway.main import _build_all, _build_cache, _build_provider, create_app
from sentiment_gateway.pipeline.orchestrator import SentimentPipeline
from sentiment_gateway.providers.cache.memory_cache import MemoryCacheProvider
from sentiment_gateway.providers.cache.null_cache import NullCacheProvider
from sentiment_gateway.providers.sentiment.google_language_provider import (
    GoogleLanguageProvider,
)


def _settings(**overrides) -> Settings:
    """Build a Settings instance with safe defaults and optional overrides."""
    defaults = {
        "google_api_key": "",
        "app_env": "test",
        "cache_enabled": True,
        "cache_max_size_mb": 2,
        "cache_entry_ttl": 30.0,
        "request_timeout": 0.5,
        "http_timeout": 4.0,
    }
    defaults.update(overrides)
    return Settings(**defaults)


# ======================================================================
# _build_cache
# ======================================================================


class TestBuildCache:
    def test_memory_cache_when_enabled(self) -> None:
        cache = _build_cache(_settings())
        assert isinstance(cache, MemoryCacheProvider)
        assert cache.stats().max_size_bytes == 2 * 1024 * 1024

    def test_null_cache_when_disabled(self) -> None:
        assert isinstance(_build_cache(_settings(cache_enabled=False)), NullCacheProvider)

    def test_zero_size_is_unbounded(self) -> None:
        cache = _build_cache(_settings(cache_max_size_mb=0))
        assert cache.stats().max_size_bytes is None


# ======================================================================
# _build_provider / _build_all
# ======================================================================


class TestBuildAll:
    @pytest.mark.asyncio
    async def test_provider_without_key_is_still_built(self) -> None:
        async with httpx.AsyncClient() as client:
            provider = _build_provider(_settings(), client)
        assert isinstance(provider, GoogleLanguageProvider)
        assert provider.is_available() is False

    @pytest.mark.asyncio
    async def test_components(self) -> None:
        components = _build_all(_settings(google_api_key="k"))
        try:
            assert set(components) == {
                "http_client",
                "provider",
                "cache",
                "pipeline",
                "request_deadline",
            }
            assert isinstance(components["pipeline"], SentimentPipeline)
            assert isinstance(components["provider"], GoogleLanguageProvider)
            assert components["provider"].is_available() is True
            assert components["request_deadline"] == 4.0
        finally:
            await components["http_client"].aclose()


# ======================================================================
# create_app
# ======================================================================


class TestCreateApp:
    def test_returns_fastapi_app(self) -> None:
        application = create_app(_settings())
        assert isinstance(application, FastAPI)

        # No lifespan here: only routing is exercised, not the pipeline.
        client = TestClient(application)
        assert client.get("/status").status_code == 200
        assert client.get("/api").status_code == 405
        assert client.get("/missing").status_code == 404

    def test_lifespan_populates_and_releases_state(self) -> None:
        application = create_app(_settings())

        with TestClient(application) as client:
            assert client.get("/status").status_code == 200
            assert isinstance(application.state.pipeline, SentimentPipeline)
            assert isinstance(application.state.cache, MemoryCacheProvider)
            http_client = application.state.http_client
            assert http_client.is_closed is False

        assert http_client.is_closed is True

    def test_lifespan_with_cache_disabled(self) -> None:
        application = create_app(_settings(cache_enabled=False))

        with TestClient(application):
            assert isinstance(application.state.cache, NullCacheProvider)
