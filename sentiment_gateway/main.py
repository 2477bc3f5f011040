"""Sentiment gateway FastAPI application entry point.

Wires together the sentiment provider, the result cache, the pipeline and
the routes via dependency injection.  Loads configuration from
``config/config.yaml``, ``.env`` and the environment, and configures
structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from sentiment_gateway.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from sentiment_gateway.api.routes import router as api_router
from sentiment_gateway.config.loader import load_settings
from sentiment_gateway.config.settings import Settings
from sentiment_gateway.interfaces.cache_provider import ICacheProvider
from sentiment_gateway.interfaces.sentiment_provider import ISentimentProvider
from sentiment_gateway.pipeline.orchestrator import SentimentPipeline
from sentiment_gateway.providers.cache.memory_cache import MemoryCacheProvider
from sentiment_gateway.providers.cache.null_cache import NullCacheProvider
from sentiment_gateway.providers.sentiment.google_language_provider import GoogleLanguageProvider
from sentiment_gateway.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = load_settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------


def _build_cache(app_settings: Settings) -> ICacheProvider:
    """Return the result cache, or the always-miss cache when disabled."""
    if not app_settings.cache_enabled:
        return NullCacheProvider()
    return MemoryCacheProvider(
        max_size_mb=app_settings.cache_max_size_mb,
        ttl=app_settings.cache_entry_ttl,
    )


def _build_provider(app_settings: Settings, http_client: httpx.AsyncClient) -> ISentimentProvider:
    provider = GoogleLanguageProvider(http_client=http_client, settings=app_settings)
    if not provider.is_available():
        _logger.warning(
            "provider_not_configured",
            provider=provider.get_provider_name(),
            msg="GOOGLE_API_KEY is empty; every cache miss will fail.",
        )
    return provider


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every shared component for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    One cache and one HTTP client exist per process; both are shared by
    every request through the pipeline.
    """
    # Outbound ceiling; the per-call request_timeout is applied by the pipeline.
    http_client = httpx.AsyncClient(timeout=app_settings.http_timeout)

    provider = _build_provider(app_settings, http_client)
    cache = _build_cache(app_settings)

    pipeline = SentimentPipeline(
        provider=provider,
        cache=cache,
        request_timeout=app_settings.request_timeout,
    )

    return {
        "http_client": http_client,
        "provider": provider,
        "cache": cache,
        "pipeline": pipeline,
        "request_deadline": app_settings.http_timeout,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise shared components on startup, release them on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    cache_stats = components["cache"].stats()
    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=app_settings.app_env,
        provider=components["provider"].get_provider_name(),
        cache=type(components["cache"]).__name__,
        cache_max_size_bytes=cache_stats.max_size_bytes,
        cache_entry_ttl=app_settings.cache_entry_ttl,
        request_timeout=app_settings.request_timeout,
    )

    yield

    provider: ISentimentProvider = components["provider"]
    await provider.aclose()
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Sentiment Gateway",
        version=_VERSION,
        description=(
            "Forwards text to a remote sentiment-analysis service, caches the "
            "result by normalized input, and returns per-sentence scores "
            "sorted and limited as requested."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings or settings

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# Direct execution
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "sentiment_gateway.main:app",
        host=settings.app_host,
        port=settings.app_port,
        timeout_keep_alive=int(settings.http_timeout),
    )
