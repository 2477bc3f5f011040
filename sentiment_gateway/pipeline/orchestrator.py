"""Request orchestrator: cache lookup, remote fallback, shaping.

Coordinates the key normalizer, the result cache, the remote sentiment
provider and the shaper for one request at a time.  The orchestrator holds
no mutable state of its own, so a single instance serves every concurrent
request; the cache and provider it is given are the only shared resources.

Failure policy:
    - Cancellation and provider failures are request-fatal and propagate.
    - Anything that goes wrong at the cache boundary (undecodable payload,
      unencodable result, refused write) is logged and the request carries
      on along the slow path.
"""

from __future__ import annotations

import asyncio

import structlog

from sentiment_gateway.interfaces.cache_provider import ICacheProvider
from sentiment_gateway.interfaces.sentiment_provider import ISentimentProvider
from sentiment_gateway.models.sentiment import SentimentResult, ShapedResponse, SortOrder
from sentiment_gateway.pipeline.context import RequestContext
from sentiment_gateway.pipeline.shaper import shape_result
from sentiment_gateway.services.result_codec import decode_result, encode_result
from sentiment_gateway.utils.errors import (
    CacheWriteError,
    DecodeError,
    EncodeError,
    ProviderError,
    RequestCancelledError,
)
from sentiment_gateway.utils.logging import get_logger
from sentiment_gateway.utils.text_normalizer import normalize_cache_key

_logger: structlog.BoundLogger = get_logger(__name__)


class SentimentPipeline:
    """Cache-fronted sentiment analysis for a single request.

    Parameters
    ----------
    provider:
        Remote sentiment provider, shared across requests.
    cache:
        Result cache, shared across requests.
    request_timeout:
        Ceiling in seconds on each remote call.
    """

    def __init__(
        self,
        provider: ISentimentProvider,
        cache: ICacheProvider,
        request_timeout: float = 1.0,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._request_timeout = request_timeout

    async def handle(
        self,
        ctx: RequestContext,
        raw_text: str,
        sort_order: SortOrder = SortOrder.ASCENDING,
        limit: int = -1,
    ) -> ShapedResponse:
        """Analyze *raw_text* and return the shaped response.

        Raises
        ------
        RequestCancelledError
            If *ctx* is done before work starts or before the result is
            returned.
        ProviderError
            If the remote call fails or exceeds ``request_timeout``.
        """
        await self._ensure_active(ctx, raw_text)

        key = normalize_cache_key(raw_text)
        result = await self._cached_result(key)
        if result is None:
            result = await self._fetch(ctx, raw_text)
            await self._store(key, result)

        await self._ensure_active(ctx, raw_text)

        if result is None:
            return []
        return shape_result(result.sentences, sort_order, limit)

    # -- Private helpers -------------------------------------------------------

    async def _ensure_active(self, ctx: RequestContext, raw_text: str) -> None:
        try:
            await ctx.ensure_active()
        except RequestCancelledError as exc:
            _logger.warning("request_cancelled", reason=exc.message, input=raw_text)
            raise

    async def _cached_result(self, key: str) -> SentimentResult | None:
        """Return the decoded cache entry for *key*, or ``None`` on any miss."""
        payload = await self._cache.get(key)
        if payload is None:
            return None
        try:
            return decode_result(payload)
        except DecodeError as exc:
            _logger.warning("cached_result_undecodable", key=key, error=str(exc))
            return None

    async def _fetch(self, ctx: RequestContext, raw_text: str) -> SentimentResult:
        """Call the provider with the original text, bounded by both timeouts.

        The call races against ``ctx.wait_done()``.  Whichever way the race
        is lost (timeout, explicit cancel, client disconnect) the provider
        task is cancelled, which closes the outstanding HTTP request.
        """
        timeout = self._request_timeout
        remaining = ctx.remaining()
        bounded_by_caller = remaining is not None and remaining < timeout
        if bounded_by_caller:
            timeout = remaining

        call = asyncio.ensure_future(self._provider.analyze(raw_text))
        watcher = asyncio.ensure_future(ctx.wait_done())
        try:
            done, _ = await asyncio.wait(
                {call, watcher}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            pending = [task for task in (call, watcher) if not task.done()]
            for task in pending:
                task.cancel()
            # Reap the cancelled tasks; their CancelledError is expected.
            await asyncio.gather(*pending, return_exceptions=True)

        if call in done:
            try:
                return call.result()
            except ProviderError as exc:
                _logger.error("provider_call_failed", error=str(exc), input=raw_text)
                raise

        if watcher in done:
            reason = watcher.result()
            _logger.warning("request_cancelled", reason=reason, input=raw_text)
            raise RequestCancelledError(
                message=f"Request cancelled: {reason} during provider call",
                provider_name=self._provider.get_provider_name(),
            )

        if bounded_by_caller:
            _logger.warning("request_cancelled", reason="deadline exceeded", input=raw_text)
            raise RequestCancelledError(
                message="Request cancelled: deadline exceeded during provider call",
                provider_name=self._provider.get_provider_name(),
            )
        _logger.error("provider_timeout", timeout=timeout, input=raw_text)
        raise ProviderError(
            message=f"Provider call timed out after {timeout}s",
            provider_name=self._provider.get_provider_name(),
        )

    async def _store(self, key: str, result: SentimentResult) -> None:
        """Write *result* to the cache; failures only cost a future miss."""
        try:
            payload = encode_result(result)
        except EncodeError as exc:
            _logger.warning("cache_write_skipped", key=key, error=str(exc))
            return
        try:
            await self._cache.set(key, payload)
        except CacheWriteError as exc:
            _logger.warning("cache_write_skipped", key=key, error=str(exc))
