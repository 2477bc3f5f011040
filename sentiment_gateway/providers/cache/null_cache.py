"""Cache provider that stores nothing.

Used when caching is switched off (``CACHE_ENABLED=false``).  Every lookup
misses and every write is discarded, so each request goes to the remote
provider.
"""

from __future__ import annotations

from sentiment_gateway.interfaces.cache_provider import CacheStats, ICacheProvider


class NullCacheProvider(ICacheProvider):
    """Always-miss cache."""

    def __init__(self) -> None:
        self._misses = 0

    async def get(self, key: str) -> bytes | None:
        self._misses += 1
        return None

    async def set(self, key: str, value: bytes) -> bool:
        return False

    async def delete(self, key: str) -> None:
        return None

    async def exists(self, key: str) -> bool:
        return False

    async def clear(self) -> None:
        return None

    def stats(self) -> CacheStats:
        return CacheStats(
            entries=0,
            size_bytes=0,
            max_size_bytes=0,
            hits=0,
            misses=self._misses,
        )
