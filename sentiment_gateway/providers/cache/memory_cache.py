"""In-memory cache provider using cachetools.TTLCache.

Bounded by total payload bytes rather than entry count: each value is an
encoded result, and ``getsizeof=len`` makes the TTLCache account for its
real size.  Expired entries are dropped first when room is needed, then the
least-recently-used ones.  Suitable for single-process deployments; swap in
another ICacheProvider for anything shared.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable

import structlog
from cachetools import TTLCache

from sentiment_gateway.interfaces.cache_provider import CacheStats, ICacheProvider

logger = structlog.get_logger(logger_name=__name__)

_BYTES_PER_MB = 1024 * 1024


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size_mb:
        Ceiling on the summed size of stored payloads, in megabytes.
        ``0`` disables the ceiling.
    ttl:
        Lifetime of every entry in seconds, fixed at construction.
    timer:
        Clock used for expiry; injectable so tests can move time forward.
    """

    def __init__(
        self,
        max_size_mb: int = 64,
        ttl: float = 600.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size_mb < 0:
            raise ValueError(f"max_size_mb must be >= 0, got {max_size_mb}")
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")

        self._ttl = ttl
        self._max_size_bytes: int | None = (
            max_size_mb * _BYTES_PER_MB if max_size_mb > 0 else None
        )
        maxsize = self._max_size_bytes if self._max_size_bytes is not None else math.inf
        self._cache: TTLCache[str, bytes] = TTLCache(
            maxsize=maxsize, ttl=ttl, timer=timer, getsizeof=len
        )
        # cachetools caches are not thread-safe; every access goes through this.
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def ttl(self) -> float:
        return self._ttl

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> bytes | None:
        """Retrieve the payload for *key*, or ``None`` if missing/expired."""
        with self._lock:
            value = self._cache.get(key)
            if value is not None:
                self._hits += 1
            else:
                self._misses += 1
        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return value

    async def set(self, key: str, value: bytes) -> bool:
        """Store *value* under *key*, evicting older entries if needed.

        A payload larger than the whole ceiling cannot be stored; it is
        dropped with a warning and ``False`` is returned.  Any previous
        entry for *key* is removed in that case so a stale value is not
        served.
        """
        try:
            with self._lock:
                self._cache[key] = value
        except ValueError:
            with self._lock:
                self._cache.pop(key, None)
            logger.warning(
                "cache_set_dropped",
                key=key,
                reason="value_too_large",
                size_bytes=len(value),
                max_size_bytes=self._max_size_bytes,
            )
            return False
        except MemoryError:
            logger.warning("cache_set_dropped", key=key, reason="out_of_memory")
            return False

        logger.debug("cache_set", key=key, size_bytes=len(value))
        return True

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        with self._lock:
            self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        with self._lock:
            return key in self._cache

    async def clear(self) -> None:
        with self._lock:
            self._cache.clear()
        logger.debug("cache_clear")

    def stats(self) -> CacheStats:
        with self._lock:
            self._cache.expire()
            return CacheStats(
                entries=len(self._cache),
                size_bytes=int(self._cache.currsize),
                max_size_bytes=self._max_size_bytes,
                hits=self._hits,
                misses=self._misses,
            )
