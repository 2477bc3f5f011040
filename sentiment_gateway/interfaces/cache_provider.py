"""Abstract base class for result cache providers.

Defines the contract for the key -> bytes store that sits in front of the
remote sentiment provider.  Values are opaque payloads produced by the
result codec; a cache never sees live model objects.  The adapter pattern
lets the in-memory backend be swapped (or disabled entirely) without
touching the pipeline.

The cache is purely an optimization: every caller must tolerate a miss at
any time, and a failed write must never fail a request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time snapshot of cache occupancy and effectiveness.

    Attributes
    ----------
    entries:
        Number of entries currently held (expired entries not yet reaped
        may still be counted).
    size_bytes:
        Sum of payload sizes currently held.
    max_size_bytes:
        Payload ceiling, or ``None`` when the cache is unbounded.
    hits:
        Lookups that returned a payload since construction.  The cache
        cannot tell whether the payload later decodes, so a corrupt entry
        still counts here even though the pipeline then treats it as a
        miss (and logs ``cached_result_undecodable``).
    misses:
        Lookups that found no live entry since construction.
    """

    entries: int
    size_bytes: int
    max_size_bytes: int | None
    hits: int
    misses: int


# Concrete implementations: MemoryCacheProvider, NullCacheProvider
# Located in: sentiment_gateway/providers/cache/
class ICacheProvider(ABC):
    """Contract for key -> bytes caches with a fixed entry lifetime.

    All operations are async to allow for network-backed stores without
    blocking the event loop.  Implementations must be safe for concurrent
    use by simultaneously handled requests; only single-entry atomicity is
    required.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Retrieve the payload stored under *key*.

        Returns
        -------
        bytes or None
            The payload if present and not expired; ``None`` otherwise.
            An expired entry is never returned, even if it has not been
            reaped yet.
        """

    @abstractmethod
    async def set(self, key: str, value: bytes) -> bool:
        """Store *value* under *key*, replacing any previous entry.

        Writes are best-effort.  An implementation that cannot keep the
        entry (too large, allocation failure) returns ``False`` rather than
        raising.  Backends with I/O may raise
        :class:`~sentiment_gateway.utils.errors.CacheWriteError`.

        Returns
        -------
        bool
            ``True`` if the entry was stored.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key* (no-op if absent)."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache and not expired."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Return a snapshot of the cache's occupancy and hit counters."""
