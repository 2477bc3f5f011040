"""Public interface definitions for the gateway's swappable collaborators.

Both shared resources of the gateway are accessed exclusively through the
abstract base classes defined in this package.  Concrete adapters implement
these interfaces and are injected at startup in ``sentiment_gateway/main.py``,
so tests can hand the pipeline a fake provider or a disabled cache without
patching anything.

CONCRETE PROVIDER MAP:
    Interface              →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    ISentimentProvider     →  GoogleLanguageProvider
    ICacheProvider         →  MemoryCacheProvider, NullCacheProvider

Re-exports
----------
ISentimentProvider
    Remote sentiment-analysis contract.
ICacheProvider, CacheStats
    Key -> bytes cache contract and its stats snapshot.
"""

from sentiment_gateway.interfaces.cache_provider import CacheStats, ICacheProvider
from sentiment_gateway.interfaces.sentiment_provider import ISentimentProvider

__all__ = [
    "CacheStats",
    "ICacheProvider",
    "ISentimentProvider",
]
