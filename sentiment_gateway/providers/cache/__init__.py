"""Cache providers.

In-memory TTL-bounded cache used to avoid repeating the remote sentiment
call for text that was analyzed recently (keys are trimmed and lowercased,
so "Great day!" and "  great day! " share an entry).

MemoryCacheProvider is process-local: fast but not shared across workers.
NullCacheProvider disables caching while keeping the pipeline unchanged.
"""

from sentiment_gateway.providers.cache.memory_cache import MemoryCacheProvider
from sentiment_gateway.providers.cache.null_cache import NullCacheProvider

__all__ = ["MemoryCacheProvider", "NullCacheProvider"]
