"""Utility modules for the sentiment gateway.

Available utility modules (all re-exported here for convenience):

- **durations** -- ``"1s"`` / ``"10m"`` style duration parsing used by the
  settings and the ``serve`` CLI flags.
- **errors** -- Domain-specific exception hierarchy rooted at
  SentimentGatewayError; request-fatal errors are kept apart from the
  cache-layer errors the pipeline recovers from.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in a terminal, structured JSON everywhere else.
- **text_normalizer** -- Cache key normalization (trim + lowercase).
"""

# -- Duration parsing ------------------------------------------------------
from sentiment_gateway.utils.durations import parse_duration

# -- Domain exception hierarchy --------------------------------------------
from sentiment_gateway.utils.errors import (
    CacheWriteError,
    CodecError,
    ConfigurationError,
    DecodeError,
    EncodeError,
    ProviderError,
    RequestCancelledError,
    SentimentGatewayError,
)

# -- Structured logging setup ----------------------------------------------
from sentiment_gateway.utils.logging import configure_logging, get_logger

# -- Cache key normalization -----------------------------------------------
from sentiment_gateway.utils.text_normalizer import normalize_cache_key

__all__ = [
    "CacheWriteError",
    "CodecError",
    "ConfigurationError",
    "DecodeError",
    "EncodeError",
    "ProviderError",
    "RequestCancelledError",
    "SentimentGatewayError",
    "configure_logging",
    "get_logger",
    "normalize_cache_key",
    "parse_duration",
]
