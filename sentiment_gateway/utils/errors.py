"""Custom exception hierarchy for the sentiment gateway.

All application exceptions inherit from :class:`SentimentGatewayError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "google_language") caused the failure.

The hierarchy is organized by how far an error is allowed to travel:

    SentimentGatewayError  (base -- catch-all for any gateway error)
    +-- RequestCancelledError  (caller abandoned the request; request-fatal)
    +-- ProviderError          (remote sentiment call failed; request-fatal)
    +-- CodecError             (cache payload (de)serialization)
    |   +-- EncodeError
    |   +-- DecodeError
    +-- CacheWriteError        (cache backend refused a write)
    +-- ConfigurationError     (startup / invalid config)

Only ``RequestCancelledError`` and ``ProviderError`` ever reach the HTTP
layer.  Codec and cache-write errors are recovered inside the pipeline by
falling back to the slow path.
"""


class SentimentGatewayError(Exception):
    """Base exception for all sentiment gateway errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[google_language] HTTP 429``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Request-fatal errors
# ---------------------------------------------------------------------------

class RequestCancelledError(SentimentGatewayError):
    """Raised when the caller's deadline passed or the caller went away.

    Checked before any work starts and again before a result is returned,
    so a result is never delivered for an abandoned request.
    """

    def __init__(
        self,
        message: str = "Request cancelled",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderError(SentimentGatewayError):
    """Raised when the remote sentiment provider call fails.

    Covers transport failures, non-2xx responses, quota errors, unparseable
    bodies and the per-call request timeout.  Never retried by the pipeline.
    """

    def __init__(
        self,
        message: str = "Sentiment provider call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Cache-layer errors (recovered locally)
# ---------------------------------------------------------------------------

class CodecError(SentimentGatewayError):
    """Base class for cache payload serialization failures."""

    def __init__(
        self,
        message: str = "Result codec failure",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EncodeError(CodecError):
    """Raised when a sentiment result cannot be serialized to bytes."""

    def __init__(
        self,
        message: str = "Failed to encode sentiment result",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DecodeError(CodecError):
    """Raised when cached bytes are malformed or do not match the schema."""

    def __init__(
        self,
        message: str = "Failed to decode sentiment result",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CacheWriteError(SentimentGatewayError):
    """Raised by a cache backend that could not persist an entry."""

    def __init__(
        self,
        message: str = "Cache write failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(SentimentGatewayError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
