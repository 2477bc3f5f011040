"""Byte codec for cached sentiment results.

The cache stores opaque ``bytes`` so that its memory ceiling can be enforced
on real payload sizes rather than on Python object graphs.  This module is
the only place that knows the payload format: the pydantic JSON
serialization of :class:`SentimentResult`, UTF-8 encoded.
"""

from __future__ import annotations

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from sentiment_gateway.models.sentiment import SentimentResult
from sentiment_gateway.utils.errors import DecodeError, EncodeError


def encode_result(result: SentimentResult) -> bytes:
    """Serialize *result* for storage.

    Raises:
        EncodeError: If the structure cannot be serialized.
    """
    try:
        return result.model_dump_json().encode("utf-8")
    except (PydanticSerializationError, UnicodeEncodeError) as exc:
        raise EncodeError(message=f"Failed to encode sentiment result: {exc}") from exc


def decode_result(payload: bytes) -> SentimentResult:
    """Rebuild a :class:`SentimentResult` from cached bytes.

    Raises:
        DecodeError: If *payload* is corrupt, truncated, or does not match
            the result schema.
    """
    try:
        return SentimentResult.model_validate_json(payload)
    except ValidationError as exc:
        raise DecodeError(
            message=f"Failed to decode sentiment result ({exc.error_count()} errors)"
        ) from exc
