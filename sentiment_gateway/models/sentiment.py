"""Sentiment analysis data models.

Defines Pydantic v2 models for the provider's structured result and the
caller-selected sort order.  All models use frozen config: a result pulled
from the cache or the provider is never mutated in place, the shaper builds
a new list instead.

Architecture note:
    ``SentimentResult`` is the unit that gets cached.  It is serialized to
    bytes by :mod:`sentiment_gateway.services.result_codec` before it enters
    the cache, so the cache only ever holds opaque payloads whose size can
    be measured.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortOrder(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Order in which sentences are returned, by sentiment score."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: str | None) -> SortOrder:
        """Map a query-string value to a sort order.

        Only ``"desc"`` (any case) selects descending; anything else,
        including a missing parameter, falls back to ascending.
        """
        if value and value.lower() == cls.DESCENDING.value:
            return cls.DESCENDING
        return cls.ASCENDING


class Sentence(BaseModel):
    """One text span with its sentiment polarity as scored by the provider."""

    # ser_json_inf_nan: non-finite scores must survive the cache round-trip.
    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    text: str
    # Polarity, -1.0 (negative) to 1.0 (positive).
    score: float
    # Strength of emotion regardless of polarity; not exposed in responses.
    magnitude: float = 0.0


class SentimentResult(BaseModel):
    """Full provider response for one document."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    sentences: list[Sentence] = Field(default_factory=list)
    document_score: float = 0.0
    document_magnitude: float = 0.0
    # Language code detected by the provider, e.g. "en".
    language: str = ""


# The externally visible response: one single-key {text: score} mapping per
# retained sentence, in the requested order.
ShapedResponse = list[dict[str, float]]
