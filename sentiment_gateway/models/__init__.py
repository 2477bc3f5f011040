"""Pydantic data models for the sentiment gateway."""

from sentiment_gateway.models.sentiment import (
    Sentence,
    SentimentResult,
    ShapedResponse,
    SortOrder,
)

__all__ = [
    "Sentence",
    "SentimentResult",
    "ShapedResponse",
    "SortOrder",
]
