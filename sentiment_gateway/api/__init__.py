"""Sentiment gateway API layer: routes, schemas, and middleware."""

from sentiment_gateway.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
)
from sentiment_gateway.api.routes import router
from sentiment_gateway.api.schemas import AnalyzeRequest, ErrorResponse

__all__ = [
    "AnalyzeRequest",
    "ErrorHandlingMiddleware",
    "ErrorResponse",
    "RequestLoggingMiddleware",
    "router",
]
