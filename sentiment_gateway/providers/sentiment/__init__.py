"""Remote sentiment-analysis providers."""

from sentiment_gateway.providers.sentiment.google_language_provider import (
    GoogleLanguageProvider,
)

__all__ = ["GoogleLanguageProvider"]
