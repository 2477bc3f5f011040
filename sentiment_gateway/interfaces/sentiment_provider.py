"""Abstract base class for remote sentiment-analysis providers.

Defines the single capability the gateway consumes: given text, return the
per-sentence polarity scores, or fail.  The production adapter wraps the
Google Cloud Natural Language REST API; tests inject an in-memory double.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sentiment_gateway.models.sentiment import SentimentResult


# Concrete implementation: GoogleLanguageProvider
# Located in: sentiment_gateway/providers/sentiment/
class ISentimentProvider(ABC):
    """Contract for sentiment-analysis services.

    Implementations are shared by all in-flight requests and must support
    concurrent ``analyze`` calls; no state may leak between calls.
    """

    @abstractmethod
    async def analyze(self, text: str) -> SentimentResult:
        """Score the sentiment of *text*.

        Parameters
        ----------
        text:
            The caller's original, un-normalized text.

        Returns
        -------
        SentimentResult
            Sentences in provider order with their scores.

        Raises
        ------
        sentiment_gateway.utils.errors.ProviderError
            If the remote call fails for any reason.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs, e.g. ``"google_language"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured well enough to call."""

    async def aclose(self) -> None:
        """Release any resources owned by the provider.

        The default is a no-op for providers that borrow their transport.
        """
