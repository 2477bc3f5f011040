"""Google Cloud Natural Language sentiment provider.

Implements ISentimentProvider against the ``documents:analyzeSentiment``
REST endpoint.  Authentication uses an API key passed as the ``key`` query
parameter.  The ``httpx.AsyncClient`` is injected via the constructor so a
single connection pool is shared by every request and can be replaced in
tests.  Any failure (transport, non-2xx status, unparseable body) surfaces
as :class:`ProviderError`; retries are left to the caller.
"""

from __future__ import annotations

from typing import Any

import httpx

from sentiment_gateway.config.settings import Settings
from sentiment_gateway.interfaces.sentiment_provider import ISentimentProvider
from sentiment_gateway.models.sentiment import Sentence, SentimentResult
from sentiment_gateway.utils.errors import ProviderError
from sentiment_gateway.utils.logging import get_logger

_PROVIDER_NAME = "google_language"
_ANALYZE_PATH = "/v1/documents:analyzeSentiment"


class GoogleLanguageProvider(ISentimentProvider):
    """Sentiment provider backed by the Google Cloud Natural Language API."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._api_key = settings.google_api_key
        self._url = f"{settings.language_api_base_url.rstrip('/')}{_ANALYZE_PATH}"
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # ISentimentProvider implementation
    # ------------------------------------------------------------------

    async def analyze(self, text: str) -> SentimentResult:
        """Send *text* as a plain-text document and parse the per-sentence scores."""
        payload = {
            "document": {"type": "PLAIN_TEXT", "content": text},
            "encodingType": "UTF8",
        }
        try:
            response = await self._http.post(
                self._url, params={"key": self._api_key}, json=payload
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                message=f"Language API returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(
                message=f"Language API request failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except ValueError as exc:
            raise ProviderError(
                message="Language API returned a non-JSON body",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not isinstance(body, dict):
            raise ProviderError(
                message="Language API returned an unexpected body",
                provider_name=_PROVIDER_NAME,
            )

        result = self._parse_response(body)
        self._logger.debug(
            "google_language_analyzed",
            sentences=len(result.sentences),
            language=result.language,
        )
        return result

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured."""
        return bool(self._api_key)

    # -- Private helpers -------------------------------------------------------

    @staticmethod
    def _parse_response(body: dict[str, Any]) -> SentimentResult:
        """Map the REST response onto :class:`SentimentResult`.

        Missing fields default to empty/zero, matching the API's habit of
        omitting zero-valued fields.
        """
        try:
            sentences = [
                Sentence(
                    text=(item.get("text") or {}).get("content", ""),
                    score=(item.get("sentiment") or {}).get("score", 0.0),
                    magnitude=(item.get("sentiment") or {}).get("magnitude", 0.0),
                )
                for item in body.get("sentences") or []
            ]
            document = body.get("documentSentiment") or {}
            return SentimentResult(
                sentences=sentences,
                document_score=document.get("score", 0.0),
                document_magnitude=document.get("magnitude", 0.0),
                language=body.get("language", ""),
            )
        except (AttributeError, TypeError, ValueError) as exc:
            raise ProviderError(
                message=f"Language API response did not match the expected shape: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
