# SPDX-License-Identifier: Apache-2.0
"""Langbly translation backend."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

from langbly_translator import __version__
from langbly_translator.translators.base import (
    ArrayLengthMismatchError,
    ConfigurationError,
    MalformedResponseError,
    QuotaExceededError,
    TranslationServiceError,
)

logger = logging.getLogger(__name__)


class LangblyTranslator:
    """Langbly translation backend.

    Talks to the Langbly REST API, which follows the Google Translate v2
    request and response shape. All texts passed to ``translate_batch`` are
    sent in a single request, so callers are responsible for keeping batches
    within the service limits (50 strings, 10,000 characters).

    Attributes:
        name: Backend identifier ("langbly").
    """

    DEFAULT_API_URL = "https://api.langbly.com"
    TRANSLATE_PATH = "/language/translate/v2"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        api_key: str,
        api_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        text_format: str = "html",
    ) -> None:
        """Initialize LangblyTranslator.

        Args:
            api_key: Langbly API key.
            api_url: API base URL (default: public Langbly endpoint).
            timeout: Total timeout per request in seconds.
            text_format: Source format hint, "html" or "text".

        Raises:
            ConfigurationError: If API key is not provided.
        """
        if not api_key:
            raise ConfigurationError("Langbly API key is required")

        self._api_key = api_key
        self._api_url = (api_url or self.DEFAULT_API_URL).rstrip("/")
        self._timeout = timeout
        self._text_format = text_format
        self._session: aiohttp.ClientSession | None = None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "langbly"

    @property
    def endpoint(self) -> str:
        """Full URL of the translate endpoint."""
        return self._api_url + self.TRANSLATE_PATH

    async def __aenter__(self) -> LangblyTranslator:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                    "User-Agent": f"langbly-python/{__version__}",
                },
            )
        return self._session

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text using Langbly.

        Raises:
            TranslationServiceError: On translation failure.
            MalformedResponseError: If the response cannot be read.
            ConfigurationError: On authentication failure.
        """
        results = await self.translate_batch([text], source_lang, target_lang)
        return results[0]

    async def translate_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate multiple texts in a single Langbly request.

        Args:
            texts: List of texts to translate.
            source_lang: Source language code.
            target_lang: Target language code.

        Returns:
            List of translated texts (same order and length as input).

        Raises:
            TranslationServiceError: On API or transport failure, an empty
                result, or a result of the wrong length.
            MalformedResponseError: If the response cannot be read.
            ConfigurationError: On authentication failure.
        """
        if not texts:
            return []

        payload = {
            "q": texts,
            "target": target_lang,
            "source": source_lang,
            "format": self._text_format,
        }
        data = await self._post(payload)
        return self._parse_translations(data, expected=len(texts))

    async def _post(self, payload: dict[str, Any]) -> Any:
        """Send a translate request and return the decoded JSON body."""
        session = await self._ensure_session()
        logger.debug(
            "POST %s (%d texts, %s -> %s)",
            self.endpoint,
            len(payload["q"]),
            payload["source"],
            payload["target"],
        )

        try:
            async with session.post(self.endpoint, json=payload) as response:
                raw = await response.read()
                if response.status == 200:
                    try:
                        return json.loads(raw.decode("utf-8"))
                    except (UnicodeDecodeError, json.JSONDecodeError) as e:
                        raise MalformedResponseError(
                            "Invalid JSON response from Langbly API."
                        ) from e

                body = raw.decode("utf-8", errors="replace")
                message = self._error_message(body) or (
                    f"HTTP {response.status}: {body}".strip()
                )
                if response.status in (401, 403):
                    raise ConfigurationError(f"Langbly API rejected the API key: {message}")
                if response.status == 429:
                    raise QuotaExceededError(f"Langbly API rate limit exceeded: {message}")
                raise TranslationServiceError(f"Langbly API error: {message}")
        except aiohttp.ClientError as e:
            raise TranslationServiceError(f"Langbly API error: {e}") from e
        except asyncio.TimeoutError as e:
            raise TranslationServiceError(
                f"Langbly API request timed out after {self._timeout:g}s"
            ) from e

    @staticmethod
    def _error_message(body: str) -> str | None:
        """Extract ``error.message`` from an error response body."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return None

    @staticmethod
    def _parse_translations(data: Any, expected: int) -> list[str]:
        if not isinstance(data, dict):
            raise MalformedResponseError("Langbly API response is not a JSON object.")

        container = data.get("data")
        translations = container.get("translations") if isinstance(container, dict) else None
        if not translations:
            raise TranslationServiceError("Langbly API returned empty translations.")
        if not isinstance(translations, list):
            raise MalformedResponseError("Langbly API translations must be a list.")

        results: list[str] = []
        for item in translations:
            text = item.get("translatedText") if isinstance(item, dict) else None
            if not isinstance(text, str):
                raise MalformedResponseError(
                    "Langbly API translation entry is missing translatedText."
                )
            results.append(text)

        if len(results) != expected:
            raise ArrayLengthMismatchError(expected=expected, actual=len(results))
        return results

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
