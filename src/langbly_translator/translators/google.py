# SPDX-License-Identifier: Apache-2.0
"""Google Translate backend using deep-translator."""

import asyncio

from deep_translator import GoogleTranslator as DeepGoogleTranslator  # type: ignore[import-untyped]
from deep_translator.exceptions import (  # type: ignore[import-untyped]
    InvalidSourceOrTargetLanguage,
    LanguageNotSupportedException,
    NotValidLength,
    NotValidPayload,
    RequestError,
    ServerException,
    TooManyRequests,
    TranslationNotFound,
)

from langbly_translator.translators.base import (
    ConfigurationError,
    QuotaExceededError,
    TranslationServiceError,
)

# The web endpoint rejects texts of 5000 characters or more.
MAX_TEXT_CHARS = 4999


class GoogleTranslator:
    """Google Translate backend.

    Uses the free Google Translate web API through deep-translator, so no
    API key is needed. The web API takes one text per request, so a batch
    is sent text by text in a worker thread and stops at the first failure.
    At most ``max_concurrent`` batches are in flight at a time.

    deep-translator strips the text it sends; leading and trailing
    whitespace of every text is restored on the translation.

    Attributes:
        name: Backend identifier ("google").
    """

    def __init__(self, max_concurrent: int = 5) -> None:
        """Initialize GoogleTranslator.

        Args:
            max_concurrent: Maximum number of batches translated at once.

        Raises:
            ConfigurationError: If max_concurrent is less than 1.
        """
        if max_concurrent < 1:
            raise ConfigurationError("max_concurrent must be at least 1")
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def name(self) -> str:
        """Return backend name."""
        return "google"

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text using Google Translate.

        Empty and whitespace-only texts are returned without a request.

        Raises:
            TranslationServiceError: On translation failure.
            QuotaExceededError: If Google rate-limits the request.
        """
        return (await self.translate_batch([text], source_lang, target_lang))[0]

    async def translate_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate multiple texts, one request per non-blank text.

        Returns:
            List of translated texts (same order and length as input).

        Raises:
            TranslationServiceError: If a text is too long, the language pair
                is not supported, or any request fails.
            QuotaExceededError: If Google rate-limits a request.
        """
        for text in texts:
            if len(text) > MAX_TEXT_CHARS:
                raise TranslationServiceError(
                    f"Google Translate accepts at most {MAX_TEXT_CHARS} characters "
                    f"per text, got {len(text)}"
                )
        if all(not text.strip() for text in texts):
            return list(texts)

        async with self._semaphore:
            return await asyncio.to_thread(
                self._translate_batch_sync, texts, source_lang, target_lang
            )

    def _translate_batch_sync(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        # deep-translator keeps request state on the instance, so each batch
        # gets its own translator and uses it from a single thread.
        try:
            translator = DeepGoogleTranslator(source=source_lang, target=target_lang)
        except (InvalidSourceOrTargetLanguage, LanguageNotSupportedException) as e:
            raise TranslationServiceError(
                f"Google Translate does not support {source_lang!r} -> {target_lang!r}: {e}"
            ) from e
        return [_translate_text(translator, text) for text in texts]


def _translate_text(translator: DeepGoogleTranslator, text: str) -> str:
    stripped = text.strip()
    if not stripped:
        return text

    try:
        result = translator.translate(stripped)
    except TooManyRequests as e:
        raise QuotaExceededError(f"Google Translate rate limit exceeded: {e}") from e
    except (
        NotValidLength,
        NotValidPayload,
        RequestError,
        ServerException,
        TranslationNotFound,
    ) as e:
        raise TranslationServiceError(f"Google Translate failed: {e}") from e

    # None means Google echoed the text back unchanged.
    if result is None:
        result = stripped
    lead = len(text) - len(text.lstrip())
    return text[:lead] + result + text[lead + len(stripped):]
