# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for translation backends."""

from typing import Protocol, runtime_checkable


class TranslatorError(Exception):
    """Base exception for translator module."""

    pass


class TranslationServiceError(TranslatorError):
    """The translation service failed (API error, timeout, bad result size).

    The diagnostic message is meant to be shown to users as-is.
    """

    pass


class ArrayLengthMismatchError(TranslationServiceError):
    """The service returned a different number of translations than requested."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} translations but got {actual}")
        self.expected = expected
        self.actual = actual


class QuotaExceededError(TranslationServiceError):
    """The service rejected the request because a rate or usage limit was hit."""

    pass


class MalformedResponseError(TranslatorError):
    """The service answered, but the response is structurally invalid."""

    pass


class ConfigurationError(TranslatorError):
    """Configuration error (missing API key, invalid parameters, etc.).

    This error is not tied to a document - fix the configuration first.
    """

    pass


@runtime_checkable
class TranslatorBackend(Protocol):
    """Protocol definition for translation backends.

    All translator implementations must conform to this protocol.
    """

    @property
    def name(self) -> str:
        """Backend name ("langbly", "google", "echo")."""
        ...

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text.

        Args:
            text: Text to translate.
            source_lang: Source language code ("en", "fr").
            target_lang: Target language code ("en", "fr").

        Returns:
            Translated text.

        Raises:
            TranslationServiceError: On translation failure.
        """
        ...

    async def translate_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        """Translate multiple texts in one call.

        Args:
            texts: List of texts to translate.
            source_lang: Source language code.
            target_lang: Target language code.

        Returns:
            List of translated texts (same order and length as input).

        Raises:
            TranslationServiceError: On translation failure.
            MalformedResponseError: If the service response cannot be read.
        """
        ...
