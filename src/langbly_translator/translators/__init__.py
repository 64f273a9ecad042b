# SPDX-License-Identifier: Apache-2.0
"""Translation backend modules.

This module provides translation backends for Langbly, Google Translate and
an echo backend for dry runs.

Usage:
    # Langbly (requires an API key)
    from langbly_translator.translators import LangblyTranslator
    async with LangblyTranslator(api_key="your-api-key") as translator:
        result = await translator.translate_batch(["Hello"], "en", "fr")

    # Google Translate (no API key required)
    from langbly_translator.translators import GoogleTranslator
    translator = GoogleTranslator()
    result = await translator.translate("Hello", "en", "fr")
"""

from langbly_translator.translators.base import (
    ArrayLengthMismatchError,
    ConfigurationError,
    MalformedResponseError,
    QuotaExceededError,
    TranslationServiceError,
    TranslatorBackend,
    TranslatorError,
)
from langbly_translator.translators.echo import EchoTranslator
from langbly_translator.translators.google import GoogleTranslator
from langbly_translator.translators.langbly import LangblyTranslator

__all__ = [
    # Protocol and exceptions
    "TranslatorBackend",
    "TranslatorError",
    "TranslationServiceError",
    "ArrayLengthMismatchError",
    "QuotaExceededError",
    "MalformedResponseError",
    "ConfigurationError",
    # Backends
    "EchoTranslator",
    "GoogleTranslator",
    "LangblyTranslator",
]
