# SPDX-License-Identifier: Apache-2.0
"""Translation pipeline implementation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from langbly_translator.core.batcher import MAX_BATCH_CHARS, MAX_BATCH_SIZE, create_batches
from langbly_translator.core.extractor import extract
from langbly_translator.core.models import (
    Batch,
    Document,
    TranslationResult,
    TranslationUnit,
)
from langbly_translator.core.reassembler import reassemble
from langbly_translator.pipeline.errors import DocumentTranslationError
from langbly_translator.pipeline.progress import ProgressCallback
from langbly_translator.translators.base import (
    ArrayLengthMismatchError,
    ConfigurationError,
    MalformedResponseError,
    TranslationServiceError,
    TranslatorBackend,
    TranslatorError,
)

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Stages a document goes through."""

    EXTRACTING = "extract"
    BATCHING = "batch"
    TRANSLATING = "translate"
    REASSEMBLING = "reassemble"
    DONE = "done"
    FAILED = "failed"


class OutcomeStatus(str, Enum):
    """How a successfully processed document ended."""

    TRANSLATED = "translated"
    NO_CONTENT = "no_content"


@dataclass
class PipelineConfig:
    """Translation pipeline configuration."""

    source_lang: str = "en"
    target_lang: str = "fr"

    # Per-request service limits
    max_batch_size: int = MAX_BATCH_SIZE
    max_batch_chars: int = MAX_BATCH_CHARS

    # Seconds to wait for one batch; None waits indefinitely
    request_timeout: float | None = 30.0


@dataclass
class TranslationOutcome:
    """Result of translating one document."""

    status: OutcomeStatus
    document: Document | None = None
    results: list[TranslationResult] = field(default_factory=list)
    stats: dict[str, Any] | None = None

    @property
    def has_content(self) -> bool:
        return self.status is OutcomeStatus.TRANSLATED


class TranslationPipeline:
    """Document translation pipeline.

    Runs extraction, batching, one translator call per batch and reassembly
    for a single document. The pipeline keeps no per-document state, so one
    instance may translate many documents, also concurrently.
    """

    def __init__(
        self,
        translator: TranslatorBackend,
        config: PipelineConfig | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize TranslationPipeline."""
        self._translator = translator
        self._config = config or PipelineConfig()
        self._progress_callback = progress_callback

    @property
    def config(self) -> PipelineConfig:
        return self._config

    async def translate(
        self,
        document: Document,
        document_id: str | None = None,
    ) -> TranslationOutcome:
        """Translate every translatable leaf of ``document``.

        Args:
            document: Document to translate. It is not modified.
            document_id: Identity attached to errors and log records.

        Returns:
            Outcome holding the rebuilt document, or ``NO_CONTENT`` when the
            document has nothing to translate.

        Raises:
            DocumentTranslationError: If any batch fails. No partial document
                is returned.
            AmbiguousKeyPathError: If a document key contains the key path
                delimiter.
            ConfigurationError: If the translator is misconfigured.
        """
        units = self._stage_extract(document)
        if not units:
            logger.debug("Document %s has no translatable content", document_id or "-")
            self._notify(PipelineState.DONE, 0, 0, "No translatable content found.")
            return TranslationOutcome(
                status=OutcomeStatus.NO_CONTENT,
                stats={"units": 0, "batches": 0, "characters": 0},
            )

        batches = self._stage_batch(units)
        translations = await self._stage_translate(batches, document_id)

        results = [
            TranslationResult(key_path=unit.key_path, translated_text=text)
            for unit, text in zip(units, translations)
        ]
        translated_document = self._stage_reassemble(results)

        stats = {
            "units": len(units),
            "batches": len(batches),
            "characters": sum(batch.char_count for batch in batches),
        }
        self._notify(PipelineState.DONE, len(results), len(results))
        return TranslationOutcome(
            status=OutcomeStatus.TRANSLATED,
            document=translated_document,
            results=results,
            stats=stats,
        )

    def _stage_extract(self, document: Document) -> list[TranslationUnit]:
        units = extract(document)
        self._notify(PipelineState.EXTRACTING, len(units), len(units))
        return units

    def _stage_batch(self, units: list[TranslationUnit]) -> list[Batch]:
        batches = create_batches(
            units,
            max_batch_size=self._config.max_batch_size,
            max_batch_chars=self._config.max_batch_chars,
        )
        logger.debug("Split %d units into %d batches", len(units), len(batches))
        self._notify(PipelineState.BATCHING, len(batches), len(batches))
        return batches

    async def _stage_translate(
        self,
        batches: list[Batch],
        document_id: str | None,
    ) -> list[str]:
        translated_texts: list[str] = []
        total = len(batches)

        # Sequential on purpose: later batches are not sent once one fails.
        for index, batch in enumerate(batches, start=1):
            try:
                translated_texts.extend(await self._translate_batch(batch))
            except ConfigurationError:
                raise
            except TranslatorError as exc:
                self._notify(PipelineState.FAILED, index - 1, total, str(exc))
                raise DocumentTranslationError(
                    f"Batch {index} of {total} failed",
                    document_id=document_id,
                    cause=exc,
                ) from exc
            self._notify(PipelineState.TRANSLATING, index, total)

        return translated_texts

    async def _translate_batch(self, batch: Batch) -> list[str]:
        """Send one batch and check the result against the port contract.

        Every failure of the backend call surfaces as a ``TranslatorError``.
        Exceptions outside that hierarchy are wrapped in
        ``TranslationServiceError``.
        """
        texts = batch.texts
        timeout = self._config.request_timeout
        try:
            translations = await asyncio.wait_for(
                self._translator.translate_batch(
                    texts,
                    self._config.source_lang,
                    self._config.target_lang,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as exc:
            limit = f" after {timeout:g}s" if timeout is not None else ""
            raise TranslationServiceError(
                f"Translator {self._translator.name!r} timed out{limit}"
            ) from exc
        except TranslatorError:
            raise
        except Exception as exc:
            logger.warning(
                "Translator %r raised %s: %s",
                self._translator.name,
                type(exc).__name__,
                exc,
            )
            raise TranslationServiceError(
                f"Translator {self._translator.name!r} failed: {exc}"
            ) from exc

        if not translations:
            raise ArrayLengthMismatchError(expected=len(texts), actual=0)
        if not isinstance(translations, (list, tuple)) or not all(
            isinstance(text, str) for text in translations
        ):
            raise MalformedResponseError(
                f"Translator {self._translator.name!r} must return a list of strings"
            )
        if len(translations) != len(texts):
            raise ArrayLengthMismatchError(expected=len(texts), actual=len(translations))
        return list(translations)

    def _stage_reassemble(self, results: list[TranslationResult]) -> Document:
        document = reassemble(results)
        self._notify(PipelineState.REASSEMBLING, len(results), len(results))
        return document

    def _notify(
        self,
        stage: PipelineState,
        current: int,
        total: int,
        message: str = "",
    ) -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage.value, current, total, message)
