# SPDX-License-Identifier: Apache-2.0
"""Translation of multi-document jobs.

A job holds several items, each with its own document. Items are isolated
from each other: one failing item is reported on its result and the other
items still run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from langbly_translator.core.models import Document
from langbly_translator.pipeline.errors import DocumentTranslationError
from langbly_translator.pipeline.translation_pipeline import (
    OutcomeStatus,
    PipelineConfig,
    TranslationOutcome,
    TranslationPipeline,
)
from langbly_translator.translators.base import TranslatorBackend

logger = logging.getLogger(__name__)


@dataclass
class JobItem:
    """A document to translate, identified within its job."""

    item_id: str
    document: Document


@dataclass
class JobMessage:
    """Message recorded on a job item."""

    text: str
    level: str = "status"


@dataclass
class JobItemResult:
    """Outcome of one job item."""

    item_id: str
    outcome: TranslationOutcome | None = None
    error: DocumentTranslationError | None = None
    messages: list[JobMessage] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.error is None


async def translate_job(
    translator: TranslatorBackend,
    items: Sequence[JobItem],
    config: PipelineConfig | None = None,
    max_concurrent: int = 1,
) -> list[JobItemResult]:
    """Translate every item of a job.

    Args:
        translator: Backend shared by all items.
        items: Items to translate.
        config: Pipeline configuration shared by all items.
        max_concurrent: Number of items translated at the same time. Batches
            of a single item are always sent one after another.

    Returns:
        One result per item, in the order of ``items``.

    Raises:
        AmbiguousKeyPathError: If a document key contains the key path
            delimiter. Items still running are cancelled.
        ConfigurationError: If the translator is misconfigured. Items still
            running are cancelled.
    """
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be >= 1, got {max_concurrent}")

    pipeline = TranslationPipeline(translator, config)
    semaphore = asyncio.Semaphore(max_concurrent)

    async def run(item: JobItem) -> JobItemResult:
        async with semaphore:
            return await translate_item(pipeline, item)

    tasks = [asyncio.create_task(run(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        # Siblings must not keep sending batches after the job has failed.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def translate_item(pipeline: TranslationPipeline, item: JobItem) -> JobItemResult:
    """Translate one job item and record the outcome as messages."""
    result = JobItemResult(item_id=item.item_id)

    try:
        outcome = await pipeline.translate(item.document, document_id=item.item_id)
    except DocumentTranslationError as e:
        result.error = e
        result.messages.append(JobMessage(f"Translation failed: {e.diagnostic}", "error"))
        logger.error("Translation failed for job item %s: %s", item.item_id, e.diagnostic)
        return result

    result.outcome = outcome
    if outcome.status is OutcomeStatus.NO_CONTENT:
        result.messages.append(JobMessage("No translatable content found.", "warning"))
        logger.warning("No translatable content found for job item %s", item.item_id)
    else:
        result.messages.append(JobMessage(f"Translated {len(outcome.results)} segment(s)."))
    return result
