# SPDX-License-Identifier: Apache-2.0
"""Translation pipeline package."""

from .errors import DocumentTranslationError, PipelineError
from .job import JobItem, JobItemResult, JobMessage, translate_item, translate_job
from .progress import ProgressCallback
from .translation_pipeline import (
    OutcomeStatus,
    PipelineConfig,
    PipelineState,
    TranslationOutcome,
    TranslationPipeline,
)

__all__ = [
    "DocumentTranslationError",
    "JobItem",
    "JobItemResult",
    "JobMessage",
    "OutcomeStatus",
    "PipelineConfig",
    "PipelineError",
    "PipelineState",
    "ProgressCallback",
    "TranslationOutcome",
    "TranslationPipeline",
    "translate_item",
    "translate_job",
]
