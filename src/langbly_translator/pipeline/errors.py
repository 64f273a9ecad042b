# SPDX-License-Identifier: Apache-2.0
"""Pipeline error definitions."""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    default_stage = "pipeline"

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.cause = cause

    def __str__(self) -> str:
        text = f"[{self.stage}] {self.message}"
        if self.cause is not None:
            text += f" (caused by: {self.cause})"
        return text


class DocumentTranslationError(PipelineError):
    """A document could not be translated.

    Raised once per document when any batch fails. Translations obtained from
    earlier batches of the same document are discarded.

    Attributes:
        document_id: Identity of the failed document, if the caller gave one.
        diagnostic: Message of the underlying service error.
    """

    default_stage = "translate"

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        stage: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, stage=stage, cause=cause)
        self.document_id = document_id

    @property
    def diagnostic(self) -> str:
        return str(self.cause) if self.cause is not None else self.message
