# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for translation pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol.

    ``stage`` is the value of a ``PipelineState``; ``current`` and ``total``
    count units (extract), batches (batch, translate) or leaves (reassemble).
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
