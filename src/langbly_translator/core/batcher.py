# SPDX-License-Identifier: Apache-2.0
"""Packing of translation units into request-sized batches."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Batch, TranslationUnit

MAX_BATCH_SIZE = 50
MAX_BATCH_CHARS = 10000


def create_batches(
    units: Iterable[TranslationUnit],
    max_batch_size: int = MAX_BATCH_SIZE,
    max_batch_chars: int = MAX_BATCH_CHARS,
) -> list[Batch]:
    """Split units into batches respecting API limits.

    Greedy single pass: a unit goes into the current batch unless that would
    exceed either limit, in which case the batch is closed first. A unit
    longer than ``max_batch_chars`` ends up alone in its own batch; text is
    never split.

    Args:
        units: Units in document order.
        max_batch_size: Maximum units per batch.
        max_batch_chars: Maximum characters (code points) per batch.

    Returns:
        Non-empty batches whose concatenated units equal the input order.

    Raises:
        ValueError: If a limit is smaller than 1.
    """
    if max_batch_size < 1:
        raise ValueError(f"max_batch_size must be >= 1, got {max_batch_size}")
    if max_batch_chars < 1:
        raise ValueError(f"max_batch_chars must be >= 1, got {max_batch_chars}")

    batches: list[Batch] = []
    current = Batch()

    for unit in units:
        if len(current) and (
            len(current) + 1 > max_batch_size
            or current.char_count + unit.char_count > max_batch_chars
        ):
            batches.append(current)
            current = Batch()
        current.add(unit)

    if len(current):
        batches.append(current)

    return batches
