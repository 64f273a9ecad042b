# SPDX-License-Identifier: Apache-2.0
"""Tests for batch creation."""

from __future__ import annotations

import pytest

from langbly_translator.core.batcher import MAX_BATCH_CHARS, MAX_BATCH_SIZE, create_batches
from langbly_translator.core.models import Batch, TranslationUnit


def _units(*texts: str) -> list[TranslationUnit]:
    return [TranslationUnit((str(i),), text) for i, text in enumerate(texts)]


def _assert_invariants(
    batches: list[Batch],
    units: list[TranslationUnit],
    max_size: int = MAX_BATCH_SIZE,
    max_chars: int = MAX_BATCH_CHARS,
) -> None:
    for batch in batches:
        assert 1 <= len(batch) <= max_size
        assert batch.char_count == sum(len(unit.text) for unit in batch.units)
        if batch.char_count > max_chars:
            assert len(batch) == 1
    assert [unit for batch in batches for unit in batch.units] == units


class TestCreateBatches:
    """Tests for create_batches()."""

    def test_default_limits(self) -> None:
        assert MAX_BATCH_SIZE == 50
        assert MAX_BATCH_CHARS == 10000

    def test_empty_input(self) -> None:
        assert create_batches([]) == []

    def test_single_batch(self) -> None:
        units = _units("a", "b", "c")
        batches = create_batches(units)

        assert len(batches) == 1
        assert batches[0].units == units
        assert batches[0].char_count == 3

    def test_split_by_count(self) -> None:
        """120 short units become batches of 50, 50 and 20."""
        units = _units(*["x"] * 120)
        batches = create_batches(units)

        assert [len(batch) for batch in batches] == [50, 50, 20]
        _assert_invariants(batches, units)

    def test_exactly_max_size(self) -> None:
        units = _units(*["x"] * 50)
        assert len(create_batches(units)) == 1

    def test_split_by_chars(self) -> None:
        units = _units("a" * 6000, "b" * 3000, "c" * 2000)
        batches = create_batches(units)

        assert [len(batch) for batch in batches] == [2, 1]
        assert [batch.char_count for batch in batches] == [9000, 2000]
        _assert_invariants(batches, units)

    def test_exactly_max_chars(self) -> None:
        """A batch may reach the character limit exactly."""
        units = _units("a" * 5000, "b" * 5000)
        batches = create_batches(units)
        assert len(batches) == 1
        assert batches[0].char_count == 10000

    def test_oversize_unit_alone(self) -> None:
        """A 12,000 character unit gets its own batch and is not rejected."""
        units = _units("short", "x" * 12000, "tail")
        batches = create_batches(units)

        assert [len(batch) for batch in batches] == [1, 1, 1]
        assert batches[1].char_count == 12000
        _assert_invariants(batches, units)

    def test_oversize_unit_first(self) -> None:
        units = _units("x" * 12000, "a", "b")
        batches = create_batches(units)

        assert [len(batch) for batch in batches] == [1, 2]
        _assert_invariants(batches, units)

    def test_counts_code_points(self) -> None:
        """Multi-byte characters count once each."""
        units = _units("日" * 6, "本" * 4)
        batches = create_batches(units, max_batch_chars=10)
        assert len(batches) == 1
        assert batches[0].char_count == 10

    def test_custom_limits(self) -> None:
        units = _units("aa", "bb", "cc", "dd", "ee")
        batches = create_batches(units, max_batch_size=2, max_batch_chars=100)

        assert [len(batch) for batch in batches] == [2, 2, 1]
        _assert_invariants(batches, units, max_size=2, max_chars=100)

    def test_mixed_limits(self) -> None:
        texts = [("y" * (i * 37 % 900)) for i in range(300)]
        units = _units(*texts)
        batches = create_batches(units, max_batch_size=7, max_batch_chars=2500)
        _assert_invariants(batches, units, max_size=7, max_chars=2500)

    def test_empty_texts_allowed(self) -> None:
        units = _units("", "", "")
        batches = create_batches(units)
        assert len(batches) == 1
        assert batches[0].char_count == 0

    @pytest.mark.parametrize("size,chars", [(0, 100), (10, 0), (-1, 100)])
    def test_invalid_limits(self, size: int, chars: int) -> None:
        with pytest.raises(ValueError):
            create_batches(_units("a"), max_batch_size=size, max_batch_chars=chars)
