# SPDX-License-Identifier: Apache-2.0
"""Data models for structured document translation.

A document is a tree of nodes. Internal nodes map keys to child nodes,
leaves carry text. Only ``TranslatableLeaf`` nodes are sent for translation.
Key paths are kept as tuples and joined to a delimited string only at
boundaries that need a flat key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

KEY_DELIMITER = "|"

KeyPath = tuple[str, ...]


class AmbiguousKeyPathError(ValueError):
    """A key cannot be represented unambiguously in a key path.

    Raised when a document key contains ``KEY_DELIMITER`` or when a set of
    key paths cannot be rebuilt into a single tree.
    """


@dataclass(frozen=True)
class TranslatableLeaf:
    """Leaf node whose text is eligible for translation."""

    text: str


@dataclass(frozen=True)
class OpaqueLeaf:
    """Leaf node that is carried by the document but never translated."""

    text: str | None = None


@dataclass(frozen=True)
class InternalNode:
    """Node mapping child keys to child nodes.

    Insertion order of ``children`` is the canonical traversal order.
    """

    children: dict[str, Node] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)


Node = Union[InternalNode, TranslatableLeaf, OpaqueLeaf]

# The document root is always an internal node.
Document = InternalNode


@dataclass(frozen=True)
class TranslationUnit:
    """A single translatable text located by its key path."""

    key_path: KeyPath
    text: str

    @property
    def char_count(self) -> int:
        """Length in Unicode code points."""
        return len(self.text)


@dataclass
class Batch:
    """Ordered group of units sent in one request."""

    units: list[TranslationUnit] = field(default_factory=list)
    char_count: int = 0

    def __len__(self) -> int:
        return len(self.units)

    @property
    def texts(self) -> list[str]:
        """Source texts in unit order."""
        return [unit.text for unit in self.units]

    def add(self, unit: TranslationUnit) -> None:
        self.units.append(unit)
        self.char_count += unit.char_count


@dataclass(frozen=True)
class TranslationResult:
    """Translated text for the unit at ``key_path``."""

    key_path: KeyPath
    translated_text: str


def validate_key(key: str) -> str:
    """Return ``key`` unchanged or raise if it contains the delimiter."""
    if KEY_DELIMITER in key:
        raise AmbiguousKeyPathError(
            f"Key {key!r} contains the key path delimiter {KEY_DELIMITER!r}"
        )
    return key


def join_key_path(key_path: KeyPath) -> str:
    """Join a key path into its delimited string form.

    Raises:
        AmbiguousKeyPathError: If a key contains the delimiter.
    """
    return KEY_DELIMITER.join(validate_key(key) for key in key_path)


def split_key_path(flat_key: str) -> KeyPath:
    """Split a delimited key back into a key path."""
    if not flat_key:
        return ()
    return tuple(flat_key.split(KEY_DELIMITER))
