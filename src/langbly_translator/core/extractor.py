# SPDX-License-Identifier: Apache-2.0
"""Extraction of translatable text units from a document tree."""

from __future__ import annotations

from collections.abc import Iterator

from .models import (
    Document,
    InternalNode,
    KeyPath,
    Node,
    OpaqueLeaf,
    TranslatableLeaf,
    TranslationUnit,
    validate_key,
)


def extract(document: Document) -> list[TranslationUnit]:
    """Collect every translatable leaf of ``document`` in traversal order.

    Traversal is depth-first pre-order, visiting children in insertion
    order. A document without translatable leaves yields an empty list.

    Args:
        document: Root node of the document. It is not modified.

    Returns:
        Units ordered as their leaves appear in the document.

    Raises:
        AmbiguousKeyPathError: If a key on the way to a leaf contains the
            key path delimiter.
    """
    return list(_walk(document, ()))


def _walk(node: Node, key_path: KeyPath) -> Iterator[TranslationUnit]:
    if isinstance(node, TranslatableLeaf):
        yield TranslationUnit(key_path=key_path, text=node.text)
    elif isinstance(node, InternalNode):
        for key, child in node.children.items():
            yield from _walk(child, (*key_path, validate_key(key)))
    elif isinstance(node, OpaqueLeaf):
        return
    else:
        raise TypeError(f"Unsupported node type: {type(node).__name__}")
