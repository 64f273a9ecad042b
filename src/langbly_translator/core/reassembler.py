# SPDX-License-Identifier: Apache-2.0
"""Rebuilding a document tree from translated key paths."""

from __future__ import annotations

from collections.abc import Iterable

from .models import (
    AmbiguousKeyPathError,
    Document,
    InternalNode,
    TranslatableLeaf,
    TranslationResult,
    join_key_path,
)


def reassemble(results: Iterable[TranslationResult]) -> Document:
    """Build a new document containing one leaf per translation result.

    Intermediate internal nodes are created on demand, in the order results
    first reach them, so results in extraction order reproduce the source
    sibling order. Nodes that were not translated are absent from the output.

    Raises:
        AmbiguousKeyPathError: If a key path is empty, or if two paths
            collide (one ends where the other continues).
    """
    root = InternalNode()

    for result in results:
        if not result.key_path:
            raise AmbiguousKeyPathError("Cannot place a translation at the document root")

        *parents, leaf_key = result.key_path
        current = root
        for depth, key in enumerate(parents):
            child = current.children.get(key)
            if child is None:
                child = InternalNode()
                current.children[key] = child
            elif not isinstance(child, InternalNode):
                raise AmbiguousKeyPathError(
                    "Key path "
                    f"{join_key_path(result.key_path)!r} passes through leaf "
                    f"{join_key_path(result.key_path[: depth + 1])!r}"
                )
            current = child

        if leaf_key in current.children:
            raise AmbiguousKeyPathError(
                f"Duplicate key path {join_key_path(result.key_path)!r}"
            )
        current.children[leaf_key] = TranslatableLeaf(result.translated_text)

    return root
