# SPDX-License-Identifier: Apache-2.0
"""Conversion between job item data and document trees.

Job item data is a nested mapping. A mapping holding a ``#text`` key is a
leaf; a truthy ``#translate`` flag next to it marks the leaf as
translatable. Other ``#``-prefixed scalar properties (``#label``,
``#format``, ...) are metadata and are not part of the tree.

Example:
    {
        "title": {"#text": "Hello", "#translate": True},
        "meta": {"#text": "x", "#translate": False},
    }
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .models import Document, InternalNode, Node, OpaqueLeaf, TranslatableLeaf

TEXT_PROPERTY = "#text"
TRANSLATE_PROPERTY = "#translate"


class DocumentFormatError(ValueError):
    """Job item data does not describe a document tree."""


def document_from_dict(data: Mapping[str, Any]) -> Document:
    """Build a document tree from job item data.

    Raises:
        DocumentFormatError: If ``data`` is not a mapping or is a leaf itself.
    """
    if not isinstance(data, Mapping):
        raise DocumentFormatError(
            f"Document data must be a mapping, got {type(data).__name__}"
        )
    if TEXT_PROPERTY in data:
        raise DocumentFormatError("Document root must not be a text leaf")
    return _internal_from_dict(data)


def _node_from_dict(data: Mapping[Any, Any]) -> Node:
    if TEXT_PROPERTY in data:
        text = data[TEXT_PROPERTY]
        if data.get(TRANSLATE_PROPERTY):
            return TranslatableLeaf("" if text is None else str(text))
        return OpaqueLeaf(None if text is None else str(text))
    return _internal_from_dict(data)


def _internal_from_dict(data: Mapping[Any, Any]) -> InternalNode:
    children: dict[str, Node] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            children[str(key)] = _node_from_dict(value)
    return InternalNode(children)


def document_to_dict(node: Node, include_flags: bool = False) -> dict[str, Any]:
    """Convert a document tree back into job item data.

    Args:
        node: Tree to convert.
        include_flags: Also emit ``#translate`` for each leaf.

    Returns:
        Nested dictionary. Leaves become ``{"#text": ...}``.
    """
    if isinstance(node, InternalNode):
        return {
            key: document_to_dict(child, include_flags)
            for key, child in node.children.items()
        }

    result: dict[str, Any] = {TEXT_PROPERTY: node.text}
    if include_flags:
        result[TRANSLATE_PROPERTY] = isinstance(node, TranslatableLeaf)
    return result


def merge_translations(
    data: Mapping[str, Any],
    translated: Document,
) -> dict[str, Any]:
    """Overlay translated texts onto a copy of the original job item data.

    Every leaf of ``translated`` replaces the ``#text`` at the same key path
    in ``data``. All other properties are kept. ``data`` is not modified.

    Raises:
        DocumentFormatError: If a translated key path does not exist in
            ``data``.
    """
    merged = copy.deepcopy(dict(data))
    _merge_into(merged, translated, ())
    return merged


def _merge_into(target: dict[Any, Any], node: InternalNode, path: tuple[str, ...]) -> None:
    for key, child in node.children.items():
        child_path = (*path, key)
        target_key = _find_key(target, key)
        if target_key is None or not isinstance(target[target_key], dict):
            raise DocumentFormatError(
                f"Translated key path {'/'.join(child_path)!r} not found in source data"
            )
        if isinstance(child, InternalNode):
            _merge_into(target[target_key], child, child_path)
        else:
            target[target_key][TEXT_PROPERTY] = child.text


def _find_key(target: Mapping[Any, Any], key: str) -> Any:
    # Source data may use non-string keys (e.g. list deltas).
    if key in target:
        return key
    for candidate in target:
        if str(candidate) == key:
            return candidate
    return None


def load_document(path: Path | str) -> dict[str, Any]:
    """Read job item data from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise DocumentFormatError(f"{path}: top-level JSON value must be an object")
    return data


def dump_document(data: Mapping[str, Any], path: Path | str) -> None:
    """Write job item data to a JSON file."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
