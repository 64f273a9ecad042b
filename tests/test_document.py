# SPDX-License-Identifier: Apache-2.0
"""Tests for job item data conversion."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from langbly_translator.core.document import (
    DocumentFormatError,
    document_from_dict,
    document_to_dict,
    dump_document,
    load_document,
    merge_translations,
)
from langbly_translator.core.models import (
    InternalNode,
    OpaqueLeaf,
    TranslatableLeaf,
)

NODE_DATA = {
    "#label": "Article",
    "title": {
        "#label": "Title",
        "0": {"value": {"#text": "Hello", "#translate": True, "#label": "Title"}},
    },
    "meta": {"#text": "x", "#translate": False},
    "body": {
        "0": {
            "value": {"#text": "<p>Body</p>", "#translate": True, "#format": "full_html"},
            "format": {"#text": "full_html"},
        }
    },
}


class TestDocumentFromDict:
    """Tests for document_from_dict()."""

    def test_builds_tagged_tree(self) -> None:
        document = document_from_dict(NODE_DATA)

        assert document == InternalNode(
            {
                "title": InternalNode(
                    {"0": InternalNode({"value": TranslatableLeaf("Hello")})}
                ),
                "meta": OpaqueLeaf("x"),
                "body": InternalNode(
                    {
                        "0": InternalNode(
                            {
                                "value": TranslatableLeaf("<p>Body</p>"),
                                "format": OpaqueLeaf("full_html"),
                            }
                        )
                    }
                ),
            }
        )

    def test_metadata_properties_dropped(self) -> None:
        document = document_from_dict({"#label": "x", "a": {"#text": "t", "#translate": 1}})
        assert list(document.children) == ["a"]

    def test_leaf_wins_over_children(self) -> None:
        """A translatable leaf with nested mappings is treated as a leaf."""
        document = document_from_dict(
            {"a": {"#text": "t", "#translate": True, "nested": {"#text": "n", "#translate": True}}}
        )
        assert document.children["a"] == TranslatableLeaf("t")

    def test_non_string_keys(self) -> None:
        document = document_from_dict({0: {"#text": "t", "#translate": True}})  # type: ignore[dict-item]
        assert list(document.children) == ["0"]

    def test_none_text(self) -> None:
        document = document_from_dict({"a": {"#text": None, "#translate": True}})
        assert document.children["a"] == TranslatableLeaf("")

    def test_root_leaf_rejected(self) -> None:
        with pytest.raises(DocumentFormatError):
            document_from_dict({"#text": "root", "#translate": True})

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(DocumentFormatError):
            document_from_dict(["a"])  # type: ignore[arg-type]

    @pytest.mark.parametrize("data", [{}, {"#label": "x"}, {"a": "scalar"}])
    def test_root_without_leaves(self, data: dict[str, Any]) -> None:
        assert document_from_dict(data) == InternalNode({})

    def test_format_error_is_value_error(self) -> None:
        assert issubclass(DocumentFormatError, ValueError)


class TestDocumentToDict:
    """Tests for document_to_dict()."""

    def test_leaves_become_text_mappings(self) -> None:
        document = InternalNode(
            {"title": TranslatableLeaf("Bonjour"), "a": InternalNode({"b": OpaqueLeaf("x")})}
        )
        assert document_to_dict(document) == {
            "title": {"#text": "Bonjour"},
            "a": {"b": {"#text": "x"}},
        }

    def test_include_flags(self) -> None:
        document = InternalNode({"t": TranslatableLeaf("a"), "o": OpaqueLeaf("b")})
        assert document_to_dict(document, include_flags=True) == {
            "t": {"#text": "a", "#translate": True},
            "o": {"#text": "b", "#translate": False},
        }

    def test_round_trip_with_flags(self) -> None:
        document = document_from_dict(NODE_DATA)
        assert document_from_dict(document_to_dict(document, include_flags=True)) == document


class TestMergeTranslations:
    """Tests for merge_translations()."""

    def test_overlays_text(self) -> None:
        translated = InternalNode(
            {"title": InternalNode({"0": InternalNode({"value": TranslatableLeaf("Bonjour")})})}
        )
        merged = merge_translations(NODE_DATA, translated)

        assert merged["title"]["0"]["value"]["#text"] == "Bonjour"
        assert merged["title"]["0"]["value"]["#label"] == "Title"
        assert merged["meta"] == {"#text": "x", "#translate": False}
        assert merged["#label"] == "Article"

    def test_source_not_modified(self) -> None:
        translated = InternalNode({"meta": TranslatableLeaf("y")})
        merge_translations(NODE_DATA, translated)
        assert NODE_DATA["meta"]["#text"] == "x"  # type: ignore[index]

    def test_non_string_source_keys(self) -> None:
        data = {"items": {0: {"#text": "a", "#translate": True}}}
        translated = InternalNode({"items": InternalNode({"0": TranslatableLeaf("b")})})
        merged = merge_translations(data, translated)  # type: ignore[arg-type]
        assert merged["items"][0]["#text"] == "b"

    def test_unknown_key_path_rejected(self) -> None:
        translated = InternalNode({"missing": TranslatableLeaf("b")})
        with pytest.raises(DocumentFormatError):
            merge_translations(NODE_DATA, translated)


class TestJsonFiles:
    """Tests for load_document() and dump_document()."""

    def test_dump_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "out" / "doc.json"
        dump_document({"title": {"#text": "Grüß Gott"}}, path)

        assert "Grüß Gott" in path.read_text(encoding="utf-8")
        assert load_document(path) == {"title": {"#text": "Grüß Gott"}}

    def test_load_rejects_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(DocumentFormatError):
            load_document(path)
