# SPDX-License-Identifier: Apache-2.0
"""Core document modules: extraction, batching and reassembly."""

from .batcher import MAX_BATCH_CHARS, MAX_BATCH_SIZE, create_batches
from .document import (
    DocumentFormatError,
    document_from_dict,
    document_to_dict,
    dump_document,
    load_document,
    merge_translations,
)
from .extractor import extract
from .models import (
    KEY_DELIMITER,
    AmbiguousKeyPathError,
    Batch,
    Document,
    InternalNode,
    KeyPath,
    Node,
    OpaqueLeaf,
    TranslatableLeaf,
    TranslationResult,
    TranslationUnit,
    join_key_path,
    split_key_path,
)
from .reassembler import reassemble

__all__ = [
    "KEY_DELIMITER",
    "MAX_BATCH_CHARS",
    "MAX_BATCH_SIZE",
    "AmbiguousKeyPathError",
    "Batch",
    "Document",
    "DocumentFormatError",
    "InternalNode",
    "KeyPath",
    "Node",
    "OpaqueLeaf",
    "TranslatableLeaf",
    "TranslationResult",
    "TranslationUnit",
    "create_batches",
    "document_from_dict",
    "document_to_dict",
    "dump_document",
    "extract",
    "join_key_path",
    "load_document",
    "merge_translations",
    "reassemble",
    "split_key_path",
]
