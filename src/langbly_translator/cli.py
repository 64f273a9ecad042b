# SPDX-License-Identifier: Apache-2.0
"""
Langbly Translator - CLI Tool

Translates the translatable leaves of a JSON document and writes the
translated document as JSON.

Usage:
    translate-doc <input.json> [options]

Examples:
    translate-doc node.json                         # Langbly, en -> fr
    translate-doc node.json -s en -t de -o de.json
    translate-doc node.json --merge                 # Keep untranslated fields
    translate-doc job.json --job                    # One document per top-level key
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any, NoReturn

from dotenv import load_dotenv

from langbly_translator.core.batcher import MAX_BATCH_CHARS, MAX_BATCH_SIZE
from langbly_translator.core.document import (
    DocumentFormatError,
    document_from_dict,
    document_to_dict,
    dump_document,
    load_document,
    merge_translations,
)
from langbly_translator.core.models import AmbiguousKeyPathError, InternalNode
from langbly_translator.pipeline.job import JobItem, translate_job
from langbly_translator.pipeline.translation_pipeline import PipelineConfig
from langbly_translator.translators.base import ConfigurationError, TranslatorBackend
from langbly_translator.translators.echo import EchoTranslator
from langbly_translator.translators.google import GoogleTranslator
from langbly_translator.translators.langbly import LangblyTranslator

logger = logging.getLogger(__name__)

# Default output directory
DEFAULT_OUTPUT_DIR = "./output/"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value: {value!r}") from None
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="translate-doc",
        description="Translate the translatable fields of a JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s node.json                     # Langbly (default)
  %(prog)s node.json --backend google    # Google Translate, no API key
  %(prog)s node.json --backend echo      # Dry run, copies source text
  %(prog)s node.json -s en -t de         # English to German
  %(prog)s node.json --merge             # Write the full document back

Environment Variables:
  LANGBLY_API_KEY   Langbly API key (required for --backend langbly)
  LANGBLY_API_URL   Langbly API base URL (optional)
""",
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Path to the JSON document to translate",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help=f"Output file path (default: {DEFAULT_OUTPUT_DIR}<input>_<target>.json)",
    )
    parser.add_argument(
        "-b",
        "--backend",
        default="langbly",
        choices=["langbly", "google", "echo"],
        help="Translation backend (default: langbly)",
    )
    parser.add_argument(
        "-s",
        "--source",
        default="en",
        help="Source language code (default: en)",
    )
    parser.add_argument(
        "-t",
        "--target",
        default="fr",
        help="Target language code (default: fr)",
    )

    langbly_group = parser.add_argument_group("Langbly options")
    langbly_group.add_argument(
        "--api-key",
        help="Langbly API key (or set LANGBLY_API_KEY)",
    )
    langbly_group.add_argument(
        "--api-url",
        help="Langbly API base URL (or set LANGBLY_API_URL)",
    )

    batch_group = parser.add_argument_group("Batching options")
    batch_group.add_argument(
        "--max-batch-size",
        type=_positive_int,
        default=MAX_BATCH_SIZE,
        help=f"Maximum texts per request (default: {MAX_BATCH_SIZE})",
    )
    batch_group.add_argument(
        "--max-batch-chars",
        type=_positive_int,
        default=MAX_BATCH_CHARS,
        help=f"Maximum characters per request (default: {MAX_BATCH_CHARS})",
    )
    batch_group.add_argument(
        "--timeout",
        type=_positive_float,
        default=30.0,
        help="Seconds to wait for one request (default: 30)",
    )

    parser.add_argument(
        "--merge",
        action="store_true",
        help="Write the source document with translated texts instead of "
        "only the translated fields",
    )
    parser.add_argument(
        "--job",
        action="store_true",
        help="Treat each top-level key of the input as a separate document",
    )
    parser.add_argument(
        "-j",
        "--concurrency",
        type=_positive_int,
        default=1,
        help="Documents translated in parallel with --job (default: 1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def create_translator(args: argparse.Namespace) -> TranslatorBackend:
    """Create translator based on backend selection.

    Raises:
        ConfigurationError: If the Langbly API key is missing.
    """
    if args.backend == "langbly":
        api_key = args.api_key or os.environ.get("LANGBLY_API_KEY", "")
        if not api_key:
            raise ConfigurationError(
                "Langbly API key is required for --backend langbly. "
                "Set --api-key or the LANGBLY_API_KEY environment variable."
            )
        api_url = args.api_url or os.environ.get("LANGBLY_API_URL") or None
        return LangblyTranslator(api_key=api_key, api_url=api_url, timeout=args.timeout)

    if args.backend == "google":
        return GoogleTranslator()

    return EchoTranslator()


def default_output_path(input_path: Path, target_lang: str) -> Path:
    return Path(DEFAULT_OUTPUT_DIR) / f"{input_path.stem}_{target_lang}.json"


def build_items(data: dict[str, Any], as_job: bool) -> list[JobItem]:
    """Turn input data into job items.

    Raises:
        DocumentFormatError: If a document is malformed.
    """
    if not as_job:
        return [JobItem(item_id="document", document=document_from_dict(data))]

    items = []
    for item_id, item_data in data.items():
        if not isinstance(item_data, dict):
            raise DocumentFormatError(f"Job item {item_id!r} must be an object")
        items.append(JobItem(item_id=str(item_id), document=document_from_dict(item_data)))
    return items


async def run(args: argparse.Namespace) -> int:
    """Execute translation pipeline.

    Returns:
        Exit code (0: success, 1: failure).
    """
    input_path: Path = args.input
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        data = load_document(input_path)
        items = build_items(data, args.job)
        translator = create_translator(args)
    except (ValueError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output_path: Path = args.output or default_output_path(input_path, args.target)
    config = PipelineConfig(
        source_lang=args.source,
        target_lang=args.target,
        max_batch_size=args.max_batch_size,
        max_batch_chars=args.max_batch_chars,
        request_timeout=args.timeout,
    )

    print(f"Input: {input_path}")
    print(f"Output: {output_path}")
    print(f"Backend: {translator.name}")
    print(f"Translation: {args.source} -> {args.target}")
    print()

    try:
        results = await translate_job(
            translator, items, config, max_concurrent=max(1, args.concurrency)
        )
    except (AmbiguousKeyPathError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if isinstance(translator, LangblyTranslator):
            await translator.close()

    output: dict[str, Any] = {}
    failed = 0
    for result in results:
        for message in result.messages:
            print(f"  [{result.item_id}] {message.level}: {message.text}")
        if not result.succeeded:
            failed += 1
            continue

        source = data if not args.job else data[result.item_id]
        outcome = result.outcome
        document = InternalNode()
        if outcome is not None and outcome.document is not None:
            document = outcome.document
        if args.merge:
            translated = merge_translations(source, document)
        else:
            translated = document_to_dict(document)
        if args.job:
            output[result.item_id] = translated
        else:
            output = translated

    if failed and not args.job:
        return 1

    dump_document(output, output_path)
    print()
    print(f"Complete: {output_path}")
    if failed:
        print(f"  Failed items: {failed} of {len(results)}", file=sys.stderr)
        return 1
    return 0


def main() -> NoReturn:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
