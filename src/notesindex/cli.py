"""Command-line entry point for building a notes index."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from notesindex import __version__
from notesindex.config import OUTPUT_FORMATS
from notesindex.exceptions import NotesIndexError
from notesindex.pipeline import IndexOptions, build_index
from notesindex.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notesindex",
        description="Build a table-of-contents index from a directory of notes files.",
    )
    parser.add_argument("--input-dir", required=True, help="Directory with one notes file per book")
    parser.add_argument("--output-file", required=True, help="Path of the generated index")
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: inferred from the output file suffix)",
    )
    parser.add_argument(
        "--pattern",
        action="append",
        default=[],
        help="Glob pattern for notes files (repeatable, default: *.md and *.txt)",
    )
    parser.add_argument("--title", help="Title of the HTML index page")
    parser.add_argument("--no-toc", action="store_true", help="Omit the table of contents")
    sections = parser.add_mutually_exclusive_group()
    sections.add_argument(
        "--include-section",
        action="append",
        default=[],
        metavar="TITLE",
        help="Keep only sections with this title (repeatable)",
    )
    sections.add_argument(
        "--exclude-section",
        action="append",
        default=[],
        metavar="TITLE",
        help="Drop sections with this title (repeatable)",
    )
    parser.add_argument("--max-depth", type=_positive_int, help="Drop sections nested deeper than this")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"notesindex {__version__}")
    return parser


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    options = IndexOptions(
        output_format=args.format,
        include_toc=not args.no_toc,
        section_filter_mode="include" if args.include_section else "exclude",
        sections=args.include_section or args.exclude_section,
        max_depth=args.max_depth,
        patterns=args.pattern,
        title=args.title,
    )

    try:
        result = build_index(args.input_dir, args.output_file, options)
    except NotesIndexError as exc:
        logger.debug("Index build failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(result.summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
