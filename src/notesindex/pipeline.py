"""Index pipeline: discover, load, filter, render and write notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from notesindex.config import FORMAT_BY_SUFFIX, NOTESINDEX_DEFAULT_FORMAT, OUTPUT_FORMATS
from notesindex.exceptions import RenderError
from notesindex.loader import discover_documents, load_documents
from notesindex.output_formatter import format_index
from notesindex.schemas import IndexResult
from notesindex.sections import filter_document
from notesindex.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class IndexOptions:
    """Options for building a notes index.

    Attributes:
        output_format: "markdown", "html" or "json". Inferred from the output
            file suffix when None.
        include_toc: If True, include a table of contents in the output.
        section_filter_mode: Mode for section filtering ("include" or "exclude").
        sections: List of section titles to include or exclude.
        max_depth: Drop sections nested deeper than this.
        patterns: Glob patterns selecting notes files in the input directory.
        title: Page title for HTML output; defaults to the input directory name.
    """

    output_format: str | None = None
    include_toc: bool = True
    section_filter_mode: Literal["include", "exclude"] = "exclude"
    sections: list[str] = field(default_factory=list)
    max_depth: int | None = None
    patterns: list[str] = field(default_factory=list)
    title: str | None = None


def resolve_output_format(output_file: Path, requested: str | None = None) -> str:
    """Pick the output format from the request or the output file suffix.

    Raises:
        RenderError: If the requested format is not supported.
    """
    output_format = requested or FORMAT_BY_SUFFIX.get(output_file.suffix.lower(), NOTESINDEX_DEFAULT_FORMAT)
    if output_format not in OUTPUT_FORMATS:
        raise RenderError(
            f"Unsupported output format {output_format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    return output_format


def build_index(
    input_dir: Path | str,
    output_file: Path | str,
    options: IndexOptions | None = None,
) -> IndexResult:
    """Load every notes file in ``input_dir`` and write the rendered index.

    Args:
        input_dir: Directory holding the notes files.
        output_file: Path of the generated index; parent directories are created.
        options: Processing options. Uses defaults if None.

    Returns:
        The rendered index with its summary and section tree.

    Raises:
        NotFoundError: If the input directory or a notes file is missing.
        EncodingError: If a notes file cannot be decoded.
        RenderError: If the output format is not supported.
    """
    opts = options or IndexOptions()
    input_path = Path(input_dir)
    output_path = Path(output_file)
    output_format = resolve_output_format(output_path, opts.output_format)

    paths = discover_documents(input_path, opts.patterns or None)
    if not paths:
        logger.warning("No notes files found", extra={"input_dir": str(input_path)})

    documents = [
        filter_document(
            document,
            mode=opts.section_filter_mode,
            selected=opts.sections,
            max_depth=opts.max_depth,
        )
        for document in load_documents(paths)
    ]

    result = format_index(
        documents,
        output_format=output_format,
        include_toc=opts.include_toc,
        title=opts.title or _default_title(input_path),
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.content + "\n", encoding="utf-8")
    logger.info(
        "Wrote notes index",
        extra={"output_file": str(output_path), "documents": len(documents), "format": output_format},
    )
    return result


def _default_title(input_path: Path) -> str:
    name = input_path.resolve().name.replace("_", " ").replace("-", " ").strip()
    return name.title() if name else "Notes Index"
