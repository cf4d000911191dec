"""Format parsed notes into summary, tree, and content outputs."""

from __future__ import annotations

import logging

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from notesindex.config import NOTESINDEX_TOKEN_ENCODING, OUTPUT_FORMATS
from notesindex.exceptions import RenderError
from notesindex.renderer import render_html, render_json, render_markdown
from notesindex.schemas import Document, IndexResult, SectionNode
from notesindex.sections import count_blocks, count_sections

logger = logging.getLogger(__name__)


def format_index(
    documents: list[Document],
    *,
    output_format: str,
    include_toc: bool = True,
    title: str = "Notes Index",
) -> IndexResult:
    """Create summary, section tree, and rendered content.

    Raises:
        RenderError: If ``output_format`` is not supported.
    """
    if output_format == "markdown":
        content = _render_markdown_index(documents, include_toc=include_toc)
    elif output_format == "html":
        content = render_html(documents, title=title, include_toc=include_toc)
    elif output_format == "json":
        content = render_json(documents)
    else:
        raise RenderError(
            f"Unsupported output format {output_format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
        )

    tree = "Sections:\n" + _create_documents_tree(documents)

    summary_lines = [
        f"Documents: {len(documents)}",
        f"Sections: {sum(count_sections(doc.sections) for doc in documents)}",
        f"Code blocks: {sum(count_blocks(doc.sections, 'code') for doc in documents)}",
        f"Format: {output_format}",
    ]
    token_estimate = _format_token_count(content)
    if token_estimate:
        summary_lines.append(f"Estimated tokens: {token_estimate}")

    return IndexResult(summary="\n".join(summary_lines), sections_tree=tree, content=content)


def _render_markdown_index(documents: list[Document], *, include_toc: bool) -> str:
    blocks: list[str] = []
    if include_toc:
        toc = _render_toc(documents)
        if toc:
            blocks.append("## Contents\n" + toc)

    for document in documents:
        if not _opens_with_title(document):
            blocks.append(f"# {document.title}")
        blocks.append(render_markdown(document))

    return "\n\n".join(block for block in blocks if block).strip()


def _opens_with_title(document: Document) -> bool:
    sections = document.sections
    return bool(sections) and sections[0].level == 1 and sections[0].title == document.title


def _render_toc(documents: list[Document]) -> str:
    lines: list[str] = []
    for document in documents:
        lines.append("- " + document.title)
        sections = document.sections
        # The leading title heading is already listed as the document entry.
        if _opens_with_title(document):
            sections = sections[0].children + sections[1:]
        toc = _render_section_toc(sections, indent=1)
        if toc:
            lines.append(toc)
    return "\n".join(lines)


def _render_section_toc(sections: tuple[SectionNode, ...], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        prefix = "  " * indent + "- "
        lines.append(prefix + section.title)
        if section.children:
            lines.append(_render_section_toc(section.children, indent + 1))
    return "\n".join(lines)


def _create_documents_tree(documents: list[Document]) -> str:
    lines: list[str] = []
    for document in documents:
        lines.append(document.title)
        if document.sections:
            lines.append(_create_sections_tree(document.sections, indent=1))
    return "\n".join(lines)


def _create_sections_tree(sections: tuple[SectionNode, ...], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + section.title)
        if section.children:
            lines.append(_create_sections_tree(section.children, indent + 1))
    return "\n".join(lines)


def _format_token_count(text: str) -> str | None:
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding(NOTESINDEX_TOKEN_ENCODING)
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception as exc:
        logger.debug("Token estimate unavailable: %s", exc)
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
