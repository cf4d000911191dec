"""Section filtering and utilities."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from notesindex.schemas import Document, SectionNode


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison."""
    title = title.strip().lower()
    title = re.sub(r"^(?:chapter\s+)?[\d.]+[:)]?\s+", "", title)
    return re.sub(r"\s+", " ", title)


def iter_sections(sections: Iterable[SectionNode]) -> Iterator[SectionNode]:
    """Yield sections in document order (pre-order)."""
    for section in sections:
        yield section
        yield from iter_sections(section.children)


def count_sections(sections: Iterable[SectionNode]) -> int:
    """Count total sections in the tree."""
    return sum(1 for _ in iter_sections(sections))


def count_blocks(sections: Iterable[SectionNode], kind: str | None = None) -> int:
    """Count body blocks in the tree, optionally only those of ``kind``."""
    return sum(
        1
        for section in iter_sections(sections)
        for block in section.blocks
        if kind is None or block.kind == kind
    )


def filter_sections(
    sections: Iterable[SectionNode],
    *,
    mode: str = "exclude",
    selected: Iterable[str] | None = None,
) -> tuple[SectionNode, ...]:
    """Filter sections by title using include or exclude mode.

    Include mode keeps matching sections with their subtrees, plus the
    ancestors of any match. Exclude mode drops matching sections together
    with their subtrees.
    """
    if mode not in {"include", "exclude"}:
        raise ValueError(f"Unknown section filter mode: {mode}")
    selected_titles = {normalize_section_title(title) for title in (selected or []) if title.strip()}
    if not selected_titles:
        return tuple(sections)

    def _filter(nodes: Iterable[SectionNode]) -> tuple[SectionNode, ...]:
        result: list[SectionNode] = []
        for node in nodes:
            in_selected = normalize_section_title(node.title) in selected_titles
            if mode == "include":
                if in_selected:
                    result.append(node)
                else:
                    children = _filter(node.children)
                    if children:
                        result.append(node.model_copy(update={"children": children}))
            else:
                if in_selected:
                    continue
                result.append(node.model_copy(update={"children": _filter(node.children)}))
        return tuple(result)

    return _filter(sections)


def limit_depth(sections: Iterable[SectionNode], max_depth: int | None) -> tuple[SectionNode, ...]:
    """Drop sections nested deeper than ``max_depth``."""
    if max_depth is None:
        return tuple(sections)
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")
    return tuple(
        node.model_copy(update={"children": limit_depth(node.children, max_depth)})
        for node in sections
        if node.depth <= max_depth
    )


def filter_document(
    document: Document,
    *,
    mode: str = "exclude",
    selected: Iterable[str] | None = None,
    max_depth: int | None = None,
) -> Document:
    """Return a copy of ``document`` with its section tree filtered."""
    sections = filter_sections(document.sections, mode=mode, selected=selected)
    sections = limit_depth(sections, max_depth)
    return document.model_copy(update={"sections": sections})
