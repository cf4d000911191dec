"""Parse notes text into blocks and a section tree."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from notesindex.schemas import Block, Document, SectionNode

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.*?)[ \t]*$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*(.*?)[ \t]*$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_SLUG_STRIP_RE = re.compile(r"[^\w\- ]")
_DEFAULT_ANCHOR = "section"


@dataclass
class _Fence:
    marker: str
    language: str | None

    def closes(self, line: str) -> bool:
        match = _FENCE_CLOSE_RE.match(line)
        if not match:
            return False
        closing = match.group(1)
        return closing[0] == self.marker[0] and len(closing) >= len(self.marker)


@dataclass
class _PendingSection:
    title: str
    level: int
    depth: int
    anchor: str
    lines: list[str] = field(default_factory=list)
    children: list["_PendingSection"] = field(default_factory=list)

    def freeze(self) -> SectionNode:
        return SectionNode(
            title=self.title,
            level=self.level,
            depth=self.depth,
            anchor=self.anchor,
            blocks=parse_blocks("\n".join(self.lines)),
            children=tuple(child.freeze() for child in self.children),
        )


def _open_fence(line: str) -> _Fence | None:
    match = _FENCE_OPEN_RE.match(line)
    if not match:
        return None
    marker, info = match.group(1), match.group(2)
    # Backtick fences cannot carry backticks in their info string.
    if marker[0] == "`" and "`" in info:
        return None
    language = info.split()[0] if info else None
    return _Fence(marker=marker, language=language)


def parse_heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, title)`` when the line is an ATX heading."""
    match = _HEADING_RE.match(line)
    if not match:
        return None
    title = _CLOSING_HASHES_RE.sub("", match.group(2)).strip()
    if not title:
        return None
    return len(match.group(1)), title


def parse_blocks(text: str) -> tuple[Block, ...]:
    """Split body text into paragraph and fenced code blocks."""
    blocks: list[Block] = []
    paragraph: list[str] = []
    code: list[str] = []
    fence: _Fence | None = None

    def flush_paragraph() -> None:
        if paragraph:
            blocks.append(Block(kind="paragraph", text="\n".join(paragraph)))
            paragraph.clear()

    for line in text.splitlines():
        if fence is not None:
            if fence.closes(line):
                blocks.append(Block(kind="code", text="\n".join(code), language=fence.language))
                code.clear()
                fence = None
            else:
                code.append(line)
            continue

        if not line.strip():
            flush_paragraph()
            continue

        opened = _open_fence(line)
        if opened is not None:
            flush_paragraph()
            fence = opened
            continue

        paragraph.append(line)

    if fence is not None:
        logger.debug("Unterminated code fence runs to end of text")
        blocks.append(Block(kind="code", text="\n".join(code), language=fence.language))
    flush_paragraph()
    return tuple(blocks)


def slugify(title: str) -> str:
    """Create a GitHub-style anchor slug for a heading title."""
    slug = _SLUG_STRIP_RE.sub("", title.strip().lower())
    slug = re.sub(r"\s+", "-", slug.strip())
    return slug or _DEFAULT_ANCHOR


class AnchorRegistry:
    """Hand out anchors that are unique within one document."""

    def __init__(self) -> None:
        self._seen: dict[str, int] = {}

    def claim(self, title: str) -> str:
        base = slugify(title)
        anchor = base
        while anchor in self._seen:
            self._seen[base] += 1
            anchor = f"{base}-{self._seen[base]}"
        self._seen[anchor] = 0
        return anchor


def index_text(text: str, title: str) -> tuple[SectionNode, ...]:
    """Build the section tree for a notes text.

    Headings that skip levels are attached to the nearest open section with
    a smaller level; the resulting ``depth`` is always one more than the
    parent's. Text before the first heading is collected into an implicit
    root section (level 0) named after the document.

    Args:
        text: Raw notes content.
        title: Document title, used for the implicit root section.

    Returns:
        Top-level sections in document order.
    """
    anchors = AnchorRegistry()
    preamble: list[str] = []
    root_anchor: str | None = None
    roots: list[_PendingSection] = []
    stack: list[_PendingSection] = []
    fence: _Fence | None = None

    for line in text.splitlines():
        current = stack[-1].lines if stack else preamble

        if fence is not None:
            if fence.closes(line):
                fence = None
            current.append(line)
            continue

        heading = parse_heading(line)
        if heading is None:
            fence = _open_fence(line)
            current.append(line)
            continue

        level, heading_title = heading
        if not roots and root_anchor is None and _has_content(preamble):
            root_anchor = anchors.claim(title)
        while stack and stack[-1].level >= level:
            stack.pop()

        parent = stack[-1] if stack else None
        if parent is not None and level != parent.level + 1:
            logger.debug(
                "Heading level skip flattened",
                extra={"title": heading_title, "level": level, "parent_level": parent.level},
            )

        node = _PendingSection(
            title=heading_title,
            level=level,
            depth=parent.depth + 1 if parent else 1,
            anchor=anchors.claim(heading_title),
        )
        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    sections = [node.freeze() for node in roots]
    if _has_content(preamble):
        root = _PendingSection(
            title=title,
            level=0,
            depth=1,
            anchor=root_anchor or anchors.claim(title),
            lines=preamble,
        )
        sections.insert(0, root.freeze())
    return tuple(sections)


def _has_content(lines: list[str]) -> bool:
    return any(line.strip() for line in lines)


def document_title(sections: tuple[SectionNode, ...], fallback: str) -> str:
    """Pick the title of a document from its leading level-1 heading."""
    if sections and sections[0].level == 1:
        return sections[0].title
    return fallback


def title_from_path(path: Path) -> str:
    return re.sub(r"[_\-]+", " ", path.stem).strip() or path.stem


def index_document(text: str, path: Path | str) -> Document:
    """Parse notes text read from ``path`` into a Document."""
    path = Path(path)
    fallback = title_from_path(path)
    sections = index_text(text, fallback)
    return Document(
        id=path.stem,
        title=document_title(sections, fallback),
        path=str(path),
        sections=sections,
    )
