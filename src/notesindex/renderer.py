"""Render parsed Documents as Markdown, HTML or JSON."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from pydantic import TypeAdapter

from notesindex.exceptions import RenderError
from notesindex.indexer import slugify
from notesindex.schemas import Block, Document, SectionNode

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RenderError(
        "BeautifulSoup4 is required for HTML rendering (pip install beautifulsoup4)."
    ) from exc


_HEADING_RE = re.compile(r"^h[1-6]$")
_BACKTICK_RUN_RE = re.compile(r"^ {0,3}(`{3,})", re.MULTILINE)
_DOCUMENTS_ADAPTER = TypeAdapter(list[Document])
_HTML_SKELETON = (
    "<!DOCTYPE html>"
    '<html lang="en"><head><meta charset="utf-8"/><title></title></head><body></body></html>'
)


@dataclass
class RenderedOutline:
    """Heading outline recovered from a rendered HTML page."""

    document_id: str
    title: str
    section_titles: list[str]


def render_markdown(document: Document) -> str:
    """Render a Document back to Markdown in document order."""
    blocks: list[str] = []
    for section in document.sections:
        blocks.extend(_render_section_markdown(section))
    return "\n\n".join(block for block in blocks if block).strip()


def _render_section_markdown(section: SectionNode) -> list[str]:
    blocks: list[str] = []
    if section.level:
        blocks.append(_render_heading_markdown(section))
    blocks.extend(_render_block_markdown(block) for block in section.blocks)
    for child in section.children:
        blocks.extend(_render_section_markdown(child))
    return blocks


def _render_heading_markdown(section: SectionNode) -> str:
    marks = "#" * section.level
    # A trailing "#" would otherwise be read back as a closing sequence.
    if section.title.endswith("#"):
        return f"{marks} {section.title} {marks}"
    return f"{marks} {section.title}"


def _render_block_markdown(block: Block) -> str:
    if block.kind == "paragraph":
        return block.text
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(block.text)), default=0)
    fence = "`" * max(3, longest + 1)
    opening = fence + (block.language or "")
    if block.text:
        return f"{opening}\n{block.text}\n{fence}"
    return f"{opening}\n{fence}"


def render_json(documents: Iterable[Document]) -> str:
    """Serialize Documents as an indented JSON table of contents."""
    return _DOCUMENTS_ADAPTER.dump_json(list(documents), indent=2).decode("utf-8")


def parse_rendered_json(content: str | bytes) -> list[Document]:
    """Load Documents back from :func:`render_json` output."""
    return _DOCUMENTS_ADAPTER.validate_json(content)


def html_document_id(document: Document) -> str:
    """Element id for a document, safe to use as a URL fragment."""
    return slugify(document.id)


def html_anchor(document: Document, section: SectionNode) -> str:
    """Page-wide unique element id for a section."""
    return f"{html_document_id(document)}--{section.anchor}"


def render_html(
    documents: Iterable[Document],
    *,
    title: str = "Notes Index",
    include_toc: bool = True,
) -> str:
    """Render Documents as one standalone HTML page.

    The page holds an optional nested ``<nav>`` table of contents followed by
    one ``<article>`` per document and one ``<section>`` per section.
    """
    documents = list(documents)
    soup = BeautifulSoup(_HTML_SKELETON, "html.parser")
    soup.title.string = title
    body = soup.body

    page_title = soup.new_tag("h1", attrs={"class": "index-title"})
    page_title.string = title
    body.append(page_title)

    if include_toc and documents:
        body.append(_render_toc_html(soup, documents))

    for document in documents:
        article = soup.new_tag("article", attrs={"id": html_document_id(document), "class": "document"})
        heading = soup.new_tag("h2", attrs={"class": "document-title"})
        heading.string = document.title
        article.append(heading)
        for section in document.sections:
            article.append(_render_section_html(soup, document, section))
        body.append(article)

    return str(soup)


def _render_toc_html(soup: BeautifulSoup, documents: list[Document]) -> Tag:
    nav = soup.new_tag("nav", attrs={"class": "toc"})
    heading = soup.new_tag("h2")
    heading.string = "Contents"
    nav.append(heading)

    outer = soup.new_tag("ul")
    for document in documents:
        item = soup.new_tag("li")
        link = soup.new_tag("a", attrs={"href": f"#{html_document_id(document)}"})
        link.string = document.title
        item.append(link)
        nested = _render_toc_list(soup, document, document.sections)
        if nested is not None:
            item.append(nested)
        outer.append(item)
    nav.append(outer)
    return nav


def _render_toc_list(
    soup: BeautifulSoup, document: Document, sections: tuple[SectionNode, ...]
) -> Tag | None:
    if not sections:
        return None
    listing = soup.new_tag("ul")
    for section in sections:
        item = soup.new_tag("li")
        link = soup.new_tag("a", attrs={"href": f"#{html_anchor(document, section)}"})
        link.string = section.title
        item.append(link)
        nested = _render_toc_list(soup, document, section.children)
        if nested is not None:
            item.append(nested)
        listing.append(item)
    return listing


def _render_section_html(soup: BeautifulSoup, document: Document, section: SectionNode) -> Tag:
    classes = "section" if section.level else "section preamble"
    element = soup.new_tag(
        "section",
        attrs={"id": html_anchor(document, section), "class": classes, "data-level": str(section.level)},
    )
    if section.level:
        heading = soup.new_tag(f"h{min(section.depth + 2, 6)}", attrs={"class": "section-title"})
        heading.string = section.title
        element.append(heading)

    for block in section.blocks:
        if block.kind == "code":
            pre = soup.new_tag("pre")
            code_attrs = {"class": f"language-{block.language}"} if block.language else {}
            code = soup.new_tag("code", attrs=code_attrs)
            code.string = block.text
            pre.append(code)
            element.append(pre)
        else:
            paragraph = soup.new_tag("p")
            paragraph.string = block.text
            element.append(paragraph)

    for child in section.children:
        element.append(_render_section_html(soup, document, child))
    return element


def parse_rendered_html(html: str) -> list[RenderedOutline]:
    """Recover document titles and section headings from a rendered page."""
    soup = BeautifulSoup(html, "lxml")
    outlines: list[RenderedOutline] = []
    for article in soup.find_all("article", class_="document"):
        title_tag = article.find(class_="document-title")
        titles = [
            heading.get_text()
            for heading in article.find_all(_HEADING_RE)
            if "section-title" in heading.get("class", [])
        ]
        outlines.append(
            RenderedOutline(
                document_id=article.get("id", ""),
                title=title_tag.get_text() if title_tag else "",
                section_titles=titles,
            )
        )
    return outlines
