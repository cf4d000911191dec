"""notesindex: build a navigable index from a directory of notes files."""

from notesindex.exceptions import (
    EncodingError,
    LoadError,
    NotesIndexError,
    NotFoundError,
    ReadError,
    RenderError,
)
from notesindex.indexer import index_document, index_text, parse_blocks
from notesindex.loader import (
    discover_documents,
    load_document,
    load_documents,
    load_documents_async,
)
from notesindex.pipeline import IndexOptions, build_index
from notesindex.renderer import render_html, render_json, render_markdown
from notesindex.schemas import Block, Document, IndexResult, SectionNode

__version__ = "0.1.0"

__all__ = [
    "Block",
    "Document",
    "EncodingError",
    "IndexOptions",
    "IndexResult",
    "LoadError",
    "NotFoundError",
    "NotesIndexError",
    "ReadError",
    "RenderError",
    "SectionNode",
    "__version__",
    "build_index",
    "discover_documents",
    "index_document",
    "index_text",
    "load_document",
    "load_documents",
    "load_documents_async",
    "parse_blocks",
    "render_html",
    "render_json",
    "render_markdown",
]
