"""Shared schemas for notesindex."""

from notesindex.schemas.document import Document
from notesindex.schemas.index import IndexResult
from notesindex.schemas.sections import Block, SectionNode

__all__ = ["Block", "Document", "IndexResult", "SectionNode"]
