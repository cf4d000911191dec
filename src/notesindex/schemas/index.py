"""Index output model."""

from __future__ import annotations

from pydantic import BaseModel


class IndexResult(BaseModel):
    """Final index output."""

    summary: str
    sections_tree: str
    content: str
