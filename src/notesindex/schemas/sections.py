"""Section tree models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Block(BaseModel):
    """A unit of body content within a section."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph", "code"]
    text: str
    language: str | None = None


class SectionNode(BaseModel):
    """A hierarchical section node.

    ``level`` is the heading marker level as written in the source (0 for the
    implicit root section holding text before the first heading). ``depth``
    is the node's position in the tree and always equals its parent's depth
    plus one.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    level: int = Field(..., ge=0, le=6)
    depth: int = Field(..., ge=1)
    anchor: str
    blocks: tuple[Block, ...] = ()
    children: tuple["SectionNode", ...] = ()
