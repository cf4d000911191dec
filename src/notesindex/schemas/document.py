"""Document model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from notesindex.schemas.sections import SectionNode


class Document(BaseModel):
    """One parsed notes file.

    Attributes:
        id: Stable identifier derived from the file stem.
        title: Display title of the notes.
        path: Source path as given to the loader.
        sections: Top-level sections in document order.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    path: str
    sections: tuple[SectionNode, ...] = ()
