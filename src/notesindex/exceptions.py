"""Custom exceptions for notesindex."""

from __future__ import annotations

from pathlib import Path


class NotesIndexError(Exception):
    """Base exception for notesindex operations."""


class LoadError(NotesIndexError):
    """Error while loading a notes file."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class NotFoundError(LoadError):
    """Input path does not exist."""


class EncodingError(LoadError):
    """Input content could not be decoded as text."""


class ReadError(LoadError):
    """Input file exists but could not be read."""


class RenderError(NotesIndexError):
    """Error during output rendering."""
