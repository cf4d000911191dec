"""Load notes files from disk into Documents."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable

from notesindex.config import NOTESINDEX_ENCODING, NOTESINDEX_PATTERNS
from notesindex.exceptions import EncodingError, NotFoundError, ReadError
from notesindex.indexer import index_document
from notesindex.schemas import Document

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def discover_documents(
    input_dir: Path | str,
    patterns: Iterable[str] | None = None,
) -> list[Path]:
    """List the notes files directly inside ``input_dir``.

    Args:
        input_dir: Directory holding one notes file per book.
        patterns: Glob patterns to match; defaults to ``NOTESINDEX_PATTERNS``.

    Returns:
        Matching file paths, sorted by name.

    Raises:
        NotFoundError: If ``input_dir`` does not exist or is not a directory.
    """
    directory = Path(input_dir)
    if not directory.is_dir():
        raise NotFoundError(f"Input directory not found: {directory}", directory)

    found: set[Path] = set()
    for pattern in patterns or NOTESINDEX_PATTERNS:
        found.update(path for path in directory.glob(pattern) if path.is_file())
    paths = sorted(found, key=lambda path: path.name)
    logger.debug("Discovered %d notes files in %s", len(paths), directory)
    return paths


def decode_text(raw: bytes, path: Path, encoding: str | None = None) -> str:
    """Decode file contents strictly with ``encoding`` or ``NOTESINDEX_ENCODING``.

    Raises:
        EncodingError: If the bytes are not valid for ``encoding``.
    """
    encoding = encoding or NOTESINDEX_ENCODING
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise EncodingError(
            f"Cannot decode {path} as {encoding}: {exc.reason} at byte {exc.start}", path
        ) from exc
    except LookupError as exc:
        raise EncodingError(f"Unknown encoding {encoding!r} for {path}", path) from exc
    return text[1:] if text.startswith(_BOM) else text


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise NotFoundError(f"Notes file not found: {path}", path)
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise NotFoundError(f"Notes file not found: {path}", path) from exc
    except OSError as exc:
        raise ReadError(f"Cannot read {path}: {exc.strerror or exc}", path) from exc


def load_document(path: Path | str, *, encoding: str | None = None) -> Document:
    """Read and parse one notes file.

    An empty file yields a Document with no sections.

    Raises:
        NotFoundError: If ``path`` does not exist or is not a file.
        ReadError: If the file exists but cannot be read.
        EncodingError: If the content cannot be decoded as text.
    """
    path = Path(path)
    text = decode_text(_read_bytes(path), path, encoding)
    document = index_document(text, path)
    logger.debug("Loaded %s with %d top-level sections", path, len(document.sections))
    return document


def load_documents(
    paths: Iterable[Path | str], *, encoding: str | None = None
) -> list[Document]:
    """Load several notes files in order; the first failure is raised."""
    return [load_document(path, encoding=encoding) for path in paths]


async def load_documents_async(
    paths: Iterable[Path | str], *, encoding: str | None = None
) -> list[Document]:
    """Load several notes files, reading them in a thread pool.

    Results keep the input order; the first failure in input order is raised.
    """
    resolved = [Path(path) for path in paths]
    contents = await asyncio.gather(
        *(asyncio.to_thread(_read_bytes, path) for path in resolved),
        return_exceptions=True,
    )
    for result in contents:
        if isinstance(result, Exception):
            raise result
    return [
        index_document(decode_text(raw, path, encoding), path)
        for path, raw in zip(resolved, contents)
    ]
