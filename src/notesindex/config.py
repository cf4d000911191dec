"""Local configuration for notesindex."""

from __future__ import annotations

import os

DEFAULT_ENCODING = "utf-8"
DEFAULT_PATTERNS = "*.md,*.txt"
DEFAULT_OUTPUT_FORMAT = "html"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_TOKEN_ENCODING = "o200k_base"

OUTPUT_FORMATS = ("markdown", "html", "json")
FORMAT_BY_SUFFIX = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".html": "html",
    ".htm": "html",
    ".json": "json",
}

NOTESINDEX_ENCODING = os.getenv("NOTESINDEX_ENCODING", DEFAULT_ENCODING)
NOTESINDEX_PATTERNS = tuple(
    pattern.strip()
    for pattern in os.getenv("NOTESINDEX_PATTERNS", DEFAULT_PATTERNS).split(",")
    if pattern.strip()
)
NOTESINDEX_DEFAULT_FORMAT = os.getenv("NOTESINDEX_DEFAULT_FORMAT", DEFAULT_OUTPUT_FORMAT)
NOTESINDEX_LOG_LEVEL = os.getenv("NOTESINDEX_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
NOTESINDEX_TOKEN_ENCODING = os.getenv("NOTESINDEX_TOKEN_ENCODING", DEFAULT_TOKEN_ENCODING)
