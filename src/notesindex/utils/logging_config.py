"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging

from notesindex.config import NOTESINDEX_LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: int | str | None = None) -> None:
    """Install a stderr handler on the root logger.

    Args:
        level: Log level name or number; defaults to ``NOTESINDEX_LOG_LEVEL``.
    """
    resolved = level if level is not None else NOTESINDEX_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
