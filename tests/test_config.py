"""Tests for environment-driven configuration."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import notesindex.config as config
from notesindex.exceptions import EncodingError
from notesindex.loader import decode_text, discover_documents
from notesindex.output_formatter import format_index
from notesindex.pipeline import resolve_output_format
from notesindex.utils.logging_config import configure_logging


@pytest.fixture
def reload_config(monkeypatch: pytest.MonkeyPatch):
    """Reload the config module under patched environment variables."""

    def _reload(**env: str):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


class TestEnvironmentOverrides:
    """Tests for NOTESINDEX_* variables read at import time."""

    def test_defaults(self, reload_config, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "NOTESINDEX_ENCODING",
            "NOTESINDEX_PATTERNS",
            "NOTESINDEX_DEFAULT_FORMAT",
            "NOTESINDEX_LOG_LEVEL",
            "NOTESINDEX_TOKEN_ENCODING",
        ):
            monkeypatch.delenv(name, raising=False)

        module = reload_config()

        assert module.NOTESINDEX_ENCODING == "utf-8"
        assert module.NOTESINDEX_PATTERNS == ("*.md", "*.txt")
        assert module.NOTESINDEX_DEFAULT_FORMAT == "html"
        assert module.NOTESINDEX_LOG_LEVEL == "WARNING"
        assert module.NOTESINDEX_TOKEN_ENCODING == "o200k_base"

    def test_overrides(self, reload_config) -> None:
        module = reload_config(
            NOTESINDEX_ENCODING="latin-1",
            NOTESINDEX_PATTERNS=" *.rst, ,*.txt ",
            NOTESINDEX_DEFAULT_FORMAT="json",
            NOTESINDEX_LOG_LEVEL="debug",
            NOTESINDEX_TOKEN_ENCODING="cl100k_base",
        )

        assert module.NOTESINDEX_ENCODING == "latin-1"
        assert module.NOTESINDEX_PATTERNS == ("*.rst", "*.txt")
        assert module.NOTESINDEX_DEFAULT_FORMAT == "json"
        assert module.NOTESINDEX_LOG_LEVEL == "DEBUG"
        assert module.NOTESINDEX_TOKEN_ENCODING == "cl100k_base"


class TestConfiguredDefaults:
    """Tests that each consumer picks up its configured default."""

    def test_encoding(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        raw = "Café".encode("latin-1")
        with pytest.raises(EncodingError):
            decode_text(raw, tmp_path / "a.md")

        monkeypatch.setattr("notesindex.loader.NOTESINDEX_ENCODING", "latin-1")

        assert decode_text(raw, tmp_path / "a.md") == "Café"

    def test_patterns(self, monkeypatch: pytest.MonkeyPatch, notes_dir: Path) -> None:
        (notes_dir / "effective_python.rst").write_text("notes")
        monkeypatch.setattr("notesindex.loader.NOTESINDEX_PATTERNS", ("*.rst",))

        assert [path.name for path in discover_documents(notes_dir)] == ["effective_python.rst"]

    def test_default_format(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("notesindex.pipeline.NOTESINDEX_DEFAULT_FORMAT", "json")

        assert resolve_output_format(Path("index.out")) == "json"
        assert resolve_output_format(Path("index.md")) == "markdown"

    def test_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)
        monkeypatch.setattr("notesindex.utils.logging_config.NOTESINDEX_LOG_LEVEL", "ERROR")

        configure_logging()

        assert root.level == logging.ERROR

    def test_token_encoding(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake_tiktoken = MagicMock()
        fake_tiktoken.get_encoding.return_value.encode.return_value = [1, 2, 3]
        monkeypatch.setattr("notesindex.output_formatter.NOTESINDEX_TOKEN_ENCODING", "cl100k_base")

        with patch("notesindex.output_formatter.tiktoken", fake_tiktoken):
            result = format_index([], output_format="json")

        fake_tiktoken.get_encoding.assert_called_once_with("cl100k_base")
        assert result.summary.splitlines()[-1] == "Estimated tokens: 3"
