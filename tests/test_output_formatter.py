"""Tests for output formatting."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from conftest import CLEAN_CODE_NOTES, PHILOSOPHY_NOTES

from notesindex.exceptions import RenderError
from notesindex.indexer import index_document
from notesindex.output_formatter import format_index
from notesindex.schemas import Document


@pytest.fixture
def documents() -> list[Document]:
    return [
        index_document(CLEAN_CODE_NOTES, "clean_code.md"),
        index_document("Loose notes.\n\n## Idiom\n\nUse enumerate.\n", "effective_python.md"),
    ]


class TestFormatIndex:
    """Tests for format_index function."""

    def test_summary(self, documents: list[Document]) -> None:
        result = format_index(documents, output_format="markdown")

        assert result.summary.splitlines() == [
            "Documents: 2",
            "Sections: 7",
            "Code blocks: 1",
            "Format: markdown",
        ]

    def test_sections_tree(self, documents: list[Document]) -> None:
        result = format_index(documents, output_format="json")

        assert result.sections_tree.splitlines() == [
            "Sections:",
            "Clean Code",
            "    Clean Code",
            "        Meaningful Names",
            "        Functions",
            "            Small",
            "            Do One Thing",
            "effective python",
            "    effective python",
            "    Idiom",
        ]

    def test_markdown_content(self, documents: list[Document]) -> None:
        """Documents without a title heading get one; the ToC lists all sections."""
        content = format_index(documents, output_format="markdown").content

        assert content.startswith("## Contents\n- Clean Code\n  - Meaningful Names\n")
        assert "\n- effective python\n  - effective python\n  - Idiom" in content
        assert content.count("# Clean Code\n") == 1
        assert "# effective python\n\nLoose notes." in content

    def test_markdown_without_toc(self, documents: list[Document]) -> None:
        content = format_index(documents, output_format="markdown", include_toc=False).content

        assert "## Contents" not in content
        assert content.startswith("# Clean Code")

    def test_html_content(self, documents: list[Document]) -> None:
        content = format_index(documents, output_format="html", title="Books").content

        assert content.startswith("<!DOCTYPE html>")
        assert "<title>Books</title>" in content

    def test_unknown_format(self, documents: list[Document]) -> None:
        with pytest.raises(RenderError, match="Unsupported output format"):
            format_index(documents, output_format="pdf")

    def test_token_estimate(self) -> None:
        """Adds a token estimate when tiktoken is available."""
        encoding = MagicMock()
        encoding.encode.return_value = list(range(1500))
        fake_tiktoken = MagicMock()
        fake_tiktoken.get_encoding.return_value = encoding

        with patch("notesindex.output_formatter.tiktoken", fake_tiktoken):
            result = format_index(
                [index_document(PHILOSOPHY_NOTES, "p.md")], output_format="markdown"
            )

        assert result.summary.splitlines()[-1] == "Estimated tokens: 1.5k"

    def test_token_estimate_failure_is_skipped(self) -> None:
        fake_tiktoken = MagicMock()
        fake_tiktoken.get_encoding.side_effect = ValueError("unknown encoding")

        with patch("notesindex.output_formatter.tiktoken", fake_tiktoken):
            result = format_index([], output_format="json")

        assert "Estimated tokens" not in result.summary
