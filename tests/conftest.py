"""Test setup for notesindex."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


CLEAN_CODE_NOTES = """\
# Clean Code

Notes on the book by Robert C. Martin.

## Meaningful Names

Use intention-revealing names.
Avoid disinformation.

```python
elapsed_time_in_days = 3
```

## Functions

### Small

Functions should be small.

### Do One Thing

Functions should do one thing.
"""

PHILOSOPHY_NOTES = """\
# A Philosophy of Software Design

## Complexity

#### Symptoms

Change amplification and cognitive load.

## Deep Modules

Interfaces should be simpler than implementations.
"""


@pytest.fixture(autouse=True)
def no_token_estimate(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests offline: token estimates may download encodings."""
    monkeypatch.setattr("notesindex.output_formatter.tiktoken", None)


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """A directory holding two book notes files."""
    directory = tmp_path / "notes"
    directory.mkdir()
    (directory / "clean_code.md").write_text(CLEAN_CODE_NOTES, encoding="utf-8")
    (directory / "philosophy_of_software_design.md").write_text(PHILOSOPHY_NOTES, encoding="utf-8")
    return directory
