"""Module entry point for running with python -m notesindex."""

from notesindex.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
