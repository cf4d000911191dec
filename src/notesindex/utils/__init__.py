"""Utility helpers for notesindex."""
