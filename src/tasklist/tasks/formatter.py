# src/tasklist/tasks/formatter.py

from __future__ import annotations


def format_text(text: str) -> str:
    """Capitalize the first character and lower-case the rest (display only)."""
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()
