# src/tasklist/display/console.py

from __future__ import annotations

import logging
import re
import sys
from datetime import datetime
from typing import TextIO

from ..tasks.stats import TaskStats
from ..tasks.view import ViewModel

logger = logging.getLogger(__name__)

ANSI_RE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|[@-Z\\-_])")
CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sanitize_text(text: str) -> str:
    """Strip terminal escape sequences and control characters from untrusted text."""
    return CONTROL_RE.sub("", ANSI_RE.sub("", text))


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_filters(view: ViewModel) -> str:
    return "  ".join(f"[{f.label}]" if f.active else f" {f.label} " for f in view.filters)


def format_view(view: ViewModel, stats: TaskStats, *, show_dates: bool = True) -> list[str]:
    lines = [f"Filter: {format_filters(view)}"]

    if view.is_empty:
        lines.append(f"  ({view.empty_message})")
    else:
        for i, item in enumerate(view.items, start=1):
            mark = "[x]" if item.completed else "[ ]"
            row = f"  {mark} {i:>2}. {sanitize_text(item.display_text)}"
            if show_dates and item.created_at:
                row += f"  ({sanitize_text(item.created_at)})"
            row += f"  #{item.id}"
            lines.append(row)

    lines.append(f"Total: {stats.total}  Completed: {stats.completed}")
    return lines


class ConsoleDisplay:
    """Prints the derived view to a text stream."""

    def __init__(self, stream: TextIO | None = None, *, show_dates: bool = True) -> None:
        self._stream = stream
        self._show_dates = show_dates

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def show(self, view: ViewModel, stats: TaskStats) -> None:
        lines = format_view(view, stats, show_dates=self._show_dates)
        print("\n".join(lines), file=self.stream, flush=True)
        logger.debug("Displayed %d rows filter=%s", len(view.items), view.current_filter.value)

    def alert(self, message: str) -> None:
        print(f"[{_ts_local()}] ! {sanitize_text(message)}", file=self.stream, flush=True)

    def message(self, text: str) -> None:
        print(f"[{_ts_local()}] {text}", file=self.stream, flush=True)
