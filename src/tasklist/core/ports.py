# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and displays swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.stats import TaskStats
from ..tasks.view import ViewModel


class KeyValueSlot(Protocol):
    """Durable named-value storage (one JSON blob per key)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class Display(Protocol):
    """
    Display-side port: applies a derived view to the screen.

    Implementations must treat task text as untrusted (escape/strip it).
    """

    def show(self, view: ViewModel, stats: TaskStats) -> None: ...
    def alert(self, message: str) -> None: ...
