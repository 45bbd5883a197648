# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..storage.persistence import PersistenceAdapter
from ..tasks.stats import TaskStats, compute_stats
from ..tasks.task_store import StoreChange, TaskStore
from ..tasks.view import ViewModel, render
from .ports import Display


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskStore
    persistence: PersistenceAdapter
    display: Display

    def current_view(self) -> ViewModel:
        return render(self.store.tasks, self.store.current_filter)

    def current_stats(self) -> TaskStats:
        return compute_stats(self.store.tasks)

    def refresh(self, change: StoreChange | None = None) -> None:
        """Store -> derive view + counts -> display (never the other way round)."""
        self.display.show(self.current_view(), self.current_stats())
