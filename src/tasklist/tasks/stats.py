# src/tasklist/tasks/stats.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Task


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int

    @property
    def active(self) -> int:
        return self.total - self.completed


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    total = 0
    completed = 0
    for t in tasks:
        total += 1
        if t.completed:
            completed += 1
    return TaskStats(total=total, completed=completed)
