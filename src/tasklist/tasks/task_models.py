# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskFilter(StrEnum):
    """
    Which subset of the collection is displayed.

    Process-wide selection, not persisted; starts as ALL.
    """

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True

    @classmethod
    def parse(cls, raw: str | TaskFilter) -> TaskFilter:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown filter {raw!r} (expected one of: {choices})") from None


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False
    created_at: str = ""
