# src/tasklist/tasks/view.py

"""
Pure view derivation: (tasks, filter) -> ViewModel.

Re-run in full after every mutation. Display layers only read the result;
the visual "completed" state comes from Task.completed and nowhere else.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .formatter import format_text
from .task_models import Task, TaskFilter

NO_TASKS_MESSAGE = "No tasks yet!"

EMPTY_FILTER_MESSAGES: dict[TaskFilter, str] = {
    TaskFilter.ALL: NO_TASKS_MESSAGE,
    TaskFilter.ACTIVE: "No active tasks!",
    TaskFilter.COMPLETED: "No completed tasks!",
}


@dataclass(frozen=True, slots=True)
class ViewItem:
    id: int
    completed: bool
    display_text: str
    created_at: str


@dataclass(frozen=True, slots=True)
class FilterIndicator:
    value: TaskFilter
    label: str
    active: bool


@dataclass(frozen=True, slots=True)
class ViewModel:
    items: list[ViewItem]
    is_empty: bool
    empty_message: str
    current_filter: TaskFilter
    filters: list[FilterIndicator] = field(default_factory=list)

    def position_of(self, task_id: int) -> int | None:
        """1-based row number of a task in this view."""
        for i, item in enumerate(self.items, start=1):
            if item.id == task_id:
                return i
        return None


def filter_indicators(current: TaskFilter) -> list[FilterIndicator]:
    return [FilterIndicator(value=f, label=f.label, active=f is current) for f in TaskFilter]


def render(tasks: Sequence[Task], task_filter: TaskFilter | str = TaskFilter.ALL) -> ViewModel:
    current = TaskFilter.parse(task_filter)
    indicators = filter_indicators(current)

    if not tasks:
        return ViewModel(
            items=[],
            is_empty=True,
            empty_message=NO_TASKS_MESSAGE,
            current_filter=current,
            filters=indicators,
        )

    items = [
        ViewItem(
            id=t.id,
            completed=t.completed,
            display_text=format_text(t.text),
            created_at=t.created_at,
        )
        for t in tasks
        if current.matches(t)
    ]

    return ViewModel(
        items=items,
        is_empty=not items,
        empty_message="" if items else EMPTY_FILTER_MESSAGES[current],
        current_filter=current,
        filters=indicators,
    )
