# src/tasklist/tasks/errors.py

"""
Failure taxonomy.

None of these escape the TaskStore boundary: validation errors become user
notices, unknown ids become no-ops, persistence errors are logged.
"""

from __future__ import annotations


class TaskListError(Exception):
    """Base class for tasklist errors."""


class ValidationError(TaskListError):
    """Task text is empty or whitespace-only."""


class NotFoundError(TaskListError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task id {task_id} not found")
        self.task_id = task_id


class PersistenceReadError(TaskListError):
    """Saved data is malformed."""


class PersistenceWriteError(TaskListError):
    """Durable slot could not be written."""
