# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from .errors import NotFoundError, ValidationError
from .task_models import Task, TaskFilter

logger = logging.getLogger(__name__)

EMPTY_TEXT_NOTICE = "Please enter a task!"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True, slots=True)
class StoreChange:
    kind: str  # "add" | "toggle" | "remove" | "clear" | "filter" | "hydrate"
    task_id: int | None = None


StoreListener = Callable[[StoreChange], None]


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _validate_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError(EMPTY_TEXT_NOTICE)
    return cleaned


class TaskStore:
    """
    In-memory owner of the ordered task collection and the current filter.

    Every mutation runs to completion and then notifies subscribers, which
    re-derive the view and the counts. Nothing raises past this class:
    - empty text on add  -> notice via `notify`, no state change
    - unknown id         -> silent no-op
    """

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        *,
        notify: Callable[[str], None] | None = None,
        now: Callable[[], datetime] = _local_now,
    ) -> None:
        self._tasks: list[Task] = []
        self._filter = TaskFilter.ALL
        self._notify = notify
        self._now = now
        self._last_id = 0
        self._listeners: list[StoreListener] = []
        if tasks is not None:
            self._replace(tasks)

    # ---- queries ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def current_filter(self) -> TaskFilter:
        return self._filter

    def get(self, task_id: int) -> Task | None:
        try:
            return self._find(task_id)
        except NotFoundError:
            return None

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- subscriptions ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: str, task_id: int | None = None) -> None:
        change = StoreChange(kind=kind, task_id=task_id)
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Store listener failed on %s", change)

    # ---- internals ----

    def _find(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def _next_id(self, now: datetime) -> int:
        # Millisecond timestamp, bumped past the last id when two adds share a tick.
        now_ms = int(now.timestamp() * 1000)
        self._last_id = max(now_ms, self._last_id + 1)
        return self._last_id

    def _replace(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
        self._last_id = max((t.id for t in self._tasks), default=self._last_id)

    # ---- mutations ----

    def add(self, text: str) -> Task | None:
        try:
            cleaned = _validate_text(text)
        except ValidationError as e:
            logger.debug("Rejected empty task text.")
            if self._notify is not None:
                self._notify(str(e))
            return None

        now = self._now()
        task = Task(
            id=self._next_id(now),
            text=cleaned,
            completed=False,
            created_at=now.strftime(TIMESTAMP_FORMAT),
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s total=%s", task.id, len(self._tasks))
        self._emit("add", task.id)
        return task

    def toggle(self, task_id: int, completed: bool) -> bool:
        """Set completion to the caller's flag (the checkbox state wins)."""
        try:
            task = self._find(task_id)
        except NotFoundError:
            logger.debug("toggle: unknown task id=%s", task_id)
            return False

        task.completed = bool(completed)
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        self._emit("toggle", task_id)
        return True

    def remove(self, task_id: int) -> bool:
        try:
            task = self._find(task_id)
        except NotFoundError:
            logger.debug("remove: unknown task id=%s", task_id)
            return False

        self._tasks.remove(task)
        logger.debug("Task removed id=%s total=%s", task_id, len(self._tasks))
        self._emit("remove", task_id)
        return True

    def clear_completed(self) -> int:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        removed = before - len(self._tasks)
        logger.debug("Cleared %s completed tasks", removed)
        self._emit("clear")
        return removed

    def set_filter(self, value: TaskFilter | str) -> bool:
        try:
            self._filter = TaskFilter.parse(value)
        except ValueError:
            logger.warning("Ignoring unknown filter %r", value)
            return False

        logger.debug("Filter set to %s", self._filter.value)
        self._emit("filter")
        return True

    def hydrate(self, tasks: Iterable[Task], *, notify: bool = True) -> None:
        """Replace the whole collection (startup load). notify=False skips subscribers."""
        self._replace(tasks)
        logger.info("TaskStore hydrated total=%s", len(self._tasks))
        if notify:
            self._emit("hydrate")
