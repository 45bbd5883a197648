# src/tasklist/storage/persistence.py

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from ..core.ports import KeyValueSlot
from ..tasks.errors import PersistenceReadError, PersistenceWriteError
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_KEY = "tasks"

_INT_RE = re.compile(r"-?[0-9]+")


def _task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "date": task.created_at,
    }


def _coerce_id(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str) and _INT_RE.fullmatch(raw.strip()):
        return int(raw.strip())
    return None


def encode(tasks: Iterable[Task]) -> str:
    """Serialize the whole collection as a JSON array of {id, text, completed, date}."""
    return json.dumps([_task_to_record(t) for t in tasks], ensure_ascii=False)


def decode(raw: str) -> list[Task]:
    """
    Parse a saved collection leniently.

    Only malformed JSON or a non-list top level is an error. Individual records
    are repaired or skipped:
    - non-dict records and records with blank text are dropped
    - completed is True only for JSON true
    - date defaults to ""
    - missing/invalid/duplicate ids get a fresh id above the largest seen
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PersistenceReadError(f"Saved tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise PersistenceReadError(f"Saved tasks must be a list, got {type(data).__name__}")

    kept: list[tuple[int | None, dict[str, Any]]] = []
    for rec in data:
        if not isinstance(rec, dict):
            continue
        text = rec.get("text")
        if not isinstance(text, str) or not text.strip():
            continue
        kept.append((_coerce_id(rec.get("id")), rec))

    next_id = max((i for i, _ in kept if i is not None), default=0)
    seen: set[int] = set()
    out: list[Task] = []
    for task_id, rec in kept:
        if task_id is None or task_id in seen:
            next_id += 1
            task_id = next_id
        seen.add(task_id)

        date = rec.get("date")
        out.append(
            Task(
                id=task_id,
                text=rec["text"].strip(),
                completed=rec.get("completed") is True,
                created_at=date if isinstance(date, str) else "",
            )
        )
    return out


class PersistenceAdapter:
    """Load/save the task collection through one named key of a KeyValueSlot."""

    def __init__(self, slot: KeyValueSlot, key: str = DEFAULT_KEY) -> None:
        self._slot = slot
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task] | None:
        """Saved collection, or None when nothing usable is stored. Never raises."""
        try:
            raw = self._slot.get(self._key)
        except Exception:
            logger.exception("Failed to read saved tasks key=%s", self._key)
            return None

        if raw is None:
            logger.info("No saved tasks key=%s", self._key)
            return None

        try:
            tasks = decode(raw)
        except PersistenceReadError as e:
            logger.warning("Ignoring saved tasks key=%s: %s", self._key, e)
            return None

        logger.info("Loaded saved tasks: %d from key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the slot with the full collection."""
        payload = encode(tasks)
        try:
            self._slot.set(self._key, payload)
        except Exception as e:
            raise PersistenceWriteError(f"Failed to save tasks key={self._key}: {e}") from e
        logger.info("Saved tasks to key=%s", self._key)
