# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.bootstrap import create_initial_state
from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore

from .fakes import MemorySlot, RecordingDisplay


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "tasklist.sqlite3",
        storage_key="tasks",
        save_on_exit=True,
        show_dates=True,
    )


class StepClock:
    """Deterministic clock: every call advances by `step`."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start or datetime(2026, 10, 18, 9, 30, 0)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture()
def notices() -> list[str]:
    return []


@pytest.fixture()
def store(notices: list[str]) -> TaskStore:
    return TaskStore(notify=notices.append, now=StepClock())


@pytest.fixture()
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture()
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture()
def state(settings: SimpleNamespace, slot: MemorySlot, display: RecordingDisplay) -> AppState:
    """AppState wired with the in-memory slot and a recording display."""
    return create_initial_state(settings=settings, slot=slot, display=display)
