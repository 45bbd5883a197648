# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store, persistence and display into AppState,
- hydrates the store from the saved collection and saves it back at shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Display, KeyValueSlot
from ..core.state import AppState
from ..display.console import ConsoleDisplay
from ..storage.kv_slot import SqliteKeyValueSlot
from ..storage.persistence import PersistenceAdapter
from ..tasks.errors import PersistenceWriteError
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    slot: KeyValueSlot | None = None,
    display: Display | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Settings, slot and display are injectable for tests; if settings is None,
    falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if slot is None:
        slot = SqliteKeyValueSlot(settings.db_path)
    if display is None:
        display = ConsoleDisplay(show_dates=getattr(settings, "show_dates", True))

    state = AppState(
        settings=settings,
        store=TaskStore(notify=display.alert),
        persistence=PersistenceAdapter(slot, key=getattr(settings, "storage_key", "tasks")),
        display=display,
    )
    state.store.subscribe(state.refresh)
    return state


def load_saved_tasks(state: AppState, *, refresh: bool = True) -> int:
    """
    Hydrate the store once at startup. Missing or malformed data leaves it empty.

    With refresh=False the display is left alone; the console loop draws the
    first view after its banner.
    """
    tasks = state.persistence.load()
    if tasks is None:
        return 0
    state.store.hydrate(tasks, notify=refresh)
    return len(tasks)


def save_tasks(state: AppState) -> bool:
    """Best-effort save at shutdown; failures are logged, not retried."""
    if not getattr(state.settings, "save_on_exit", True):
        logger.info("save_on_exit disabled; not saving tasks.")
        return False
    try:
        state.persistence.save(state.store.tasks)
    except PersistenceWriteError:
        logger.exception("Failed to save tasks.")
        return False
    logger.info("Saved %d tasks.", len(state.store))
    return True
