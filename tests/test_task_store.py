# tests/test_task_store.py

from __future__ import annotations

from datetime import datetime, timedelta

from tasklist.tasks.task_models import Task, TaskFilter
from tasklist.tasks.task_store import EMPTY_TEXT_NOTICE, StoreChange, TaskStore

from .conftest import StepClock


def test_add_creates_active_trimmed_task(store: TaskStore) -> None:
    task = store.add("  buy milk  ")

    assert task is not None
    assert len(store) == 1
    assert store.tasks[0].text == "buy milk"
    assert store.tasks[0].completed is False
    assert store.tasks[0].created_at == "2026-10-18 09:30:00"


def test_add_rejects_blank_text_with_one_notice(store: TaskStore, notices: list[str]) -> None:
    assert store.add("") is None
    assert store.add("   ") is None

    assert len(store) == 0
    assert notices == [EMPTY_TEXT_NOTICE, EMPTY_TEXT_NOTICE]


def test_ids_unique_within_same_millisecond(notices: list[str]) -> None:
    frozen = datetime(2026, 10, 18, 9, 30, 0)
    store = TaskStore(notify=notices.append, now=lambda: frozen)

    ids = [store.add(f"task {i}").id for i in range(5)]  # type: ignore[union-attr]

    assert len(set(ids)) == 5
    assert ids == sorted(ids)


def test_ids_continue_above_hydrated_tasks(store: TaskStore) -> None:
    far_future = int((datetime(2026, 10, 18) + timedelta(days=3650)).timestamp() * 1000)
    store.hydrate([Task(id=far_future, text="old")])

    new = store.add("new")

    assert new is not None
    assert new.id == far_future + 1


def test_toggle_sets_flag_from_caller(store: TaskStore) -> None:
    task = store.add("clean")
    assert task is not None

    assert store.toggle(task.id, True) is True
    assert store.get(task.id).completed is True  # type: ignore[union-attr]

    # Same flag again keeps it completed (not an inversion).
    store.toggle(task.id, True)
    assert store.get(task.id).completed is True  # type: ignore[union-attr]

    store.toggle(task.id, False)
    assert store.get(task.id).completed is False  # type: ignore[union-attr]


def test_toggle_and_remove_unknown_id_are_noops(store: TaskStore) -> None:
    store.add("a")
    before = [(t.id, t.text, t.completed) for t in store.tasks]

    assert store.toggle(123, True) is False
    assert store.remove(123) is False

    assert [(t.id, t.text, t.completed) for t in store.tasks] == before


def test_remove_drops_only_matching_task(store: TaskStore) -> None:
    a = store.add("a")
    b = store.add("b")
    assert a is not None and b is not None

    assert store.remove(a.id) is True
    assert [t.id for t in store.tasks] == [b.id]


def test_clear_completed_is_idempotent(store: TaskStore) -> None:
    a = store.add("a")
    store.add("b")
    c = store.add("c")
    assert a is not None and c is not None
    store.toggle(a.id, True)
    store.toggle(c.id, True)

    assert store.clear_completed() == 2
    once = [t.id for t in store.tasks]
    assert store.clear_completed() == 0
    assert [t.id for t in store.tasks] == once
    assert [t.text for t in store.tasks] == ["b"]


def test_set_filter_accepts_enum_and_string_and_ignores_unknown(store: TaskStore) -> None:
    assert store.current_filter is TaskFilter.ALL

    assert store.set_filter("Active") is True
    assert store.current_filter is TaskFilter.ACTIVE

    assert store.set_filter(TaskFilter.COMPLETED) is True
    assert store.current_filter is TaskFilter.COMPLETED

    assert store.set_filter("someday") is False
    assert store.current_filter is TaskFilter.COMPLETED


def test_subscribers_see_every_mutation(store: TaskStore) -> None:
    seen: list[StoreChange] = []
    unsubscribe = store.subscribe(seen.append)

    task = store.add("x")
    assert task is not None
    store.toggle(task.id, True)
    store.set_filter("completed")
    store.clear_completed()
    store.add("")  # rejected: no change event

    assert [c.kind for c in seen] == ["add", "toggle", "filter", "clear"]
    assert seen[0].task_id == task.id

    unsubscribe()
    store.add("y")
    assert len(seen) == 4


def test_failing_listener_does_not_break_mutation() -> None:
    store = TaskStore(now=StepClock())
    calls: list[str] = []

    def boom(change: StoreChange) -> None:
        raise RuntimeError("display crashed")

    store.subscribe(boom)
    store.subscribe(lambda c: calls.append(c.kind))

    assert store.add("still added") is not None
    assert len(store) == 1
    assert calls == ["add"]


def test_hydrate_replaces_collection(store: TaskStore) -> None:
    store.add("temporary")
    store.hydrate([Task(id=1, text="a"), Task(id=2, text="b", completed=True)])

    assert [t.id for t in store.tasks] == [1, 2]
    assert store.tasks[1].completed is True


def test_tasks_property_is_a_copy(store: TaskStore) -> None:
    store.add("a")
    snapshot = store.tasks
    snapshot.clear()
    assert len(store) == 1
