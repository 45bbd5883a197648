# tests/test_persistence.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasklist.storage.kv_slot import SqliteKeyValueSlot
from tasklist.storage.persistence import PersistenceAdapter, decode, encode
from tasklist.tasks.errors import PersistenceReadError, PersistenceWriteError
from tasklist.tasks.task_models import Task

from .fakes import BrokenSlot, MemorySlot


def _tasks() -> list[Task]:
    return [
        Task(id=1729240000000, text="buy milk", completed=False, created_at="2026-10-18 09:00:00"),
        Task(id=1729240000001, text="Ünïcode ✓", completed=True, created_at="2026-10-18 09:00:01"),
    ]


def test_encode_uses_date_key() -> None:
    records = json.loads(encode(_tasks()))
    assert records[0] == {
        "id": 1729240000000,
        "text": "buy milk",
        "completed": False,
        "date": "2026-10-18 09:00:00",
    }


def test_save_then_load_reproduces_collection() -> None:
    adapter = PersistenceAdapter(MemorySlot())
    adapter.save(_tasks())

    assert adapter.load() == _tasks()


def test_decode_is_lenient_about_fields() -> None:
    raw = json.dumps(
        [
            {"id": 5, "text": " walk dog ", "extra": "ignored"},
            {"id": " 7 ", "text": "string id", "completed": "yes", "date": 12},
            {"text": "no id"},
            {"id": 5, "text": "duplicate id"},
            {"id": "--5", "text": "double dash id"},
            {"id": "²", "text": "superscript id"},
            {"id": 9, "text": "   "},
            {"id": 10},
            "not a record",
            None,
        ]
    )

    tasks = decode(raw)

    assert [t.text for t in tasks] == [
        "walk dog",
        "string id",
        "no id",
        "duplicate id",
        "double dash id",
        "superscript id",
    ]
    assert [t.id for t in tasks[:2]] == [5, 7]
    assert tasks[1].completed is False
    assert tasks[1].created_at == ""
    ids = [t.id for t in tasks]
    assert len(set(ids)) == len(ids)
    assert min(ids[2:]) > 7


def test_decode_list_of_dropped_records_is_empty() -> None:
    assert decode(json.dumps([{"id": 1}])) == []
    assert PersistenceAdapter(MemorySlot({"tasks": '[{"id": 1}, "x", null]'})).load() == []


@pytest.mark.parametrize(
    "record",
    [
        {"id": "--5", "text": "x"},
        {"id": "²", "text": "x"},
        {"id": "1e3", "text": "x"},
        {"id": float("inf"), "text": "x"},
        {"id": [1], "text": "x"},
        {"id": {"n": 1}, "text": "x"},
        {"id": 1, "text": ["x"]},
    ],
)
def test_load_repairs_odd_ids_instead_of_raising(record: dict) -> None:
    tasks = PersistenceAdapter(MemorySlot({"tasks": json.dumps([record])})).load()
    assert tasks is not None
    assert all(isinstance(t.id, int) for t in tasks)


@pytest.mark.parametrize("raw", ["{not json", '{"tasks": []}', "null", "42"])
def test_decode_rejects_malformed_payloads(raw: str) -> None:
    with pytest.raises(PersistenceReadError):
        decode(raw)


@pytest.mark.parametrize("raw", ["{not json", '{"tasks": []}', "null"])
def test_load_treats_malformed_data_as_nothing_saved(raw: str) -> None:
    adapter = PersistenceAdapter(MemorySlot({"tasks": raw}))
    assert adapter.load() is None


def test_load_missing_key_and_broken_slot_return_none() -> None:
    assert PersistenceAdapter(MemorySlot()).load() is None
    assert PersistenceAdapter(BrokenSlot()).load() is None


def test_load_empty_list_is_valid() -> None:
    assert PersistenceAdapter(MemorySlot({"tasks": "[]"})).load() == []


def test_save_failure_raises_write_error() -> None:
    adapter = PersistenceAdapter(MemorySlot(fail_writes=True))
    with pytest.raises(PersistenceWriteError):
        adapter.save(_tasks())


def test_custom_key_is_used() -> None:
    slot = MemorySlot()
    PersistenceAdapter(slot, key="other").save(_tasks())
    assert set(slot.data) == {"other"}


def test_sqlite_slot_get_set_overwrite_delete(tmp_path: Path) -> None:
    slot = SqliteKeyValueSlot(tmp_path / "nested" / "kv.sqlite3")

    assert slot.get("tasks") is None
    slot.set("tasks", "[1]")
    slot.set("tasks", "[2]")
    assert slot.get("tasks") == "[2]"

    slot.delete("tasks")
    assert slot.get("tasks") is None


def test_sqlite_slot_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "kv.sqlite3"
    PersistenceAdapter(SqliteKeyValueSlot(db)).save(_tasks())

    reopened = PersistenceAdapter(SqliteKeyValueSlot(db))
    assert reopened.load() == _tasks()
