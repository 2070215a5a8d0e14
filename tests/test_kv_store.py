# tests/test_kv_store.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.storage.kv_store import (
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    SqliteKeyValueStore,
    open_kv_store,
)
from todolist.tasks.errors import StorageQuotaExceededError


def test_json_file_store_set_get_remove(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"
    kv = JsonFileKeyValueStore(path)

    assert kv.get_item("todoTasks") is None
    kv.set_item("todoTasks", "[]")
    kv.set_item("taskIdCounter", "4")

    assert json.loads(path.read_text("utf-8")) == {"todoTasks": "[]", "taskIdCounter": "4"}
    assert JsonFileKeyValueStore(path).get_item("taskIdCounter") == "4"

    kv.remove_item("todoTasks")
    assert kv.get_item("todoTasks") is None
    assert not path.with_suffix(".json.tmp").exists()


def test_json_file_store_treats_garbage_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{{{ definitely not json", "utf-8")
    kv = JsonFileKeyValueStore(path)
    assert kv.get_item("todoTasks") is None

    kv.set_item("todoTasks", "[]")
    assert kv.get_item("todoTasks") == "[]"


def test_json_file_store_quota_leaves_file_untouched(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    kv = JsonFileKeyValueStore(path, quota_bytes=64)
    kv.set_item("k", "small")

    with pytest.raises(StorageQuotaExceededError):
        kv.set_item("big", "x" * 200)

    assert isinstance(StorageQuotaExceededError("x"), OSError)
    assert json.loads(path.read_text("utf-8")) == {"k": "small"}


def test_sqlite_store_roundtrip(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    kv = SqliteKeyValueStore(db)

    assert kv.get_item("todoTasks") is None
    kv.set_item("todoTasks", '[{"id": 1}]')
    kv.set_item("todoTasks", "[]")
    assert kv.get_item("todoTasks") == "[]"

    reopened = SqliteKeyValueStore(db)
    assert reopened.get_item("todoTasks") == "[]"

    reopened.remove_item("todoTasks")
    assert kv.get_item("todoTasks") is None


def test_memory_store_quota() -> None:
    kv = MemoryKeyValueStore(quota_bytes=30)
    kv.set_item("a", "1")
    with pytest.raises(StorageQuotaExceededError):
        kv.set_item("b", "y" * 50)
    assert kv.snapshot() == {"a": "1"}


@pytest.mark.parametrize(
    ("backend", "cls"),
    [("json", JsonFileKeyValueStore), ("sqlite", SqliteKeyValueStore), ("memory", MemoryKeyValueStore)],
)
def test_open_kv_store_picks_backend(tmp_path: Path, backend: str, cls: type) -> None:
    settings = SimpleNamespace(
        storage_backend=backend,
        storage_path=tmp_path / f"storage.{backend}",
        storage_quota_bytes=0,
    )
    assert isinstance(open_kv_store(settings), cls)


def test_open_kv_store_rejects_unknown_backend(tmp_path: Path) -> None:
    settings = SimpleNamespace(storage_backend="redis", storage_path=tmp_path / "x", storage_quota_bytes=0)
    with pytest.raises(ValueError):
        open_kv_store(settings)
