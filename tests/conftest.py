# tests/conftest.py

from __future__ import annotations

import itertools
from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.cli.bootstrap import create_initial_state
from todolist.core.state import AppState
from todolist.storage.kv_store import MemoryKeyValueStore
from todolist.tasks.task_models import TaskRules
from todolist.tasks.task_store import TaskStore

from .fakes import FakeView


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and task_api.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_backend="json",
        storage_path=tmp_path / "storage.json",
        storage_quota_bytes=0,
        max_task_length=100,
        refocus_after_add=True,
        confirm_destructive=True,
        export_filename="my-tasks.json",
    )


@pytest.fixture()
def clock():
    """Deterministic createdAt values: 2025-01-01T10:00:00.000Z, ...:01.000Z, ..."""
    counter = itertools.count()
    return lambda: f"2025-01-01T10:00:{next(counter):02d}.000Z"


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(kv: MemoryKeyValueStore, clock) -> TaskStore:
    return TaskStore(kv, rules=TaskRules(max_length=100), clock=clock)


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def state(settings: SimpleNamespace, view: FakeView) -> AppState:
    """
    AppState wired through the real composition root.

    NOTE: the JSON file store is real here because persistence across
    sessions is part of what we want to test.
    """
    return create_initial_state(view=view, settings=settings)
