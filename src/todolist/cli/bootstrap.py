# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value backend, TaskStore and the view into AppState.
"""

from __future__ import annotations

import functools
import logging

from ..config import get_settings
from ..core.ports import TaskListView
from ..core.state import AppState
from ..storage.kv_store import open_kv_store
from ..tasks.task_api import report_storage_failure
from ..tasks.task_models import TaskRules
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, view: TaskListView, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    task_store = TaskStore(open_kv_store(settings), rules=TaskRules.from_settings(settings))
    state = AppState(settings=settings, task_store=task_store, view=view)

    # The store reports write failures through the view of the state that owns it.
    task_store.on_storage_failure = functools.partial(report_storage_failure, state)

    logger.info(
        "State ready backend=%s path=%s tasks=%d",
        settings.storage_backend,
        settings.storage_path,
        len(task_store.tasks),
    )
    return state
