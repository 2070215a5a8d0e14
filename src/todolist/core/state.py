# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import TaskListView


@dataclass
class AppState:
    """
    Everything a session needs, built once by cli/bootstrap.py and passed by reference.

    settings is typed as Any so tests can pass a SimpleNamespace.
    """

    settings: Any
    task_store: TaskStore
    view: TaskListView
