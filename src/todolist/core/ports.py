# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends and front-ends swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import Severity, Task, TaskStats


class KeyValueStore(Protocol):
    """
    String-to-string persistent storage (same contract as browser localStorage).

    set_item may raise OSError (including StorageQuotaExceededError) or sqlite3.Error;
    get_item returns None for missing keys.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
    def close(self) -> None: ...


class TaskListView(Protocol):
    """
    Front-end side port: how task operations report back to the user.

    The store never calls the view directly; tasks/task_api.py does it after
    each operation.
    """

    def render(self, tasks: Sequence[Task]) -> None: ...
    def show_stats(self, stats: TaskStats) -> None: ...
    def notify(self, message: str, severity: Severity = Severity.SUCCESS) -> None: ...
    def confirm(self, prompt: str) -> bool: ...
    def focus_input(self) -> None: ...
