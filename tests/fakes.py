# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from todolist.storage.kv_store import MemoryKeyValueStore
from todolist.tasks.task_models import Severity, Task, TaskStats


@dataclass(slots=True)
class FakeView:
    """
    Deterministic TaskListView for unit tests.

    - Captures every call for assertions
    - Answers confirmation prompts with `answer`
    """

    answer: bool = True
    renders: list[list[Task]] = field(default_factory=list)
    stats: list[TaskStats] = field(default_factory=list)
    notifications: list[tuple[str, Severity]] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)
    focus_calls: int = 0

    def render(self, tasks: Sequence[Task]) -> None:
        self.renders.append(list(tasks))

    def show_stats(self, stats: TaskStats) -> None:
        self.stats.append(stats)

    def notify(self, message: str, severity: Severity = Severity.SUCCESS) -> None:
        self.notifications.append((message, severity))

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer

    def focus_input(self) -> None:
        self.focus_calls += 1

    @property
    def last_message(self) -> tuple[str, Severity] | None:
        return self.notifications[-1] if self.notifications else None


class FailingKeyValueStore:
    """Reads work, every write raises (disk full / quota)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data = dict(initial or {})
        self.write_attempts = 0

    def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        raise OSError(28, "No space left on device")

    def remove_item(self, key: str) -> None:
        raise OSError(28, "No space left on device")

    def close(self) -> None:
        return


class KeyFailingKeyValueStore(MemoryKeyValueStore):
    """Memory store whose writes to one key always fail (partial persist)."""

    def __init__(self, failing_key: str, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.failing_key = failing_key

    def set_item(self, key: str, value: str) -> None:
        if key == self.failing_key:
            raise OSError(5, "Input/output error")
        super().set_item(key, value)
