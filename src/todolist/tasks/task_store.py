# src/todolist/tasks/task_store.py

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Callable
from typing import Any

from ..core.ports import KeyValueStore
from .errors import (
    DuplicateTaskError,
    EmptyInputError,
    InvalidFormatError,
    StorageFailureError,
    TaskTooLongError,
)
from .task_models import Task, TaskRules, TaskStats, utc_now_iso

logger = logging.getLogger(__name__)

TASKS_KEY = "todoTasks"
COUNTER_KEY = "taskIdCounter"

StorageFailureHandler = Callable[[StorageFailureError], None]


class TaskStore:
    """
    In-memory task collection synchronized with a key-value store.

    - tasks are kept newest first
    - ids come from a counter that only ever grows (deletions never free an id)
    - every successful mutation is written through to the store

    A failed write never raises: it is logged, handed to on_storage_failure,
    and the in-memory state stays as it is until the next successful persist.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        rules: TaskRules | None = None,
        on_storage_failure: StorageFailureHandler | None = None,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._kv = kv
        self.rules = rules or TaskRules()
        self.on_storage_failure = on_storage_failure
        self._clock = clock

        self._tasks: list[Task] = []
        self._next_id = 1
        self.load()
        logger.info("TaskStore ready total=%s next_id=%s", len(self._tasks), self._next_id)

    # ---- lifecycle ----

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Flush on session end."""
        self.persist()

    # ---- read-only views ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def next_id(self) -> int:
        return self._next_id

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def stats(self) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskStats(total=total, completed=completed, pending=total - completed)

    def is_duplicate(self, text: str) -> bool:
        needle = text.strip().casefold()
        return any(t.normalized_text() == needle for t in self._tasks)

    # ---- persistence ----

    def load(self) -> None:
        """Read both keys; anything missing or malformed falls back to empty / 1."""
        self._tasks = self._load_tasks()
        self._next_id = self._load_counter()

    def _load_tasks(self) -> list[Task]:
        try:
            raw = self._kv.get_item(TASKS_KEY)
        except (OSError, sqlite3.Error):
            logger.exception("Failed to read %s; starting with an empty list.", TASKS_KEY)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Stored %s is not valid JSON; starting with an empty list.", TASKS_KEY)
            return []
        if not isinstance(data, list):
            logger.warning("Stored %s is not a JSON array; starting with an empty list.", TASKS_KEY)
            return []
        return [Task.from_record(r) for r in data if isinstance(r, dict)]

    def _load_counter(self) -> int:
        try:
            raw = self._kv.get_item(COUNTER_KEY)
        except (OSError, sqlite3.Error):
            logger.exception("Failed to read %s; counter starts at 1.", COUNTER_KEY)
            return 1
        if raw is None:
            return 1
        try:
            value = int(str(raw).strip())
        except ValueError:
            logger.warning("Stored %s=%r is not an integer; counter starts at 1.", COUNTER_KEY, raw)
            return 1
        return value if value >= 1 else 1

    def persist(self) -> bool:
        """Write counter and tasks. Returns False (and reports) on storage failure."""
        payload = json.dumps([t.to_record() for t in self._tasks], ensure_ascii=False)
        try:
            # Counter first: if the second write fails, the saved counter is
            # ahead of the saved tasks, never behind them.
            self._kv.set_item(COUNTER_KEY, str(self._next_id))
            self._kv.set_item(TASKS_KEY, payload)
        except (OSError, sqlite3.Error) as e:
            logger.warning("Failed to persist %d task(s): %s", len(self._tasks), e)
            failure = StorageFailureError(str(e))
            if self.on_storage_failure is not None:
                self.on_storage_failure(failure)
            return False
        logger.debug("Persisted %d task(s) next_id=%s", len(self._tasks), self._next_id)
        return True

    # ---- mutations ----

    def create(self, text: str) -> Task:
        """
        Validate and prepend a new task.

        Raises EmptyInputError, TaskTooLongError or DuplicateTaskError;
        the collection is untouched in those cases.
        """
        clean = (text or "").strip()
        if not clean:
            raise EmptyInputError()

        max_length = self.rules.max_length
        if max_length and len(clean) > max_length:
            raise TaskTooLongError(len(clean), max_length)

        if self.is_duplicate(clean):
            raise DuplicateTaskError(clean)

        task = Task(id=self._next_id, text=clean, completed=False, created_at=self._clock())
        self._next_id += 1
        self._tasks.insert(0, task)
        self.persist()
        logger.debug("Task created id=%s", task.id)
        return task

    def toggle(self, task_id: int) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle: no task id=%s", task_id)
            return None
        task.completed = not task.completed
        self.persist()
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        return task

    def delete(self, task_id: int) -> bool:
        remaining = [t for t in self._tasks if t.id != task_id]
        if len(remaining) == len(self._tasks):
            logger.debug("delete: no task id=%s", task_id)
            return False
        self._tasks = remaining
        self.persist()
        logger.debug("Task deleted id=%s", task_id)
        return True

    def clear_completed(self) -> int:
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        if removed:
            self._tasks = remaining
            self.persist()
            logger.debug("Cleared %d completed task(s)", removed)
        return removed

    def clear_all(self) -> int:
        removed = len(self._tasks)
        if removed:
            self._tasks = []
            self.persist()
            logger.debug("Cleared all %d task(s)", removed)
        return removed

    # ---- import / export ----

    def export_tasks(self) -> bytes:
        records = [t.to_record() for t in self._tasks]
        return json.dumps(records, ensure_ascii=False, indent=2).encode("utf-8")

    def import_tasks(self, data: bytes | str) -> int:
        """
        Replace the whole collection with the tasks in `data`.

        Only the top level is checked (a JSON array of objects). Ids are taken
        as-is and next_id is NOT moved past them, so later creates may collide
        with imported ids; that case is logged.
        """
        try:
            text = data.decode("utf-8-sig") if isinstance(data, bytes) else data
            parsed: Any = json.loads(text)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise InvalidFormatError(f"not valid JSON: {e}") from e

        if not isinstance(parsed, list):
            raise InvalidFormatError(f"expected a JSON array, got {type(parsed).__name__}")
        if not all(isinstance(r, dict) for r in parsed):
            raise InvalidFormatError("every element must be a JSON object")

        imported = [Task.from_record(r) for r in parsed]
        clashing = [t.id for t in imported if t.id >= self._next_id]
        if clashing:
            logger.warning(
                "Imported ids %s are >= next_id=%s; new tasks may reuse them.",
                clashing,
                self._next_id,
            )

        self._tasks = imported
        self.persist()
        logger.info("Imported %d task(s)", len(imported))
        return len(imported)
