# src/todolist/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for recoverable task list errors (never fatal to the session)."""


class EmptyInputError(TaskError, ValueError):
    def __init__(self) -> None:
        super().__init__("task text is empty")


class TaskTooLongError(TaskError, ValueError):
    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(f"task text has {length} characters, maximum is {max_length}")
        self.length = length
        self.max_length = max_length


class DuplicateTaskError(TaskError, ValueError):
    def __init__(self, text: str) -> None:
        super().__init__(f"task already exists: {text!r}")
        self.text = text


class InvalidFormatError(TaskError, ValueError):
    """Imported data is not a JSON array of task objects."""


class StorageFailureError(TaskError):
    """Persisting to the key-value store failed; in-memory state is kept."""


class StorageQuotaExceededError(OSError):
    """Raised by size-limited key-value stores (the localStorage 'quota exceeded' case)."""
