# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class Severity(StrEnum):
    """Notification severity shown to the user."""

    SUCCESS = "success"
    ERROR = "error"


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a 'Z' suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce_int(raw: Any, default: int = 0) -> int:
    if isinstance(raw, bool):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False
    created_at: str = ""

    def to_record(self) -> dict[str, Any]:
        """Persisted/exported shape (camelCase keys are part of the file format)."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        """
        Build a Task from a stored or imported record.

        Lenient on purpose: missing or odd fields get defaults instead of
        failing, so a hand-edited file still loads.
        """
        text = record.get("text", "")
        created_at = record.get("createdAt", "")
        return cls(
            id=_coerce_int(record.get("id")),
            text=text if isinstance(text, str) else str(text),
            completed=bool(record.get("completed", False)),
            created_at=created_at if isinstance(created_at, str) else str(created_at),
        )

    def normalized_text(self) -> str:
        return self.text.strip().casefold()


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int

    def as_dict(self) -> dict[str, int]:
        return {"total": self.total, "completed": self.completed, "pending": self.pending}


@dataclass(frozen=True, slots=True)
class TaskRules:
    """
    Validation/UX options applied by TaskStore.create.

    max_length: None or 0 disables the length check.
    refocus_after_add: the view gets focus_input() after a successful add.
    """

    max_length: int | None = 100
    refocus_after_add: bool = True

    @classmethod
    def from_settings(cls, settings: Any) -> TaskRules:
        max_length = getattr(settings, "max_task_length", 100)
        return cls(
            max_length=max_length or None,
            refocus_after_add=bool(getattr(settings, "refocus_after_add", True)),
        )
