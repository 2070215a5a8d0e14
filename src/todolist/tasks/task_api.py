# src/todolist/tasks/task_api.py

"""
User-facing task operations.

Each function calls the TaskStore, then reports back through state.view:
re-render + stats after every mutation, a notification for every outcome.
Confirmation for destructive operations is asked here, before the store is
touched. Nothing in this module raises to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.state import AppState
from .errors import (
    DuplicateTaskError,
    EmptyInputError,
    InvalidFormatError,
    StorageFailureError,
    TaskTooLongError,
)
from .task_models import Severity, Task

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."
STORAGE_FAILURE_MESSAGE = "Failed to save tasks. Storage may be full."


def report_storage_failure(state: AppState, failure: StorageFailureError) -> None:
    """Hook for TaskStore.on_storage_failure."""
    logger.debug("Storage failure reported to user: %s", failure)
    state.view.notify(STORAGE_FAILURE_MESSAGE, Severity.ERROR)


def refresh(state: AppState) -> None:
    """Render the current list and counters."""
    state.view.render(state.task_store.tasks)
    state.view.show_stats(state.task_store.stats())


def _confirm(state: AppState, prompt: str) -> bool:
    if not getattr(state.settings, "confirm_destructive", True):
        return True
    return state.view.confirm(prompt)


def add_task(state: AppState, text: str) -> Task | None:
    store = state.task_store
    try:
        task = store.create(text)
    except EmptyInputError:
        state.view.notify("Please enter a task!", Severity.ERROR)
        return None
    except TaskTooLongError as e:
        state.view.notify(
            f"Task is too long! Maximum {e.max_length} characters.", Severity.ERROR
        )
        return None
    except DuplicateTaskError:
        state.view.notify("This task already exists!", Severity.ERROR)
        return None
    except Exception:
        logger.exception("add_task failed")
        state.view.notify("Failed to add task. Please try again.", Severity.ERROR)
        return None

    refresh(state)
    state.view.notify("Task added successfully!", Severity.SUCCESS)
    if store.rules.refocus_after_add:
        state.view.focus_input()
    return task


def toggle_task(state: AppState, task_id: int) -> Task | None:
    try:
        task = state.task_store.toggle(task_id)
    except Exception:
        logger.exception("toggle_task failed id=%s", task_id)
        state.view.notify(GENERIC_ERROR_MESSAGE, Severity.ERROR)
        return None

    if task is None:
        return None

    refresh(state)
    msg = "Task completed!" if task.completed else "Task marked as pending!"
    state.view.notify(msg, Severity.SUCCESS)
    return task


def delete_task(state: AppState, task_id: int) -> bool:
    if not _confirm(state, "Are you sure you want to delete this task?"):
        return False

    try:
        deleted = state.task_store.delete(task_id)
    except Exception:
        logger.exception("delete_task failed id=%s", task_id)
        state.view.notify(GENERIC_ERROR_MESSAGE, Severity.ERROR)
        return False

    if deleted:
        refresh(state)
        state.view.notify("Task deleted!", Severity.SUCCESS)
    return deleted


def clear_completed(state: AppState) -> int:
    count = state.task_store.stats().completed
    if count == 0:
        state.view.notify("No completed tasks to clear!", Severity.ERROR)
        return 0

    if not _confirm(state, f"Are you sure you want to delete {count} completed task(s)?"):
        return 0

    try:
        removed = state.task_store.clear_completed()
    except Exception:
        logger.exception("clear_completed failed")
        state.view.notify(GENERIC_ERROR_MESSAGE, Severity.ERROR)
        return 0

    refresh(state)
    state.view.notify(f"{removed} completed task(s) cleared!", Severity.SUCCESS)
    return removed


def clear_all(state: AppState) -> int:
    count = state.task_store.stats().total
    if count == 0:
        state.view.notify("No tasks to clear!", Severity.ERROR)
        return 0

    if not _confirm(state, f"Are you sure you want to delete all {count} task(s)?"):
        return 0

    try:
        removed = state.task_store.clear_all()
    except Exception:
        logger.exception("clear_all failed")
        state.view.notify(GENERIC_ERROR_MESSAGE, Severity.ERROR)
        return 0

    refresh(state)
    state.view.notify("All tasks cleared!", Severity.SUCCESS)
    return removed


def default_export_path(state: AppState) -> Path:
    data_dir = Path(getattr(state.settings, "data_dir", "."))
    return data_dir / str(getattr(state.settings, "export_filename", "my-tasks.json"))


def export_tasks(state: AppState, path: str | Path | None = None) -> Path | None:
    target = Path(path).expanduser() if path else default_export_path(state)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(state.task_store.export_tasks())
    except OSError:
        logger.exception("Failed to export tasks to %s", target)
        state.view.notify("Failed to export tasks!", Severity.ERROR)
        return None

    logger.info("Exported %d task(s) to %s", len(state.task_store.tasks), target)
    state.view.notify(f"Tasks exported successfully! ({target})", Severity.SUCCESS)
    return target


def import_tasks(state: AppState, path: str | Path) -> int | None:
    source = Path(path).expanduser()
    try:
        count = state.task_store.import_tasks(source.read_bytes())
    except OSError:
        logger.exception("Failed to read import file %s", source)
        state.view.notify("Error importing tasks!", Severity.ERROR)
        return None
    except InvalidFormatError as e:
        logger.info("Rejected import from %s: %s", source, e)
        state.view.notify("Error importing tasks!", Severity.ERROR)
        return None

    refresh(state)
    state.view.notify("Tasks imported successfully!", Severity.SUCCESS)
    return count
