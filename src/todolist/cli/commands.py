# src/todolist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks import task_api

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw_args: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        raw_args: bool = False,
    ) -> None:
        """raw_args: the handler gets everything after the name as one argument."""
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        if raw_args:
            self._raw_args.add(key)
        for alias in aliases:
            self._handlers[alias.lower()] = handler
            if raw_args:
                self._raw_args.add(alias.lower())

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string ("" when the view already reported everything)
        or None if the line is not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw_args:
            # Free text (task text, file paths): keep inner whitespace as typed.
            args = [rest] if rest.strip() else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any line that does not start with '/' is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        task_id = int(args[0].lstrip("#"))
    except ValueError:
        return None
    return task_id if task_id > 0 else None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    task_api.add_task(state, args[0] if args else "")
    return ""


def cmd_toggle(state: AppState, args: list[str]) -> str:
    """
    /done <id>  -> mark complete (or back to pending if already complete)
    """
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task_api.toggle_task(state, task_id)
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /del <id>"
    task_api.delete_task(state, task_id)
    return ""


def cmd_clear_done(state: AppState, args: list[str]) -> str:
    task_api.clear_completed(state)
    return ""


def cmd_clear_all(state: AppState, args: list[str]) -> str:
    task_api.clear_all(state)
    return ""


def cmd_list(state: AppState, args: list[str]) -> str:
    task_api.refresh(state)
    return ""


def cmd_stats(state: AppState, args: list[str]) -> str:
    state.view.show_stats(state.task_store.stats())
    return ""


def cmd_export(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /export          -> write <data_dir>/<export_filename>
    /export <path>   -> write to path
    """
    path = args[0].strip() if args else None
    if emit:
        emit(f"Exporting {len(state.task_store.tasks)} task(s)...")
    task_api.export_tasks(state, path)
    return ""


def cmd_import(state: AppState, args: list[str]) -> str:
    """
    /import <path>   -> replace the whole list with the tasks in a JSON file
    """
    if not args:
        return "Usage: /import <path>"
    task_api.import_tasks(state, args[0].strip())
    return ""


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    store = state.task_store
    max_len = store.rules.max_length or "unlimited"
    return (
        "Status:\n"
        f"  Storage: {getattr(settings, 'storage_backend', '?')} ({getattr(settings, 'storage_path', '?')})\n"
        f"  Tasks: {len(store.tasks)}, next id: {store.next_id}\n"
        f"  Max task length: {max_len}\n"
        f"  Confirm destructive actions: {'ON' if getattr(settings, 'confirm_destructive', True) else 'OFF'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"], raw_args=True)
registry.register(
    "done", cmd_toggle, help_text="Toggle a task complete/pending: /done <id>.", aliases=["toggle", "t"]
)
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["rm", "delete"])
registry.register("clear-done", cmd_clear_done, help_text="Delete all completed tasks.")
registry.register("clear-all", cmd_clear_all, help_text="Delete every task.")
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show total/completed/pending counts.")
registry.register("export", cmd_export, help_text="Save tasks as JSON: /export [path].", raw_args=True)
registry.register(
    "import",
    cmd_import,
    help_text="Load tasks from JSON (replaces list): /import <path>.",
    raw_args=True,
)
registry.register("status", cmd_status, help_text="Show storage and rule settings.")
