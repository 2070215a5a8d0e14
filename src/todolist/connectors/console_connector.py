# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TextIO

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import Severity, Task, TaskStats

logger = logging.getLogger(__name__)

PROMPT = ">>> "
FOCUSED_PROMPT = ">>> New task: "
EMPTY_STATE_TEXT = "No tasks yet. Type a task and press Enter to add it."


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleView:
    """TaskListView for an interactive terminal."""

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        out: TextIO | None = None,
    ) -> None:
        self._input = input_fn
        self._out = out
        self.input_focused = False

    def _print(self, text: str = "") -> None:
        print(text, file=self._out or sys.stdout, flush=True)

    def render(self, tasks: Sequence[Task]) -> None:
        if not tasks:
            self._print(EMPTY_STATE_TEXT)
            return
        width = len(str(max(t.id for t in tasks)))
        for t in tasks:
            mark = "x" if t.completed else " "
            self._print(f"  [{mark}] #{t.id:<{width}}  {t.text}")

    def show_stats(self, stats: TaskStats) -> None:
        self._print(
            f"Total: {stats.total} | Completed: {stats.completed} | Pending: {stats.pending}"
        )

    def notify(self, message: str, severity: Severity = Severity.SUCCESS) -> None:
        tag = "OK" if severity == Severity.SUCCESS else "ERROR"
        self._print(f"[{_ts_local()}] [{tag}] {message}")

    def confirm(self, prompt: str) -> bool:
        try:
            answer = self._input(f"{prompt} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            self._print()
            return False
        return answer.strip().lower() in ("y", "yes")

    def focus_input(self) -> None:
        self.input_focused = True

    def prompt(self) -> str:
        return FOCUSED_PROMPT if self.input_focused else PROMPT


def handle_line(state: AppState, line: str, emit: Callable[[str], None] | None = None) -> str | None:
    """
    Dispatch one console line: slash commands go to the registry,
    anything else is added as a task. Returns text to print, if any.
    """
    cmd_response = command_registry.handle(state, line, emit=emit)
    if cmd_response is not None:
        return cmd_response or None

    task_api.add_task(state, line)
    return None


def run_console_loop(state: AppState, *, input_fn: Callable[[str], str] = input) -> None:
    logger.info("Console connector started (tasks=%d).", len(state.task_store.tasks))
    view = state.view
    prompt_for = getattr(view, "prompt", None)

    print(f"[{_ts_local()}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    task_api.refresh(state)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        prompt = prompt_for() if callable(prompt_for) else PROMPT
        try:
            user_input = input_fn(prompt).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if hasattr(view, "input_focused"):
            view.input_focused = False

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response:
            print(f"[{_ts_local()}] {response}")

    logger.info("Console connector finished.")
