# tests/test_console_connector.py

from __future__ import annotations

import io

from todolist.cli.bootstrap import create_initial_state
from todolist.connectors.console_connector import (
    EMPTY_STATE_TEXT,
    FOCUSED_PROMPT,
    PROMPT,
    ConsoleView,
    handle_line,
    run_console_loop,
)
from todolist.tasks.task_models import Severity, Task, TaskStats


def _scripted(lines: list[str], prompts: list[str] | None = None):
    it = iter(lines)

    def fake_input(prompt: str) -> str:
        if prompts is not None:
            prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return fake_input


def test_console_view_rendering() -> None:
    out = io.StringIO()
    view = ConsoleView(out=out)

    view.render([])
    view.render([Task(id=10, text="B", completed=True), Task(id=2, text="A")])
    view.show_stats(TaskStats(total=2, completed=1, pending=1))
    view.notify("This task already exists!", Severity.ERROR)

    lines = out.getvalue().splitlines()
    assert lines[0] == EMPTY_STATE_TEXT
    assert lines[1] == "  [x] #10  B"
    assert lines[2] == "  [ ] #2   A"
    assert lines[3] == "Total: 2 | Completed: 1 | Pending: 1"
    assert lines[4].endswith("[ERROR] This task already exists!")


def test_console_view_confirm() -> None:
    out = io.StringIO()
    assert ConsoleView(input_fn=_scripted(["y"]), out=out).confirm("Sure?") is True
    assert ConsoleView(input_fn=_scripted(["YES "]), out=out).confirm("Sure?") is True
    assert ConsoleView(input_fn=_scripted([""]), out=out).confirm("Sure?") is False
    assert ConsoleView(input_fn=_scripted([]), out=out).confirm("Sure?") is False


def test_handle_line_adds_plain_text(settings) -> None:
    view = ConsoleView(out=io.StringIO())
    state = create_initial_state(view=view, settings=settings)

    assert handle_line(state, "Buy milk") is None
    assert [t.text for t in state.task_store.tasks] == ["Buy milk"]
    assert view.input_focused is True
    assert handle_line(state, "/nope").startswith("Unknown command")


def test_console_loop_runs_commands_until_exit(settings, capsys) -> None:
    out = io.StringIO()
    prompts: list[str] = []
    view = ConsoleView(input_fn=_scripted(["y"]), out=out)
    state = create_initial_state(view=view, settings=settings)

    run_console_loop(
        state,
        input_fn=_scripted(["A", "", "/done 1", "B", "/exit", "never read"], prompts),
    )

    assert [(t.text, t.completed) for t in state.task_store.tasks] == [("B", False), ("A", True)]
    assert prompts == [PROMPT, FOCUSED_PROMPT, PROMPT, PROMPT, FOCUSED_PROMPT]
    assert "Task completed!" in out.getvalue()
    assert "Use /help for commands" in capsys.readouterr().out


def test_console_loop_survives_handler_crash(settings, capsys, monkeypatch) -> None:
    view = ConsoleView(out=io.StringIO())
    state = create_initial_state(view=view, settings=settings)

    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("todolist.connectors.console_connector.handle_line", boom)
    run_console_loop(state, input_fn=_scripted(["/list", "/quit"]))

    assert "Internal error while handling a command." in capsys.readouterr().out


def test_blank_line_reports_empty_task(settings) -> None:
    out = io.StringIO()
    view = ConsoleView(out=out)
    state = create_initial_state(view=view, settings=settings)

    run_console_loop(state, input_fn=_scripted(["   ", "/exit"]))

    assert "[ERROR] Please enter a task!" in out.getvalue()
    assert state.task_store.tasks == ()
