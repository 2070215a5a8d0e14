# src/todolist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todolist.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _is_own_logger(name: str) -> bool:
    return name == "todolist" or name.startswith("todolist.")


class _ConsoleNoiseFilter(logging.Filter):
    """Only todolist records reach the terminal below ERROR; everything else needs ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        return _is_own_logger(record.name) or record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/todolist",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send records to stderr (filtered, so the task list on stdout stays clean)
    and to <log_dir>/todolist.log (unfiltered). Replaces any root handlers
    installed earlier. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())

    log_to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    log_to_file.setLevel(file_level)
    log_to_file.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(log_to_file)

    # warnings.warn(...) shows up as 'py.warnings' records
    logging.captureWarnings(True)

    return log_file
