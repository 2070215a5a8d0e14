# src/todolist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a usable default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

STORAGE_BACKENDS = ("json", "sqlite", "memory")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    storage_path: Path
    storage_quota_bytes: int

    # ---- Task rules ----
    max_task_length: int
    refocus_after_add: bool

    # ---- Console behaviour ----
    confirm_destructive: bool
    export_filename: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todolist").strip() or "todolist"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todolist"))

        storage_backend = _env(_k("STORAGE_BACKEND"), "json").strip().lower() or "json"
        default_file = "storage.sqlite3" if storage_backend == "sqlite" else "storage.json"
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / default_file)
        storage_quota_bytes = max(0, _env_int(_k("STORAGE_QUOTA_BYTES"), 0))

        max_task_length = max(0, _env_int(_k("MAX_TASK_LENGTH"), 100))
        refocus_after_add = _env_bool(_k("REFOCUS_AFTER_ADD"), True)

        confirm_destructive = _env_bool(_k("CONFIRM_DESTRUCTIVE"), True)
        export_filename = _env(_k("EXPORT_FILENAME"), "my-tasks.json").strip() or "my-tasks.json"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_path=storage_path,
            storage_quota_bytes=storage_quota_bytes,
            max_task_length=max_task_length,
            refocus_after_add=refocus_after_add,
            confirm_destructive=confirm_destructive,
            export_filename=export_filename,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
