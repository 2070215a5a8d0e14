# src/todolist/storage/kv_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import sqlite3
from pathlib import Path
from typing import Any

from ..core.ports import KeyValueStore
from ..tasks.errors import StorageQuotaExceededError

logger = logging.getLogger(__name__)


def _encoded_size(data: dict[str, str]) -> int:
    return len(json.dumps(data, ensure_ascii=False).encode("utf-8"))


class MemoryKeyValueStore:
    """
    Dict-backed store for tests and throwaway sessions.

    quota_bytes mimics a browser storage quota: a write that would push the
    serialized size over the limit raises StorageQuotaExceededError and
    changes nothing.
    """

    def __init__(self, initial: dict[str, str] | None = None, *, quota_bytes: int | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes or None

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        candidate = dict(self._data)
        candidate[key] = str(value)
        if self._quota_bytes is not None and _encoded_size(candidate) > self._quota_bytes:
            raise StorageQuotaExceededError(f"storage quota of {self._quota_bytes} bytes exceeded")
        self._data = candidate

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def close(self) -> None:
        return

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileKeyValueStore:
    """
    All keys in a single JSON object file.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write leaves the previous file intact.
    An unreadable or malformed file is treated as empty (and logged).
    """

    def __init__(self, path: str | Path, *, quota_bytes: int | None = None) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = quota_bytes or None
        logger.info("JsonFileKeyValueStore ready path=%s quota=%s", self._path, self._quota_bytes)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read storage file %s; treating it as empty.", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold a JSON object; treating it as empty.", self._path)
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def _write_all(self, data: dict[str, str]) -> None:
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        if self._quota_bytes is not None and len(payload.encode("utf-8")) > self._quota_bytes:
            raise StorageQuotaExceededError(f"storage quota of {self._quota_bytes} bytes exceeded")

        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(payload, "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            # Task text is personal data; keep the file private on disk.
            os.chmod(self._path, 0o600)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = str(value)
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    def close(self) -> None:
        return


class SqliteKeyValueStore:
    """
    SQLite key-value table.

    Each method opens its own short-lived connection (no persistent handle to close).
    """

    def __init__(self, db_path: str | Path = "storage.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKeyValueStore ready db=%s", self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get_item(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])
        finally:
            conn.close()

    def set_item(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, str(value)),
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return


def open_kv_store(settings: Any) -> KeyValueStore:
    """Build the backend named by settings.storage_backend."""
    backend = str(getattr(settings, "storage_backend", "json")).lower()
    quota = int(getattr(settings, "storage_quota_bytes", 0) or 0) or None

    if backend == "json":
        return JsonFileKeyValueStore(settings.storage_path, quota_bytes=quota)
    if backend == "sqlite":
        return SqliteKeyValueStore(settings.storage_path)
    if backend == "memory":
        logger.warning("Using in-memory storage: tasks will not survive this session.")
        return MemoryKeyValueStore(quota_bytes=quota)

    raise ValueError(f"Unknown storage backend: {backend!r}")
