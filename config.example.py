# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todolist).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Storage
    "TODO_DATA_DIR": "Local data directory for storage, exports and logs (default: .local/todolist).",
    "TODO_STORAGE_BACKEND": "json | sqlite | memory (default: json).",
    "TODO_STORAGE_PATH": (
        "Storage file (default: <data_dir>/storage.json, or storage.sqlite3 for sqlite)."
    ),
    "TODO_STORAGE_QUOTA_BYTES": "Size limit for the json/memory backends, 0 = unlimited (default: 0).",
    # Task rules
    "TODO_MAX_TASK_LENGTH": "Maximum task text length, 0 = unlimited (default: 100).",
    "TODO_REFOCUS_AFTER_ADD": "Prompt for the next task right after adding one (default: true).",
    # Console
    "TODO_CONFIRM_DESTRUCTIVE": "Ask before delete/clear (default: true).",
    "TODO_EXPORT_FILENAME": "Default /export file name under data_dir (default: my-tasks.json).",
}
