"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStats, TaskRules, Severity)
- errors.py: recoverable error types
- task_store.py: in-memory task list persisted through a key-value store
- task_api.py: user-facing operations (notify, re-render, confirmation)
"""
