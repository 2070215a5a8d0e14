"""Local task list manager."""
