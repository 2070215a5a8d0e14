"""Ports and application state shared by the task list and its front-ends."""
