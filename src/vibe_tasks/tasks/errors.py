# src/vibe_tasks/tasks/errors.py

"""
Error taxonomy for task operations.

Every error is terminal for the current command: the CLI reports the message
and exits non-zero without writing the data file.
"""

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base exception for task-related errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NotFound(TaskError):
    """Raised when no task with the given id exists."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task #{task_id} not found.")


class ValidationError(TaskError):
    """Raised for invalid user input (empty title, unparsable due date, ...)."""


class InvalidCategory(TaskError):
    """Raised when a label is not part of the category palette."""

    def __init__(self, label: str, allowed: list[str] | None = None):
        self.label = label
        hint = f" (choose from: {', '.join(allowed)})" if allowed else ""
        super().__init__(f"Unknown category '{label}'{hint}.")


class AlreadyTracking(TaskError):
    """Raised when starting a session on a task that already has one open."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Time tracking is already running for task #{task_id}.")


class NotTracking(TaskError):
    """Raised when stopping a session on a task that has none open."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"No active time tracking for task #{task_id}.")


class CorruptData(TaskError):
    """Raised when the data file exists but cannot be parsed."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"Cannot read task data from {self.path}: {reason}. "
            "The file was left untouched; fix or move it and re-run."
        )


class NotificationError(Exception):
    """Raised by notifiers when a notification could not be delivered."""
