# src/vibe_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the notification backend and the prompt source swappable and makes
testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import Task


class Notifier(Protocol):
    """
    Delivers one due-soon alert outward (desktop popup, console line, ...).

    Implementations raise NotificationError when delivery failed so the task
    stays eligible for the next check.
    """

    def notify(self, *, summary: str, body: str) -> None: ...


class Prompter(Protocol):
    """Interactive input source used by the command layer."""

    def ask(self, prompt: str, *, default: str | None = None) -> str: ...

    def choose(self, prompt: str, choices: Sequence[str], *, default: str | None = None) -> str: ...

    def choose_many(self, prompt: str, choices: Sequence[str]) -> list[str]: ...


class TaskRepo(Protocol):
    # Notification scan API
    def list_tasks(self) -> list[Task]: ...
