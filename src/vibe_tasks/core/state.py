# src/vibe_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from ..tasks.task_store import TaskStore
from .ports import Notifier, Prompter


@dataclass
class AppState:
    """Everything a command handler needs for one invocation."""

    # Store Settings on the state for easy access in handlers.
    settings: object

    task_store: TaskStore
    notifier: Notifier
    prompter: Prompter
    console: Console
