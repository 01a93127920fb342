# src/vibe_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- loads the task store from the data file,
- picks the notifier (desktop popup or console fallback),
- wires everything into AppState.
"""

from __future__ import annotations

import logging

from rich.console import Console

from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, RichPrompter
from ..connectors.desktop_notifier import DesktopNotifier
from ..core.ports import Notifier
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_notifier(settings, console: Console) -> Notifier:
    if getattr(settings, "notifications_enabled", True):
        desktop = DesktopNotifier(command=getattr(settings, "notify_command", "notify-send"))
        if desktop.is_available():
            return desktop
        logger.info("%s not found; printing notifications to the console", desktop.command)
    return ConsoleNotifier(console)


def create_initial_state(*, settings=None, console: Console | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises CorruptData when the data file exists but cannot be read.
    """
    if settings is None:
        settings = get_settings()
    if console is None:
        console = Console()

    store = TaskStore.load(settings.data_file)

    return AppState(
        settings=settings,
        task_store=store,
        notifier=create_notifier(settings, console),
        prompter=RichPrompter(console),
        console=console,
    )
