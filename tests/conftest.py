# tests/conftest.py

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

from vibe_tasks.core.state import AppState
from vibe_tasks.tasks.task_store import TaskStore

from .fakes import FakeNotifier, FakePrompter


def ts(*args: int) -> float:
    """Local wall-clock timestamp, e.g. ts(2026, 1, 5, 10, 30)."""
    return datetime(*args).timestamp()


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        log_level="WARNING",
        log_dir=None,
        data_file=tmp_path / "tasks.json",
        notifications_enabled=False,
        notify_command="notify-send",
        notify_window_hours=24.0,
        notify_cooldown_hours=6.0,
        notify_overdue_grace_minutes=0.0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore.load(settings.data_file)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, notifier: FakeNotifier, prompter: FakePrompter) -> AppState:
    """
    AppState wired with deterministic fakes.

    NOTE: We keep the real JSON TaskStore here because its persistence is part
    of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=store,
        notifier=notifier,
        prompter=prompter,
        console=Console(file=io.StringIO(), width=120),
    )
