# tests/test_connectors.py

from __future__ import annotations

import io
import subprocess
from types import SimpleNamespace

import pytest
from rich.console import Console

from vibe_tasks.cli.bootstrap import create_notifier
from vibe_tasks.connectors import console_connector, desktop_notifier
from vibe_tasks.connectors.console_connector import ConsoleNotifier, RichPrompter
from vibe_tasks.connectors.desktop_notifier import DesktopNotifier
from vibe_tasks.tasks.errors import NotificationError


def test_desktop_notifier_runs_command(monkeypatch) -> None:
    calls: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(desktop_notifier.subprocess, "run", fake_run)
    DesktopNotifier("notify-send").notify(summary="Task Due Soon!", body="Task 'x' is due now!")
    assert calls == [["notify-send", "--icon=calendar", "Task Due Soon!", "Task 'x' is due now!"]]


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError("notify-send"),
        subprocess.CalledProcessError(1, ["notify-send"], stderr=b"no dbus"),
        subprocess.TimeoutExpired(["notify-send"], 10),
        PermissionError(13, "Permission denied"),
        OSError(8, "Exec format error"),
    ],
)
def test_desktop_notifier_wraps_failures(monkeypatch, exc) -> None:
    def fake_run(cmd, **kwargs):
        raise exc

    monkeypatch.setattr(desktop_notifier.subprocess, "run", fake_run)
    with pytest.raises(NotificationError):
        DesktopNotifier().notify(summary="s", body="b")


def test_console_notifier_prints() -> None:
    console = Console(file=io.StringIO(), width=120)
    ConsoleNotifier(console).notify(summary="Task Due Soon!", body="Task '[draft]' is due now!")
    assert "Task Due Soon! Task '[draft]' is due now!" in console.file.getvalue()


def test_create_notifier_falls_back_to_console(monkeypatch) -> None:
    console = Console(file=io.StringIO())
    off = SimpleNamespace(notifications_enabled=False, notify_command="notify-send")
    assert isinstance(create_notifier(off, console), ConsoleNotifier)

    monkeypatch.setattr(desktop_notifier.shutil, "which", lambda _: None)
    on = SimpleNamespace(notifications_enabled=True, notify_command="notify-send")
    assert isinstance(create_notifier(on, console), ConsoleNotifier)

    monkeypatch.setattr(desktop_notifier.shutil, "which", lambda _: "/usr/bin/notify-send")
    assert isinstance(create_notifier(on, console), DesktopNotifier)


def test_prompter_choose_many_accepts_numbers_and_names(monkeypatch) -> None:
    answers = iter(["1, bogus", "1 health"])
    monkeypatch.setattr(console_connector.Prompt, "ask", lambda *a, **kw: next(answers))

    console = Console(file=io.StringIO(), width=120)
    picked = RichPrompter(console).choose_many("Pick", ["Work", "Personal", "Health"])

    assert picked == ["Work", "health"]
    assert "Unknown choice: bogus" in console.file.getvalue()


def test_prompter_choose_retries_until_valid(monkeypatch) -> None:
    answers = iter(["maybe", "in progress"])
    monkeypatch.setattr(console_connector.Prompt, "ask", lambda *a, **kw: next(answers))

    console = Console(file=io.StringIO(), width=120)
    picked = RichPrompter(console).choose("Status", ["Todo", "In Progress", "Done"])
    assert picked == "In Progress"
