# tests/test_time_tracker.py

from __future__ import annotations

import io

import pytest
from rich.console import Console

from vibe_tasks.cli.render import render_time_report
from vibe_tasks.tasks import time_tracker
from vibe_tasks.tasks.errors import AlreadyTracking, NotTracking
from vibe_tasks.tasks.task_models import Task

from .conftest import ts


def _task() -> Task:
    return Task(id=1, title="Deep work", created_at=ts(2026, 1, 5, 9, 0))


def test_start_twice_fails() -> None:
    task = _task()
    time_tracker.start(task, now_ts=ts(2026, 1, 5, 10, 0))
    with pytest.raises(AlreadyTracking):
        time_tracker.start(task, now_ts=ts(2026, 1, 5, 10, 5))
    assert task.active_session_start == ts(2026, 1, 5, 10, 0)


def test_stop_without_start_fails() -> None:
    task = _task()
    with pytest.raises(NotTracking):
        time_tracker.stop(task)
    assert task.time_sessions == []


def test_stop_closes_session() -> None:
    task = _task()
    time_tracker.start(task, now_ts=ts(2026, 1, 5, 10, 0))
    session = time_tracker.stop(task, now_ts=ts(2026, 1, 5, 10, 30))

    assert session.duration == 30 * 60
    assert task.time_sessions == [session]
    assert task.active_session_start is None
    with pytest.raises(NotTracking):
        time_tracker.stop(task)


def test_report_keeps_open_session_separate() -> None:
    task = _task()
    time_tracker.start(task, now_ts=ts(2026, 1, 5, 10, 0))
    time_tracker.stop(task, now_ts=ts(2026, 1, 5, 10, 30))
    time_tracker.start(task, now_ts=ts(2026, 1, 5, 11, 0))
    time_tracker.stop(task, now_ts=ts(2026, 1, 5, 11, 15))
    time_tracker.start(task, now_ts=ts(2026, 1, 5, 12, 0))

    rep = time_tracker.report(task, now_ts=ts(2026, 1, 5, 12, 10))

    assert [line.duration for line in rep.sessions] == [30 * 60, 15 * 60]
    assert rep.closed_total == 45 * 60
    assert rep.is_tracking
    assert rep.open_elapsed == 10 * 60

    console = Console(file=io.StringIO(), width=120)
    console.print(render_time_report(rep))
    out = console.file.getvalue()
    assert "Session 2:" in out
    assert "Running for: 0.17 hours" in out
    assert "Total time spent: 0.75 hours" in out


def test_report_without_sessions() -> None:
    rep = time_tracker.report(_task(), now_ts=ts(2026, 1, 5, 12, 0))
    assert rep.sessions == ()
    assert rep.closed_total == 0
    assert rep.open_elapsed is None


def test_backwards_clock_clamps_to_zero() -> None:
    task = _task()
    time_tracker.start(task, now_ts=ts(2026, 1, 5, 10, 0))

    rep = time_tracker.report(task, now_ts=ts(2026, 1, 5, 9, 0))
    assert rep.open_elapsed == 0

    session = time_tracker.stop(task, now_ts=ts(2026, 1, 5, 9, 50))
    assert session.end >= session.start
    assert session.duration == 0
