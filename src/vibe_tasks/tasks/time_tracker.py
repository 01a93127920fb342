# src/vibe_tasks/tasks/time_tracker.py

from __future__ import annotations

"""
Time tracking on a single task.

At most one session is open per task (`active_session_start`). Stopping it
closes a TimeSession and appends it to `time_sessions`.

Durations use wall-clock seconds. If the clock went backwards while a session
was open, the duration is clamped to zero.
"""

import logging
import time
from dataclasses import dataclass

from .errors import AlreadyTracking, NotTracking
from .task_models import Task, TimeSession

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SessionLine:
    index: int
    start: float
    end: float
    duration: float


@dataclass(slots=True, frozen=True)
class TimeReport:
    """
    Time summary for one task.

    `closed_total` covers closed sessions only. A running session is reported
    through `open_start`/`open_elapsed` and is never added to the total.
    """

    task_id: int
    title: str
    sessions: tuple[SessionLine, ...]
    closed_total: float
    open_start: float | None
    open_elapsed: float | None

    @property
    def is_tracking(self) -> bool:
        return self.open_start is not None


def start(task: Task, *, now_ts: float | None = None) -> float:
    if task.active_session_start is not None:
        raise AlreadyTracking(task.id)
    if now_ts is None:
        now_ts = time.time()
    task.active_session_start = float(now_ts)
    logger.info("Time tracking started task_id=%s", task.id)
    return task.active_session_start


def stop(task: Task, *, now_ts: float | None = None) -> TimeSession:
    started = task.active_session_start
    if started is None:
        raise NotTracking(task.id)
    if now_ts is None:
        now_ts = time.time()

    end = float(now_ts)
    if end < started:
        logger.warning(
            "Clock moved backwards during session task_id=%s (start=%s end=%s); clamping to 0",
            task.id,
            started,
            end,
        )
        end = started

    session = TimeSession(start=started, end=end)
    task.time_sessions.append(session)
    task.active_session_start = None
    logger.info("Time tracking stopped task_id=%s duration=%.0fs", task.id, session.duration)
    return session


def report(task: Task, *, now_ts: float | None = None) -> TimeReport:
    if now_ts is None:
        now_ts = time.time()

    lines = tuple(
        SessionLine(index=i, start=s.start, end=s.end, duration=s.duration)
        for i, s in enumerate(task.time_sessions, start=1)
    )

    open_start = task.active_session_start
    open_elapsed = None if open_start is None else max(0.0, float(now_ts) - open_start)

    return TimeReport(
        task_id=task.id,
        title=task.title,
        sessions=lines,
        closed_total=sum(line.duration for line in lines),
        open_start=open_start,
        open_elapsed=open_elapsed,
    )
