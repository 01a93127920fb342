# src/vibe_tasks/tasks/notification_gate.py

from __future__ import annotations

"""
Due-soon notification gate.

For every task on each check:
- skip tasks without a due date and tasks that are done,
- skip tasks due further ahead than the window,
- skip tasks overdue by more than the grace period,
- otherwise fire if the task was never notified or the cooldown has elapsed.

`decide()` is pure. `check_notifications()` runs it over a repo, hands each
event to a Notifier and stamps `last_notified_at` once delivery succeeded.
"""

import logging
import time
from dataclasses import dataclass

from ..core.ports import Notifier, TaskRepo
from .errors import NotificationError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

HOUR = 3600.0

NOTIFICATION_SUMMARY = "Task Due Soon!"


@dataclass(slots=True, frozen=True)
class NotificationPolicy:
    window_seconds: float = 24 * HOUR
    cooldown_seconds: float = 6 * HOUR
    overdue_grace_seconds: float = 0.0

    @classmethod
    def from_settings(cls, settings) -> NotificationPolicy:
        return cls(
            window_seconds=float(getattr(settings, "notify_window_hours", 24)) * HOUR,
            cooldown_seconds=float(getattr(settings, "notify_cooldown_hours", 6)) * HOUR,
            overdue_grace_seconds=float(getattr(settings, "notify_overdue_grace_minutes", 0)) * 60.0,
        )


@dataclass(slots=True, frozen=True)
class NotificationEvent:
    task_id: int
    title: str
    due_at: float
    remaining_seconds: float

    @property
    def summary(self) -> str:
        return NOTIFICATION_SUMMARY

    @property
    def body(self) -> str:
        hours = int(self.remaining_seconds // HOUR)
        if hours <= 0:
            return f"Task '{self.title}' is due now!"
        unit = "hour" if hours == 1 else "hours"
        return f"Task '{self.title}' is due in {hours} {unit}!"


def decide(task: Task, now_ts: float, policy: NotificationPolicy) -> NotificationEvent | None:
    if task.due_at is None or task.status == TaskStatus.DONE:
        return None

    remaining = task.due_at - now_ts
    if remaining > policy.window_seconds:
        return None
    if remaining < -policy.overdue_grace_seconds:
        return None

    last = task.last_notified_at
    if last is not None and now_ts - last < policy.cooldown_seconds:
        return None

    return NotificationEvent(
        task_id=task.id,
        title=task.title,
        due_at=task.due_at,
        remaining_seconds=remaining,
    )


def check_notifications(
    repo: TaskRepo,
    notifier: Notifier,
    *,
    now_ts: float | None = None,
    policy: NotificationPolicy | None = None,
) -> list[NotificationEvent]:
    """
    Scan all tasks and deliver due-soon alerts.

    Returns the events that were delivered. A failed delivery is logged and
    leaves `last_notified_at` unchanged, so the next check tries again.
    """
    if now_ts is None:
        now_ts = time.time()
    if policy is None:
        policy = NotificationPolicy()

    delivered: list[NotificationEvent] = []
    for task in repo.list_tasks():
        event = decide(task, now_ts, policy)
        if event is None:
            continue

        try:
            notifier.notify(summary=event.summary, body=event.body)
        except NotificationError:
            logger.exception("Notification dispatch failed task_id=%s", task.id)
            continue

        task.last_notified_at = float(now_ts)
        delivered.append(event)
        logger.info("Notified task_id=%s remaining=%.0fs", task.id, event.remaining_seconds)

    logger.debug("Notification check done: %d delivered", len(delivered))
    return delivered
