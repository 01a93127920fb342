# src/vibe_tasks/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime

from .errors import ValidationError
from .task_models import Priority, TaskStatus

logger = logging.getLogger(__name__)

DUE_DATE_FORMAT = "%Y-%m-%d %H:%M"


def parse_due_date(raw: str | None) -> float | None:
    """
    Parse "YYYY-MM-DD HH:MM" (local time) into epoch seconds.

    Empty input means "no due date".
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        dt = datetime.strptime(text, DUE_DATE_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid due date '{text}': expected YYYY-MM-DD HH:MM.") from None
    return dt.timestamp()


def parse_priority(raw: str | None) -> Priority:
    if raw is None or not raw.strip():
        return Priority.LOW
    p = Priority.parse(raw)
    if p is None:
        choices = ", ".join(x.label for x in Priority)
        raise ValidationError(f"Unknown priority '{raw}' (choose from: {choices}).")
    return p


def parse_status(raw: str) -> TaskStatus:
    s = TaskStatus.parse(raw)
    if s is None:
        choices = ", ".join(x.label for x in TaskStatus)
        raise ValidationError(f"Unknown status '{raw}' (choose from: {choices}).")
    return s


def format_ts(ts: float, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    return datetime.fromtimestamp(ts).strftime(fmt)


def format_hours(seconds: float) -> str:
    return f"{seconds / 3600.0:.2f} hours"
