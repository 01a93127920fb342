# src/vibe_tasks/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
import time
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

from .errors import CorruptData, NotFound, ValidationError
from .task_models import Category, Priority, Task, TaskStatus, TimeSession

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class TaskStore:
    """
    JSON-file task store.

    The whole collection lives in memory; `save()` rewrites the file.

    File layout:
      {"version": 1, "next_id": N, "tasks": [ {...}, ... ]}

    Loading is tolerant:
    - a missing file is an empty store
    - missing optional fields get their defaults
    - unknown enum values fall back to defaults
    - a bare top-level list of tasks (older layout) is accepted, including
      records with RFC 3339 timestamps, {"name": ...} categories, `due_date`,
      `time_entries`, `current_time_entry` and `last_notification`

    Anything that cannot be read at all raises CorruptData and the file is
    not touched.

    Ids come from a high-water mark (`next_id`) that is persisted, so ids of
    deleted tasks are never handed out again.
    """

    def __init__(self, path: str | Path, tasks: list[Task] | None = None, next_id: int = 1) -> None:
        self._path = Path(path)
        self._tasks: dict[int, Task] = {}
        for t in tasks or []:
            self._tasks[t.id] = t
        highest = max(self._tasks, default=0)
        self._next_id = max(int(next_id), highest + 1, 1)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---- lifecycle ----

    @classmethod
    def load(cls, path: str | Path) -> TaskStore:
        path = Path(path)
        if not path.exists():
            logger.info("No task file at %s; starting empty", path)
            return cls(path)

        try:
            raw = path.read_text("utf-8")
        except OSError as e:
            raise CorruptData(path, f"read failed ({e})") from e

        if not raw.strip():
            return cls(path)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptData(path, f"invalid JSON at line {e.lineno} column {e.colno}") from e

        if isinstance(data, list):
            records, next_id = data, 1
        elif isinstance(data, dict):
            records = data.get("tasks", [])
            next_id = data.get("next_id", 1)
            if not isinstance(records, list):
                raise CorruptData(path, "'tasks' is not a list")
            if not isinstance(next_id, int) or isinstance(next_id, bool):
                next_id = 1
        else:
            raise CorruptData(path, "top-level value is not an object")

        tasks: list[Task] = []
        seen: set[int] = set()
        for i, rec in enumerate(records):
            try:
                task = _dict_to_task(rec)
            except (KeyError, TypeError, ValueError) as e:
                raise CorruptData(path, f"task record #{i + 1}: {e}") from e
            if task.id in seen:
                raise CorruptData(path, f"duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)

        store = cls(path, tasks, next_id)
        logger.info("TaskStore loaded path=%s total=%s next_id=%s", path, len(tasks), store.next_id)
        return store

    def to_document(self) -> dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "next_id": self._next_id,
            "tasks": [_task_to_dict(t) for t in self._tasks.values()],
        }

    def dumps(self) -> str:
        return json.dumps(self.to_document(), ensure_ascii=False, indent=2) + "\n"

    def save(self) -> None:
        """Write the whole collection via a temp file + os.replace."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(self.dumps(), "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        with contextlib.suppress(OSError):
            # Best-effort: keep the file private on disk.
            os.chmod(self._path, 0o600)
        logger.debug("TaskStore saved path=%s total=%s", self._path, len(self._tasks))

    @contextlib.contextmanager
    def session(self) -> Iterator[TaskStore]:
        """
        Save when the block finishes normally.

        If the block raises, nothing is written: the previous file content
        stays as it was and the exception propagates.
        """
        yield self
        self.save()

    # ---- public API ----

    def add(
        self,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.LOW,
        due_at: float | None = None,
        *,
        now_ts: float | None = None,
    ) -> int:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Task title must not be empty.")
        description = (description or "").strip() or None

        if now_ts is None:
            now_ts = time.time()

        task_id = self._next_id
        self._next_id += 1
        self._tasks[task_id] = Task(
            id=task_id,
            title=title,
            description=description,
            priority=priority,
            status=TaskStatus.TODO,
            due_at=due_at,
            created_at=float(now_ts),
        )
        logger.debug("Task added id=%s priority=%s due_at=%s", task_id, priority.value, due_at)
        return task_id

    def get(self, task_id: int) -> Task:
        """Return the live record; changes to it are saved with the store."""
        task = self._tasks.get(int(task_id))
        if task is None:
            raise NotFound(task_id)
        return task

    def delete(self, task_id: int) -> Task:
        task = self._tasks.pop(int(task_id), None)
        if task is None:
            raise NotFound(task_id)
        logger.debug("Task deleted id=%s sessions=%s", task_id, len(task.time_sessions))
        return task

    def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def set_status(self, task_id: int, new_status: TaskStatus) -> Task:
        task = self.get(task_id)
        task.status = new_status
        logger.debug("Task status id=%s -> %s", task_id, new_status.value)
        return task


# ---- (de)serialization ----


def _task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "priority": task.priority.value,
        "status": task.status.value,
        "due_at": task.due_at,
        "created_at": task.created_at,
        "categories": [c.value for c in task.categories],
        "time_sessions": [{"start": s.start, "end": s.end} for s in task.time_sessions],
        "active_session_start": task.active_session_start,
        "last_notified_at": task.last_notified_at,
    }


def _opt_float(v: Any) -> float | None:
    if v is None or isinstance(v, bool):
        return None
    return float(v)


_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def _opt_ts(v: Any) -> float | None:
    """
    Epoch seconds, or an RFC 3339 string as written by the earlier tool.

    Fractions longer than microseconds are truncated before parsing.
    """
    if isinstance(v, str):
        text = _EXTRA_FRACTION.sub(r"\1", v.strip())
        return datetime.fromisoformat(text).timestamp()
    return _opt_float(v)


def _first(rec: dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if rec.get(k) is not None:
            return rec[k]
    return None


def _decode_sessions(rec: dict[str, Any]) -> list[TimeSession]:
    sessions: list[TimeSession] = []
    for s in rec.get("time_sessions") or []:
        if not isinstance(s, dict):
            raise TypeError("time session is not an object")
        start = float(s["start"])
        end = max(start, float(s["end"]))
        sessions.append(TimeSession(start=start, end=end))

    # Earlier layout: {"start_time": ..., "end_time": ..., "duration": ...}
    for s in rec.get("time_entries") or []:
        if not isinstance(s, dict):
            raise TypeError("time entry is not an object")
        start, end = _opt_ts(s["start_time"]), _opt_ts(s.get("end_time"))
        if start is None or end is None:
            continue
        sessions.append(TimeSession(start=start, end=max(start, end)))
    return sessions


def _active_start(rec: dict[str, Any]) -> float | None:
    if rec.get("active_session_start") is not None:
        return _opt_ts(rec["active_session_start"])
    current = rec.get("current_time_entry")
    if isinstance(current, dict):
        return _opt_ts(current.get("start_time"))
    return None


def _dict_to_task(rec: Any) -> Task:
    if not isinstance(rec, dict):
        raise TypeError("record is not an object")

    raw_id = rec.get("id")
    if not isinstance(raw_id, int) or isinstance(raw_id, bool) or raw_id < 1:
        raise ValueError(f"invalid id {raw_id!r}")

    title = rec.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"task {raw_id} has no title")

    categories: list[Category] = []
    for item in rec.get("categories") or []:
        # plain label, or {"name": ..., "color": ..., "emoji": ...}
        label = item.get("name") if isinstance(item, dict) else item
        c = Category.parse(str(label or ""))
        if c is not None and c not in categories:
            categories.append(c)
    categories.sort(key=list(Category).index)

    description = rec.get("description")
    return Task(
        id=raw_id,
        title=title,
        description=str(description) if description else None,
        priority=Priority.from_db(rec.get("priority")),
        status=TaskStatus.from_db(rec.get("status")),
        due_at=_opt_ts(_first(rec, "due_at", "due_date")),
        created_at=_opt_ts(rec.get("created_at")) or 0.0,
        categories=categories,
        time_sessions=_decode_sessions(rec),
        active_session_start=_active_start(rec),
        last_notified_at=_opt_ts(_first(rec, "last_notified_at", "last_notification")),
    )
