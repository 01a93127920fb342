# src/vibe_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


def _lookup_key(raw: str) -> str:
    return raw.strip().lower().replace("-", "_").replace(" ", "_")


class Priority(StrEnum):
    """Task priority. Ordered Low < Medium < High < Urgent for display and sorting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, raw: str) -> Priority | None:
        key = _lookup_key(raw)
        for p in cls:
            if p.value == key:
                return p
        return None

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.LOW
        return cls.parse(str(raw)) or cls.LOW


_PRIORITY_ORDER: tuple[Priority, ...] = (
    Priority.LOW,
    Priority.MEDIUM,
    Priority.HIGH,
    Priority.URGENT,
)


class TaskStatus(StrEnum):
    """
    Task status.

    A flat set of values: any status may be assigned from any other, there are
    no transition rules.
    """

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return {"todo": "Todo", "in_progress": "In Progress", "done": "Done"}[self.value]

    @classmethod
    def parse(cls, raw: str) -> TaskStatus | None:
        key = _lookup_key(raw)
        if key == "inprogress":
            key = "in_progress"
        for s in cls:
            if s.value == key:
                return s
        return None

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.TODO
        return cls.parse(str(raw)) or cls.TODO


class Category(StrEnum):
    """Closed category palette."""

    WORK = "work"
    PERSONAL = "personal"
    STUDY = "study"
    HEALTH = "health"
    SHOPPING = "shopping"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw: str) -> Category | None:
        key = _lookup_key(raw)
        for c in cls:
            if c.value == key:
                return c
        return None


@dataclass(slots=True, frozen=True)
class TimeSession:
    """One closed tracking interval. `end` is never before `start`."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return max(0.0, self.end - self.start)


@dataclass(slots=True)
class Task:
    id: int
    title: str
    created_at: float

    description: str | None = None
    priority: Priority = Priority.LOW
    status: TaskStatus = TaskStatus.TODO
    due_at: float | None = None

    categories: list[Category] = field(default_factory=list)
    time_sessions: list[TimeSession] = field(default_factory=list)
    active_session_start: float | None = None
    last_notified_at: float | None = None

    @property
    def is_tracking(self) -> bool:
        return self.active_session_start is not None

    @property
    def tracked_seconds(self) -> float:
        """Total of closed sessions only."""
        return sum(s.duration for s in self.time_sessions)
