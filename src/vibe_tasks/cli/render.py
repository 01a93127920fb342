# src/vibe_tasks/cli/render.py

"""Rich renderables for command output. Pure presentation over the task model."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Group, RenderableType
from rich.rule import Rule
from rich.text import Text

from ..tasks.categories import CATEGORY_STYLES
from ..tasks.task_api import format_hours, format_ts
from ..tasks.task_models import Priority, Task, TaskStatus
from ..tasks.time_tracker import TimeReport

STATUS_STYLES: dict[TaskStatus, tuple[str, str]] = {
    TaskStatus.TODO: ("TODO", "red"),
    TaskStatus.IN_PROGRESS: ("IN PROGRESS", "yellow"),
    TaskStatus.DONE: ("DONE", "green"),
}

PRIORITY_STYLES: dict[Priority, tuple[str, str]] = {
    Priority.LOW: ("LOW", "blue"),
    Priority.MEDIUM: ("MEDIUM", "yellow"),
    Priority.HIGH: ("HIGH", "red"),
    Priority.URGENT: ("URGENT", "bold red"),
}

SEPARATOR = Rule(style="cyan")


def _field(label: str, value: str | Text) -> Text:
    line = Text(f"{label}: ")
    line.append(value if isinstance(value, Text) else Text(value))
    return line


def render_task(task: Task) -> RenderableType:
    lines: list[RenderableType] = []

    head = Text(f"Task #{task.id}: ")
    head.append(task.title, style="bold")
    lines.append(head)

    if task.description:
        lines.append(_field("Description", task.description))

    p_text, p_style = PRIORITY_STYLES[task.priority]
    lines.append(_field("Priority", Text(p_text, style=p_style)))
    s_text, s_style = STATUS_STYLES[task.status]
    lines.append(_field("Status", Text(s_text, style=s_style)))

    if task.categories:
        cats = Text()
        for i, c in enumerate(task.categories):
            if i:
                cats.append(", ")
            style = CATEGORY_STYLES[c]
            cats.append(f"{style.emoji} {c.label}", style=style.color)
        lines.append(_field("Categories", cats))

    if task.active_session_start is not None:
        lines.append(Text(f"🔄 Currently tracking time (started: {format_ts(task.active_session_start, '%H:%M:%S')})"))
    if task.time_sessions:
        lines.append(Text(f"⏱️ Total time: {format_hours(task.tracked_seconds)}"))

    if task.due_at is not None:
        lines.append(_field("Due", Text(format_ts(task.due_at, "%Y-%m-%d %H:%M"), style="magenta")))
    lines.append(_field("Created", format_ts(task.created_at, "%Y-%m-%d %H:%M")))
    return Group(*lines)


def render_task_list(tasks: Iterable[Task]) -> RenderableType:
    tasks = list(tasks)
    if not tasks:
        return Text("No tasks found. Add some tasks to get started! ✨")

    parts: list[RenderableType] = []
    for task in tasks:
        parts.append(SEPARATOR)
        parts.append(render_task(task))
    parts.append(SEPARATOR)
    return Group(*parts)


def render_time_report(rep: TimeReport) -> RenderableType:
    parts: list[RenderableType] = [SEPARATOR]
    head = Text(f"Time Report for Task #{rep.task_id}: ")
    head.append(rep.title, style="bold")
    parts.append(head)

    if not rep.sessions and not rep.is_tracking:
        parts.append(Text("No time entries recorded for this task."))
        parts.append(SEPARATOR)
        return Group(*parts)

    for line in rep.sessions:
        parts.append(Text(""))
        parts.append(Text(f"Session {line.index}:"))
        parts.append(Text(f"Start: {format_ts(line.start)}"))
        parts.append(Text(f"End: {format_ts(line.end)}"))
        parts.append(Text(f"Duration: {format_hours(line.duration)}"))

    if rep.open_start is not None and rep.open_elapsed is not None:
        parts.append(Text(""))
        parts.append(Text("Current session:"))
        parts.append(Text(f"Started: {format_ts(rep.open_start)}"))
        parts.append(Text(f"Running for: {format_hours(rep.open_elapsed)}"))

    parts.append(Text(""))
    parts.append(Text(f"Total time spent: {format_hours(rep.closed_total)}"))
    parts.append(SEPARATOR)
    return Group(*parts)
