# src/vibe_tasks/cli/commands.py

"""
Typer app: one subcommand per task operation.

Every command gets the AppState from the click context (built once per
invocation by the bootstrap). Mutating commands run inside
`TaskStore.session()`, so the data file is written only when the command body
finishes without raising.

Exit codes: 0 success, 1 task error / aborted prompt (nothing written),
2 usage error (handled by typer/click).
"""

import contextlib
import logging
from collections.abc import Iterator
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..core.state import AppState
from ..tasks import categories, time_tracker
from ..tasks.categories import CATEGORY_STYLES
from ..tasks.errors import TaskError
from ..tasks.notification_gate import NotificationPolicy, check_notifications
from ..tasks.task_api import parse_due_date, parse_priority, parse_status
from ..tasks.task_models import Category, Priority, TaskStatus
from .bootstrap import create_initial_state
from .render import render_task_list, render_time_report

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)

app = typer.Typer(
    name="vibe-tasks",
    help="A vibey task manager for good vibes only ✨",
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)

TaskId = typer.Argument(..., min=1, help="Task id (see 'list').")


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/] {escape(message)}", highlight=False)
    return typer.Exit(1)


@contextlib.contextmanager
def _command(ctx: typer.Context, *, mutates: bool) -> Iterator[AppState]:
    """
    Resolve the AppState and map task errors to exit code 1.

    Tests inject a ready AppState through `ctx.obj`.
    """
    try:
        if ctx.obj is None:
            ctx.obj = create_initial_state()
        state: AppState = ctx.obj

        if mutates:
            with state.task_store.session():
                yield state
        else:
            yield state
    except TaskError as e:
        logger.info("Command %s failed: %s", ctx.info_name, e.message)
        raise _fail(e.message) from None
    except OSError as e:
        logger.exception("Saving task data failed")
        raise _fail(f"could not write task data: {e}") from None
    except (EOFError, KeyboardInterrupt):
        err_console.print("\nAborted. Nothing was saved.", highlight=False)
        raise typer.Exit(1) from None


def _say(state: AppState, text: str) -> None:
    state.console.print(text, markup=False, highlight=False)


def _category_choices() -> list[str]:
    return [c.label for c in Category]


@app.command()
def add(
    ctx: typer.Context,
    title: Optional[List[str]] = typer.Argument(None, help="Quick add with defaults; omit to be prompted."),
) -> None:
    """Add a new task."""
    with _command(ctx, mutates=True) as state:
        store = state.task_store

        if title:
            task_id = store.add(" ".join(title))
            _say(state, f"✅ Task #{task_id} added successfully!")
            return

        ask = state.prompter
        raw_title = ask.ask("✨ Task title")
        description = ask.ask("🚀 Description (optional)", default="")
        priority = parse_priority(
            ask.choose("🔥 Select priority", [p.label for p in Priority], default=Priority.LOW.label)
        )
        due_at = parse_due_date(ask.ask("📅 Due date (YYYY-MM-DD HH:MM, optional)", default=""))

        task_id = store.add(raw_title, description, priority, due_at)

        labels = ask.choose_many("🏷️ Select categories", _category_choices())
        categories.assign(store.get(task_id), labels)
        _say(state, f"✅ Task #{task_id} added successfully!")


@app.command("list")
def list_tasks(ctx: typer.Context) -> None:
    """List all tasks."""
    with _command(ctx, mutates=False) as state:
        state.console.print(render_task_list(state.task_store.list_tasks()))


@app.command()
def complete(ctx: typer.Context, task_id: int = TaskId) -> None:
    """Mark a task as complete."""
    with _command(ctx, mutates=True) as state:
        state.task_store.set_status(task_id, TaskStatus.DONE)
        _say(state, f"✅ Task {task_id} marked as complete!")


@app.command()
def status(
    ctx: typer.Context,
    task_id: int = TaskId,
    new_status: Optional[str] = typer.Argument(None, help="todo | in-progress | done; omit to be prompted."),
) -> None:
    """Update task status."""
    with _command(ctx, mutates=True) as state:
        task = state.task_store.get(task_id)
        if new_status is None:
            new_status = state.prompter.choose(
                "🚀 Select new status", [s.label for s in TaskStatus], default=task.status.label
            )
        state.task_store.set_status(task_id, parse_status(new_status))
        _say(state, "✅ Task status updated!")


@app.command()
def delete(ctx: typer.Context, task_id: int = TaskId) -> None:
    """Delete a task."""
    with _command(ctx, mutates=True) as state:
        state.task_store.delete(task_id)
        _say(state, f"✅ Task {task_id} deleted!")


@app.command("add-categories")
def add_categories(
    ctx: typer.Context,
    task_id: int = TaskId,
    labels: Optional[List[str]] = typer.Argument(None, help="Replaces the current set; omit to be prompted."),
) -> None:
    """Set the categories of a task."""
    with _command(ctx, mutates=True) as state:
        task = state.task_store.get(task_id)

        if labels:
            picked = [p for a in labels for p in a.replace(",", " ").split()]
        else:
            picked = state.prompter.choose_many("🏷️ Select categories", _category_choices())

        chosen = categories.assign(task, picked)
        shown = ", ".join(f"{CATEGORY_STYLES[c].emoji} {c.label}" for c in chosen) or "none"
        _say(state, f"✅ Categories updated! ({shown})")


@app.command("start-time")
def start_time(ctx: typer.Context, task_id: int = TaskId) -> None:
    """Start time tracking for a task."""
    with _command(ctx, mutates=True) as state:
        time_tracker.start(state.task_store.get(task_id))
        _say(state, "⏰ Time tracking started!")


@app.command("stop-time")
def stop_time(ctx: typer.Context, task_id: int = TaskId) -> None:
    """Stop time tracking for a task."""
    with _command(ctx, mutates=True) as state:
        session = time_tracker.stop(state.task_store.get(task_id))
        _say(state, f"⏰ Time tracking stopped! ({session.duration / 3600.0:.2f} hours)")


@app.command("time-report")
def time_report(ctx: typer.Context, task_id: int = TaskId) -> None:
    """Show time tracking summary for a task."""
    with _command(ctx, mutates=False) as state:
        state.console.print(render_time_report(time_tracker.report(state.task_store.get(task_id))))


@app.command("check-notifications")
def check_notifications_cmd(ctx: typer.Context) -> None:
    """Check for due tasks and send notifications."""
    with _command(ctx, mutates=True) as state:
        policy = NotificationPolicy.from_settings(state.settings)
        sent = check_notifications(state.task_store, state.notifier, policy=policy)
        if not sent:
            _say(state, "No tasks due soon.")
        else:
            _say(state, f"🔔 Sent {len(sent)} notification(s).")


# Short aliases
app.command("ls", hidden=True)(list_tasks)
app.command("done", hidden=True)(complete)
app.command("rm", hidden=True)(delete)
