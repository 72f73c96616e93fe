"""Snooze command - Hide a task for a while."""

import typer

from sift.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .session import resolve_id, task_session

app = typer.Typer(help="Snooze or wake a task")


@app.command("snooze")
@command_wrapper
def toggle_snooze(
    task_id: str = typer.Argument(..., help="Task ID, prefix or suffix"),
) -> None:
    """Snooze a task for the configured number of days, or wake a snoozed one."""
    with task_session() as task_service:
        task = task_service.toggle_snoozed(resolve_id(task_service, task_id))

    if task.snoozed is not None:
        format_success(f"Snoozed until {task.snoozed.isoformat()}: {task.title}")
    else:
        format_success(f"Woke up: {task.title}")
