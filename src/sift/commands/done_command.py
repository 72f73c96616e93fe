"""Done command - Toggle task completion."""

import typer

from sift.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .session import resolve_id, task_session

app = typer.Typer(help="Complete or reopen a task")


@app.command("done")
@command_wrapper
def toggle_done(
    task_id: str = typer.Argument(..., help="Task ID, prefix or suffix"),
) -> None:
    """Mark a task completed, or reopen it if it already is."""
    with task_session() as task_service:
        task = task_service.toggle_completed(resolve_id(task_service, task_id))

    if task.is_completed:
        format_success(f"Completed: {task.title}")
    else:
        format_success(f"Reopened: {task.title}")
