"""Due command - Set or clear a due date."""

import typer

from sift.utils.ui.formatters import format_success

from .decorators import command_wrapper
from .session import parse_due, resolve_id, task_session

app = typer.Typer(help="Set a task's due date")


@app.command("due")
@command_wrapper
def set_due(
    task_id: str = typer.Argument(..., help="Task ID, prefix or suffix"),
    due: str | None = typer.Argument(None, help="Due date (YYYY-MM-DD); omit to clear"),
) -> None:
    """Set a task's due date, or clear it."""
    due_date = parse_due(due) if due else None
    with task_session() as task_service:
        task = task_service.set_due(resolve_id(task_service, task_id), due_date)

    if task.due is not None:
        format_success(f"Due {task.due.isoformat()}: {task.title}")
    else:
        format_success(f"Due date cleared: {task.title}")
