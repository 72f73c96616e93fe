"""Add command - Create a task."""

import typer

from sift.utils.exit_codes import ERROR_INVALID_ARGS
from sift.utils.ui.console import get_console
from sift.utils.ui.formatters import format_success
from sift.utils.uuid_utils import format_uuid_short

from .decorators import AppError, command_wrapper
from .session import parse_due, resolve_id, task_session

app = typer.Typer(help="Add a task")
console = get_console()


@app.command("add")
@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    after: str | None = typer.Option(
        None, "--after", help="ID of the task to insert after (default: top of the list)"
    ),
    due: str | None = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
) -> None:
    """Add a task at the top of the list, or right after another task."""
    title = title.strip()
    if not title:
        raise AppError("Task title cannot be empty", exit_code=ERROR_INVALID_ARGS)

    due_date = parse_due(due) if due else None
    with task_session() as task_service:
        after_id = resolve_id(task_service, after) if after else None
        task = task_service.add_task(title, after=after_id, due=due_date)

    format_success(f"Added: {task.title}")
    console.print(f"[dim]ID: {format_uuid_short(task.id)}[/dim]")
