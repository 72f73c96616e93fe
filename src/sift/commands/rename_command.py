"""Rename command - Change a task title."""

import typer

from sift.utils.exit_codes import ERROR_INVALID_ARGS
from sift.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper
from .session import resolve_id, task_session

app = typer.Typer(help="Rename a task")


@app.command("rename")
@command_wrapper
def rename_task(
    task_id: str = typer.Argument(..., help="Task ID, prefix or suffix"),
    title: str = typer.Argument(..., help="New title"),
) -> None:
    """Rename a task."""
    title = title.strip()
    if not title:
        raise AppError("Task title cannot be empty", exit_code=ERROR_INVALID_ARGS)

    with task_session() as task_service:
        resolved_id = resolve_id(task_service, task_id)
        old_title = task_service.get_task(resolved_id).title
        task_service.rename_task(resolved_id, title)

    format_success(f"Task renamed: {old_title} → {title}")
