"""Move command - Reorder tasks."""

import typer

from sift.utils.exit_codes import ERROR_INVALID_ARGS
from sift.utils.ui.formatters import format_success, format_warning

from .decorators import AppError, command_wrapper
from .session import resolve_id, task_session

app = typer.Typer(help="Move a task up or down")


@app.command("move")
@command_wrapper
def move_task(
    task_id: str = typer.Argument(..., help="Task ID, prefix or suffix"),
    up: bool = typer.Option(False, "--up", "-u", help="Move one place up"),
    down: bool = typer.Option(False, "--down", "-d", help="Move one place down"),
) -> None:
    """Move a task one place among the visible tasks, wrapping at either end."""
    if up == down:
        raise AppError("Specify exactly one of --up or --down", exit_code=ERROR_INVALID_ARGS)

    with task_session() as task_service:
        resolved_id = resolve_id(task_service, task_id)
        task = task_service.get_task(resolved_id)
        if task.is_snoozed(task_service.today()):
            format_warning(f"Snoozed tasks keep their place until they wake up: {task.title}")
            return
        if up:
            task_service.move_up(resolved_id)
        else:
            task_service.move_down(resolved_id)

    format_success(f"Moved {'up' if up else 'down'}: {task.title}")
