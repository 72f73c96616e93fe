"""Delete command - Remove a task."""

import typer

from sift.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .session import resolve_id, task_session

app = typer.Typer(help="Delete a task")


@app.command("delete")
@command_wrapper
def delete_task(
    task_id: str = typer.Argument(..., help="Task ID, prefix or suffix"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    with task_session() as task_service:
        resolved_id = resolve_id(task_service, task_id)
        task = task_service.get_task(resolved_id)

        if not force:
            confirm = typer.confirm(f"Delete task '{task.title}'?")
            if not confirm:
                format_info("Cancelled")
                return

        task_service.delete_task(resolved_id)

    format_success(f"Deleted: {task.title}")
