"""List command - Show tasks in order."""

import typer

from sift.utils.ui.formatters import format_tasks_table

from .decorators import command_wrapper
from .session import task_session

app = typer.Typer(help="List tasks")


@app.command("list")
@command_wrapper
def list_tasks(
    all_tasks: bool = typer.Option(False, "--all", "-a", help="Include snoozed tasks"),
) -> None:
    """List tasks in their stored order."""
    with task_session() as task_service:
        today = task_service.today()
        if all_tasks:
            tasks = task_service.list_tasks()
        else:
            tasks = task_service.visible_tasks(today)
    format_tasks_table(tasks, today)
