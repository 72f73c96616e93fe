"""Purge command - Delete completed tasks."""

import typer

from sift.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper
from .session import task_session

app = typer.Typer(help="Delete completed tasks")


@app.command("purge")
@command_wrapper
def purge_completed() -> None:
    """Delete every visible completed task."""
    with task_session() as task_service:
        count = task_service.purge_completed()

    if count:
        format_success(f"Purged {count} completed task(s)")
    else:
        format_info("No completed tasks to purge")
