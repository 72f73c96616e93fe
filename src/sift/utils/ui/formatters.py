"""Output formatters for the sift CLI."""

from __future__ import annotations

from datetime import date

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sift.models import Task
from sift.utils.uuid_utils import format_uuid_short

from .console import get_console

console = get_console()

STATUS_ICONS = {
    "open": "○",
    "completed": "✓",
}


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def is_overdue(due: date | None, today: date) -> bool:
    return due is not None and due < today


def format_due_date(due: date, today: date) -> str:
    """Format a due date compactly: ``DD/MM Day``, with the year when it differs."""
    if due == today:
        return "today"
    day_str = due.strftime("%d/%m") if due.year == today.year else due.strftime("%d/%m/%Y")
    return f"{day_str} {due.strftime('%a')}"


def format_task_line(task: Task, today: date) -> Text:
    """Format a single task as one line of rich text."""
    status_icon = STATUS_ICONS["completed"] if task.is_completed else STATUS_ICONS["open"]
    title = escape(task.title)
    line_str = f"{status_icon} "
    line_str += f"[dim]{title}[/dim]" if task.is_completed else title

    if task.due is not None:
        due_str = format_due_date(task.due, today)
        if is_overdue(task.due, today) and not task.is_completed:
            line_str += f" [bold red]• {due_str}[/bold red]"
        else:
            line_str += f" [cyan]• {due_str}[/cyan]"

    if task.is_snoozed(today):
        line_str += f" [magenta]zz {task.snoozed.isoformat()}[/magenta]"

    return Text.from_markup(line_str)


def format_tasks_table(tasks: list[Task], today: date) -> None:
    """Display tasks in their stored order."""
    if not tasks:
        console.print("[dim]No tasks[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Task")

    for position, task in enumerate(tasks, start=1):
        table.add_row(str(position), format_uuid_short(task.id), format_task_line(task, today))

    console.print(table)
