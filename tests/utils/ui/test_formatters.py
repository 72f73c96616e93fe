"""Tests for output formatters."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from unittest.mock import patch

import pytest

from sift.models import Task
from sift.utils.ui.formatters import (
    format_due_date,
    format_error,
    format_info,
    format_success,
    format_task_line,
    format_tasks_table,
    format_warning,
    is_overdue,
)


@pytest.fixture()
def mock_console():
    with patch("sift.utils.ui.formatters.console") as console:
        yield console


@pytest.mark.parametrize(
    "func,prefix",
    [
        (format_error, "Error:"),
        (format_success, "Success:"),
        (format_warning, "Warning:"),
        (format_info, "Info:"),
    ],
)
def test_message_prefixes(mock_console, func, prefix):
    func("something happened")
    printed = mock_console.print.call_args[0][0]
    assert prefix in printed
    assert "something happened" in printed


def test_messages_escape_markup(mock_console):
    format_error("[bold]not markup[/bold]")
    printed = mock_console.print.call_args[0][0]
    assert "\\[bold]" in printed


class TestDueDates:
    def test_is_overdue(self, today):
        assert is_overdue(today - timedelta(days=1), today)
        assert not is_overdue(today, today)
        assert not is_overdue(None, today)

    def test_today(self, today):
        assert format_due_date(today, today) == "today"

    def test_same_year(self, today):
        assert format_due_date(date(2024, 6, 20), today) == "20/06 Thu"

    def test_other_year(self, today):
        assert format_due_date(date(2025, 1, 3), today) == "03/01/2025 Fri"


class TestTaskLine:
    def test_open_task(self, today):
        line = format_task_line(Task.new("Write report"), today)
        assert line.plain == "○ Write report"

    def test_completed_task(self, today):
        task = Task.new("Buy milk", completed=datetime(2024, 6, 14, tzinfo=UTC))
        assert format_task_line(task, today).plain == "✓ Buy milk"

    def test_due_and_snoozed(self, today):
        task = Task.new("Call", due=today, snoozed=date(2024, 6, 22))
        assert format_task_line(task, today).plain == "○ Call • today zz 2024-06-22"

    def test_title_with_brackets_is_not_markup(self, today):
        assert format_task_line(Task.new("[red]x[/red]"), today).plain == "○ [red]x[/red]"


class TestTasksTable:
    def test_empty(self, mock_console, today):
        format_tasks_table([], today)
        assert "No tasks" in mock_console.print.call_args[0][0]

    def test_table_rows(self, mock_console, today, sample_tasks):
        format_tasks_table(sample_tasks.tasks, today)
        table = mock_console.print.call_args[0][0]
        assert table.row_count == 3
        assert [column.header for column in table.columns] == ["#", "ID", "Task"]
