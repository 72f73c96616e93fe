"""Task service - Business logic for task operations.

This service layer sits between commands and the store, providing the
everyday task actions. Every mutating action runs as exactly one
transaction, so each is undone by a single ``undo``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from sift.models import Task
from sift.repositories import Store, Transaction
from sift.utils.uuid_utils import resolve_task_uuid

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskService:
    """Service for task business logic.

    Args:
        store: Store implementation holding the tasks
        snooze_days: How far ahead ``toggle_snoozed`` snoozes a task
        clock: Returns the current instant; defaults to the UTC wall clock
    """

    def __init__(
        self,
        store: Store,
        *,
        snooze_days: int = 7,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.snooze_days = snooze_days
        self.clock = clock or _utc_now

    def today(self) -> date:
        return self.clock().date()

    # -------------------- queries --------------------

    def list_tasks(self) -> list[Task]:
        return self.store.list_tasks()

    def visible_tasks(self, today: date | None = None) -> list[Task]:
        """List tasks that are not snoozed past ``today``."""
        today = today or self.today()
        return [task for task in self.store.list_tasks() if not task.is_snoozed(today)]

    def get_task(self, task_id: UUID) -> Task:
        return self.store.get_task(task_id)

    def resolve_task_id(self, short_or_full_id: str) -> UUID:
        """Resolve a full id, or a unique id prefix or suffix, to a task id.

        Raises:
            ValueError: If the id is too short, unknown or ambiguous
        """
        return resolve_task_uuid(short_or_full_id, self.store)

    # -------------------- edits --------------------

    def add_task(
        self,
        title: str,
        *,
        after: UUID | None = None,
        due: date | None = None,
    ) -> Task:
        """Create a task right after ``after``, or at the top of the list."""
        task = Task.new(title, due=due)
        self.store.with_transaction(lambda txn: txn.insert_task(after, task))
        logger.info("added task %s", task.id)
        return task

    def _update(self, task_id: UUID, change: Callable[[Task], None]) -> Task:
        def apply(txn: Transaction) -> Task:
            task = txn.get_task(task_id)
            change(task)
            txn.put_task(task)
            return task

        return self.store.with_transaction(apply)

    def rename_task(self, task_id: UUID, title: str) -> Task:
        def change(task: Task) -> None:
            task.title = title

        return self._update(task_id, change)

    def set_due(self, task_id: UUID, due: date | None) -> Task:
        def change(task: Task) -> None:
            task.due = due

        return self._update(task_id, change)

    def toggle_completed(self, task_id: UUID) -> Task:
        """Mark an open task completed now, or reopen a completed one."""

        def change(task: Task) -> None:
            task.completed = None if task.is_completed else self.clock()

        return self._update(task_id, change)

    def toggle_snoozed(self, task_id: UUID, today: date | None = None) -> Task:
        """Snooze a task for ``snooze_days``, or clear an existing snooze."""
        today = today or self.today()

        def change(task: Task) -> None:
            if task.snoozed is not None:
                task.snoozed = None
            else:
                task.snoozed = today + timedelta(days=self.snooze_days)

        return self._update(task_id, change)

    def delete_task(self, task_id: UUID) -> None:
        self.store.get_task(task_id)
        self.store.with_transaction(lambda txn: txn.delete_task(task_id))

    def purge_completed(self, today: date | None = None) -> int:
        """Delete every visible completed task in one transaction.

        Returns:
            Number of deleted tasks
        """
        doomed = [task.id for task in self.visible_tasks(today) if task.is_completed]

        def apply(txn: Transaction) -> None:
            for task_id in doomed:
                txn.delete_task(task_id)

        self.store.with_transaction(apply)
        logger.info("purged %d completed tasks", len(doomed))
        return len(doomed)

    # -------------------- ordering --------------------

    def _ids_for_move(self, today: date | None) -> list[UUID | None]:
        # Leading None stands for "before the first task".
        return [None] + [task.id for task in self.visible_tasks(today)]

    def move_up(self, task_id: UUID, today: date | None = None) -> None:
        """Move a task one place up among visible tasks; the first wraps to the end."""
        ids = self._ids_for_move(today)
        if task_id not in ids:
            self.store.get_task(task_id)
            return
        index = ids.index(task_id)
        # Target is the task two places up; circular, so index 1 wraps to the last id.
        after = ids[(index - 2) % len(ids)]
        self.store.with_transaction(lambda txn: txn.move_task(after, task_id))

    def move_down(self, task_id: UUID, today: date | None = None) -> None:
        """Move a task one place down among visible tasks; the last wraps to the top."""
        ids = self._ids_for_move(today)
        if task_id not in ids:
            self.store.get_task(task_id)
            return
        index = ids.index(task_id)
        after = ids[(index + 1) % len(ids)]
        self.store.with_transaction(lambda txn: txn.move_task(after, task_id))

    # -------------------- history --------------------

    def undo(self) -> None:
        self.store.undo()

    def redo(self) -> None:
        self.store.redo()
