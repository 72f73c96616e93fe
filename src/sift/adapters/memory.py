"""In-memory transactional task store with snapshot undo/redo.

The store's whole state is a Record: a task mapping plus an id order.
Records are never modified; every edit builds a new Record that shares
all untouched Task instances with the previous one, so keeping old
Records around as undo/redo snapshots costs a shallow copy, not a deep
one. Tasks are copied on the way in and on the way out, so a Task held
by a Record is never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from uuid import UUID

from sift.adapters.siftfile import load_tasks, save_tasks
from sift.models import (
    DuplicateTaskError,
    NothingToRedoError,
    NothingToUndoError,
    Task,
    TaskList,
    TaskNotFoundError,
    TransactionClosedError,
    TransactionInProgressError,
)
from sift.repositories import Store, Transaction

logger = logging.getLogger(__name__)


def _index_after(order: tuple[UUID, ...], after: UUID | None) -> int:
    """Position right after ``after``; the front when absent or None."""
    if after is None:
        return 0
    try:
        return order.index(after) + 1
    except ValueError:
        return 0


@dataclass(frozen=True)
class Record:
    """One consistent state of the task collection."""

    tasks: Mapping[UUID, Task] = field(default_factory=lambda: MappingProxyType({}))
    order: tuple[UUID, ...] = ()

    @classmethod
    def from_task_list(cls, task_list: TaskList) -> Record:
        tasks = {task.id: task.model_copy() for task in task_list.tasks}
        order = tuple(task.id for task in task_list.tasks)
        return cls(MappingProxyType(tasks), order)

    def _replace(self, tasks: dict[UUID, Task], order: tuple[UUID, ...]) -> Record:
        return Record(MappingProxyType(tasks), order)

    def get_task(self, task_id: UUID) -> Task:
        try:
            return self.tasks[task_id]
        except KeyError:
            raise TaskNotFoundError(task_id) from None

    def list_tasks(self) -> list[Task]:
        result = []
        for task_id in self.order:
            task = self.tasks.get(task_id)
            if task is None:
                raise RuntimeError(f"task {task_id} is in the order but not in the task map")
            result.append(task)
        return result

    def put_task(self, task: Task) -> Record:
        if task.id not in self.tasks:
            raise TaskNotFoundError(task.id)
        tasks = dict(self.tasks)
        tasks[task.id] = task
        return self._replace(tasks, self.order)

    def insert_task(self, after: UUID | None, task: Task) -> Record:
        if task.id in self.tasks or task.id in self.order:
            raise DuplicateTaskError(task.id)
        index = _index_after(self.order, after)
        order = self.order[:index] + (task.id,) + self.order[index:]
        tasks = dict(self.tasks)
        tasks[task.id] = task
        return self._replace(tasks, order)

    def delete_task(self, task_id: UUID) -> Record:
        if task_id not in self.tasks and task_id not in self.order:
            return self
        order = tuple(other for other in self.order if other != task_id)
        tasks = {key: value for key, value in self.tasks.items() if key != task_id}
        return self._replace(tasks, order)

    def move_task(self, after: UUID | None, task_id: UUID) -> Record:
        if task_id not in self.tasks:
            raise TaskNotFoundError(task_id)
        remaining = tuple(other for other in self.order if other != task_id)
        index = _index_after(remaining, after)
        order = remaining[:index] + (task_id,) + remaining[index:]
        return Record(self.tasks, order)


class MemoryTransaction(Transaction):
    """Transaction over a MemoryStore.

    Edits are applied to the store as they happen; the Record the store
    held when the transaction began is kept to roll back to, and becomes
    the undo snapshot on commit.
    """

    def __init__(self, store: MemoryStore):
        self._store = store
        self._start = store._current
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise TransactionClosedError("transaction is already closed")

    def get_task(self, task_id: UUID) -> Task:
        self._check_open()
        return self._store.get_task(task_id)

    def list_tasks(self) -> list[Task]:
        self._check_open()
        return self._store.list_tasks()

    def put_task(self, task: Task) -> None:
        self._check_open()
        store = self._store
        store._current = store._current.put_task(task.model_copy())

    def insert_task(self, after: UUID | None, task: Task) -> None:
        self._check_open()
        store = self._store
        store._current = store._current.insert_task(after, task.model_copy())

    def delete_task(self, task_id: UUID) -> None:
        self._check_open()
        store = self._store
        store._current = store._current.delete_task(task_id)

    def move_task(self, after: UUID | None, task_id: UUID) -> None:
        self._check_open()
        store = self._store
        store._current = store._current.move_task(after, task_id)

    def commit(self) -> None:
        self._check_open()
        self._closed = True
        self._store._finish_transaction(self, commit=True)

    def rollback(self) -> None:
        self._check_open()
        self._closed = True
        self._store._current = self._start
        self._store._finish_transaction(self, commit=False)


class MemoryStore(Store):
    """Store keeping the task collection and its history in memory.

    Args:
        task_list: Initial tasks, in order
        history_limit: Maximum number of undo steps kept; unbounded if None
    """

    def __init__(self, task_list: TaskList | None = None, *, history_limit: int | None = None):
        if history_limit is not None and history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self.history_limit = history_limit
        self._current = Record.from_task_list(task_list) if task_list is not None else Record()
        self._undo_stack: list[Record] = []
        self._redo_stack: list[Record] = []
        self._active: MemoryTransaction | None = None

    def __repr__(self) -> str:
        return (
            f"MemoryStore(tasks={len(self._current.order)}, "
            f"undo={len(self._undo_stack)}, redo={len(self._redo_stack)})"
        )

    # -------------------- loading / saving --------------------

    @classmethod
    def from_task_list(cls, task_list: TaskList, *, history_limit: int | None = None) -> MemoryStore:
        return cls(task_list, history_limit=history_limit)

    @classmethod
    def load(cls, path: Path | str, *, history_limit: int | None = None) -> MemoryStore:
        """Create a store from a sift file."""
        return cls(load_tasks(path), history_limit=history_limit)

    def to_task_list(self) -> TaskList:
        return TaskList(tasks=[task.model_copy() for task in self._current.list_tasks()])

    def save(self, path: Path | str) -> None:
        """Write the current tasks to a sift file."""
        save_tasks(path, self.to_task_list())

    # -------------------- queries --------------------

    def get_task(self, task_id: UUID) -> Task:
        return self._current.get_task(task_id).model_copy()

    def list_tasks(self) -> list[Task]:
        return [task.model_copy() for task in self._current.list_tasks()]

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    # -------------------- history --------------------

    def _check_idle(self) -> None:
        if self._active is not None:
            raise TransactionInProgressError("a transaction is already open on this store")

    def _push_undo(self, record: Record) -> None:
        self._undo_stack.append(record)
        if self.history_limit is not None and len(self._undo_stack) > self.history_limit:
            del self._undo_stack[: len(self._undo_stack) - self.history_limit]

    def undo(self) -> None:
        self._check_idle()
        if not self._undo_stack:
            raise NothingToUndoError()
        self._redo_stack.append(self._current)
        self._current = self._undo_stack.pop()
        logger.debug("undo: %d undo / %d redo steps left", len(self._undo_stack), len(self._redo_stack))

    def redo(self) -> None:
        self._check_idle()
        if not self._redo_stack:
            raise NothingToRedoError()
        self._push_undo(self._current)
        self._current = self._redo_stack.pop()
        logger.debug("redo: %d undo / %d redo steps left", len(self._undo_stack), len(self._redo_stack))

    # -------------------- transactions --------------------

    def transaction(self) -> MemoryTransaction:
        self._check_idle()
        self._active = MemoryTransaction(self)
        return self._active

    def _finish_transaction(self, txn: MemoryTransaction, *, commit: bool) -> None:
        if self._active is not txn:
            raise RuntimeError("transaction does not belong to the active slot of this store")
        self._active = None
        if commit:
            self._push_undo(txn._start)
            self._redo_stack.clear()
            logger.debug("commit: %d undo steps", len(self._undo_stack))
        else:
            logger.debug("rollback")


def load(path: Path | str, *, history_limit: int | None = None) -> MemoryStore:
    """Load a store from a sift file."""
    return MemoryStore.load(path, history_limit=history_limit)


def save(store: MemoryStore, path: Path | str) -> None:
    """Save a store's current tasks to a sift file."""
    store.save(path)
