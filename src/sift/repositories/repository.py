"""Store abstraction layer for sift.

This module defines the abstract base classes (interfaces) for the task
store and its transactions, following the Ports & Adapters pattern. The
in-memory implementation lives in ``sift.adapters.memory``.

All edits go through a Transaction. Committing a transaction records one
undo step no matter how many operations it performed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar
from uuid import UUID

from sift.models import Task

T = TypeVar("T")


class Transaction(ABC):
    """A unit of work against a store.

    A transaction can be used as a context manager: it commits when the
    block exits normally and rolls back when the block raises, unless the
    block already closed it.
    """

    @abstractmethod
    def get_task(self, task_id: UUID) -> Task:
        """Get a task by ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("Transaction.get_task() must be implemented by adapter")

    @abstractmethod
    def list_tasks(self) -> list[Task]:
        """List tasks in their current order."""
        raise NotImplementedError("Transaction.list_tasks() must be implemented by adapter")

    @abstractmethod
    def put_task(self, task: Task) -> None:
        """Replace the stored task that has the same ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("Transaction.put_task() must be implemented by adapter")

    @abstractmethod
    def insert_task(self, after: UUID | None, task: Task) -> None:
        """Insert a task right after ``after``, or first when ``after`` is None.

        An ``after`` id that is not present also inserts at the front.

        Raises:
            DuplicateTaskError: If a task with the same ID already exists
        """
        raise NotImplementedError("Transaction.insert_task() must be implemented by adapter")

    @abstractmethod
    def delete_task(self, task_id: UUID) -> None:
        """Delete a task. Deleting an unknown ID does nothing."""
        raise NotImplementedError("Transaction.delete_task() must be implemented by adapter")

    @abstractmethod
    def move_task(self, after: UUID | None, task_id: UUID) -> None:
        """Move a task right after ``after``, or first when ``after`` is None.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("Transaction.move_task() must be implemented by adapter")

    @abstractmethod
    def commit(self) -> None:
        """Commit and close the transaction, recording one undo step."""
        raise NotImplementedError("Transaction.commit() must be implemented by adapter")

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change made in the transaction and close it."""
        raise NotImplementedError("Transaction.rollback() must be implemented by adapter")

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """True once the transaction has been committed or rolled back."""
        raise NotImplementedError("Transaction.is_closed must be implemented by adapter")

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # The block may already have committed or rolled back explicitly.
        if self.is_closed:
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


class Store(ABC):
    """Abstract base class for an ordered task collection with undo/redo."""

    @abstractmethod
    def get_task(self, task_id: UUID) -> Task:
        """Get a task by ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("Store.get_task() must be implemented by adapter")

    @abstractmethod
    def list_tasks(self) -> list[Task]:
        """List tasks in their current order."""
        raise NotImplementedError("Store.list_tasks() must be implemented by adapter")

    @abstractmethod
    def undo(self) -> None:
        """Step the whole collection back one committed transaction.

        Raises:
            NothingToUndoError: If there is no undo history
        """
        raise NotImplementedError("Store.undo() must be implemented by adapter")

    @abstractmethod
    def redo(self) -> None:
        """Step the whole collection forward one undone transaction.

        Raises:
            NothingToRedoError: If there is no redo history
        """
        raise NotImplementedError("Store.redo() must be implemented by adapter")

    @property
    @abstractmethod
    def can_undo(self) -> bool:
        raise NotImplementedError("Store.can_undo must be implemented by adapter")

    @property
    @abstractmethod
    def can_redo(self) -> bool:
        raise NotImplementedError("Store.can_redo must be implemented by adapter")

    @abstractmethod
    def transaction(self) -> Transaction:
        """Open a transaction bound to this store.

        Raises:
            TransactionInProgressError: If another transaction is still open
        """
        raise NotImplementedError("Store.transaction() must be implemented by adapter")

    def with_transaction(self, callback: Callable[[Transaction], T]) -> T:
        """Run ``callback`` in a fresh transaction and commit it.

        If the callback raises, its partial changes are rolled back and the
        exception propagates.

        Returns:
            Whatever the callback returns
        """
        with self.transaction() as txn:
            return callback(txn)
