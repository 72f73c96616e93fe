"""Unit tests for the in-memory transactional store."""

from __future__ import annotations

from collections import Counter
from datetime import date

import pytest

from sift.adapters.memory import MemoryStore, Record, load, save
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


def _titles(store: MemoryStore) -> list[str]:
    return [task.title for task in store.list_tasks()]


def _insert(store: MemoryStore, after, title: str) -> Task:
    task = Task.new(title)
    store.with_transaction(lambda txn: txn.insert_task(after, task))
    return task


@pytest.fixture()
def abc_store() -> tuple[MemoryStore, list[Task]]:
    """Store holding tasks a, b, c in that order, with no history."""
    tasks = [Task.new("a"), Task.new("b"), Task.new("c")]
    return MemoryStore(TaskList(tasks=tasks)), tasks


# ---------------------------------------------------------------------------
# Construction and queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_empty_store(self):
        store = MemoryStore()
        assert store.list_tasks() == []
        assert not store.can_undo
        assert not store.can_redo

    def test_list_keeps_order(self, store, sample_tasks):
        assert [task.id for task in store.list_tasks()] == sample_tasks.ids()

    def test_get_task(self, store, sample_tasks):
        first = sample_tasks.tasks[0]
        assert store.get_task(first.id) == first

    def test_get_unknown_task(self, store):
        with pytest.raises(TaskNotFoundError):
            store.get_task(Task.new("ghost").id)

    def test_returned_tasks_are_copies(self, abc_store):
        store, tasks = abc_store
        fetched = store.get_task(tasks[0].id)
        fetched.title = "changed outside"
        store.list_tasks()[1].title = "changed too"
        assert _titles(store) == ["a", "b", "c"]

    def test_input_list_is_copied(self):
        task = Task.new("original")
        store = MemoryStore(TaskList(tasks=[task]))
        task.title = "mutated"
        assert _titles(store) == ["original"]

    def test_to_task_list(self, store, sample_tasks):
        assert store.to_task_list() == sample_tasks

    def test_invalid_history_limit(self):
        with pytest.raises(ValueError):
            MemoryStore(history_limit=0)

    def test_list_detects_broken_record(self):
        orphan = Task.new("orphan")
        record = Record(order=(orphan.id,))
        with pytest.raises(RuntimeError):
            record.list_tasks()


# ---------------------------------------------------------------------------
# Transaction operations
# ---------------------------------------------------------------------------


class TestInsert:
    def test_insert_after_none_goes_first(self, abc_store):
        store, _ = abc_store
        _insert(store, None, "new")
        assert _titles(store) == ["new", "a", "b", "c"]

    def test_insert_after_task(self, abc_store):
        store, tasks = abc_store
        _insert(store, tasks[1].id, "new")
        assert _titles(store) == ["a", "b", "new", "c"]

    def test_insert_after_last(self, abc_store):
        store, tasks = abc_store
        _insert(store, tasks[2].id, "new")
        assert _titles(store) == ["a", "b", "c", "new"]

    def test_insert_after_unknown_goes_first(self, abc_store):
        store, _ = abc_store
        _insert(store, Task.new("ghost").id, "new")
        assert _titles(store) == ["new", "a", "b", "c"]

    def test_insert_into_empty_store(self):
        store = MemoryStore()
        task = _insert(store, None, "only")
        assert store.get_task(task.id) == task

    def test_insert_duplicate_id(self, abc_store):
        store, tasks = abc_store
        with pytest.raises(DuplicateTaskError):
            store.with_transaction(lambda txn: txn.insert_task(None, tasks[0]))
        assert _titles(store) == ["a", "b", "c"]


class TestPut:
    def test_put_replaces_task(self, abc_store):
        store, tasks = abc_store
        changed = tasks[1].model_copy(update={"title": "B", "due": date(2024, 1, 1)})
        store.with_transaction(lambda txn: txn.put_task(changed))
        assert store.get_task(tasks[1].id) == changed
        assert _titles(store) == ["a", "B", "c"]

    def test_put_unknown_task(self, abc_store):
        store, _ = abc_store
        with pytest.raises(TaskNotFoundError):
            store.with_transaction(lambda txn: txn.put_task(Task.new("ghost")))

    def test_mutating_after_put_does_not_leak(self, abc_store):
        store, tasks = abc_store
        with store.transaction() as txn:
            task = txn.get_task(tasks[0].id)
            task.title = "A"
            txn.put_task(task)
            task.title = "leaked"
        assert store.get_task(tasks[0].id).title == "A"


class TestDelete:
    def test_delete(self, abc_store):
        store, tasks = abc_store
        store.with_transaction(lambda txn: txn.delete_task(tasks[1].id))
        assert _titles(store) == ["a", "c"]
        with pytest.raises(TaskNotFoundError):
            store.get_task(tasks[1].id)

    def test_delete_unknown_is_noop(self, abc_store):
        store, _ = abc_store
        store.with_transaction(lambda txn: txn.delete_task(Task.new("ghost").id))
        assert _titles(store) == ["a", "b", "c"]


class TestMove:
    def test_move_to_front(self, abc_store):
        store, tasks = abc_store
        store.with_transaction(lambda txn: txn.move_task(None, tasks[2].id))
        assert _titles(store) == ["c", "a", "b"]

    def test_move_after_task(self, abc_store):
        store, tasks = abc_store
        store.with_transaction(lambda txn: txn.move_task(tasks[2].id, tasks[0].id))
        assert _titles(store) == ["b", "c", "a"]

    def test_move_after_itself_goes_first(self, abc_store):
        store, tasks = abc_store
        store.with_transaction(lambda txn: txn.move_task(tasks[1].id, tasks[1].id))
        assert _titles(store) == ["b", "a", "c"]

    def test_move_unknown_task(self, abc_store):
        store, tasks = abc_store
        with pytest.raises(TaskNotFoundError):
            store.with_transaction(lambda txn: txn.move_task(tasks[0].id, Task.new("ghost").id))

    @pytest.mark.parametrize("after_index", [None, 0, 1, 2])
    @pytest.mark.parametrize("moved_index", [0, 1, 2])
    def test_move_preserves_ids(self, abc_store, after_index, moved_index):
        store, tasks = abc_store
        before = Counter(task.id for task in store.list_tasks())
        after = None if after_index is None else tasks[after_index].id
        store.with_transaction(lambda txn: txn.move_task(after, tasks[moved_index].id))
        assert Counter(task.id for task in store.list_tasks()) == before


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class TestTransactions:
    def test_edits_are_visible_inside_transaction(self, abc_store):
        store, _ = abc_store
        with store.transaction() as txn:
            txn.insert_task(None, Task.new("new"))
            assert [task.title for task in txn.list_tasks()] == ["new", "a", "b", "c"]

    def test_rollback_restores_state(self, abc_store):
        store, tasks = abc_store
        txn = store.transaction()
        txn.insert_task(None, Task.new("new"))
        txn.delete_task(tasks[0].id)
        txn.rollback()
        assert _titles(store) == ["a", "b", "c"]
        assert not store.can_undo

    def test_context_manager_rolls_back_on_error(self, abc_store):
        store, _ = abc_store
        with pytest.raises(RuntimeError, match="boom"):
            with store.transaction() as txn:
                txn.insert_task(None, Task.new("new"))
                raise RuntimeError("boom")
        assert _titles(store) == ["a", "b", "c"]
        assert not store.can_undo

    def test_with_transaction_is_atomic(self, abc_store):
        store, tasks = abc_store

        def edit(txn):
            txn.delete_task(tasks[0].id)
            txn.move_task(None, Task.new("ghost").id)

        with pytest.raises(TaskNotFoundError):
            store.with_transaction(edit)
        assert _titles(store) == ["a", "b", "c"]

    def test_with_transaction_returns_callback_result(self, abc_store):
        store, tasks = abc_store
        assert store.with_transaction(lambda txn: txn.get_task(tasks[0].id).title) == "a"

    def test_only_one_open_transaction(self, abc_store):
        store, _ = abc_store
        txn = store.transaction()
        with pytest.raises(TransactionInProgressError):
            store.transaction()
        with pytest.raises(TransactionInProgressError):
            store.undo()
        with pytest.raises(TransactionInProgressError):
            store.redo()
        txn.commit()
        store.transaction().rollback()

    def test_closed_transaction_cannot_be_used(self, abc_store):
        store, tasks = abc_store
        txn = store.transaction()
        txn.commit()
        with pytest.raises(TransactionClosedError):
            txn.delete_task(tasks[0].id)
        with pytest.raises(TransactionClosedError):
            txn.commit()
        with pytest.raises(TransactionClosedError):
            txn.rollback()

    def test_explicit_commit_inside_with_block(self, abc_store):
        store, _ = abc_store
        with store.transaction() as txn:
            txn.insert_task(None, Task.new("new"))
            txn.commit()
            assert txn.is_closed
        assert _titles(store) == ["new", "a", "b", "c"]
        assert store.can_undo
        store.undo()
        assert _titles(store) == ["a", "b", "c"]

    def test_error_after_explicit_commit_is_not_masked(self, abc_store):
        store, _ = abc_store
        with pytest.raises(RuntimeError, match="after commit"):
            with store.transaction() as txn:
                txn.insert_task(None, Task.new("new"))
                txn.commit()
                raise RuntimeError("after commit")
        assert _titles(store) == ["new", "a", "b", "c"]

    def test_error_after_explicit_rollback_is_not_masked(self, abc_store):
        store, _ = abc_store
        with pytest.raises(RuntimeError, match="after rollback"):
            with store.transaction() as txn:
                txn.insert_task(None, Task.new("new"))
                txn.rollback()
                raise RuntimeError("after rollback")
        assert _titles(store) == ["a", "b", "c"]
        assert not store.can_undo

    def test_with_transaction_callback_may_commit(self, abc_store):
        store, _ = abc_store

        def edit(txn):
            txn.insert_task(None, Task.new("new"))
            txn.commit()

        store.with_transaction(edit)
        assert _titles(store) == ["new", "a", "b", "c"]
        store.transaction().rollback()

    def test_untouched_tasks_are_shared_between_snapshots(self, abc_store):
        store, tasks = abc_store
        before = store._current
        store.with_transaction(lambda txn: txn.delete_task(tasks[0].id))
        after = store._current
        assert after.tasks[tasks[1].id] is before.tasks[tasks[1].id]


# ---------------------------------------------------------------------------
# Undo / redo
# ---------------------------------------------------------------------------


class TestHistory:
    def test_undo_on_empty_history(self):
        with pytest.raises(NothingToUndoError, match="undo is not available"):
            MemoryStore().undo()

    def test_redo_on_empty_history(self):
        with pytest.raises(NothingToRedoError, match="redo is not available"):
            MemoryStore().redo()

    def test_one_undo_step_per_transaction(self, abc_store):
        store, tasks = abc_store
        with store.transaction() as txn:
            txn.insert_task(None, Task.new("x"))
            txn.insert_task(None, Task.new("y"))
            txn.delete_task(tasks[0].id)
        store.undo()
        assert _titles(store) == ["a", "b", "c"]
        assert not store.can_undo

    def test_empty_commit_still_records_a_step(self, abc_store):
        store, _ = abc_store
        store.transaction().commit()
        assert store.can_undo
        store.undo()
        assert _titles(store) == ["a", "b", "c"]

    def test_undo_all_returns_to_initial_state(self, abc_store):
        store, _ = abc_store
        initial = store.list_tasks()
        for title in ["x", "y", "z"]:
            _insert(store, None, title)
        for _ in range(3):
            store.undo()
        assert store.list_tasks() == initial
        with pytest.raises(NothingToUndoError):
            store.undo()

    def test_redo_reapplies_undone_change(self, abc_store):
        store, _ = abc_store
        _insert(store, None, "x")
        store.undo()
        assert store.can_redo
        store.redo()
        assert _titles(store) == ["x", "a", "b", "c"]
        assert not store.can_redo

    def test_undo_and_redo_are_inverses(self, abc_store):
        store, tasks = abc_store
        _insert(store, None, "x")
        store.with_transaction(lambda txn: txn.delete_task(tasks[2].id))
        store.undo()
        store.undo()
        store.redo()
        assert _titles(store) == ["x", "a", "b", "c"]
        store.redo()
        assert _titles(store) == ["x", "a", "b"]
        store.undo()
        assert _titles(store) == ["x", "a", "b", "c"]
        store.undo()
        assert _titles(store) == ["a", "b", "c"]

    def test_commit_clears_redo(self, abc_store):
        store, _ = abc_store
        _insert(store, None, "x")
        store.undo()
        _insert(store, None, "y")
        assert not store.can_redo
        with pytest.raises(NothingToRedoError):
            store.redo()

    def test_rollback_keeps_redo(self, abc_store):
        store, _ = abc_store
        _insert(store, None, "x")
        store.undo()
        store.transaction().rollback()
        assert store.can_redo

    def test_history_limit_drops_oldest(self, abc_store):
        _, tasks = abc_store
        store = MemoryStore(TaskList(tasks=tasks), history_limit=2)
        for title in ["x", "y", "z"]:
            _insert(store, None, title)
        store.undo()
        store.undo()
        assert _titles(store) == ["x", "a", "b", "c"]
        assert not store.can_undo


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestPersistence:
    def test_save_and_load(self, tmp_path, store, sample_tasks):
        path = tmp_path / "tasks.sift"
        store.save(path)
        loaded = MemoryStore.load(path)
        assert loaded.to_task_list() == sample_tasks
        assert not loaded.can_undo

    def test_module_level_helpers(self, tmp_path, store, sample_tasks):
        path = tmp_path / "tasks.sift"
        save(store, path)
        loaded = load(path, history_limit=5)
        assert loaded.history_limit == 5
        assert loaded.to_task_list() == sample_tasks

    def test_repr(self, store):
        assert repr(store) == "MemoryStore(tasks=3, undo=0, redo=0)"
