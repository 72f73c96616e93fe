"""Shared plumbing for task commands: open the task file, run, save."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from uuid import UUID

from sift.adapters.memory import MemoryStore
from sift.services.config_service import get_config_service
from sift.services.task_service import TaskService
from sift.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from sift.utils.logger import get_logger
from sift.utils.uuid_utils import MIN_SHORT_ID_LENGTH, is_full_uuid

from .decorators import AppError

# Set by the global ``--file`` option; None means "use the configured file".
_data_file_override: Path | None = None


def set_data_file(path: Path | None) -> None:
    global _data_file_override
    _data_file_override = path


def data_file() -> Path:
    """Path of the task file the current command works on."""
    if _data_file_override is not None:
        return _data_file_override
    return get_config_service().config.data_file


def open_store(path: Path) -> MemoryStore:
    """Load the store from ``path``; a missing file starts an empty store."""
    history_limit = get_config_service().config.history_limit
    if not path.exists():
        get_logger().info("no task file at %s, starting empty", path)
        return MemoryStore(history_limit=history_limit)
    return MemoryStore.load(path, history_limit=history_limit)


@contextmanager
def task_session() -> Iterator[TaskService]:
    """Yield a TaskService over the task file and save it if anything was committed.

    Nothing is written when the body raises.
    """
    path = data_file()
    store = open_store(path)
    service = TaskService(store, snooze_days=get_config_service().config.snooze_days)
    yield service
    if store.can_undo:
        store.save(path)


def resolve_id(task_service: TaskService, task_id: str) -> UUID:
    """Resolve a command line task id, mapping failures to CLI exit codes."""
    task_id = task_id.strip()
    if not is_full_uuid(task_id) and len(task_id) < MIN_SHORT_ID_LENGTH:
        raise AppError(
            f"ID must be at least {MIN_SHORT_ID_LENGTH} characters. Got: {task_id!r}",
            exit_code=ERROR_INVALID_ARGS,
        )
    try:
        return task_service.resolve_task_id(task_id)
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_NOT_FOUND) from e


def parse_due(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` due date given on the command line."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise AppError(
            f"Invalid date {value!r}, expected YYYY-MM-DD", exit_code=ERROR_INVALID_ARGS
        ) from e
