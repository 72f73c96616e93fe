"""Load and save task lists as sift files."""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path

from sift.models import StorageIOError, TaskList

from .document import read_document, write_document

logger = logging.getLogger(__name__)


def _fsync_directory(directory: Path) -> None:
    # Directory fds cannot be opened on every platform; the rename is
    # still atomic there, just not yet durable.
    if os.name != "posix":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def _discard(tmp_path: Path) -> None:
    with contextlib.suppress(OSError):
        tmp_path.unlink(missing_ok=True)


def save_tasks(path: Path | str, task_list: TaskList) -> None:
    """Write ``task_list`` to ``path`` and flush it to disk.

    The file is written to a temporary sibling, fsynced, then renamed over
    ``path``, so an interrupted save never leaves a half-written file.

    Raises:
        StorageIOError: If the file cannot be created, written or synced
        ReconcileError: If the task list cannot be encoded
    """
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "wb") as f:
            write_document(f, task_list)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        _fsync_directory(path.parent)
    except OSError as e:
        _discard(tmp_path)
        raise StorageIOError(path, e) from e
    except Exception:
        _discard(tmp_path)
        raise
    logger.debug("saved %d tasks to %s", len(task_list), path)


def load_tasks(path: Path | str) -> TaskList:
    """Read a task list from ``path``.

    Raises:
        StorageIOError: If the file cannot be opened or read
        ContainerError: If the container framing is invalid
        CodecError: If the document cannot be decoded
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            task_list = read_document(f)
    except OSError as e:
        raise StorageIOError(path, e) from e
    logger.debug("loaded %d tasks from %s", len(task_list), path)
    return task_list
