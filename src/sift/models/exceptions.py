"""Custom exceptions for sift.

Every error raised by the persistence layer and the store derives from
SiftError, so callers can catch the whole family in one place.
"""

from __future__ import annotations

from pathlib import Path
from uuid import UUID


class SiftError(Exception):
    """Base exception for all sift errors."""


# ---------------------------------------------------------------------------
# I/O
# ---------------------------------------------------------------------------


class StorageIOError(SiftError):
    """Raised when the task file cannot be created, opened, read, written or synced."""

    def __init__(self, path: Path | str, cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot access file `{self.path}`: {cause}")


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------


class ContainerError(SiftError):
    """Base exception for binary container framing errors."""


class InvalidHeaderError(ContainerError):
    """Raised when the file does not start with the sift signature."""


class ChunkTooLargeError(ContainerError):
    """Raised when a chunk length exceeds the safety limit."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"chunk size exceeded: {length} bytes (limit {limit})")


class TruncatedChunkError(ContainerError):
    """Raised when the stream ends in the middle of a chunk."""


class ChecksumMismatchError(ContainerError):
    """Raised when a chunk's stored CRC does not match its contents."""

    def __init__(self, chunk_type: bytes, expected: int, actual: int):
        self.chunk_type = chunk_type
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"CRC mismatch in chunk {chunk_type!r}: "
            f"stored 0x{expected:08x}, computed 0x{actual:08x}"
        )


class UnexpectedChunkTypeError(ContainerError):
    """Raised when a chunk has a different type tag than required."""

    def __init__(self, expected: bytes, actual: bytes):
        self.expected = expected
        self.actual = actual
        super().__init__(f"unexpected chunk type: expected {expected!r}, got {actual!r}")


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


class CodecError(SiftError):
    """Base exception for document encode/decode errors."""


class ReconcileError(CodecError):
    """Raised when a task list cannot be encoded as a document."""


class HydrateError(CodecError):
    """Raised when a document cannot be decoded into a task list.

    Attributes:
        field: Name of the offending field, when one is known
        raw: Raw string that failed to parse, when one is known
    """

    def __init__(self, message: str, *, field: str | None = None, raw: str | None = None):
        self.field = field
        self.raw = raw
        if field is not None:
            message = f"{message} (field {field!r}, value {raw!r})"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class StoreError(SiftError):
    """Base exception for task store errors."""


class TaskNotFoundError(StoreError):
    """Raised when a task id is not present in the store."""

    def __init__(self, task_id: UUID):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class DuplicateTaskError(StoreError):
    """Raised when inserting a task whose id is already present."""

    def __init__(self, task_id: UUID):
        self.task_id = task_id
        super().__init__(f"Task already exists: {task_id}")


class NothingToUndoError(StoreError):
    """Raised when undo is requested with an empty undo history."""

    def __init__(self):
        super().__init__("undo is not available")


class NothingToRedoError(StoreError):
    """Raised when redo is requested with an empty redo history."""

    def __init__(self):
        super().__init__("redo is not available")


class TransactionInProgressError(StoreError):
    """Raised when the store is used while another transaction is open."""


class TransactionClosedError(StoreError):
    """Raised when a committed or rolled back transaction is used again."""
