"""sift - a durable, mergeable, transactional store for an ordered task list."""

__version__ = "0.1.0"

from .adapters.memory import MemoryStore, load, save
from .models import (
    ChecksumMismatchError,
    ChunkTooLargeError,
    CodecError,
    ContainerError,
    DuplicateTaskError,
    HydrateError,
    InvalidHeaderError,
    NothingToRedoError,
    NothingToUndoError,
    ReconcileError,
    SiftError,
    StorageIOError,
    StoreError,
    Task,
    TaskList,
    TaskNotFoundError,
    TransactionClosedError,
    TransactionInProgressError,
    TruncatedChunkError,
    UnexpectedChunkTypeError,
)
from .utils.midpoint import midpoint

__all__ = [
    "__version__",
    "load",
    "save",
    "MemoryStore",
    "Task",
    "TaskList",
    "midpoint",
    "SiftError",
    "StorageIOError",
    "ContainerError",
    "InvalidHeaderError",
    "ChunkTooLargeError",
    "TruncatedChunkError",
    "ChecksumMismatchError",
    "UnexpectedChunkTypeError",
    "CodecError",
    "ReconcileError",
    "HydrateError",
    "StoreError",
    "TaskNotFoundError",
    "DuplicateTaskError",
    "NothingToUndoError",
    "NothingToRedoError",
    "TransactionInProgressError",
    "TransactionClosedError",
]
