"""sift domain models.

This package contains the Pydantic models for tasks and configuration,
and the exception hierarchy shared by the whole application.
"""

from .config_models import AppConfig, OutputConfig
from .exceptions import (
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
    TaskNotFoundError,
    TransactionClosedError,
    TransactionInProgressError,
    TruncatedChunkError,
    UnexpectedChunkTypeError,
)
from .task import Task, TaskList

__all__ = [
    # Task models
    "Task",
    "TaskList",
    # Config models
    "AppConfig",
    "OutputConfig",
    # Errors
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
