"""UUID utility functions for sift.

Provides time-ordered task id generation (UUID version 7), validation,
short id display, and resolution of short ids against a store.
"""

from __future__ import annotations

import re
import secrets
import time
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from sift.repositories import Store

# Relaxed UUID pattern (any version)
UUID_RELAXED_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

_MAX_COUNTER = 0xFFF

MIN_SHORT_ID_LENGTH = 4

_last_ms = 0
_counter = 0


def new_task_id() -> UUID:
    """Generate a new UUID version 7.

    Layout (RFC 9562): 48-bit unix timestamp in milliseconds, version
    nibble, 12-bit sequence counter, variant bits, 62 random bits. The
    counter keeps ids generated within the same millisecond increasing.

    Returns:
        A fresh, time-ordered UUID
    """
    global _last_ms, _counter

    now_ms = time.time_ns() // 1_000_000
    if now_ms > _last_ms:
        # Leave headroom so a burst of ids in one millisecond rarely overflows.
        _counter = secrets.randbits(11)
        _last_ms = now_ms
    else:
        _counter += 1
        if _counter > _MAX_COUNTER:
            _last_ms += 1
            _counter = 0

    value = (_last_ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= _counter << 64
    value |= 0b10 << 62
    value |= secrets.randbits(62)
    return UUID(int=value)


def is_valid_uuid(value: str) -> bool:
    """Check if a string is a valid UUID.

    Args:
        value: String to validate

    Returns:
        True if value is a valid UUID
    """
    if not isinstance(value, str):
        return False
    return UUID_RELAXED_PATTERN.match(value) is not None


def is_full_uuid(value: str) -> bool:
    """Check if string is a full UUID (36 characters)."""
    return len(value) == 36 and is_valid_uuid(value)


def uuid_suffix(uuid: UUID | str, length: int = 8) -> str:
    """Get the last N characters of a UUID.

    Version 7 ids created close together share their leading timestamp
    digits, so the random tail is what tells them apart.
    """
    return str(uuid)[-length:]


def format_uuid_short(uuid: UUID | str) -> str:
    """Format UUID for display in lists (last 8 chars)."""
    return uuid_suffix(uuid, 8)


def resolve_task_uuid(
    short_or_full_id: str, store: Store, min_length: int = MIN_SHORT_ID_LENGTH
) -> UUID:
    """Resolve a short or full UUID to a task id present in the store.

    Args:
        short_or_full_id: Full UUID, prefix or suffix (min ``min_length`` chars)
        store: Store to search
        min_length: Minimum length for short UUIDs (default 4)

    Returns:
        Full task id

    Raises:
        ValueError: If ID is too short, not found, or ambiguous
    """
    short_or_full_id = short_or_full_id.lower().strip()
    task_ids = [task.id for task in store.list_tasks()]

    if is_full_uuid(short_or_full_id):
        task_id = UUID(short_or_full_id)
        if task_id not in task_ids:
            raise ValueError(f"Task not found: {short_or_full_id}")
        return task_id

    if len(short_or_full_id) < min_length:
        raise ValueError(
            f"ID must be at least {min_length} characters. "
            f"Got: {short_or_full_id} ({len(short_or_full_id)} chars)"
        )

    matches = [
        task_id
        for task_id in task_ids
        if str(task_id).startswith(short_or_full_id) or str(task_id).endswith(short_or_full_id)
    ]

    if len(matches) == 0:
        raise ValueError(f"Task not found: {short_or_full_id}")

    if len(matches) > 1:
        shown = ", ".join([format_uuid_short(task_id) for task_id in matches[:5]])
        if len(matches) > 5:
            shown += f", ... ({len(matches)} total)"
        raise ValueError(
            f"Ambiguous ID '{short_or_full_id}' matches {len(matches)} tasks: {shown}"
        )

    return matches[0]
