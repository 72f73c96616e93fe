"""Mergeable document codec for task lists.

A TaskList is stored as a document tree with two parts:

* ``task_map`` maps each stringified task id to its record, so every field
  of every task merges independently,
* ``task_order`` is a replicated list of task ids giving the order.

Optional fields are left out of a record when unset; they are never
written as null. Dates use ``YYYY-MM-DD`` and instants
``YYYY-MM-DDTHH:MM:SSZ`` so that equal values always encode to identical
bytes.

After concurrent edits are merged an id may appear more than once in the
order list. Decoding keeps the first occurrence and drops the rest.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, date, datetime
from typing import Any, BinaryIO
from uuid import UUID

from pydantic import ValidationError

from sift.models import HydrateError, ReconcileError, Task, TaskList

from .container import Chunk, expect_type, read_chunk, read_header, write_chunk, write_header

logger = logging.getLogger(__name__)

AUTOMERGE_CHUNK = b"AMRG"
END_CHUNK = b"SEND"

TASK_MAP = "task_map"
TASK_ORDER = "task_order"

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


# ---------------------------------------------------------------------------
# Scalar formats
# ---------------------------------------------------------------------------


def format_date(value: date) -> str:
    # isoformat always pads the year to four digits; strftime("%Y") does not.
    return value.isoformat()


def format_datetime(value: datetime) -> str:
    if value.tzinfo is None:
        raise ReconcileError(f"cannot encode naive instant {value.isoformat()}")
    naive = value.astimezone(UTC).replace(tzinfo=None)
    return naive.isoformat(timespec="seconds") + "Z"


def parse_date(raw: Any, field: str) -> date:
    if not isinstance(raw, str):
        raise HydrateError("error parsing naive date: expected a string", field=field, raw=repr(raw))
    try:
        value = datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as e:
        raise HydrateError(f"error parsing naive date: {e}", field=field, raw=raw) from e
    # strptime also takes unpadded months and days.
    if format_date(value) != raw:
        raise HydrateError("error parsing naive date: not in YYYY-MM-DD form", field=field, raw=raw)
    return value


def parse_datetime(raw: Any, field: str) -> datetime:
    if not isinstance(raw, str):
        raise HydrateError("error parsing date time: expected a string", field=field, raw=repr(raw))
    try:
        value = datetime.strptime(raw, DATETIME_FORMAT).replace(tzinfo=UTC)
    except ValueError as e:
        raise HydrateError(f"error parsing date time: {e}", field=field, raw=raw) from e
    if format_datetime(value) != raw:
        raise HydrateError(
            "error parsing date time: not in YYYY-MM-DDTHH:MM:SSZ form", field=field, raw=raw
        )
    return value


# ---------------------------------------------------------------------------
# Reconcile / hydrate
# ---------------------------------------------------------------------------


def encode_task(task: Task) -> dict[str, str]:
    """Encode one task record, omitting unset optional fields."""
    record = {"title": task.title}
    if task.snoozed is not None:
        record["snoozed"] = format_date(task.snoozed)
    if task.due is not None:
        record["due_date"] = format_date(task.due)
    if task.completed is not None:
        record["completed"] = format_datetime(task.completed)
    return record


def encode(task_list: TaskList) -> dict[str, Any]:
    """Reconcile a task list into its document tree.

    Raises:
        ReconcileError: If the list holds a duplicate id or a value that
            has no canonical encoding
    """
    task_map: dict[str, dict[str, str]] = {}
    task_order: list[str] = []
    for task in task_list.tasks:
        key = str(task.id)
        if key in task_map:
            raise ReconcileError(f"duplicate task id in task list: {key}")
        task_map[key] = encode_task(task)
        task_order.append(key)
    return {TASK_MAP: task_map, TASK_ORDER: task_order}


def decode_task(task_id: UUID, record: Any) -> Task:
    """Hydrate one task record."""
    if not isinstance(record, dict):
        raise HydrateError(f"task record for {task_id} is not a map")
    title = record.get("title")
    if not isinstance(title, str):
        raise HydrateError(f"task record for {task_id} has no title", field="title", raw=repr(title))

    snoozed = record.get("snoozed")
    due = record.get("due_date")
    completed = record.get("completed")
    try:
        return Task(
            id=task_id,
            title=title,
            snoozed=None if snoozed is None else parse_date(snoozed, "snoozed"),
            due=None if due is None else parse_date(due, "due_date"),
            completed=None if completed is None else parse_datetime(completed, "completed"),
        )
    except ValidationError as e:
        raise HydrateError(f"invalid task record for {task_id}: {e}") from e


def decode(document: Any) -> TaskList:
    """Hydrate a task list from its document tree.

    Tasks are produced by walking ``task_order``; ids that occur again
    later in the order are dropped.

    Raises:
        HydrateError: If the tree is malformed or a field cannot be parsed
    """
    if not isinstance(document, dict):
        raise HydrateError("document root is not a map")
    task_map = document.get(TASK_MAP)
    task_order = document.get(TASK_ORDER)
    if not isinstance(task_map, dict):
        raise HydrateError(f"document has no {TASK_MAP!r} map")
    if not isinstance(task_order, list):
        raise HydrateError(f"document has no {TASK_ORDER!r} list")

    seen: set[UUID] = set()
    tasks: list[Task] = []
    for key in task_order:
        if not isinstance(key, str):
            raise HydrateError("task order entry is not a string", field=TASK_ORDER, raw=repr(key))
        try:
            task_id = UUID(key)
        except ValueError as e:
            raise HydrateError("task order entry is not a UUID", field=TASK_ORDER, raw=key) from e
        if task_id in seen:
            logger.warning("dropping duplicate task order entry %s", key)
            continue
        if key not in task_map:
            raise HydrateError(f"task {key} is ordered but missing from {TASK_MAP!r}")
        seen.add(task_id)
        tasks.append(decode_task(task_id, task_map[key]))

    return TaskList(tasks=tasks)


# ---------------------------------------------------------------------------
# Bytes
# ---------------------------------------------------------------------------


def encode_document(task_list: TaskList) -> bytes:
    """Serialize a task list to canonical document bytes."""
    tree = encode(task_list)
    return json.dumps(tree, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def decode_document(data: bytes) -> TaskList:
    """Deserialize document bytes into a task list.

    Raises:
        HydrateError: If the bytes are not a valid document
    """
    try:
        tree = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise HydrateError(f"cannot load document: {e}") from e
    return decode(tree)


def write_document(stream: BinaryIO, task_list: TaskList) -> None:
    """Write a complete sift file: header, document chunk, end chunk."""
    payload = encode_document(task_list)
    write_header(stream)
    write_chunk(stream, Chunk(AUTOMERGE_CHUNK, payload))
    write_chunk(stream, Chunk(END_CHUNK))


def read_document(stream: BinaryIO) -> TaskList:
    """Read a complete sift file written by write_document."""
    read_header(stream)
    document_chunk = read_chunk(stream)
    expect_type(document_chunk, AUTOMERGE_CHUNK)

    task_list = decode_document(document_chunk.data)

    end_chunk = read_chunk(stream)
    expect_type(end_chunk, END_CHUNK)
    return task_list
