"""Task data models."""

from __future__ import annotations

from datetime import UTC, date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sift.utils.uuid_utils import new_task_id


class Task(BaseModel):
    """A single task.

    Attributes:
        id: Time-ordered unique identifier (UUID v7), immutable
        title: Title of the task
        snoozed: Snooze date; a task snoozed until a future date is hidden
            from the default listing
        due: Due date
        completed: Completion instant in UTC; ``None`` means the task is open
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=new_task_id, frozen=True)
    title: str
    snoozed: date | None = None
    due: date | None = None
    completed: datetime | None = None

    @field_validator("snoozed", "due", mode="before")
    @classmethod
    def reject_datetime(cls, v):
        # datetime is a date subclass; a time component would be silently dropped.
        if isinstance(v, datetime):
            raise ValueError("expected a calendar date without a time component")
        return v

    @field_validator("completed")
    @classmethod
    def normalize_completed(cls, v: datetime | None) -> datetime | None:
        """Store completion instants in UTC at whole-second precision."""
        if v is None:
            return None
        if v.tzinfo is None:
            raise ValueError("completed must be timezone-aware")
        return v.astimezone(UTC).replace(microsecond=0)

    @classmethod
    def new(
        cls,
        title: str,
        *,
        snoozed: date | None = None,
        due: date | None = None,
        completed: datetime | None = None,
    ) -> Task:
        """Create a task with a freshly generated id."""
        return cls(id=new_task_id(), title=title, snoozed=snoozed, due=due, completed=completed)

    @property
    def is_completed(self) -> bool:
        return self.completed is not None

    def is_snoozed(self, today: date) -> bool:
        """Return True if the task is snoozed until a date after ``today``."""
        return self.snoozed is not None and self.snoozed > today


class TaskList(BaseModel):
    """An ordered sequence of tasks with unique ids.

    Order is meaningful and controlled by the caller; it is not derived
    from any task field.
    """

    tasks: list[Task] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> TaskList:
        seen: set[UUID] = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id in task list: {task.id}")
            seen.add(task.id)
        return self

    def __len__(self) -> int:
        return len(self.tasks)

    def ids(self) -> list[UUID]:
        return [task.id for task in self.tasks]
