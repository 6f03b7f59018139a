# src/task_dashboard/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

from ..errors import StoreError, ValidationError

T = TypeVar("T")

# Columns requested from the store for every read and insert.
TASK_COLUMNS = ("id", "title", "description", "status", "due_date", "created_at")


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    There is no transition graph: any status may change to any other directly.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Accept a stored value or a short console alias (p / ip / c)."""
        key = (raw or "").strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown status: {raw!r}") from None


_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETE: "Complete",
}

_ALIASES = {
    "p": TaskStatus.PENDING,
    "pending": TaskStatus.PENDING,
    "ip": TaskStatus.IN_PROGRESS,
    "in_progress": TaskStatus.IN_PROGRESS,
    "in-progress": TaskStatus.IN_PROGRESS,
    "progress": TaskStatus.IN_PROGRESS,
    "c": TaskStatus.COMPLETE,
    "complete": TaskStatus.COMPLETE,
    "done": TaskStatus.COMPLETE,
}


@dataclass(frozen=True, slots=True)
class Task:
    """
    A persisted task.

    `id` and `created_at` are assigned by the store and never touched by the client.
    `due_date` is the normalized ISO date-time string the store returned.
    """

    id: str
    title: str
    description: str | None
    status: TaskStatus
    due_date: str | None
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Task:
        status_raw = row.get("status")
        try:
            status = TaskStatus(status_raw)
        except ValueError:
            raise ValueError(f"Row {row.get('id')!r} has invalid status {status_raw!r}") from None
        due = row.get("due_date") or None
        if due is not None:
            try:
                _due_day(str(due))
            except ValueError:
                raise ValueError(f"Row {row.get('id')!r} has invalid due_date {due!r}") from None
        return cls(
            id=str(row["id"]),
            title=str(row["title"]),
            description=row.get("description"),
            status=status,
            due_date=str(due) if due is not None else None,
            created_at=str(row["created_at"]),
        )

    def with_status(self, status: TaskStatus) -> Task:
        return replace(self, status=status)


@dataclass(slots=True)
class NewTaskInput:
    """Form state: raw text fields exactly as the user typed them."""

    title: str = ""
    description: str = ""
    due_date: str = ""  # plain calendar date, YYYY-MM-DD
    status: TaskStatus = TaskStatus.PENDING


@dataclass(frozen=True, slots=True)
class TaskCounts:
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    complete: int = 0


@dataclass(frozen=True, slots=True)
class StoreResult(Generic[T]):
    """Outcome of one data-access call: either data or an error, never an exception."""

    data: T | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str) -> StoreResult[T]:
        return cls(error=StoreError(message))


@dataclass(frozen=True, slots=True)
class StatusChange:
    """
    Result of TaskList.set_status.

    `previous` is the status captured before the optimistic update; a failed
    change is reverted to exactly this value.
    """

    task_id: str
    requested: TaskStatus
    previous: TaskStatus | None = None
    applied: bool = False
    error: StoreError | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.applied and self.error is None


def _due_day(due_date: str) -> date:
    return datetime.fromisoformat(due_date.strip()).date()


def is_overdue(task: Task, today: date | None = None) -> bool:
    """Incomplete task whose due date falls strictly before the current day."""
    if task.status == TaskStatus.COMPLETE or not task.due_date:
        return False
    if today is None:
        today = date.today()
    return _due_day(task.due_date) < today


def normalize_due_date(raw: str) -> str:
    """Turn a plain YYYY-MM-DD date into the stored UTC date-time form."""
    try:
        day = date.fromisoformat(raw.strip())
    except ValueError:
        raise ValidationError(f"Invalid due date: {raw!r} (expected YYYY-MM-DD)") from None
    return f"{day.isoformat()}T00:00:00.000Z"


def format_due_date(task: Task) -> str:
    if not task.due_date:
        return "-"
    return _due_day(task.due_date).isoformat()
