# tests/test_task_models.py

from __future__ import annotations

from datetime import date, timedelta

import pytest

from task_dashboard.errors import ValidationError
from task_dashboard.tasks.task_models import (
    Task,
    TaskStatus,
    format_due_date,
    is_overdue,
    normalize_due_date,
)

from .fakes import make_task

TODAY = date(2025, 6, 15)


def _iso(day: date) -> str:
    return f"{day.isoformat()}T00:00:00.000Z"


def test_pending_task_due_yesterday_is_overdue() -> None:
    task = make_task("a", status=TaskStatus.PENDING, due_date=_iso(TODAY - timedelta(days=1)))
    assert is_overdue(task, TODAY)


def test_complete_task_is_never_overdue() -> None:
    task = make_task("a", status=TaskStatus.COMPLETE, due_date=_iso(TODAY - timedelta(days=1)))
    assert not is_overdue(task, TODAY)


@pytest.mark.parametrize("status", list(TaskStatus))
def test_task_without_due_date_is_never_overdue(status: TaskStatus) -> None:
    assert not is_overdue(make_task("a", status=status, due_date=None), TODAY)


def test_due_today_is_not_overdue() -> None:
    task = make_task("a", status=TaskStatus.IN_PROGRESS, due_date=_iso(TODAY))
    assert not is_overdue(task, TODAY)


def test_overdue_uses_date_portion_only() -> None:
    task = make_task("a", due_date="2025-06-14T23:59:59.999Z")
    assert is_overdue(task, TODAY)
    assert not is_overdue(task, date(2025, 6, 14))


def test_normalize_due_date() -> None:
    assert normalize_due_date("2025-01-01") == "2025-01-01T00:00:00.000Z"
    assert normalize_due_date(" 2024-02-29 ") == "2024-02-29T00:00:00.000Z"


def test_normalize_due_date_rejects_garbage() -> None:
    with pytest.raises(ValidationError):
        normalize_due_date("next tuesday")


def test_status_parse_accepts_aliases() -> None:
    assert TaskStatus.parse("ip") is TaskStatus.IN_PROGRESS
    assert TaskStatus.parse("Done") is TaskStatus.COMPLETE
    assert TaskStatus.parse("pending") is TaskStatus.PENDING
    with pytest.raises(ValueError):
        TaskStatus.parse("archived")


def test_from_row_rejects_unknown_status() -> None:
    row = {"id": 1, "title": "x", "description": None, "status": "blocked",
           "due_date": None, "created_at": "2025-01-01T00:00:00Z"}
    with pytest.raises(ValueError):
        Task.from_row(row)


def test_from_row_rejects_unparseable_due_date() -> None:
    row = {"id": 1, "title": "x", "description": None, "status": "pending",
           "due_date": "next tuesday", "created_at": "2025-01-01T00:00:00Z"}
    with pytest.raises(ValueError):
        Task.from_row(row)
    assert Task.from_row({**row, "due_date": "2025-01-01T00:00:00Z"}).due_date == "2025-01-01T00:00:00Z"


def test_from_row_keeps_absent_description_distinct_from_empty() -> None:
    base = {"id": 7, "title": "x", "status": "pending", "due_date": None,
            "created_at": "2025-01-01T00:00:00Z"}
    assert Task.from_row({**base, "description": None}).description is None
    assert Task.from_row({**base, "description": ""}).description == ""
    assert Task.from_row({**base, "description": None}).id == "7"


def test_format_due_date() -> None:
    assert format_due_date(make_task("a")) == "-"
    assert format_due_date(make_task("a", due_date="2025-01-01T00:00:00.000Z")) == "2025-01-01"
