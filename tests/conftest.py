# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_dashboard.tasks.task_models import TaskStatus

from .fakes import FakeTaskRepo, RecordingNotifier, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console layer.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="test-dashboard",
        log_level="DEBUG",
        backend="sqlite",
        rest_url="",
        rest_api_key=None,
        rest_timeout_seconds=1.0,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        success_clear_seconds=0.01,
    )


@pytest.fixture()
def sample_tasks():
    return [
        make_task("t3", "Call vendor", status=TaskStatus.IN_PROGRESS,
                  description="Ask about the Q3 invoice", created_at="2025-01-03T00:00:00.000Z"),
        make_task("t2", "Write report", status=TaskStatus.PENDING,
                  created_at="2025-01-02T00:00:00.000Z"),
        make_task("t1", "Book flights", status=TaskStatus.COMPLETE,
                  description="Vendor conference", created_at="2025-01-01T00:00:00.000Z"),
    ]


@pytest.fixture()
def repo(sample_tasks) -> FakeTaskRepo:
    return FakeTaskRepo(sample_tasks)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
