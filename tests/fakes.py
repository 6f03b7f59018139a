# tests/fakes.py

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Any

from task_dashboard.core.ports import TaskPayload
from task_dashboard.tasks.task_models import StoreResult, Task, TaskStatus


def make_task(
    task_id: str,
    title: str = "Task",
    *,
    status: TaskStatus = TaskStatus.PENDING,
    description: str | None = None,
    due_date: str | None = None,
    created_at: str = "2025-01-01T00:00:00.000Z",
) -> Task:
    return Task(
        id=task_id,
        title=title,
        description=description,
        status=status,
        due_date=due_date,
        created_at=created_at,
    )


class FakeTaskRepo:
    """
    In-memory TaskRepo for component tests.

    - Counts every call for assertions
    - Failures are injected per operation (message string)
    - `update_gate` holds status updates in flight until set
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.list_calls = 0
        self.create_calls: list[TaskPayload] = []
        self.update_calls: list[tuple[str, TaskStatus]] = []

        self.list_error: str | None = None
        self.create_error: str | None = None
        self.update_errors: dict[str, str] = {}
        self.update_gate: asyncio.Event | None = None

        self._ids = itertools.count(1)

    async def list_tasks(self) -> StoreResult[list[Task]]:
        self.list_calls += 1
        await asyncio.sleep(0)
        if self.list_error is not None:
            return StoreResult.failure(self.list_error)
        return StoreResult(data=sorted(self.tasks, key=lambda t: t.created_at, reverse=True))

    async def create_task(self, payload: TaskPayload) -> StoreResult[Task]:
        self.create_calls.append(dict(payload))
        await asyncio.sleep(0)
        if self.create_error is not None:
            return StoreResult.failure(self.create_error)
        n = next(self._ids)
        task = Task.from_row(
            {**payload, "id": f"new-{n}", "created_at": f"2030-01-01T00:00:{n:02d}.000Z"}
        )
        self.tasks.append(task)
        return StoreResult(data=task)

    async def update_task_status(self, task_id: str, status: TaskStatus) -> StoreResult[None]:
        self.update_calls.append((task_id, status))
        if self.update_gate is not None:
            await self.update_gate.wait()
        else:
            await asyncio.sleep(0)
        if task_id in self.update_errors:
            return StoreResult.failure(self.update_errors[task_id])
        self.tasks = [t.with_status(status) if t.id == task_id else t for t in self.tasks]
        return StoreResult()


@dataclass(slots=True)
class Toast:
    kind: str
    message: str
    description: str | None = None


@dataclass(slots=True)
class RecordingNotifier:
    events: list[Toast] = field(default_factory=list)

    def loading(self, message: str) -> None:
        self.events.append(Toast("loading", message))

    def success(self, message: str, description: str | None = None) -> None:
        self.events.append(Toast("success", message, description))

    def error(self, message: str, description: str | None = None) -> None:
        self.events.append(Toast("error", message, description))

    def kinds(self) -> list[str]:
        return [e.kind for e in self.events]

    def last(self, kind: str) -> Any:
        return next(e for e in reversed(self.events) if e.kind == kind)
