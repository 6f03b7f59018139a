# src/task_dashboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the dashboard components.

The components depend on Protocols instead of concrete implementations.
This keeps the backing store and the notification surface swappable and makes
testing easier.
"""

from typing import Any, Protocol

from ..tasks.task_models import StoreResult, Task, TaskStatus

TaskPayload = dict[str, Any]
# Insert payload: {"title", "description", "status", "due_date"}.


class TaskRepo(Protocol):
    """
    Data-access collaborator for the single `tasks` collection.

    Every call returns a StoreResult; store failures are reported as
    `result.error`, never raised.
    """

    async def list_tasks(self) -> StoreResult[list[Task]]:
        """All tasks, newest first (created_at descending)."""
        ...

    async def create_task(self, payload: TaskPayload) -> StoreResult[Task]:
        """Insert one row and return it with the store-assigned id and created_at."""
        ...

    async def update_task_status(self, task_id: str, status: TaskStatus) -> StoreResult[None]:
        ...


class Notifier(Protocol):
    """
    Toast-style side channel.

    Fire-and-forget: nothing is returned and implementations must not raise.
    """

    def loading(self, message: str) -> None: ...
    def success(self, message: str, description: str | None = None) -> None: ...
    def error(self, message: str, description: str | None = None) -> None: ...
