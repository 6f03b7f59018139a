# src/task_dashboard/tasks/task_form.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from ..core.ports import Notifier, TaskPayload, TaskRepo
from ..errors import ValidationError
from .task_models import NewTaskInput, Task, TaskStatus, normalize_due_date

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Task added successfully"


def build_payload(form: NewTaskInput) -> TaskPayload:
    """
    Validate and normalize form input into an insert payload.

    - title: trimmed, must be non-empty
    - description: trimmed, empty -> None
    - status: defaults to pending
    - due_date: YYYY-MM-DD -> normalized UTC date-time, empty -> None
    """
    title = (form.title or "").strip()
    if not title:
        raise ValidationError("Title is required")

    description = (form.description or "").strip() or None
    due_raw = (form.due_date or "").strip()
    return {
        "title": title,
        "description": description,
        "status": (form.status or TaskStatus.PENDING).value,
        "due_date": normalize_due_date(due_raw) if due_raw else None,
    }


class TaskForm:
    """Collects one new task, submits it and reports the outcome."""

    def __init__(
        self,
        repo: TaskRepo,
        notifier: Notifier,
        *,
        on_created: Callable[[Task], object] | None = None,
        success_clear_seconds: float = 3.0,
    ) -> None:
        self._repo = repo
        self._notifier = notifier
        self._on_created = on_created
        self._success_clear_seconds = success_clear_seconds
        self._success_timer: asyncio.TimerHandle | None = None

        self.form = NewTaskInput()
        self.loading = False
        self.error: str | None = None
        self.success: str | None = None

    def update(self, **fields: object) -> None:
        """Edit form fields by name (title / description / due_date / status)."""
        self.form = replace(self.form, **fields)  # type: ignore[arg-type]

    def reset(self) -> None:
        self.form = NewTaskInput()

    async def submit(self) -> Task | None:
        """
        Submit the current form.

        Returns the created task, or None on validation/store failure.
        On failure the entered values are kept so the user can retry.
        """
        self.error = None
        self.success = None

        try:
            payload = build_payload(self.form)
        except ValidationError as e:
            self.error = e.message
            self._notifier.error(e.message)
            return None

        self.loading = True
        try:
            result = await self._repo.create_task(payload)
        finally:
            self.loading = False

        if result.error is not None:
            self.error = result.error.message
            logger.warning("Task create failed title=%r: %s", payload["title"], result.error.message)
            self._notifier.error("Failed to add task", description=result.error.message)
            return None

        task = result.data
        if task is None:
            return None

        logger.info("Task created id=%s status=%s", task.id, task.status.value)
        if self._on_created is not None:
            self._on_created(task)
        self.reset()
        self._show_success()
        self._notifier.success("Task added", description=payload["title"])
        return task

    def _show_success(self) -> None:
        self.success = SUCCESS_MESSAGE
        if self._success_timer is not None:
            self._success_timer.cancel()
        loop = asyncio.get_running_loop()
        self._success_timer = loop.call_later(self._success_clear_seconds, self._clear_success)

    def _clear_success(self) -> None:
        self.success = None
        self._success_timer = None
