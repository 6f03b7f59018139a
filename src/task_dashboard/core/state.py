# src/task_dashboard/core/state.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

from .dashboard import Dashboard
from .ports import TaskRepo

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object
    store: TaskRepo
    dashboard: Dashboard

    background: set[asyncio.Task[Any]] = field(default_factory=set)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task[Any]:
        """
        Run `coro` on the loop without awaiting it.

        The task is referenced until it finishes so it is not garbage collected
        mid-flight; crashes are logged instead of lost.
        """
        task = asyncio.create_task(coro, name=name)
        self.background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    def _on_background_done(self, task: asyncio.Task[Any]) -> None:
        self.background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task %s crashed", task.get_name(), exc_info=exc)

    async def drain(self) -> None:
        """Wait for in-flight background work (status updates) before shutdown."""
        if self.background:
            await asyncio.gather(*list(self.background), return_exceptions=True)
