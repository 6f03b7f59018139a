# src/task_dashboard/core/dashboard.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..tasks.task_form import TaskForm
from ..tasks.task_list import TaskList
from ..tasks.task_models import Task, TaskCounts
from .ports import Notifier, TaskRepo

logger = logging.getLogger(__name__)


@dataclass
class Dashboard:
    """
    Page state: wires the search query and refresh key between form and list.

    The list runs in controlled-query mode and reports counts back here;
    the page owns the aggregate display.
    """

    repo: TaskRepo
    notifier: Notifier
    success_clear_seconds: float = 3.0

    query: str = ""
    refresh_key: int = 0
    counts: TaskCounts = field(default_factory=TaskCounts)
    add_open: bool = False

    task_list: TaskList = field(init=False)
    task_form: TaskForm = field(init=False)

    def __post_init__(self) -> None:
        self.task_list = TaskList(
            self.repo,
            self.notifier,
            query=self.query,
            on_counts_change=self.set_counts,
        )
        self.task_form = TaskForm(
            self.repo,
            self.notifier,
            on_created=self.handle_created,
            success_clear_seconds=self.success_clear_seconds,
        )

    async def start(self) -> None:
        await self.task_list.mount(self.refresh_key)

    def set_counts(self, counts: TaskCounts) -> None:
        self.counts = counts

    def set_query(self, query: str) -> None:
        self.query = query
        self.task_list.controlled_query = query

    def handle_created(self, task: Task) -> None:
        logger.debug("Created task %s; bumping refresh key", task.id)
        self.refresh_key += 1
        self.add_open = False

    async def refresh(self, *, bump: bool = False) -> None:
        if bump:
            self.refresh_key += 1
        await self.task_list.refresh(self.refresh_key)

    async def submit_form(self) -> Task | None:
        task = await self.task_form.submit()
        if task is not None:
            await self.refresh()
        return task
