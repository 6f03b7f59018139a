# src/task_dashboard/tasks/task_list.py

from __future__ import annotations

"""
Task list component.

Holds the in-memory collection of tasks and:
- loads it from the store (on mount and on every refresh-key change),
- derives aggregate counts and reports them to an observer,
- filters it by a free-text query (read-only view),
- applies status changes optimistically, reverting on store failure.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from ..core.ports import Notifier, TaskRepo
from .task_models import StatusChange, Task, TaskCounts, TaskStatus

logger = logging.getLogger(__name__)

CountsObserver = Callable[[TaskCounts], None]


def count_tasks(tasks: Iterable[Task]) -> TaskCounts:
    pending = in_progress = complete = 0
    for t in tasks:
        if t.status == TaskStatus.PENDING:
            pending += 1
        elif t.status == TaskStatus.IN_PROGRESS:
            in_progress += 1
        elif t.status == TaskStatus.COMPLETE:
            complete += 1
    return TaskCounts(
        total=pending + in_progress + complete,
        pending=pending,
        in_progress=in_progress,
        complete=complete,
    )


def filter_tasks(tasks: Sequence[Task], query: str | None) -> list[Task]:
    """
    Visible subsequence for `query`.

    Blank/whitespace-only query -> every task, order unchanged.
    Otherwise -> tasks whose title or description contains the query (case-insensitive).
    """
    if not query or not query.strip():
        return list(tasks)
    q = query.lower()
    return [
        t
        for t in tasks
        if q in t.title.lower() or (t.description is not None and q in t.description.lower())
    ]


def replace_status(tasks: Sequence[Task], task_id: str, status: TaskStatus) -> list[Task]:
    return [t.with_status(status) if t.id == task_id else t for t in tasks]


class TaskList:
    def __init__(
        self,
        repo: TaskRepo,
        notifier: Notifier,
        *,
        initial: Sequence[Task] | None = None,
        query: str | None = None,
        on_counts_change: CountsObserver | None = None,
    ) -> None:
        self._repo = repo
        self._notifier = notifier
        self._on_counts_change = on_counts_change

        self._initial_supplied = bool(initial)
        self._tasks: list[Task] = list(initial or [])
        self._reported_counts: TaskCounts | None = None

        # None -> the list owns its query (set_query); str -> controlled by the page.
        self.controlled_query: str | None = query
        self._internal_query = ""

        self.loading = False
        self.error: str | None = None

        self._refresh_key: int | None = None
        self._load_generation = 0

    # ---- derived state ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def query(self) -> str:
        return self.controlled_query if self.controlled_query is not None else self._internal_query

    def set_query(self, query: str) -> None:
        self._internal_query = query

    @property
    def counts(self) -> TaskCounts:
        return count_tasks(self._tasks)

    @property
    def visible(self) -> list[Task]:
        return filter_tasks(self._tasks, self.query)

    @property
    def show_loading_indicator(self) -> bool:
        # Only when empty, so refreshing a populated list does not flicker.
        return self.loading and not self._tasks

    @property
    def empty_message(self) -> str | None:
        if self.loading:
            return None
        if not self._tasks:
            return "No tasks yet - create your first task."
        if not self.visible:
            return f"No matching tasks for “{self.query}”."
        return None

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ---- collection updates ----

    def _set_tasks(self, tasks: list[Task]) -> None:
        self._tasks = tasks
        self._report_counts()

    def _report_counts(self) -> None:
        counts = self.counts
        if counts == self._reported_counts:
            return
        self._reported_counts = counts
        if self._on_counts_change is not None:
            self._on_counts_change(counts)

    # ---- load ----

    async def mount(self, refresh_key: int | None = None) -> None:
        self._refresh_key = refresh_key
        self._report_counts()
        if not self._initial_supplied:
            await self.load()

    async def refresh(self, refresh_key: int) -> None:
        if refresh_key == self._refresh_key:
            return
        self._refresh_key = refresh_key
        await self.load()

    async def load(self) -> None:
        """
        Fetch every task once.

        On failure the previously held collection is kept and the error is surfaced.
        A response that arrives after a newer load was started is discarded.
        """
        self._load_generation += 1
        generation = self._load_generation

        self.loading = True
        self.error = None
        result = await self._repo.list_tasks()

        if generation != self._load_generation:
            logger.debug("Discarding stale task load generation=%s", generation)
            return

        self.loading = False
        if result.error is not None:
            self.error = result.error.message
            logger.warning("Task load failed: %s", result.error.message)
            return

        tasks = list(result.data or [])
        self._set_tasks(tasks)
        logger.debug("Loaded %d tasks", len(tasks))

    # ---- status change ----

    async def set_status(self, task_id: str, status: TaskStatus) -> StatusChange:
        """
        Optimistically move one task to `status`.

        Unknown id or unchanged status -> no-op without a store call.
        On store failure the task is reverted to the status captured here,
        not to whatever the collection holds by then.
        """
        current = self.get(task_id)
        if current is None or current.status == status:
            return StatusChange(task_id=task_id, requested=status)

        previous = current.status
        self._set_tasks(replace_status(self._tasks, task_id, status))
        self._notifier.loading("Updating status…")

        result = await self._repo.update_task_status(task_id, status)
        change = StatusChange(
            task_id=task_id,
            requested=status,
            previous=previous,
            applied=True,
            error=result.error,
        )

        if result.error is None:
            logger.info("Task %s status %s -> %s", task_id, previous.value, status.value)
            self._notifier.success("Status updated")
            return change

        self._revert(task_id, status, previous, result.error.message)
        return change

    def _revert(self, task_id: str, requested: TaskStatus, previous: TaskStatus, message: str) -> None:
        self._set_tasks(replace_status(self._tasks, task_id, previous))
        message = message or "Failed to update status"
        self.error = message
        logger.warning(
            "Task %s status update to %s failed, reverted to %s: %s",
            task_id,
            requested.value,
            previous.value,
            message,
        )
        self._notifier.error(message)
