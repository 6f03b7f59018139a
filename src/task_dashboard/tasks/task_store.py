# src/task_dashboard/tasks/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..core.ports import TaskPayload
from .task_models import TASK_COLUMNS, StoreResult, Task, TaskStatus

logger = logging.getLogger(__name__)

_SELECT = ", ".join(TASK_COLUMNS)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TaskStore:
    """
    SQLite task store implementing the TaskRepo port.

    The schema mirrors the hosted `tasks` table:
    - id is an opaque uuid assigned on insert
    - created_at is assigned on insert and is the only sort key
    - status is constrained to the three lifecycle values

    Thread-safety:
    - each call opens its own SQLite connection
    - blocking work runs in a worker thread so the event loop never stalls
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s", self._db_path)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL CHECK (length(trim(title)) > 0),
                    description TEXT,
                    status TEXT NOT NULL DEFAULT 'pending'
                        CHECK (status IN ('pending','in_progress','complete')),
                    due_date TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")
            conn.commit()
        finally:
            conn.close()

    # ---- blocking implementations ----

    def _select_all(self) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                f"SELECT {_SELECT} FROM tasks ORDER BY created_at DESC, rowid DESC"
            )
            return [Task.from_row(dict(r)) for r in cur.fetchall()]
        finally:
            conn.close()

    def _insert(self, payload: TaskPayload) -> Task:
        row: dict[str, Any] = {
            "id": uuid.uuid4().hex,
            "title": payload["title"],
            "description": payload.get("description"),
            "status": payload.get("status") or TaskStatus.PENDING.value,
            "due_date": payload.get("due_date"),
            "created_at": _now_iso(),
        }
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tasks(id, title, description, status, due_date, created_at)
                VALUES (:id, :title, :description, :status, :due_date, :created_at)
                """,
                row,
            )
            conn.commit()
            cur = conn.execute(f"SELECT {_SELECT} FROM tasks WHERE id = ?", (row["id"],))
            stored = cur.fetchone()
            if stored is None:
                raise sqlite3.DatabaseError("Inserted task was not returned")
            task = Task.from_row(dict(stored))
            logger.debug("Task added id=%s status=%s due=%s", task.id, task.status.value, task.due_date)
            return task
        finally:
            conn.close()

    def _update_status(self, task_id: str, status: TaskStatus) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ?",
                (status.value, task_id),
            )
            conn.commit()
            return cur.rowcount
        finally:
            conn.close()

    # ---- TaskRepo ----

    async def list_tasks(self) -> StoreResult[list[Task]]:
        try:
            tasks = await asyncio.to_thread(self._select_all)
        except (sqlite3.Error, ValueError) as e:
            logger.warning("list_tasks failed: %s", e)
            return StoreResult.failure(str(e))
        return StoreResult(data=tasks)

    async def create_task(self, payload: TaskPayload) -> StoreResult[Task]:
        try:
            task = await asyncio.to_thread(self._insert, payload)
        except (sqlite3.Error, ValueError) as e:
            logger.warning("create_task failed: %s", e)
            return StoreResult.failure(str(e))
        return StoreResult(data=task)

    async def update_task_status(self, task_id: str, status: TaskStatus) -> StoreResult[None]:
        try:
            changed = await asyncio.to_thread(self._update_status, task_id, status)
        except sqlite3.Error as e:
            logger.warning("update_task_status failed id=%s: %s", task_id, e)
            return StoreResult.failure(str(e))
        if changed != 1:
            return StoreResult.failure(f"Task {task_id} not found")
        return StoreResult()
