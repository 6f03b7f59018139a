# src/task_dashboard/tasks/rest_store.py

from __future__ import annotations

"""
Hosted task store (PostgREST / Supabase REST API).

One HTTP request per call:
- list:   GET   /rest/v1/tasks?select=...&order=created_at.desc
- create: POST  /rest/v1/tasks   (Prefer: return=representation)
- update: PATCH /rest/v1/tasks?id=eq.<id>

Transport errors and non-2xx responses are reported as StoreError with the
backend's message; timeouts belong to the httpx client.
"""

import logging
from typing import Any

import httpx

from ..core.ports import TaskPayload
from .task_models import TASK_COLUMNS, StoreResult, Task, TaskStatus

logger = logging.getLogger(__name__)

_SELECT = ",".join(TASK_COLUMNS)


def _error_message(resp: httpx.Response) -> str:
    """PostgREST puts a human-readable message in the JSON body; fall back to the status line."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error_description", "error", "hint"):
            val = body.get(key)
            if isinstance(val, str) and val.strip():
                return val
    return f"HTTP {resp.status_code} {resp.reason_phrase}".strip()


class RestTaskStore:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        table: str = "tasks",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self._path = f"/rest/v1/{table}"
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )
        logger.info("RestTaskStore ready url=%s table=%s", base_url, table)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, **kwargs: Any) -> httpx.Response | str:
        """Return the response on 2xx, or an error message."""
        try:
            resp = await self._client.request(method, self._path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, self._path, e)
            return str(e) or e.__class__.__name__
        if resp.is_success:
            return resp
        message = _error_message(resp)
        logger.warning("%s %s -> %s: %s", method, self._path, resp.status_code, message)
        return message

    async def list_tasks(self) -> StoreResult[list[Task]]:
        resp = await self._request(
            "GET",
            params={"select": _SELECT, "order": "created_at.desc"},
        )
        if isinstance(resp, str):
            return StoreResult.failure(resp)
        try:
            rows = resp.json()
            if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
                raise ValueError(f"expected a list of rows, got {type(rows).__name__}")
            tasks = [Task.from_row(r) for r in rows]
        except (ValueError, TypeError, KeyError) as e:
            return StoreResult.failure(f"Malformed task list: {e}")
        return StoreResult(data=tasks)

    async def create_task(self, payload: TaskPayload) -> StoreResult[Task]:
        resp = await self._request(
            "POST",
            params={"select": _SELECT},
            json=payload,
            headers={"Prefer": "return=representation"},
        )
        if isinstance(resp, str):
            return StoreResult.failure(resp)
        try:
            body = resp.json()
            row = body[0] if isinstance(body, list) else body
            if not isinstance(row, dict):
                raise ValueError(f"expected a row, got {type(row).__name__}")
            task = Task.from_row(row)
        except (ValueError, TypeError, KeyError, IndexError) as e:
            return StoreResult.failure(f"Malformed insert response: {e}")
        logger.debug("Task added id=%s status=%s", task.id, task.status.value)
        return StoreResult(data=task)

    async def update_task_status(self, task_id: str, status: TaskStatus) -> StoreResult[None]:
        resp = await self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            json={"status": status.value},
            headers={"Prefer": "return=minimal"},
        )
        if isinstance(resp, str):
            return StoreResult.failure(resp)
        return StoreResult()
