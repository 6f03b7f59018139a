# src/task_dashboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- picks the task store backend from settings,
- wires store + notifier into the Dashboard and AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.dashboard import Dashboard
from ..core.notify import ConsoleNotifier
from ..core.ports import Notifier, TaskRepo
from ..core.state import AppState
from ..tasks.rest_store import RestTaskStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> TaskRepo:
    if settings.backend == "rest":
        if not settings.rest_url or not settings.rest_api_key:
            raise ValueError(
                "backend=rest needs TASKDASH_REST_URL and TASKDASH_REST_API_KEY "
                "(or SUPABASE_URL / SUPABASE_ANON_KEY)"
            )
        return RestTaskStore(
            settings.rest_url,
            settings.rest_api_key,
            timeout_seconds=settings.rest_timeout_seconds,
        )

    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    return TaskStore(settings.tasks_db_path)


def create_initial_state(
    *,
    settings: Settings | None = None,
    store: TaskRepo | None = None,
    notifier: Notifier | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings/store injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    if store is None:
        store = create_store(settings)
    if notifier is None:
        notifier = ConsoleNotifier()

    dashboard = Dashboard(
        repo=store,
        notifier=notifier,
        success_clear_seconds=settings.success_clear_seconds,
    )
    logger.debug("State created backend=%s", settings.backend)
    return AppState(settings=settings, store=store, dashboard=dashboard)


async def close_state(state: AppState) -> None:
    """Best-effort shutdown: let in-flight updates settle, then close the store."""
    await state.drain()
    aclose = getattr(state.store, "aclose", None)
    if aclose is not None:
        try:
            await aclose()
        except Exception:
            logger.debug("Store close failed.", exc_info=True)
