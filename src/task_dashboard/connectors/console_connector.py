# src/task_dashboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from .console_view import render_counts

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


async def run_console_loop(state: AppState) -> None:
    """
    Interactive shell around the dashboard.

    Input is read in a worker thread so background status updates keep running
    on the event loop while the prompt waits.
    """
    app_name = str(getattr(state.settings, "app_name", "task-dashboard"))
    logger.info("Console connector started.")

    await state.dashboard.start()
    _print_ts(f"[{app_name}] {render_counts(state.dashboard.counts)}")
    _print_ts("Type /list to see tasks, /help for commands, /exit to quit.\n")

    while True:
        try:
            line = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            # Bare text is a search shortcut.
            line = f"/search {line}"

        try:
            response = await command_registry.handle(state, line, emit=_print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            print(response, flush=True)

    logger.info("Console connector finished.")
