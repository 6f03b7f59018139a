# src/task_dashboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console shell on one asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import close_state, create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run() -> None:
    state = create_initial_state(settings=get_settings())
    try:
        await run_console_loop(state)
    finally:
        await close_state(state)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (backend=%s)...", settings.app_name, settings.backend)
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass
    logger.info("Bye.")


if __name__ == "__main__":
    main()
