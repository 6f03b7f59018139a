# src/task_dashboard/core/notify.py

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _join(message: str, description: str | None) -> str:
    return f"{message}: {description}" if description else message


class ConsoleNotifier:
    """Prints one timestamped line per toast event."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _emit(self, tag: str, text: str) -> None:
        stream = self._stream or sys.stdout
        try:
            print(f"[{_ts_local()}] [{tag}] {text}", file=stream, flush=True)
        except (OSError, ValueError):
            logger.debug("Toast dropped: %s", text, exc_info=True)

    def loading(self, message: str) -> None:
        self._emit("..", message)

    def success(self, message: str, description: str | None = None) -> None:
        self._emit("OK", _join(message, description))

    def error(self, message: str, description: str | None = None) -> None:
        self._emit("ERR", _join(message, description))

