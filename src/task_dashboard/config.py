# src/task_dashboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the REST key is only needed for backend=rest).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDASH"
BACKENDS = ("sqlite", "rest")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Store ----
    backend: str
    rest_url: str
    rest_api_key: str | None
    rest_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- UI ----
    success_clear_seconds: float

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "task-dashboard")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        backend = _env(_k("BACKEND"), "sqlite").strip().lower()
        if backend not in BACKENDS:
            raise ValueError(f"{_k('BACKEND')} must be one of {', '.join(BACKENDS)}, got {backend!r}")

        # Accept the usual Supabase variable names as a fallback.
        rest_url = (_first_env(_k("REST_URL"), "SUPABASE_URL", default="") or "").strip()
        rest_api_key = _first_env(_k("REST_API_KEY"), "SUPABASE_ANON_KEY", default=None)
        rest_timeout_seconds = _env_float(_k("REST_TIMEOUT_SECONDS"), 10.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_dashboard"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        success_clear_seconds = _env_float(_k("SUCCESS_CLEAR_SECONDS"), 3.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            backend=backend,
            rest_url=rest_url,
            rest_api_key=rest_api_key,
            rest_timeout_seconds=max(0.1, rest_timeout_seconds),
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            success_clear_seconds=max(0.0, success_clear_seconds),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(override=False)
    return Settings.from_env()
