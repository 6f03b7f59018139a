# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets; keep the REST API key in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKDASH_APP_NAME": "App display name (default: task-dashboard).",
    "TASKDASH_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Store
    "TASKDASH_BACKEND": "Task store: sqlite (local file, default) or rest (hosted PostgREST/Supabase).",
    "TASKDASH_REST_URL": "Base URL of the hosted project, e.g. https://<ref>.supabase.co (fallback: SUPABASE_URL).",
    "TASKDASH_REST_API_KEY": "API key sent as apikey + bearer token (fallback: SUPABASE_ANON_KEY).",
    "TASKDASH_REST_TIMEOUT_SECONDS": "HTTP timeout for the hosted store (default: 10).",
    # Paths (gitignored)
    "TASKDASH_DATA_DIR": "Local data directory for logs and SQLite (default: .local/task_dashboard).",
    "TASKDASH_TASKS_DB_PATH": "SQLite path (default: <data_dir>/tasks.sqlite3).",
    # UI
    "TASKDASH_SUCCESS_CLEAR_SECONDS": "How long the form's success message stays visible (default: 3).",
}
