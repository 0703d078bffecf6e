# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODOVIEW_APP_NAME": "App display name (default: todoview).",
    "TODOVIEW_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TODOVIEW_DATA_DIR": "Local data directory (default: .local/todoview).",
    "TODOVIEW_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # Preferences
    "TODOVIEW_AUTO_PROGRESS": "Derive task progress from done subtasks (true/false, default: false).",
    "TODOVIEW_DEFAULT_REMINDER_TIME": (
        "Seconds before a deadline at which a task counts as due soon (default: 86400)."
    ),
    "TODOVIEW_SHOW_LIST_NAME": "Show the owning list name next to each task (true/false).",
    # Initial view
    "TODOVIEW_DEFAULT_FILTER": "all | done | open (default: all).",
    "TODOVIEW_DEFAULT_SORT": "Comma separated: priority, deadline (default: none).",
}
