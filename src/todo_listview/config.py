# src/todo_listview/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- The list view never reads preferences itself: Settings.view_config() hands
  it an explicit ViewConfig.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .listview.adapter import ViewConfig
from .listview.filtering import DoneFilter
from .listview.sorting import SortMask

ENV_PREFIX = "TODOVIEW"

ONE_DAY_SECONDS = 24 * 60 * 60


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides the real environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_filter(name: str, default: DoneFilter) -> DoneFilter:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return DoneFilter.parse(raw)
    except ValueError:
        return default


def _env_sort(name: str, default: SortMask) -> SortMask:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return SortMask.parse(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- Preferences ----
    auto_progress: bool
    default_reminder_time: int
    show_list_name: bool

    # ---- Initial view ----
    default_filter: DoneFilter
    default_sort: SortMask

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todoview") or "todoview"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todoview"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        auto_progress = _env_bool(_k("AUTO_PROGRESS"), False)
        default_reminder_time = max(0, _env_int(_k("DEFAULT_REMINDER_TIME"), ONE_DAY_SECONDS))
        show_list_name = _env_bool(_k("SHOW_LIST_NAME"), False)

        default_filter = _env_filter(_k("DEFAULT_FILTER"), DoneFilter.ALL_TASKS)
        default_sort = _env_sort(_k("DEFAULT_SORT"), SortMask(0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            auto_progress=auto_progress,
            default_reminder_time=default_reminder_time,
            show_list_name=show_list_name,
            default_filter=default_filter,
            default_sort=default_sort,
        )

    def view_config(self) -> ViewConfig:
        return ViewConfig(
            auto_progress=self.auto_progress,
            default_reminder_time=self.default_reminder_time,
            show_list_name=self.show_list_name,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
