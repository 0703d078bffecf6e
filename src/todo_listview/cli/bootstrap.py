# src/todo_listview/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite store and the list adapter into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..listview.adapter import TaskListAdapter
from ..listview.filtering import FilterCriterion
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, task_store=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if task_store is None:
        task_store = TaskStore(settings.tasks_db_path)

    adapter = TaskListAdapter(
        task_store,
        settings.view_config(),
        criterion=FilterCriterion(done_filter=settings.default_filter),
        sort_mask=settings.default_sort,
    )
    logger.info(
        "List view ready: %d tasks, %d rows",
        len(adapter.raw_tasks),
        adapter.total_group_rows(),
    )
    return AppState(settings=settings, task_store=task_store, adapter=adapter)
