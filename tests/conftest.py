# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_listview.cli.bootstrap import create_initial_state
from todo_listview.config import Settings
from todo_listview.core.state import AppState
from todo_listview.listview.filtering import DoneFilter
from todo_listview.listview.sorting import SortMask
from todo_listview.tasks.task_models import Priority
from todo_listview.tasks.task_store import TaskStore

from .fakes import FakeTaskRepo, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built directly (not from env) so unit tests stay isolated and deterministic.
    """
    return Settings(
        app_name="todoview-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        auto_progress=True,
        default_reminder_time=86400,
        show_list_name=False,
        default_filter=DoneFilter.ALL_TASKS,
        default_sort=SortMask(0),
    )


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def repo() -> FakeTaskRepo:
    """
    Mixed collection: two priorities, one done task, subtasks on the first.
    """
    return FakeTaskRepo(
        tasks=[
            make_task(1, name="Write report", priority=Priority.LOW, deadline=500.0,
                      subtasks=[("outline", True), ("draft", False)]),
            make_task(2, name="Pay rent", priority=Priority.HIGH, deadline=100.0),
            make_task(3, name="Call mom", priority=Priority.LOW, done=True),
            make_task(4, name="Fix bike", priority=Priority.HIGH, deadline=50.0),
        ]
    )


@pytest.fixture()
def state(settings: Settings, store: TaskStore) -> AppState:
    """AppState wired with a real SQLite store (its correctness is part of what we test)."""
    return create_initial_state(settings=settings, task_store=store)
