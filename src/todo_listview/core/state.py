# src/todo_listview/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..listview.adapter import TaskListAdapter, TaskSnapshot
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings are stored on the state for easy access in command handlers.
    settings: object

    task_store: TaskRepo
    adapter: TaskListAdapter

    # Last done-toggle, for /undo.
    last_snapshot: TaskSnapshot | None = None
