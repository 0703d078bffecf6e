# src/todo_listview/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the list view.

The view depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Priority, Subtask, Task


class TaskRepo(Protocol):
    """
    Storage collaborator.

    list_tasks() returns the current raw collection in stored order, each task
    owning its subtasks. The view never caches anything it did not get here.
    """

    def list_tasks(self, list_id: int | None = None) -> list[Task]: ...

    def save_task(self, task: Task) -> None: ...
    def save_subtask(self, subtask: Subtask) -> None: ...

    def add_subtask(self, task_id: int, name: str, *, done: bool = False) -> Subtask: ...

    def add_task(
            self,
            *,
            name: str,
            description: str = "",
            priority: Priority = Priority.MEDIUM,
            deadline: float | None = None,
            list_id: int | None = None,
            progress: int = 0,
    ) -> Task: ...
