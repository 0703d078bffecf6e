# src/todo_listview/listview/filtering.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import Task


class DoneFilter(StrEnum):
    ALL_TASKS = "all"
    COMPLETED_TASKS = "done"
    OPEN_TASKS = "open"

    @classmethod
    def parse(cls, raw: str | None) -> DoneFilter:
        if not raw:
            return cls.ALL_TASKS
        key = raw.strip().lower()
        aliases = {
            "all": cls.ALL_TASKS,
            "done": cls.COMPLETED_TASKS,
            "completed": cls.COMPLETED_TASKS,
            "open": cls.OPEN_TASKS,
            "todo": cls.OPEN_TASKS,
        }
        if key not in aliases:
            raise ValueError(f"unknown filter: {raw!r}")
        return aliases[key]


@dataclass(frozen=True, slots=True)
class FilterCriterion:
    done_filter: DoneFilter = DoneFilter.ALL_TASKS
    query: str | None = None


def passes_done_filter(task: Task, done_filter: DoneFilter) -> bool:
    if done_filter is DoneFilter.COMPLETED_TASKS:
        return task.done
    if done_filter is DoneFilter.OPEN_TASKS:
        return not task.done
    return True


def filter_tasks(raw: Iterable[Task], criterion: FilterCriterion) -> list[Task]:
    """Return the tasks passing both the done selector and the query, in input order."""
    return [
        task
        for task in raw
        if passes_done_filter(task, criterion.done_filter) and task.matches_query(criterion.query)
    ]
