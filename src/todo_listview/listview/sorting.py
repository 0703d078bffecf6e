# src/todo_listview/listview/sorting.py

"""
Sort engine.

Sort criteria are a bit set: priority is always the primary key when present,
deadline breaks priority ties (or is the only key). With no criteria the tasks
keep their original list order.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag
from typing import Any

from ..tasks.task_models import Task


class SortMask(IntFlag):
    BY_PRIORITY = 0x1
    BY_DEADLINE = 0x2

    @classmethod
    def parse(cls, raw: str | Iterable[str] | None) -> SortMask:
        """Parse "priority,deadline" (or an iterable of names) into a mask."""
        if raw is None:
            return cls(0)
        names = raw.replace(",", " ").split() if isinstance(raw, str) else list(raw)
        mask = cls(0)
        for name in names:
            key = name.strip().lower()
            if key in ("", "none"):
                continue
            if key in ("priority", "prio"):
                mask |= cls.BY_PRIORITY
            elif key in ("deadline", "due"):
                mask |= cls.BY_DEADLINE
            else:
                raise ValueError(f"unknown sort condition: {name!r}")
        return mask


def add_sort_condition(mask: SortMask, condition: SortMask) -> SortMask:
    return SortMask(mask | condition)


def remove_sort_condition(mask: SortMask, condition: SortMask) -> SortMask:
    return SortMask(mask & ~condition)


def is_priority_grouping(mask: SortMask) -> bool:
    return bool(mask & SortMask.BY_PRIORITY)


def deadline_key(task: Task) -> tuple[bool, float]:
    # (False, ts) < (True, 0.0): tasks without deadline go last.
    if task.deadline is None:
        return (True, 0.0)
    return (False, float(task.deadline))


def _sort_key(mask: SortMask):
    by_priority = bool(mask & SortMask.BY_PRIORITY)
    by_deadline = bool(mask & SortMask.BY_DEADLINE)

    if by_priority and by_deadline:

        def key(task: Task) -> Any:
            return (task.priority.rank, deadline_key(task))

    elif by_priority:

        def key(task: Task) -> Any:
            return task.priority.rank

    elif by_deadline:
        key = deadline_key
    else:

        def key(task: Task) -> Any:
            return task.list_position

    return key


def sort_tasks(filtered: Iterable[Task], mask: SortMask) -> list[Task]:
    """Return a new list ordered by the active criteria; ties keep input order."""
    return sorted(filtered, key=_sort_key(mask))
