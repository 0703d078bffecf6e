# src/todo_listview/listview/layout.py

"""
Row layout of the two-level task list.

A ListLayout is the result of one full filter -> sort -> grouping pass. It is
immutable and answers every row question the renderer asks:

- group rows: tasks, plus priority dividers when grouping is active
- child rows under a task: description (0), subtasks (1..N), "add subtask" (N+1)

Stale row indices are expected (a render may race a recompute), so lookups
return None or a fallback instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from ..tasks.task_models import Priority, Subtask, Task
from .filtering import FilterCriterion, filter_tasks
from .grouping import DividerRow, Row, TaskRow, build_rows, compute_dividers
from .sorting import SortMask, is_priority_grouping, sort_tasks

logger = logging.getLogger(__name__)

UNKNOWN_PRIORITY_LABEL = "Unknown priority"


class GroupRowType(StrEnum):
    TASK_ROW = "task"
    PRIORITY_DIVIDER_ROW = "priority_divider"


class ChildRowType(StrEnum):
    DESCRIPTION_ROW = "description"
    SUBTASK_ROW = "subtask"
    ADD_SUBTASK_ROW = "add_subtask"


@dataclass(frozen=True, slots=True)
class ListLayout:
    tasks: tuple[Task, ...] = ()
    rows: tuple[Row, ...] = ()
    dividers: Mapping[Priority, int] = field(default_factory=lambda: MappingProxyType({}))
    grouping: bool = False

    # ---- group rows ----

    def total_group_rows(self) -> int:
        return len(self.rows)

    def _row(self, row: int) -> Row | None:
        if 0 <= row < len(self.rows):
            return self.rows[row]
        return None

    def row_type(self, row: int) -> GroupRowType:
        if self.grouping and isinstance(self._row(row), DividerRow):
            return GroupRowType.PRIORITY_DIVIDER_ROW
        return GroupRowType.TASK_ROW

    def task_at_row(self, row: int) -> Task | None:
        item = self._row(row)
        if isinstance(item, TaskRow):
            return item.task
        return None

    def divider_label(self, row: int) -> str:
        item = self._row(row)
        if isinstance(item, DividerRow):
            return item.priority.label
        return UNKNOWN_PRIORITY_LABEL

    # ---- child rows ----

    def child_count(self, row: int) -> int:
        task = self.task_at_row(row)
        if task is None:
            return 0
        return len(task.subtasks) + 2

    def child_type(self, row: int, child: int) -> ChildRowType:
        task = self.task_at_row(row)
        n = len(task.subtasks) if task is not None else 0
        if child == 0:
            return ChildRowType.DESCRIPTION_ROW
        if child == n + 1:
            return ChildRowType.ADD_SUBTASK_ROW
        return ChildRowType.SUBTASK_ROW

    def child_selectable(self, row: int, child: int) -> bool:
        task = self.task_at_row(row)
        if task is None:
            return False
        return 0 < child < len(task.subtasks) + 1

    def subtask_at(self, row: int, child: int) -> Subtask | None:
        task = self.task_at_row(row)
        if task is None or not 0 < child <= len(task.subtasks):
            return None
        return task.subtasks[child - 1]

    def row_of_task(self, task_id: int) -> int | None:
        for i, item in enumerate(self.rows):
            if isinstance(item, TaskRow) and item.task.id == task_id:
                return i
        return None


def build_layout(raw: Iterable[Task], criterion: FilterCriterion, mask: SortMask) -> ListLayout:
    """Run the full filter -> sort -> grouping pipeline (no incremental path)."""
    filtered = filter_tasks(raw, criterion)
    ordered = sort_tasks(filtered, mask)

    grouping = is_priority_grouping(mask)
    dividers = compute_dividers(ordered) if grouping else {}
    rows = build_rows(ordered, dividers if grouping else None)

    logger.debug(
        "Layout rebuilt tasks=%d dividers=%d rows=%d filter=%s query=%r mask=%s",
        len(ordered),
        len(dividers),
        len(rows),
        criterion.done_filter.value,
        criterion.query,
        int(mask),
    )
    return ListLayout(
        tasks=tuple(ordered),
        rows=rows,
        dividers=MappingProxyType(dict(dividers)),
        grouping=grouping,
    )
