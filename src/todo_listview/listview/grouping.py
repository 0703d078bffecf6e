# src/todo_listview/listview/grouping.py

"""
Priority grouping.

When tasks are sorted by priority, every priority band present in the list is
preceded by a synthetic divider row. The flattened group-row space is then:

    divider(HIGH), task, task, divider(LOW), task, ...

compute_dividers() records the row index of each divider; build_rows()
materializes the whole row sequence as TaskRow / DividerRow values so that
row lookups are plain indexing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..tasks.task_models import Priority, Task


@dataclass(frozen=True, slots=True)
class TaskRow:
    task: Task


@dataclass(frozen=True, slots=True)
class DividerRow:
    priority: Priority


Row = TaskRow | DividerRow


def compute_dividers(sorted_tasks: Sequence[Task]) -> dict[Priority, int]:
    dividers: dict[Priority, int] = {}
    pos = 0
    for task in sorted_tasks:
        if task.priority not in dividers:
            dividers[task.priority] = pos
            pos += 1  # row reserved for the divider
        pos += 1
    return dividers


def build_rows(sorted_tasks: Sequence[Task], dividers: Mapping[Priority, int] | None) -> tuple[Row, ...]:
    """
    Flatten tasks and dividers into one row sequence.

    dividers=None (grouping off) yields task rows only.
    """
    if not dividers:
        return tuple(TaskRow(t) for t in sorted_tasks)

    by_row = {row: prio for prio, row in dividers.items()}
    rows: list[Row] = []
    tasks = iter(sorted_tasks)
    total = len(sorted_tasks) + len(dividers)
    for i in range(total):
        prio = by_row.get(i)
        if prio is not None:
            rows.append(DividerRow(prio))
        else:
            rows.append(TaskRow(next(tasks)))
    return tuple(rows)


def task_at_row_by_dividers(
    sorted_tasks: Sequence[Task],
    dividers: Mapping[Priority, int],
    row: int,
) -> Task | None:
    """
    Resolve a group row to a task from the divider map alone.

    Subtracts the dividers at or before `row` (scanned in priority rank order)
    and indexes into the sorted tasks. The result for a divider row is
    meaningless, so callers check the row type first; out-of-range rows give
    None.
    """
    seen = 0
    for priority in Priority:
        pos = dividers.get(priority)
        if pos is None:
            continue
        if row < pos:
            break
        seen += 1

    offset = row - seen
    if 0 <= offset < len(sorted_tasks):
        return sorted_tasks[offset]
    return None
