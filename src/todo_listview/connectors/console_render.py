# src/todo_listview/connectors/console_render.py

from __future__ import annotations

from datetime import datetime

from ..listview.adapter import TaskListAdapter
from ..listview.layout import ChildRowType, GroupRowType
from ..tasks.task_models import Task, Urgency

_URGENCY_MARK = {
    Urgency.NONE: "",
    Urgency.NORMAL: "",
    Urgency.DUE_SOON: " (!)",
    Urgency.OVERDUE: " (!!)",
}


def _format_deadline(task: Task) -> str:
    if task.deadline is None:
        return "no deadline"
    return "due " + datetime.fromtimestamp(task.deadline).astimezone().strftime("%Y-%m-%d")


def _format_task_line(adapter: TaskListAdapter, row: int, task: Task, now: float | None) -> str:
    box = "[x]" if task.done else "[ ]"
    urgency = task.deadline_urgency(adapter.config.default_reminder_time, now=now)
    line = f"{row:>3}  {box} {task.name}  {task.progress}%  {_format_deadline(task)}{_URGENCY_MARK[urgency]}"
    if adapter.show_list_name and task.list_name:
        line += f"  @{task.list_name}"
    return line


def _format_child_lines(adapter: TaskListAdapter, row: int, task: Task) -> list[str]:
    lines: list[str] = []
    for child in range(adapter.child_count(row)):
        kind = adapter.child_type(row, child)
        prefix = f"       {row}.{child}"
        if kind is ChildRowType.DESCRIPTION_ROW:
            if task.description:
                lines.append(f"{prefix}  {task.description}")
        elif kind is ChildRowType.ADD_SUBTASK_ROW:
            lines.append(f"{prefix}  + add subtask (/sub {row} <name>)")
        else:
            subtask = adapter.subtask_at(row, child)
            if subtask is None:
                continue
            box = "[x]" if subtask.done else "[ ]"
            lines.append(f"{prefix}  {box} {subtask.name}")
    return lines


def render_rows(
    adapter: TaskListAdapter,
    *,
    expanded: set[int] | None = None,
    now: float | None = None,
) -> list[str]:
    """
    Render the flattened list using only the row queries of the adapter.

    Rows in `expanded` also show their child rows.
    """
    expanded = expanded or set()
    total = adapter.total_group_rows()
    if total == 0:
        return ["(no tasks)"]

    lines: list[str] = []
    for row in range(total):
        if adapter.row_type(row) is GroupRowType.PRIORITY_DIVIDER_ROW:
            lines.append(f"---- {adapter.divider_label(row)} ----")
            continue

        task = adapter.task_at_row(row)
        if task is None:
            # Stale row; the next recompute fixes it.
            continue
        lines.append(_format_task_line(adapter, row, task, now))
        if row in expanded:
            lines.extend(_format_child_lines(adapter, row, task))
    return lines
