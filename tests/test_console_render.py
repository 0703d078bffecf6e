# tests/test_console_render.py

from __future__ import annotations

from todo_listview.connectors.console_render import render_rows
from todo_listview.listview.adapter import TaskListAdapter, ViewConfig
from todo_listview.listview.sorting import SortMask

from .fakes import FakeTaskRepo


def test_render_grouped_rows_with_expansion(repo: FakeTaskRepo) -> None:
    repo.tasks[0].description = "quarterly numbers"
    adapter = TaskListAdapter(repo, ViewConfig(auto_progress=True), sort_mask=SortMask.BY_PRIORITY)
    row = adapter.layout.row_of_task(1)

    lines = render_rows(adapter, expanded={row}, now=0.0)

    assert lines[0] == "---- High ----"
    assert any("Write report  50%" in line for line in lines)
    assert "quarterly numbers" in "\n".join(lines)
    assert any(line.endswith("[x] outline") for line in lines)
    assert any("+ add subtask" in line for line in lines)


def test_render_marks_urgency(repo: FakeTaskRepo) -> None:
    adapter = TaskListAdapter(repo, ViewConfig(default_reminder_time=100))
    lines = render_rows(adapter, now=450.0)

    report = next(line for line in lines if "Write report" in line)
    rent = next(line for line in lines if "Pay rent" in line)
    assert report.endswith("(!)")
    assert rent.endswith("(!!)")


def test_render_empty() -> None:
    adapter = TaskListAdapter(FakeTaskRepo())
    assert render_rows(adapter) == ["(no tasks)"]
