# tests/test_progress.py

from __future__ import annotations

from todo_listview.listview.progress import compute_progress

from .fakes import make_task


def test_auto_progress_from_subtasks() -> None:
    task = make_task(1, subtasks=[("a", True), ("b", True), ("c", False), ("d", False)])
    assert compute_progress(task, auto_mode=True) == 50
    assert task.progress == 50


def test_auto_progress_truncates() -> None:
    task = make_task(1, subtasks=[("a", True), ("b", True), ("c", False)])
    # 66.66.. -> 66
    assert compute_progress(task, auto_mode=True) == 66

    task = make_task(2, subtasks=[("a", True), ("b", False), ("c", False)])
    assert compute_progress(task, auto_mode=True) == 33


def test_auto_progress_truncates_the_float_percentage() -> None:
    task = make_task(1, subtasks=[(f"s{i}", i < 29) for i in range(50)])
    # 0.58 * 100 is 57.99.. in floating point
    assert compute_progress(task, auto_mode=True) == 57


def test_manual_progress_is_left_alone() -> None:
    task = make_task(1, progress=42, subtasks=[("a", True), ("b", True)])
    assert compute_progress(task, auto_mode=False) == 42
    assert task.progress == 42


def test_auto_progress_without_subtasks_keeps_stored_value() -> None:
    task = make_task(1, progress=70)
    assert compute_progress(task, auto_mode=True) == 70
    assert task.progress == 70


def test_auto_progress_bounds() -> None:
    assert compute_progress(make_task(1, subtasks=[("a", False)]), True) == 0
    assert compute_progress(make_task(2, subtasks=[("a", True), ("b", True)]), True) == 100
