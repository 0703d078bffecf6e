# tests/test_sorting.py

from __future__ import annotations

import pytest

from todo_listview.listview.sorting import (
    SortMask,
    add_sort_condition,
    is_priority_grouping,
    remove_sort_condition,
    sort_tasks,
)
from todo_listview.tasks.task_models import Priority

from .fakes import make_task


def test_deadline_sort_puts_missing_deadlines_last() -> None:
    tasks = [
        make_task(1, deadline=5.0),
        make_task(2, deadline=10.0),
        make_task(3, deadline=None),
        make_task(4, deadline=1.0),
    ]
    out = sort_tasks(tasks, SortMask.BY_DEADLINE)
    assert [t.deadline for t in out] == [1.0, 5.0, 10.0, None]


def test_two_missing_deadlines_keep_their_order() -> None:
    tasks = [make_task(1), make_task(2, deadline=3.0), make_task(3)]
    out = sort_tasks(tasks, SortMask.BY_DEADLINE)
    assert [t.id for t in out] == [2, 1, 3]


def test_priority_then_deadline() -> None:
    tasks = [
        make_task(1, priority=Priority.HIGH, deadline=10.0),
        make_task(2, priority=Priority.HIGH, deadline=5.0),
        make_task(3, priority=Priority.LOW, deadline=1.0),
    ]
    out = sort_tasks(tasks, SortMask.BY_PRIORITY | SortMask.BY_DEADLINE)
    assert [(t.priority, t.deadline) for t in out] == [
        (Priority.HIGH, 5.0),
        (Priority.HIGH, 10.0),
        (Priority.LOW, 1.0),
    ]


def test_priority_only_is_stable_within_a_band() -> None:
    tasks = [
        make_task(1, priority=Priority.LOW),
        make_task(2, priority=Priority.HIGH, deadline=10.0),
        make_task(3, priority=Priority.MEDIUM),
        make_task(4, priority=Priority.HIGH, deadline=5.0),
    ]
    out = sort_tasks(tasks, SortMask.BY_PRIORITY)
    assert [t.id for t in out] == [2, 4, 3, 1]


def test_no_criteria_uses_list_position() -> None:
    tasks = [make_task(1, position=2), make_task(2, position=0), make_task(3, position=1)]
    out = sort_tasks(tasks, SortMask(0))
    assert [t.id for t in out] == [2, 3, 1]
    # input untouched
    assert [t.id for t in tasks] == [1, 2, 3]


def test_add_and_remove_conditions_are_symmetric() -> None:
    mask = SortMask(0)
    mask = add_sort_condition(mask, SortMask.BY_DEADLINE)
    mask = add_sort_condition(mask, SortMask.BY_PRIORITY)
    assert mask == SortMask.BY_PRIORITY | SortMask.BY_DEADLINE

    mask = remove_sort_condition(mask, SortMask.BY_DEADLINE)
    assert mask == SortMask.BY_PRIORITY
    assert is_priority_grouping(mask)

    mask = remove_sort_condition(mask, SortMask.BY_PRIORITY)
    assert mask == SortMask(0)
    assert not is_priority_grouping(mask)

    # removing an unset bit is a no-op
    assert remove_sort_condition(SortMask.BY_DEADLINE, SortMask.BY_PRIORITY) == SortMask.BY_DEADLINE


def test_sort_mask_parse() -> None:
    assert SortMask.parse("priority, deadline") == SortMask.BY_PRIORITY | SortMask.BY_DEADLINE
    assert SortMask.parse("none") == SortMask(0)
    assert SortMask.parse(["due"]) == SortMask.BY_DEADLINE
    with pytest.raises(ValueError):
        SortMask.parse("alphabetical")
