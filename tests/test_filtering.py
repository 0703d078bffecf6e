# tests/test_filtering.py

from __future__ import annotations

import pytest

from todo_listview.listview.filtering import DoneFilter, FilterCriterion, filter_tasks
from todo_listview.tasks.task_models import Priority

from .fakes import make_task


@pytest.fixture()
def tasks():
    return [
        make_task(1, name="Buy milk", done=False),
        make_task(2, name="Buy bread", done=True),
        make_task(3, name="Walk dog", done=False, description="around the PARK"),
        make_task(4, name="Taxes", done=True, subtasks=[("collect receipts", False)]),
    ]


def test_all_tasks_keeps_everything_in_order(tasks) -> None:
    out = filter_tasks(tasks, FilterCriterion(DoneFilter.ALL_TASKS))
    assert [t.id for t in out] == [1, 2, 3, 4]
    assert out is not tasks


def test_completed_and_open_split(tasks) -> None:
    done = filter_tasks(tasks, FilterCriterion(DoneFilter.COMPLETED_TASKS))
    open_ = filter_tasks(tasks, FilterCriterion(DoneFilter.OPEN_TASKS))

    assert [t.id for t in done] == [2, 4]
    assert all(t.done for t in done)
    assert [t.id for t in open_] == [1, 3]
    assert not any(t.done for t in open_)


@pytest.mark.parametrize("query", [None, "", "   "])
def test_empty_query_matches_everything(tasks, query) -> None:
    out = filter_tasks(tasks, FilterCriterion(DoneFilter.ALL_TASKS, query))
    assert len(out) == len(tasks)


def test_query_is_case_insensitive_over_name_description_and_subtasks(tasks) -> None:
    assert [t.id for t in filter_tasks(tasks, FilterCriterion(query="BUY"))] == [1, 2]
    assert [t.id for t in filter_tasks(tasks, FilterCriterion(query="park"))] == [3]
    assert [t.id for t in filter_tasks(tasks, FilterCriterion(query="receipts"))] == [4]


def test_query_and_done_filter_combine(tasks) -> None:
    out = filter_tasks(tasks, FilterCriterion(DoneFilter.OPEN_TASKS, "buy"))
    assert [t.id for t in out] == [1]


def test_non_matching_query_gives_empty(tasks) -> None:
    assert filter_tasks(tasks, FilterCriterion(query="zzz-nothing")) == []


def test_filter_does_not_mutate_input(tasks) -> None:
    before = [(t.id, t.done, t.priority) for t in tasks]
    filter_tasks(tasks, FilterCriterion(DoneFilter.COMPLETED_TASKS, "buy"))
    assert [(t.id, t.done, t.priority) for t in tasks] == before
    assert tasks[0].priority is Priority.MEDIUM


def test_done_filter_parse() -> None:
    assert DoneFilter.parse("Open") is DoneFilter.OPEN_TASKS
    assert DoneFilter.parse("completed") is DoneFilter.COMPLETED_TASKS
    assert DoneFilter.parse(None) is DoneFilter.ALL_TASKS
    with pytest.raises(ValueError):
        DoneFilter.parse("someday")


def test_done_filter_formats_as_value() -> None:
    assert str(DoneFilter.OPEN_TASKS) == "open"
    assert f"{DoneFilter.COMPLETED_TASKS}" == "done"
