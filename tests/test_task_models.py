# tests/test_task_models.py

from __future__ import annotations

from todo_listview.tasks.task_models import Priority, Subtask, Urgency

from .fakes import make_task


def test_priority_rank_follows_declaration_order() -> None:
    assert [p.rank for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)] == [0, 1, 2]
    assert Priority.HIGH.label == "High"


def test_priority_from_db_tolerates_garbage() -> None:
    assert Priority.from_db("HIGH") is Priority.HIGH
    assert Priority.from_db(None) is Priority.MEDIUM
    assert Priority.from_db("urgent!!") is Priority.MEDIUM


def test_add_subtask_sets_back_reference() -> None:
    task = make_task(7)
    st = Subtask(id=1, task_id=0, name="x")
    task.add_subtask(st)
    assert st.task_id == 7
    assert task.subtasks == [st]

    assert task.remove_subtask(st)
    assert task.subtasks == []
    assert not task.remove_subtask(st)


def test_done_status_follows_subtasks() -> None:
    task = make_task(1, subtasks=[("a", True), ("b", False)])
    assert task.done_status_changed() is False

    task.subtasks[1].done = True
    assert task.done_status_changed() is True
    assert task.done

    # no subtasks: flag is kept
    lone = make_task(2, done=True)
    assert lone.done_status_changed() is True


def test_set_all_subtasks_done() -> None:
    task = make_task(1, subtasks=[("a", False), ("b", True)])
    task.set_all_subtasks_done(True)
    assert all(st.done for st in task.subtasks)
    task.set_all_subtasks_done(False)
    assert not any(st.done for st in task.subtasks)


def test_deadline_urgency() -> None:
    day = 86400
    now = 1_000_000.0

    assert make_task(1).deadline_urgency(day, now=now) is Urgency.NONE
    assert make_task(2, deadline=now - 1).deadline_urgency(day, now=now) is Urgency.OVERDUE
    assert make_task(3, deadline=now + 3600).deadline_urgency(day, now=now) is Urgency.DUE_SOON
    assert make_task(4, deadline=now + 3 * day).deadline_urgency(day, now=now) is Urgency.NORMAL
    assert make_task(5, deadline=now - 1, done=True).deadline_urgency(day, now=now) is Urgency.NONE
