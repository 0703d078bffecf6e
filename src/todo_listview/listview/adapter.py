# src/todo_listview/listview/adapter.py

"""
Task list adapter.

Holds the raw task collection fetched from the storage collaborator, the
user's filter/sort choices and the current ListLayout. Every change (filter,
sort, config, data) triggers a full recompute; mutations are persisted via the
repo before the layout is rebuilt, so the renderer never sees a half-applied
toggle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..core.ports import TaskRepo
from ..tasks.task_models import Subtask, Task
from .filtering import DoneFilter, FilterCriterion
from .layout import ChildRowType, GroupRowType, ListLayout, build_layout
from .progress import compute_progress
from .sorting import SortMask, add_sort_condition, remove_sort_condition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewConfig:
    """Preference values the view needs, passed in explicitly on every recompute."""

    auto_progress: bool = False
    # seconds; used by the deadline urgency classifier
    default_reminder_time: int = 86400
    show_list_name: bool = False


@dataclass(frozen=True, slots=True)
class Selection:
    """The long-pressed item. subtask=None means the task row itself."""

    task: Task
    subtask: Subtask | None = None


@dataclass(frozen=True, slots=True)
class TaskSnapshot:
    """Done/progress state of a task and its subtasks before a toggle."""

    task_id: int
    done: bool
    progress: int
    subtask_done: tuple[tuple[int, bool], ...]


class TaskListAdapter:
    def __init__(
        self,
        repo: TaskRepo,
        config: ViewConfig | None = None,
        *,
        criterion: FilterCriterion | None = None,
        sort_mask: SortMask = SortMask(0),
        list_id: int | None = None,
    ) -> None:
        self._repo = repo
        self._config = config or ViewConfig()
        self._criterion = criterion or FilterCriterion()
        self._sort_mask = SortMask(sort_mask)
        self._list_id = list_id
        self._raw: list[Task] = []
        self._layout = ListLayout()
        self.reload()

    # ---- state ----

    @property
    def config(self) -> ViewConfig:
        return self._config

    @property
    def criterion(self) -> FilterCriterion:
        return self._criterion

    @property
    def sort_mask(self) -> SortMask:
        return self._sort_mask

    @property
    def layout(self) -> ListLayout:
        return self._layout

    @property
    def raw_tasks(self) -> list[Task]:
        return list(self._raw)

    @property
    def show_list_name(self) -> bool:
        return self._config.show_list_name

    # ---- recompute ----

    def reload(self) -> None:
        """Re-fetch the raw collection from storage and recompute."""
        self._raw = list(self._repo.list_tasks(self._list_id))
        logger.debug("Raw collection reloaded: %d tasks (list_id=%s)", len(self._raw), self._list_id)
        self.notify_data_changed()

    def notify_data_changed(self) -> None:
        for task in self._raw:
            compute_progress(task, self._config.auto_progress)
        self._layout = build_layout(self._raw, self._criterion, self._sort_mask)

    def set_filter(self, done_filter: DoneFilter) -> None:
        self._criterion = replace(self._criterion, done_filter=done_filter)
        self.notify_data_changed()

    def set_query(self, query: str | None) -> None:
        self._criterion = replace(self._criterion, query=query or None)
        self.notify_data_changed()

    def add_sort_condition(self, condition: SortMask) -> None:
        self._sort_mask = add_sort_condition(self._sort_mask, condition)
        self.notify_data_changed()

    def remove_sort_condition(self, condition: SortMask) -> None:
        self._sort_mask = remove_sort_condition(self._sort_mask, condition)
        self.notify_data_changed()

    def set_sort_mask(self, mask: SortMask) -> None:
        self._sort_mask = SortMask(mask)
        self.notify_data_changed()

    def set_config(self, config: ViewConfig) -> None:
        self._config = config
        self.notify_data_changed()

    # ---- row queries (renderer surface) ----

    def total_group_rows(self) -> int:
        return self._layout.total_group_rows()

    def row_type(self, row: int) -> GroupRowType:
        return self._layout.row_type(row)

    def task_at_row(self, row: int) -> Task | None:
        return self._layout.task_at_row(row)

    def divider_label(self, row: int) -> str:
        return self._layout.divider_label(row)

    def child_count(self, row: int) -> int:
        return self._layout.child_count(row)

    def child_type(self, row: int, child: int) -> ChildRowType:
        return self._layout.child_type(row, child)

    def child_selectable(self, row: int, child: int) -> bool:
        return self._layout.child_selectable(row, child)

    def subtask_at(self, row: int, child: int) -> Subtask | None:
        return self._layout.subtask_at(row, child)

    # ---- selection ----

    def select_row(self, row: int) -> Selection | None:
        task = self._layout.task_at_row(row)
        if task is None:
            return None
        return Selection(task=task)

    def select_child(self, row: int, child: int) -> Selection | None:
        task = self._layout.task_at_row(row)
        subtask = self._layout.subtask_at(row, child)
        if task is None or subtask is None:
            return None
        return Selection(task=task, subtask=subtask)

    # ---- mutations ----

    @staticmethod
    def snapshot(task: Task) -> TaskSnapshot:
        return TaskSnapshot(
            task_id=task.id,
            done=task.done,
            progress=task.progress,
            subtask_done=tuple((st.id, st.done) for st in task.subtasks),
        )

    def _find_task(self, task_id: int) -> Task | None:
        for task in self._raw:
            if task.id == task_id:
                return task
        return None

    @staticmethod
    def _apply_snapshot(task: Task, snapshot: TaskSnapshot) -> None:
        task.done = snapshot.done
        task.progress = snapshot.progress
        previous = dict(snapshot.subtask_done)
        for st in task.subtasks:
            if st.id in previous:
                st.done = previous[st.id]

    def _persist_task_tree(self, task: Task) -> None:
        self._repo.save_task(task)
        for st in task.subtasks:
            self._repo.save_subtask(st)

    def set_task_done(self, task: Task, done: bool) -> TaskSnapshot:
        """
        Mark a task done/open, cascading the flag to all of its subtasks.

        Returns the state before the change; pass it to restore() to undo.
        If the repo rejects the write, the in-memory task is put back the way
        it was and the error propagates.
        """
        before = self.snapshot(task)

        try:
            task.done = done
            task.set_all_subtasks_done(done)
            compute_progress(task, self._config.auto_progress)
            self._persist_task_tree(task)
        except Exception:
            logger.warning("Task id=%s done=%s not saved; reverted", task.id, done)
            self._apply_snapshot(task, before)
            raise
        finally:
            self.notify_data_changed()

        logger.info("Task id=%s done=%s (%d subtasks)", task.id, done, len(task.subtasks))
        return before

    def restore(self, snapshot: TaskSnapshot) -> Task | None:
        task = self._find_task(snapshot.task_id)
        if task is None:
            logger.warning("Cannot restore task id=%s: not in current collection", snapshot.task_id)
            return None

        current = self.snapshot(task)
        try:
            self._apply_snapshot(task, snapshot)
            compute_progress(task, self._config.auto_progress)
            self._persist_task_tree(task)
        except Exception:
            logger.warning("Task id=%s restore not saved; reverted", task.id)
            self._apply_snapshot(task, current)
            raise
        finally:
            self.notify_data_changed()

        logger.info("Task id=%s restored done=%s", task.id, task.done)
        return task

    def set_subtask_done(self, task: Task, subtask: Subtask, done: bool) -> None:
        """Toggle a subtask; the parent's done flag and progress follow."""
        before = self.snapshot(task)

        try:
            subtask.done = done
            task.done_status_changed()
            compute_progress(task, self._config.auto_progress)
            self._repo.save_subtask(subtask)
            self._repo.save_task(task)
        except Exception:
            logger.warning("Subtask id=%s done=%s not saved; reverted", subtask.id, done)
            self._apply_snapshot(task, before)
            raise
        finally:
            self.notify_data_changed()

        logger.info(
            "Subtask id=%s done=%s -> task id=%s done=%s progress=%s",
            subtask.id,
            done,
            task.id,
            task.done,
            task.progress,
        )

    def append_subtask(self, task: Task, name: str) -> Subtask:
        subtask = self._repo.add_subtask(task.id, name)
        task.add_subtask(subtask)
        compute_progress(task, self._config.auto_progress)
        self._repo.save_task(task)
        logger.info("Subtask id=%s appended to task id=%s", subtask.id, task.id)

        self.notify_data_changed()
        return subtask
