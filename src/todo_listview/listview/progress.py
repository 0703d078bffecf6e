# src/todo_listview/listview/progress.py

from __future__ import annotations

import logging

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def compute_progress(task: Task, auto_mode: bool) -> int:
    """
    Return the task's completion percentage.

    auto_mode=False: the stored (manual) progress is returned unchanged.
    auto_mode=True: done/total subtasks as a float percentage, truncated to an
    int and stored on the task.
    A task without subtasks has no ratio; its stored progress is kept.
    """
    if not auto_mode:
        return task.progress

    total = len(task.subtasks)
    if total == 0:
        logger.debug("Auto progress skipped for task id=%s (no subtasks)", task.id)
        return task.progress

    done = sum(1 for st in task.subtasks if st.done)
    # float ratio, then truncation; 29/50 gives 57, not 58
    task.progress = int(done / total * 100)
    return task.progress
