"""
List view engine.

Components:
- filtering.py: done/open/all selector + free-text query
- sorting.py: SortMask bit set and the ordering rules
- grouping.py: priority dividers and the flattened row sequence
- layout.py: ListLayout (row queries) and the full recompute
- progress.py: task completion percentage
- adapter.py: TaskListAdapter (recompute triggers, mutations, selection)
"""

from .adapter import Selection, TaskListAdapter, TaskSnapshot, ViewConfig
from .filtering import DoneFilter, FilterCriterion, filter_tasks
from .grouping import compute_dividers
from .layout import ChildRowType, GroupRowType, ListLayout, build_layout
from .progress import compute_progress
from .sorting import SortMask, sort_tasks

__all__ = [
    "ChildRowType",
    "DoneFilter",
    "FilterCriterion",
    "GroupRowType",
    "ListLayout",
    "Selection",
    "SortMask",
    "TaskListAdapter",
    "TaskSnapshot",
    "ViewConfig",
    "build_layout",
    "compute_dividers",
    "compute_progress",
    "filter_tasks",
    "sort_tasks",
]
