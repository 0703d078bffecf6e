# src/todo_listview/tasks/task_models.py

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum

# Tasks without a deadline carry None.
NO_DEADLINE: float | None = None


class Priority(StrEnum):
    """
    Task priority.

    Declaration order is the rank order: HIGH sorts (and groups) first.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw.strip().lower())
        except Exception:
            return cls.MEDIUM


_PRIORITY_ORDER: tuple[Priority, ...] = tuple(Priority)


class Urgency(StrEnum):
    NONE = "none"
    NORMAL = "normal"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"


@dataclass(slots=True)
class Subtask:
    id: int
    task_id: int
    name: str
    done: bool = False


@dataclass(slots=True)
class Task:
    id: int
    name: str
    description: str = ""
    done: bool = False
    priority: Priority = Priority.MEDIUM
    deadline: float | None = NO_DEADLINE

    # 0..100
    progress: int = 0

    list_id: int | None = None
    list_name: str | None = None
    in_trash: bool = False
    list_position: int = 0

    subtasks: list[Subtask] = field(default_factory=list)

    def has_deadline(self) -> bool:
        return self.deadline is not None

    def add_subtask(self, subtask: Subtask) -> None:
        subtask.task_id = self.id
        self.subtasks.append(subtask)

    def remove_subtask(self, subtask: Subtask) -> bool:
        for i, st in enumerate(self.subtasks):
            if st is subtask or st.id == subtask.id:
                del self.subtasks[i]
                return True
        return False

    def set_all_subtasks_done(self, done: bool) -> None:
        for st in self.subtasks:
            st.done = done

    def done_status_changed(self) -> bool:
        """
        Re-derive the task's done flag from its subtasks.

        A task with subtasks is done exactly when all of them are done.
        Tasks without subtasks keep their flag. Returns the resulting flag.
        """
        if self.subtasks:
            self.done = all(st.done for st in self.subtasks)
        return self.done

    def matches_query(self, query: str | None) -> bool:
        """Case-insensitive substring match on name, description and subtask names."""
        if query is None:
            return True
        needle = query.strip().lower()
        if not needle:
            return True

        if needle in (self.name or "").lower():
            return True
        if needle in (self.description or "").lower():
            return True
        return any(needle in (st.name or "").lower() for st in self.subtasks)

    def deadline_urgency(self, reminder_lead_time: float, now: float | None = None) -> Urgency:
        """
        Classify how close the deadline is.

        reminder_lead_time is in seconds: deadlines closer than that are DUE_SOON.
        Done tasks and tasks without a deadline are never urgent.
        """
        if self.done or self.deadline is None:
            return Urgency.NONE

        now_ts = time.time() if now is None else now
        remaining = self.deadline - now_ts
        if remaining < 0:
            return Urgency.OVERDUE
        if remaining <= max(0.0, float(reminder_lead_time)):
            return Urgency.DUE_SOON
        return Urgency.NORMAL
