# src/todo_listview/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..connectors.console_render import render_rows
from ..core.state import AppState
from ..listview.filtering import DoneFilter
from ..listview.layout import GroupRowType
from ..listview.sorting import SortMask
from ..tasks.task_models import Priority

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /filter, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _parse_child_ref(args: list[str]) -> tuple[int, int] | None:
    """Accept "3 1" or "3.1"."""
    if len(args) >= 2:
        row, child = _parse_int(args[0]), _parse_int(args[1])
    elif len(args) == 1 and "." in args[0]:
        head, _, tail = args[0].partition(".")
        row, child = _parse_int(head), _parse_int(tail)
    else:
        return None
    if row is None or child is None:
        return None
    return row, child


def _show(state: AppState, expanded: set[int] | None = None) -> str:
    return "\n".join(render_rows(state.adapter, expanded=expanded))


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    adapter = state.adapter
    sort_names = [flag.name.lower() for flag in SortMask if flag in adapter.sort_mask] or ["none"]
    cfg = adapter.config
    return (
        "Status:\n"
        f"  Filter: {adapter.criterion.done_filter.value}\n"
        f"  Search: {adapter.criterion.query or '-'}\n"
        f"  Sort: {', '.join(sort_names)}\n"
        f"  Tasks: {len(adapter.raw_tasks)} total, {len(adapter.layout.tasks)} shown\n"
        f"  Auto progress: {'ON' if cfg.auto_progress else 'OFF'}\n"
        f"  Reminder lead time: {cfg.default_reminder_time}s"
    )


def cmd_show(state: AppState, args: list[str]) -> str:
    """
    /show        -> group rows only
    /show 3 5    -> expand rows 3 and 5
    /show all    -> expand every task row
    """
    adapter = state.adapter
    if args and args[0].lower() == "all":
        expanded = {
            r for r in range(adapter.total_group_rows()) if adapter.row_type(r) is GroupRowType.TASK_ROW
        }
    else:
        expanded = {r for r in (_parse_int(a) for a in args) if r is not None}
    return _show(state, expanded)


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.adapter.criterion.done_filter.value}. Use /filter all|done|open."
    try:
        done_filter = DoneFilter.parse(args[0])
    except ValueError:
        return "Usage: /filter all|done|open."
    state.adapter.set_filter(done_filter)
    return _show(state)


def cmd_search(state: AppState, args: list[str]) -> str:
    state.adapter.set_query(" ".join(args) or None)
    return _show(state)


def cmd_sort(state: AppState, args: list[str]) -> str:
    """
    /sort +priority   -> add a sort condition
    /sort -deadline   -> remove a sort condition
    /sort none        -> original list order
    """
    if not args:
        return "Usage: /sort +priority | -priority | +deadline | -deadline | none."

    adapter = state.adapter
    for arg in args:
        token = arg.lower()
        if token == "none":
            adapter.set_sort_mask(SortMask(0))
            continue
        sign, name = (token[0], token[1:]) if token[0] in "+-" else ("+", token)
        try:
            condition = SortMask.parse(name)
        except ValueError:
            return f"Unknown sort condition: {arg}."
        if sign == "-":
            adapter.remove_sort_condition(condition)
        else:
            adapter.add_sort_condition(condition)
    return _show(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <high|medium|low> <name...> [due:YYYY-MM-DD]"""
    if len(args) < 2:
        return "Usage: /add <high|medium|low> <name> [due:YYYY-MM-DD]."

    priority_raw = args[0].lower()
    if priority_raw not in {p.value for p in Priority}:
        return f"Unknown priority: {args[0]}."

    deadline: float | None = None
    words: list[str] = []
    for word in args[1:]:
        if word.lower().startswith("due:"):
            try:
                deadline = datetime.strptime(word[4:], "%Y-%m-%d").timestamp()
            except ValueError:
                return f"Bad date: {word[4:]} (expected YYYY-MM-DD)."
        else:
            words.append(word)

    if not words:
        return "Task name is required."

    try:
        task = state.task_store.add_task(
            name=" ".join(words),
            priority=Priority(priority_raw),
            deadline=deadline,
        )
    except ValueError as e:
        return f"Cannot add task: {e}"

    logger.info("Task id=%s added from console", task.id)
    state.adapter.reload()
    return _show(state)


def _set_done(state: AppState, args: list[str], done: bool) -> str:
    if not args or _parse_int(args[0]) is None:
        return f"Usage: /{'done' if done else 'open'} <row>."
    row = int(args[0])
    task = state.adapter.task_at_row(row)
    if task is None:
        return f"Row {row} is not a task."
    state.last_snapshot = state.adapter.set_task_done(task, done)
    return _show(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, True)


def cmd_open(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, False)


def cmd_undo(state: AppState, args: list[str]) -> str:
    snapshot = state.last_snapshot
    if snapshot is None:
        return "Nothing to undo."
    state.last_snapshot = None
    if state.adapter.restore(snapshot) is None:
        return "The task is gone; nothing to undo."
    return _show(state)


def _set_subtask_done(state: AppState, args: list[str], done: bool) -> str:
    ref = _parse_child_ref(args)
    if ref is None:
        return f"Usage: /{'check' if done else 'uncheck'} <row> <child>."
    row, child = ref
    task = state.adapter.task_at_row(row)
    subtask = state.adapter.subtask_at(row, child)
    if task is None or subtask is None:
        return f"{row}.{child} is not a subtask."
    state.adapter.set_subtask_done(task, subtask, done)
    return _show(state, {row})


def cmd_check(state: AppState, args: list[str]) -> str:
    return _set_subtask_done(state, args, True)


def cmd_uncheck(state: AppState, args: list[str]) -> str:
    return _set_subtask_done(state, args, False)


def cmd_sub(state: AppState, args: list[str]) -> str:
    if len(args) < 2 or _parse_int(args[0]) is None:
        return "Usage: /sub <row> <name>."
    row = int(args[0])
    task = state.adapter.task_at_row(row)
    if task is None:
        return f"Row {row} is not a task."
    try:
        state.adapter.append_subtask(task, " ".join(args[1:]))
    except ValueError as e:
        return f"Cannot add subtask: {e}"

    new_row = state.adapter.layout.row_of_task(task.id)
    return _show(state, {new_row} if new_row is not None else None)


def cmd_select(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /select <row> [child] -> describe the item a context action would target.

    The commands that act on the selection go to emit() as a hint line.
    """
    ref = _parse_child_ref(args)
    if ref is None and (not args or _parse_int(args[0]) is None):
        return "Usage: /select <row> [child]."

    if ref is not None:
        row, child = ref
        selection = state.adapter.select_child(row, child)
        if selection is None or selection.subtask is None:
            return "Nothing selectable there."
        if emit is not None:
            emit(f"Actions: /check {row} {child}, /uncheck {row} {child}")
        return f"Selected subtask '{selection.subtask.name}' of task '{selection.task.name}'."

    row = int(args[0])
    selection = state.adapter.select_row(row)
    if selection is None:
        return "Nothing selectable there."
    if emit is not None:
        toggle = "open" if selection.task.done else "done"
        emit(f"Actions: /{toggle} {row}, /sub {row} <name>, /trash {row}")
    return f"Selected task '{selection.task.name}'."


def cmd_trash(state: AppState, args: list[str]) -> str:
    if not args or _parse_int(args[0]) is None:
        return "Usage: /trash <row>."
    row = int(args[0])
    task = state.adapter.task_at_row(row)
    if task is None:
        return f"Row {row} is not a task."
    task.in_trash = True
    state.task_store.save_task(task)
    logger.info("Task id=%s moved to trash", task.id)
    state.adapter.reload()
    return _show(state)


def cmd_reload(state: AppState, args: list[str]) -> str:
    state.adapter.reload()
    return _show(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show filter/sort/preferences.")
registry.register("show", cmd_show, help_text="Show the list: /show [row ...] | /show all.", aliases=["ls"])
registry.register("filter", cmd_filter, help_text="Filter by state: /filter all|done|open.")
registry.register("search", cmd_search, help_text="Search tasks: /search <text> (empty clears).")
registry.register("sort", cmd_sort, help_text="Sort: /sort +priority | -deadline | none.")
registry.register("add", cmd_add, help_text="Add a task: /add <priority> <name> [due:YYYY-MM-DD].")
registry.register("done", cmd_done, help_text="Mark a task (and its subtasks) done: /done <row>.")
registry.register("open", cmd_open, help_text="Reopen a task: /open <row>.")
registry.register("undo", cmd_undo, help_text="Undo the last /done or /open.")
registry.register("check", cmd_check, help_text="Tick a subtask: /check <row> <child>.")
registry.register("uncheck", cmd_uncheck, help_text="Untick a subtask: /uncheck <row> <child>.")
registry.register("sub", cmd_sub, help_text="Append a subtask: /sub <row> <name>.")
registry.register("select", cmd_select, help_text="Select a row for a context action: /select <row> [child].")
registry.register("trash", cmd_trash, help_text="Move a task to the trash: /trash <row>.")
registry.register("reload", cmd_reload, help_text="Re-read tasks from storage.")
