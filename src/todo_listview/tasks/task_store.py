# src/todo_listview/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from .task_models import Priority, Subtask, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except Exception:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS lists (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    list_id INTEGER REFERENCES lists(id) ON DELETE SET NULL,
                    list_position INTEGER NOT NULL DEFAULT 0,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    done INTEGER NOT NULL DEFAULT 0,
                    priority TEXT NOT NULL DEFAULT 'medium',
                    deadline REAL,
                    progress INTEGER NOT NULL DEFAULT 0,
                    in_trash INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS subtasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
                    name TEXT NOT NULL,
                    done INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("list_position", "INTEGER NOT NULL DEFAULT 0")
            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("priority", "TEXT NOT NULL DEFAULT 'medium'")
            add_col("deadline", "REAL")
            add_col("progress", "INTEGER NOT NULL DEFAULT 0")
            add_col("in_trash", "INTEGER NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_list ON tasks(list_id, list_position)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_subtasks_task ON subtasks(task_id)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _clamp_progress(value: int) -> int:
        return int(max(0, min(100, int(value))))

    @staticmethod
    def _row_to_subtask(row: sqlite3.Row) -> Subtask:
        return Subtask(
            id=int(row["id"]),
            task_id=int(row["task_id"]),
            name=str(row["name"] or ""),
            done=bool(row["done"]),
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            name=str(row["name"] or ""),
            description=str(row["description"] or ""),
            done=bool(row["done"]),
            priority=Priority.from_db(row["priority"]),
            deadline=float(row["deadline"]) if row["deadline"] is not None else None,
            progress=int(row["progress"] or 0),
            list_id=int(row["list_id"]) if row["list_id"] is not None else None,
            list_name=row["list_name"],
            in_trash=bool(row["in_trash"]),
            list_position=int(row["list_position"] or 0),
        )

    def _attach_subtasks(self, conn: sqlite3.Connection, tasks: list[Task]) -> None:
        if not tasks:
            return
        by_id = {t.id: t for t in tasks}
        placeholders = ",".join("?" for _ in by_id)
        cur = conn.execute(
            f"SELECT * FROM subtasks WHERE task_id IN ({placeholders}) ORDER BY id ASC",
            tuple(by_id),
        )
        for row in cur.fetchall():
            st = self._row_to_subtask(row)
            by_id[st.task_id].subtasks.append(st)

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def add_list(self, name: str) -> int:
        if not name or not name.strip():
            raise ValueError("list name is required")

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("INSERT INTO lists(name) VALUES (?)", (name.strip(),))
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for lists insert")
            logger.debug("List added id=%s name=%s", rowid, name)
            return int(rowid)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        name: str,
        description: str = "",
        priority: Priority = Priority.MEDIUM,
        deadline: float | None = None,
        list_id: int | None = None,
        progress: int = 0,
    ) -> Task:
        if not name or not name.strip():
            raise ValueError("name is required")

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            # New tasks go to the end of their list.
            cur.execute(
                "SELECT COALESCE(MAX(list_position), -1) + 1 FROM tasks WHERE list_id IS ?",
                (list_id,),
            )
            (position,) = cur.fetchone()
            cur.execute(
                """
                INSERT INTO tasks(
                    list_id, list_position, name, description, done,
                    priority, deadline, progress, in_trash, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, 0, ?, ?, ?, 0, ?, ?)
                """,
                (
                    list_id,
                    int(position),
                    name.strip(),
                    (description or "").strip(),
                    Priority(priority).value,
                    deadline,
                    self._clamp_progress(progress),
                    now,
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug(
                "Task added id=%s priority=%s deadline=%s list_id=%s",
                task_id,
                priority,
                deadline,
                list_id,
            )
        finally:
            conn.close()

        task = self.get_task(task_id)
        if task is None:
            raise RuntimeError(f"Task {task_id} vanished right after insert")
        return task

    def get_task(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                SELECT t.*, l.name AS list_name
                FROM tasks t
                LEFT JOIN lists l ON l.id = t.list_id
                WHERE t.id = ?
                """,
                (int(task_id),),
            )
            row = cur.fetchone()
            if row is None:
                return None
            task = self._row_to_task(row)
            self._attach_subtasks(conn, [task])
            return task
        finally:
            conn.close()

    def list_tasks(self, list_id: int | None = None) -> list[Task]:
        """
        Return the raw task collection (trash excluded), in stored list order.

        list_id=None returns the tasks of every list.
        """
        conn = self._get_conn()
        try:
            sql = """
                SELECT t.*, l.name AS list_name
                FROM tasks t
                LEFT JOIN lists l ON l.id = t.list_id
                WHERE t.in_trash = 0
            """
            params: tuple = ()
            if list_id is not None:
                sql += " AND t.list_id = ?"
                params = (int(list_id),)
            sql += " ORDER BY t.list_position ASC, t.id ASC"

            tasks = [self._row_to_task(r) for r in conn.execute(sql, params).fetchall()]
            self._attach_subtasks(conn, tasks)
            return tasks
        finally:
            conn.close()

    def save_task(self, task: Task) -> None:
        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                UPDATE tasks
                SET name = ?,
                    description = ?,
                    done = ?,
                    priority = ?,
                    deadline = ?,
                    progress = ?,
                    in_trash = ?,
                    list_id = ?,
                    list_position = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    task.name,
                    task.description or "",
                    int(bool(task.done)),
                    Priority(task.priority).value,
                    task.deadline,
                    self._clamp_progress(task.progress),
                    int(bool(task.in_trash)),
                    task.list_id,
                    int(task.list_position),
                    now,
                    int(task.id),
                ),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise ValueError(f"unknown task id: {task.id}")
        finally:
            conn.close()

    def add_subtask(self, task_id: int, name: str, *, done: bool = False) -> Subtask:
        if not name or not name.strip():
            raise ValueError("subtask name is required")

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT 1 FROM tasks WHERE id = ?", (int(task_id),))
            if cur.fetchone() is None:
                raise ValueError(f"unknown task id: {task_id}")
            cur.execute(
                "INSERT INTO subtasks(task_id, name, done) VALUES (?, ?, ?)",
                (int(task_id), name.strip(), int(bool(done))),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for subtasks insert")
            logger.debug("Subtask added id=%s task_id=%s", rowid, task_id)
            return Subtask(id=int(rowid), task_id=int(task_id), name=name.strip(), done=bool(done))
        finally:
            conn.close()

    def save_subtask(self, subtask: Subtask) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE subtasks SET name = ?, done = ? WHERE id = ?",
                (subtask.name, int(bool(subtask.done)), int(subtask.id)),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise ValueError(f"unknown subtask id: {subtask.id}")
        finally:
            conn.close()

