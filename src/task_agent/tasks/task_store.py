# src/task_agent/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from .task_models import Task, format_timestamp, parse_timestamp, utc_now

logger = logging.getLogger(__name__)

SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    - every write is a single statement committed on its own
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

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
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    done INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
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

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("done", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "TEXT NOT NULL DEFAULT ''")

            # Rows migrated without a timestamp get the migration time.
            cur.execute(
                "UPDATE tasks SET created_at = ? WHERE created_at = ''",
                (format_timestamp(utc_now()),),
            )
            if cur.rowcount > 0:
                logger.info("TaskStore migration: stamped created_at on %s rows", cur.rowcount)

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            done=bool(row["done"]),
            created_at=parse_timestamp(row["created_at"]),
        )

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

    def add_task(self, *, title: str) -> Task:
        if not title or not title.strip():
            raise ValueError("title is required")

        title = title.strip()
        created_at = utc_now()

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO tasks(title, done, created_at) VALUES (?, 0, ?)",
                (title, format_timestamp(created_at)),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s title=%r", task_id, title)
            # Re-read so the returned timestamp has the stored precision.
            cur.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            return self._row_to_task(cur.fetchone())
        finally:
            conn.close()

    def list_tasks(self) -> list[Task]:
        """All tasks, most recent first (descending id)."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY id DESC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def mark_done(self, task_id: int) -> Task | None:
        """
        Set done=1 for the given id.

        Idempotent: an already-done task is re-confirmed.
        Returns the updated task, or None if no such id exists.
        """
        if not SQLITE_MIN_INTEGER <= int(task_id) <= SQLITE_MAX_INTEGER:
            # Cannot be bound as INTEGER, so cannot be a stored id.
            return None

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("UPDATE tasks SET done = 1 WHERE id = ?", (int(task_id),))
            conn.commit()
            if cur.rowcount != 1:
                return None
            logger.debug("Task done id=%s", task_id)
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()
