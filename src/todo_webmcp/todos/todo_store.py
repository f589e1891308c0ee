# src/todo_webmcp/todos/todo_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from .todo_models import OwnerID, Todo

logger = logging.getLogger(__name__)


class TodoStoreError(RuntimeError):
    """A storage read or write failed; wraps the underlying sqlite3.Error."""


class TodoStore:
    """
    SQLite todo store.

    The schema is a single table created if missing; there are no migrations.

    Connection model:
    - one connection is opened in __init__ and shared by every request thread
    - autocommit mode: each statement commits on its own
    - SQLite's locking is the only concurrency control

    Every mutating statement carries `user_id = ?` in its WHERE clause, which
    is the whole authorization model.
    """

    def __init__(self, db_path: str | Path = "todos.db") -> None:
        self._db_path = Path(db_path)
        if str(self._db_path) != ":memory:":
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = self._connect()
        self._ensure_schema()
        logger.info("TodoStore ready db=%s total=%s", self._db_path, self.count_todos())

    def close(self) -> None:
        with contextlib.suppress(sqlite3.Error):
            self._conn.close()
        logger.debug("TodoStore closed db=%s", self._db_path)

    # ---- low-level helpers ----

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            str(self._db_path),
            timeout=30.0,
            isolation_level=None,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS todos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                description TEXT NOT NULL CHECK (description <> ''),
                completed BOOLEAN NOT NULL DEFAULT 0
            )
            """
        )
        self._conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_user ON todos(user_id, id)")

    @staticmethod
    def _row_to_todo(row: sqlite3.Row, owner: OwnerID) -> Todo:
        return Todo(
            id=int(row["id"]),
            owner_id=owner,
            description=str(row["description"]),
            completed=bool(row["completed"]),
        )

    # ---- public API ----

    def count_todos(self) -> int:
        try:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM todos").fetchone()
        except sqlite3.Error as e:
            raise TodoStoreError("count failed") from e
        return int(n)

    def list_todos(self, owner: OwnerID) -> list[Todo]:
        try:
            rows = self._conn.execute(
                "SELECT id, description, completed FROM todos WHERE user_id = ? ORDER BY id",
                (owner.value,),
            ).fetchall()
        except sqlite3.Error as e:
            raise TodoStoreError(f"list failed for owner={owner.short}") from e
        return [self._row_to_todo(r, owner) for r in rows]

    def add_todo(self, owner: OwnerID, description: str) -> Todo:
        # RETURNING: lastrowid is connection-wide and races on the shared handle.
        try:
            rows = self._conn.execute(
                "INSERT INTO todos (user_id, description) VALUES (?, ?) RETURNING id",
                (owner.value, description),
            ).fetchall()
        except sqlite3.Error as e:
            raise TodoStoreError(f"insert failed for owner={owner.short}") from e

        if len(rows) != 1:
            raise TodoStoreError("SQLite did not return an id for todos insert")
        todo = Todo(id=int(rows[0]["id"]), owner_id=owner, description=description, completed=False)
        logger.debug("Todo added id=%s owner=%s", todo.id, owner.short)
        return todo

    def toggle_todo(self, owner: OwnerID, todo_id: int) -> bool:
        try:
            rows = self._conn.execute(
                "UPDATE todos SET completed = NOT completed WHERE id = ? AND user_id = ? RETURNING id",
                (int(todo_id), owner.value),
            ).fetchall()
        except sqlite3.Error as e:
            raise TodoStoreError(f"toggle failed id={todo_id}") from e
        return len(rows) == 1

    def delete_todo(self, owner: OwnerID, todo_id: int) -> bool:
        try:
            rows = self._conn.execute(
                "DELETE FROM todos WHERE id = ? AND user_id = ? RETURNING id",
                (int(todo_id), owner.value),
            ).fetchall()
        except sqlite3.Error as e:
            raise TodoStoreError(f"delete failed id={todo_id}") from e
        return len(rows) == 1
