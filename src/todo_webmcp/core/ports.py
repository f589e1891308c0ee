# src/todo_webmcp/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the web layer.

Handlers depend on a Protocol instead of the concrete SQLite store.
This keeps storage swappable and lets tests inject in-memory or failing doubles.
"""

from typing import Protocol

from ..todos.todo_models import OwnerID, Todo


class TodoRepo(Protocol):
    """
    Owner-scoped todo storage.

    Every call takes the owner explicitly; implementations must filter
    (reads) and guard (writes) on it. Failures are raised, never swallowed.
    """

    def list_todos(self, owner: OwnerID) -> list[Todo]: ...
    def add_todo(self, owner: OwnerID, description: str) -> Todo: ...
    def toggle_todo(self, owner: OwnerID, todo_id: int) -> bool: ...
    def delete_todo(self, owner: OwnerID, todo_id: int) -> bool: ...

    def count_todos(self) -> int: ...
    def close(self) -> None: ...
