# src/todo_webmcp/todos/todo_api.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from ..core.ports import TodoRepo
from .todo_models import OwnerID, Todo
from .todo_store import TodoStoreError

logger = logging.getLogger(__name__)


class TodoAction(StrEnum):
    TOGGLE = "toggle"
    DELETE = "delete"

    @classmethod
    def parse(cls, raw: str) -> TodoAction | None:
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class ActionResult:
    action: str
    id: int
    success: bool


class TodoService:
    """
    Degradation policy between the HTTP handlers and a TodoRepo.

    Storage failures never reach the client as errors:
    - list   -> empty list
    - create -> None (nothing was created)
    - toggle/delete -> success=False
    Each failure is logged with its traceback.
    """

    def __init__(self, repo: TodoRepo) -> None:
        self._repo = repo

    def list_todos(self, owner: OwnerID) -> list[Todo]:
        try:
            return self._repo.list_todos(owner)
        except TodoStoreError:
            logger.exception("list_todos failed owner=%s; rendering empty list", owner.short)
            return []

    def create_todo(self, owner: OwnerID, description: str) -> Todo | None:
        try:
            todo = self._repo.add_todo(owner, description)
        except TodoStoreError:
            logger.exception("add_todo failed owner=%s; nothing created", owner.short)
            return None
        logger.info("Created todo id=%s owner=%s", todo.id, owner.short)
        return todo

    def apply_action(self, owner: OwnerID, action_name: str, todo_id: int) -> ActionResult:
        """Run toggle/delete; unknown action names are a no-op miss."""
        action = TodoAction.parse(action_name)
        if action is None:
            logger.warning("Unknown todo action %r id=%s owner=%s", action_name, todo_id, owner.short)
            return ActionResult(action=action_name, id=todo_id, success=False)

        try:
            if action is TodoAction.TOGGLE:
                ok = self._repo.toggle_todo(owner, todo_id)
            else:
                ok = self._repo.delete_todo(owner, todo_id)
        except TodoStoreError:
            logger.exception("%s failed id=%s owner=%s", action.value, todo_id, owner.short)
            ok = False

        logger.debug("%s id=%s owner=%s success=%s", action.value, todo_id, owner.short, ok)
        return ActionResult(action=action.value, id=todo_id, success=ok)
