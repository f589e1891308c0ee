# src/todo_webmcp/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.ports import TodoRepo
from ..todos.todo_api import TodoService


@dataclass
class AppState:
    # Settings (or a compatible namespace in tests).
    settings: Any

    # The single shared storage handle for all requests.
    todo_store: TodoRepo

    service: TodoService = field(init=False)

    def __post_init__(self) -> None:
        self.service = TodoService(self.todo_store)
