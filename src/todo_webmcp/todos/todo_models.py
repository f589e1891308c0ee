# src/todo_webmcp/todos/todo_models.py

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Any

# 128 random bits, hex-encoded to 32 characters.
OWNER_TOKEN_BYTES = 16


@dataclass(frozen=True, slots=True)
class OwnerID:
    """
    Opaque per-browser token that owns todo rows.

    Possession of the token is the only credential: whoever presents it
    can read and mutate every row stored under it.
    """

    value: str

    @classmethod
    def new(cls) -> OwnerID:
        return cls(secrets.token_hex(OWNER_TOKEN_BYTES))

    @property
    def short(self) -> str:
        """First 8 characters, shown on the page as a session hint."""
        return self.value[:8]

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class Todo:
    id: int
    owner_id: OwnerID
    description: str
    completed: bool = False

    def to_public(self) -> dict[str, Any]:
        """Client-facing shape; the owner token is never echoed back."""
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
        }
