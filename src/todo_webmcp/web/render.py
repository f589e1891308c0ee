# src/todo_webmcp/web/render.py

"""
Response rendering.

Two output strategies, picked once per request from the `agent=true` flag:
- HUMAN: the full HTML page (Jinja2, autoescaped).
- AGENT: a tiny HTML shell carrying a JSON envelope in a non-executing
  <script type="application/json"> block and a zero-delay refresh back to /.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..todos.todo_api import ActionResult
from ..todos.todo_models import OwnerID, Todo

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Characters that could close the <script> block or open an HTML entity.
_SCRIPT_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class RenderMode(Enum):
    HUMAN = "human"
    AGENT = "agent"

    @classmethod
    def from_request(cls, request: Request) -> RenderMode:
        # First value wins for a repeated flag (?agent=false&agent=true is human).
        first = request.query_params.getlist("agent")[:1]
        return cls.AGENT if first == ["true"] else cls.HUMAN


def encode_envelope(payload: dict[str, Any]) -> str:
    """Compact JSON that is safe to embed verbatim inside a <script> element."""
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for ch, esc in _SCRIPT_UNSAFE.items():
        text = text.replace(ch, esc)
    return text


def list_envelope(todos: list[Todo]) -> dict[str, Any]:
    return {"count": len(todos), "todos": [t.to_public() for t in todos]}


def created_envelope(todo: Todo | None) -> dict[str, Any]:
    return {
        "created": todo.to_public() if todo is not None else None,
        "success": todo is not None,
    }


def action_envelope(result: ActionResult) -> dict[str, Any]:
    return {"action": result.action, "id": result.id, "success": result.success}


def render_agent(request: Request, payload: dict[str, Any]) -> Response:
    return templates.TemplateResponse(
        request,
        "agent_response.html",
        {"payload": encode_envelope(payload)},
    )


def render_page(request: Request, owner: OwnerID, todos: list[Todo]) -> Response:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"session": owner.short, "todos": todos},
    )


def redirect_home() -> Response:
    return RedirectResponse(url="/", status_code=303)


def invalid_path() -> Response:
    return HTMLResponse("Invalid path\n", status_code=400)
