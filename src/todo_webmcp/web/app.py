# src/todo_webmcp/web/app.py

"""
HTTP surface.

    GET  /                      -> page, or {todos, count} with ?agent=true
    GET  /todos                 -> {todos, count} with ?agent=true, else redirect /
    POST /todos                 -> create from form field `description`
    POST /todos/{id}/{action}   -> toggle | delete
    GET  /polyfill.js           -> static script
    GET  /webmcp-translator.js  -> static script

Handlers are plain `def` functions: they run in the server threadpool and
block only on the shared SQLite connection.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import FileResponse, Response

from ..core.state import AppState
from ..todos.todo_api import TodoService
from ..todos.todo_models import OwnerID
from .identity import get_owner, persist_identity
from .render import (
    RenderMode,
    action_envelope,
    created_envelope,
    invalid_path,
    list_envelope,
    redirect_home,
    render_agent,
    render_page,
)

logger = logging.getLogger(__name__)

STATIC_SCRIPTS = ("polyfill.js", "webmcp-translator.js")

_INT_RE = re.compile(r"^[+-]?\d+$")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

router = APIRouter()


def get_service(request: Request) -> TodoService:
    return request.app.state.app_state.service


def parse_todo_id(raw: str) -> int:
    """
    Parse the {id} path segment.

    Anything that is not a 64-bit decimal integer becomes 0, which never
    matches a row (AUTOINCREMENT ids start at 1). The request still proceeds;
    the malformed value is logged so it can be spotted.
    """
    if _INT_RE.match(raw):
        value = int(raw)
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
    logger.warning("Malformed todo id %r in path; treating as 0", raw)
    return 0


@router.get("/")
def index(
    request: Request,
    owner: OwnerID = Depends(get_owner),
    service: TodoService = Depends(get_service),
) -> Response:
    todos = service.list_todos(owner)
    if RenderMode.from_request(request) is RenderMode.AGENT:
        return render_agent(request, list_envelope(todos))
    return render_page(request, owner, todos)


@router.get("/todos")
def list_todos(
    request: Request,
    owner: OwnerID = Depends(get_owner),
    service: TodoService = Depends(get_service),
) -> Response:
    if RenderMode.from_request(request) is RenderMode.AGENT:
        return render_agent(request, list_envelope(service.list_todos(owner)))
    return redirect_home()


@router.post("/todos")
def create_todo(
    request: Request,
    description: str = Form(""),
    owner: OwnerID = Depends(get_owner),
    service: TodoService = Depends(get_service),
) -> Response:
    todo = service.create_todo(owner, description)
    if RenderMode.from_request(request) is RenderMode.AGENT:
        return render_agent(request, created_envelope(todo))
    return redirect_home()


@router.post("/todos/{rest:path}")
def todo_action(
    request: Request,
    rest: str,
    owner: OwnerID = Depends(get_owner),
    service: TodoService = Depends(get_service),
) -> Response:
    # rest is "<id>/<action>[/...]"; extra trailing segments are ignored.
    parts = rest.split("/")
    if len(parts) < 2:
        logger.info("Invalid todo path /todos/%s", rest)
        return invalid_path()

    todo_id = parse_todo_id(parts[0])
    result = service.apply_action(owner, parts[1], todo_id)

    if RenderMode.from_request(request) is RenderMode.AGENT:
        return render_agent(request, action_envelope(result))
    return redirect_home()


def _script_route(name: str):
    def serve(request: Request) -> Response:
        static_dir = Path(getattr(request.app.state.settings, "static_dir", "."))
        path = static_dir / name
        if not path.is_file():
            raise HTTPException(status_code=404, detail=f"{name} not found")
        return FileResponse(path, media_type="application/javascript")

    serve.__name__ = f"serve_{name.replace('-', '_').replace('.', '_')}"
    return serve


for _name in STATIC_SCRIPTS:
    router.add_api_route(f"/{_name}", _script_route(_name), methods=["GET"])


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI app around an already-opened store."""
    app = FastAPI(
        title=getattr(state.settings, "app_name", "todo-webmcp"),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.app_state = state
    app.state.settings = state.settings

    app.middleware("http")(persist_identity)
    app.include_router(router)
    return app
