# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todo_webmcp.core.state import AppState
from todo_webmcp.todos.todo_store import TodoStore
from todo_webmcp.web.app import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the web layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the process environment.
    """
    return SimpleNamespace(
        app_name="todo-webmcp-test",
        db_path=tmp_path / "todos.db",
        static_dir=tmp_path / "static",
        cookie_name="user_id",
        cookie_max_age=365 * 86400,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> Iterator[TodoStore]:
    s = TodoStore(settings.db_path)
    yield s
    s.close()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore) -> AppState:
    """
    AppState wired with a real SQLite store: owner scoping lives in the SQL,
    so it is part of what we want to test.
    """
    return AppState(settings=settings, todo_store=store)


@pytest.fixture()
def app(state: AppState) -> FastAPI:
    return create_app(state)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c
