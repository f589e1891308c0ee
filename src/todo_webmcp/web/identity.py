# src/todo_webmcp/web/identity.py

"""
Anonymous per-browser identity.

The identity is a random token kept in a cookie. Resolution happens once per
request (cached on request.state); if a new token had to be issued, the
`persist_identity` middleware writes the cookie onto whatever response the
handler produced (page, envelope or redirect).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import Request, Response

from ..todos.todo_models import OwnerID

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = "user_id"
DEFAULT_COOKIE_MAX_AGE = 365 * 86400


@dataclass(frozen=True, slots=True)
class Identity:
    owner_id: OwnerID
    issued: bool


def _cookie_name(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    return getattr(settings, "cookie_name", DEFAULT_COOKIE_NAME)


def _cookie_max_age(request: Request) -> int:
    settings = getattr(request.app.state, "settings", None)
    return int(getattr(settings, "cookie_max_age", DEFAULT_COOKIE_MAX_AGE))


def resolve_identity(request: Request) -> Identity:
    cached = getattr(request.state, "identity", None)
    if cached is not None:
        return cached

    token = request.cookies.get(_cookie_name(request), "")
    if token:
        identity = Identity(owner_id=OwnerID(token), issued=False)
    else:
        identity = Identity(owner_id=OwnerID.new(), issued=True)
        logger.info("Issued new identity %s", identity.owner_id.short)

    request.state.identity = identity
    return identity


def get_owner(request: Request) -> OwnerID:
    """FastAPI dependency: the owner id for this request."""
    return resolve_identity(request).owner_id


async def persist_identity(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """HTTP middleware: set the identity cookie when this request issued one."""
    response = await call_next(request)

    identity = getattr(request.state, "identity", None)
    if identity is not None and identity.issued:
        response.set_cookie(
            _cookie_name(request),
            identity.owner_id.value,
            max_age=_cookie_max_age(request),
            path="/",
            httponly=True,
        )
    return response
