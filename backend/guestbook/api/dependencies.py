"""Request Identity — bearer/submitter token extraction and Actor resolution.

Invariants:
    - A valid admin bearer token wins over any submitter token
    - A request with no usable credential is rejected (401) before the store is called
    - Token values are never logged

Design Decisions:
    - FastAPI dependencies over middleware: only mutation routes pay for lookups
"""

from fastapi import Depends, Header

from guestbook.core.authorization import Actor
from guestbook.core.errors import UnauthorizedError
from guestbook.infrastructure.session_manager import (
    SessionManager, get_session_manager,
)


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    """Token from `Authorization: Bearer <token>`, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def require_admin(
    token: str | None = Depends(bearer_token),
    sessions: SessionManager = Depends(get_session_manager),
) -> str:
    if not sessions.validate(token):
        raise UnauthorizedError("Invalid or expired session")
    return token


def resolve_actor(
    token: str | None = Depends(bearer_token),
    x_submitter_token: str | None = Header(None),
    sessions: SessionManager = Depends(get_session_manager),
) -> Actor:
    if token and sessions.validate(token):
        return Actor.admin()
    if x_submitter_token and x_submitter_token.strip():
        return Actor.submitter(x_submitter_token.strip())
    raise UnauthorizedError()
