"""Admin Auth Routes — login, logout and session verification.

Invariants:
    - login returns a fresh bearer token or 401; missing fields are 400
    - logout always answers 200 {success: true}, known token or not
    - verify answers 200 only for a present, unexpired session
"""

import logging

from fastapi import APIRouter, Depends

from guestbook.api.dependencies import bearer_token, require_admin
from guestbook.core.errors import InputValidationError
from guestbook.infrastructure.session_manager import (
    SessionManager, get_session_manager,
)
from guestbook.schemas.auth import LoginRequest, LoginResponse, SuccessResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    sessions: SessionManager = Depends(get_session_manager),
):
    if not body.username or not body.password:
        raise InputValidationError(
            "Username and password required",
            "username" if not body.username else "password",
        )
    session = sessions.login(body.username, body.password)
    return LoginResponse(token=session.token)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    token: str | None = Depends(bearer_token),
    sessions: SessionManager = Depends(get_session_manager),
):
    sessions.logout(token)
    return SuccessResponse()


@router.get(
    "/verify", response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
async def verify():
    return SuccessResponse()
