"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the messages file is unreadable (readiness)
    - Readiness reports the session reaper state and active session count;
      neither changes the status code
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from guestbook.config import Settings, get_settings
from guestbook.infrastructure.message_store import MessageStore, get_message_store
from guestbook.infrastructure.session_manager import (
    SessionManager, get_session_manager,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/ready")
async def readiness_check(
    store: MessageStore = Depends(get_message_store),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Readiness probe — message file readability plus session table state."""
    if not await store.health_check():
        logger.warning("Readiness failed: messages file unreadable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "storage_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {
            "storage": "healthy",
            "session_reaper": "running" if sessions.reaper_running else "stopped",
        },
        "active_sessions": len(sessions),
    }
