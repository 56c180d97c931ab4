"""Session Manager — admin bearer tokens with lazy expiry and an hourly reaper.

Invariants:
    - expires_at == created_at + ttl at creation
    - A session is valid iff present in the table AND now <= expires_at
    - Every table operation (login, validate, logout, sweep) holds self._lock
    - logout() is idempotent and never raises

Design Decisions:
    - threading.Lock over asyncio.Lock: operations never await, and sync
      route handlers run in the threadpool, so the lock must cover both
    - Lazy expiry AND a periodic sweep: tokens that are never looked up again
      would otherwise stay in the table forever
    - Reaper is an asyncio task owned by the manager; the FastAPI lifespan
      calls start()/stop()
    - Injectable clock (seconds since epoch) so expiry is testable without sleeping
    - Failed logins are logged without the attempted username
    - len() and reaper_running back the readiness probe; `in` is introspection
      for callers holding a token
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from guestbook.core.credentials import AdminCredentials
from guestbook.core.domain_types import SessionToken
from guestbook.core.errors import InvalidCredentialsError
from guestbook.core.tokens import issue_token

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_SWEEP_INTERVAL_SECONDS = 60 * 60


@dataclass
class AdminSession:
    token: SessionToken
    username: str
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class SessionManager:
    """Owns the in-memory session table for the single admin account."""

    def __init__(
        self,
        credentials: AdminCredentials,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._credentials = credentials
        self._ttl = ttl_seconds
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._sessions: dict[str, AdminSession] = {}
        self._lock = threading.Lock()
        self._reaper: asyncio.Task | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._sessions

    def login(self, username: str, password: str) -> AdminSession:
        if not self._credentials.verify(username, password):
            logger.warning("Admin login failed")
            raise InvalidCredentialsError()
        now = self._clock()
        session = AdminSession(
            token=SessionToken(issue_token()),
            username=username,
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._sessions[session.token] = session
        logger.info("Admin logged in", extra={"username": username})
        return session

    def validate(self, token: str | None) -> bool:
        if not token:
            return False
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return False
            if session.is_expired(now):
                del self._sessions[token]
                return False
            return True

    def logout(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def sweep(self) -> int:
        """Evict every expired session. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [
                token for token, session in self._sessions.items()
                if session.is_expired(now)
            ]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.info("Expired sessions swept", extra={"evicted": len(expired)})
        return len(expired)

    # ─── Reaper lifecycle ────────────────────────────────────────

    def start(self) -> None:
        if self._reaper is None or self._reaper.done():
            self._reaper = asyncio.create_task(self._run_reaper())

    async def stop(self) -> None:
        if self._reaper is None:
            return
        self._reaper.cancel()
        try:
            await self._reaper
        except asyncio.CancelledError:
            pass
        self._reaper = None

    @property
    def reaper_running(self) -> bool:
        return self._reaper is not None and not self._reaper.done()

    async def _run_reaper(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Session sweep failed: {e}", exc_info=True)


# Singleton (initialized on startup)
session_manager: SessionManager | None = None


def init_session_manager(credentials: AdminCredentials, **kwargs) -> SessionManager:
    global session_manager
    session_manager = SessionManager(credentials, **kwargs)
    return session_manager


def get_session_manager() -> SessionManager:
    """FastAPI dependency for the session manager."""
    if session_manager is None:
        raise RuntimeError("Session manager not initialized")
    return session_manager
