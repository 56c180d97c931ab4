"""API test fixtures — FastAPI test client over a tmp_path message store.

Invariants:
    - Every test gets a fresh message file and an empty session table
    - get_message_store / get_session_manager overridden via dependency_overrides
    - The lifespan does not run under ASGITransport, so nothing touches real data

Design Decisions:
    - Session manager gets a controllable clock so expiry is testable over HTTP
"""

import time

import pytest
from httpx import ASGITransport, AsyncClient

from guestbook.core.credentials import resolve_admin_credentials
from guestbook.infrastructure.message_store import MessageStore, get_message_store
from guestbook.infrastructure.session_manager import (
    SessionManager, get_session_manager,
)
from guestbook.main import app

ADMIN_PASSWORD = "test-password"


class MutableClock:
    def __init__(self):
        self.offset = 0.0

    def __call__(self) -> float:
        return time.time() + self.offset


@pytest.fixture
async def store(tmp_path):
    s = MessageStore(tmp_path / "messages.json")
    await s.initialize()
    return s


@pytest.fixture
def session_clock():
    return MutableClock()


@pytest.fixture
def sessions(session_clock):
    creds = resolve_admin_credentials("admin", password=ADMIN_PASSWORD)
    return SessionManager(creds, clock=session_clock)


@pytest.fixture
async def client(store, sessions):
    """FastAPI test client with store and session manager overridden."""
    app.dependency_overrides[get_message_store] = lambda: store
    app.dependency_overrides[get_session_manager] = lambda: sessions

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(sessions):
    token = sessions.login("admin", ADMIN_PASSWORD).token
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def posted(client):
    """A freshly posted message: (response json, owner headers)."""
    res = await client.post(
        "/api/messages", json={"name": "Ada", "message": "Hello there"},
    )
    body = res.json()
    return body, {"x-submitter-token": body["token"]}
