"""Health & Shell — tests for probes, security headers and the 404 envelope.

Tests cover:
    - liveness, readiness (storage, reaper state, active sessions), 503 on corruption
    - storage failures surface as an opaque STORAGE_ERROR
    - security headers on routed responses and on unhandled 500s
    - unknown routes use the shared error envelope
"""

from httpx import ASGITransport, AsyncClient

from guestbook.infrastructure.message_store import get_message_store
from guestbook.main import app


async def test_health_is_up(client):
    res = await client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "test"


async def test_ready_when_storage_readable(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    body = res.json()
    assert body["checks"] == {"storage": "healthy", "session_reaper": "stopped"}
    assert body["active_sessions"] == 0


async def test_ready_reports_running_reaper_and_active_sessions(
    client, sessions, admin_headers,
):
    sessions.start()
    try:
        res = await client.get("/health/ready")
    finally:
        await sessions.stop()
    body = res.json()
    assert body["checks"]["session_reaper"] == "running"
    assert body["active_sessions"] == 1


async def test_not_ready_when_storage_corrupt(client, store):
    store.path.write_text("garbage")
    res = await client.get("/health/ready")
    assert res.status_code == 503


async def test_list_with_corrupt_storage_is_opaque_500(client, store):
    store.path.write_text("garbage")
    res = await client.get("/api/messages")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "STORAGE_ERROR"
    assert error["message"] == "Failed to read messages"


async def test_security_headers_on_every_response(client):
    res = await client.get("/health")
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert res.headers["X-XSS-Protection"] == "1; mode=block"


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "HTTP_ERROR"


async def test_unhandled_exception_is_opaque_500_with_security_headers(client):
    def broken_store():
        raise RuntimeError("disk controller on fire")

    app.dependency_overrides[get_message_store] = broken_store
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as raw:
        res = await raw.get("/api/messages")

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert "fire" not in res.text
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert res.headers["X-XSS-Protection"] == "1; mode=block"
