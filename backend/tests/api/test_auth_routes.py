"""Auth Routes — tests for /api/auth login, logout and verify.

Tests cover:
    - login with correct credentials returns a token that verify accepts
    - wrong credentials are 401, missing fields are 400
    - verify rejects missing, unknown, malformed and expired tokens
    - logout is 200 for known, unknown and absent tokens
"""

ADMIN_PASSWORD = "test-password"


async def _login(client) -> str:
    res = await client.post(
        "/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD},
    )
    assert res.status_code == 200
    return res.json()["token"]


async def test_login_then_verify(client):
    token = await _login(client)
    assert len(token) == 64

    res = await client.get(
        "/api/auth/verify", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 200
    assert res.json() == {"success": True}


async def test_login_response_shape(client):
    res = await client.post(
        "/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD},
    )
    body = res.json()
    assert body["success"] is True
    assert set(body) == {"success", "token"}


async def test_login_wrong_password_401(client, sessions):
    res = await client.post(
        "/api/auth/login", json={"username": "admin", "password": "wrong"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert len(sessions) == 0


async def test_login_missing_fields_400(client):
    res = await client.post("/api/auth/login", json={"username": "admin"})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Username and password required"


async def test_verify_without_header_401(client):
    res = await client.get("/api/auth/verify")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_verify_unknown_or_malformed_token_401(client):
    for header in ("Bearer " + "0" * 64, "Basic abc", "Bearer"):
        res = await client.get("/api/auth/verify", headers={"Authorization": header})
        assert res.status_code == 401


async def test_verify_expired_token_401_and_evicted(client, sessions, session_clock):
    token = await _login(client)
    session_clock.offset = 24 * 60 * 60 + 1

    res = await client.get(
        "/api/auth/verify", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert token not in sessions


async def test_logout_invalidates_token(client):
    token = await _login(client)
    headers = {"Authorization": f"Bearer {token}"}

    res = await client.post("/api/auth/logout", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"success": True}

    res = await client.get("/api/auth/verify", headers=headers)
    assert res.status_code == 401


async def test_logout_unknown_or_missing_token_still_succeeds(client):
    res = await client.post(
        "/api/auth/logout", headers={"Authorization": "Bearer nope"},
    )
    assert res.status_code == 200
    res = await client.post("/api/auth/logout")
    assert res.status_code == 200
    assert res.json() == {"success": True}
