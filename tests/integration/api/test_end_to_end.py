import secrets

import pytest
from httpx import AsyncClient

from tests.integration.helpers import bearer


@pytest.mark.asyncio
async def test_register_login_use_and_logout(client: AsyncClient):
    """
    Full lifecycle of one session:
    register -> login -> authenticated call -> forged token rejected ->
    logout -> token no longer accepted
    """
    register = await client.post(
        "/api/users/register",
        json={
            "username": "alice",
            "email": "alice@example.com",
            "password": "Abc12345!",
            "confirm_password": "Abc12345!",
            "full_name": "Alice",
        },
    )
    assert register.status_code == 201

    login = await client.post(
        "/api/users/login",
        json={"email": "alice@example.com", "password": "Abc12345!"},
    )
    assert login.status_code == 200
    token = login.json()["session"]["session_token"]

    me = await client.get("/api/users/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["user"]["username"] == "alice"

    forged = await client.get("/api/users/me", headers=bearer(secrets.token_hex(64)))
    assert forged.status_code == 401

    logout = await client.post("/api/users/logout", headers=bearer(token))
    assert logout.status_code == 200

    reuse = await client.get("/api/users/me", headers=bearer(token))
    assert reuse.status_code == 401
