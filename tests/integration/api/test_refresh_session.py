import pytest
from httpx import AsyncClient

from tests.integration.helpers import bearer, register_and_login


@pytest.mark.asyncio
async def test_refresh_rotates_the_pair(client: AsyncClient):
    login = await register_and_login(client)
    old = login["session"]

    response = await client.post(
        "/api/users/refresh-session", json={"refresh_token": old["refresh_token"]}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Session refreshed successfully"
    assert data["user_id"] == login["user"]["uuid"]
    new = data["session"]
    assert new["session_token"] != old["session_token"]
    assert new["refresh_token"] != old["refresh_token"]

    assert (await client.get("/api/users/me", headers=bearer(old["session_token"]))).status_code == 401
    assert (await client.get("/api/users/me", headers=bearer(new["session_token"]))).status_code == 200

    sessions = await client.get("/api/users/me/sessions", headers=bearer(new["session_token"]))
    assert len(sessions.json()["sessions"]) == 1


@pytest.mark.asyncio
async def test_refresh_token_is_single_use(client: AsyncClient):
    login = await register_and_login(client)
    refresh_token = login["session"]["refresh_token"]

    first = await client.post("/api/users/refresh-session", json={"refreshToken": refresh_token})
    second = await client.post("/api/users/refresh-session", json={"refreshToken": refresh_token})

    assert first.status_code == 200
    assert second.status_code == 401
    assert second.json()["error"]["code"] == "INVALID_REFRESH_TOKEN"


@pytest.mark.asyncio
async def test_refresh_with_unknown_token(client: AsyncClient):
    response = await client.post(
        "/api/users/refresh-session", json={"refresh_token": "0" * 128}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired refresh token"


@pytest.mark.asyncio
async def test_session_token_is_not_a_refresh_token(client: AsyncClient):
    login = await register_and_login(client)

    response = await client.post(
        "/api/users/refresh-session",
        json={"refresh_token": login["session"]["session_token"]},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token_is_not_a_session_token(client: AsyncClient):
    login = await register_and_login(client)

    response = await client.get(
        "/api/users/me", headers=bearer(login["session"]["refresh_token"])
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"
