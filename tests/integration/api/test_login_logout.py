import pytest
from httpx import AsyncClient
from sqlalchemy import update

from src.domain.entities import User, UserStatus
from tests.integration.helpers import bearer, register_and_login


@pytest.mark.asyncio
async def test_login_returns_token_pair(client: AsyncClient, test_data):
    await client.post("/api/users/register", json=test_data.get_copy("register_alice"))

    response = await client.post("/api/users/login", json=test_data.credentials_for("register_alice"))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["username"] == "alice"
    assert "password_hash" not in data["user"]
    session = data["session"]
    assert len(session["session_token"]) == 128
    assert len(session["refresh_token"]) == 128
    assert session["session_token"] != session["refresh_token"]
    assert session["expires_at"].endswith(("Z", "+00:00"))


@pytest.mark.asyncio
async def test_login_captures_client_metadata(client: AsyncClient, test_data):
    login = await register_and_login(client, headers=test_data.get("client_headers"))

    response = await client.get(
        "/api/users/me/sessions", headers=bearer(login["session"]["session_token"])
    )

    assert response.status_code == 200
    session = response.json()["sessions"][0]
    assert session["user_agent"] == "FinlyTest/1.0"
    assert session["device_info"]["platform"] == '"Linux"'
    assert session["device_info"]["browser"] == '"Chromium";v="120"'
    assert session["ip_address"] == "127.0.0.1"


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_look_alike(
    client: AsyncClient, test_data
):
    await client.post("/api/users/register", json=test_data.get_copy("register_alice"))

    wrong_password = await client.post(
        "/api/users/login",
        json={"email": "alice@example.com", "password": "Wrong123!"},
    )
    unknown_email = await client.post(
        "/api/users/login",
        json={"email": "nobody@example.com", "password": "Abc12345!"},
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_suspended_account(client: AsyncClient, test_data, db_session):
    await client.post("/api/users/register", json=test_data.get_copy("register_alice"))
    await db_session.execute(
        update(User)
        .where(User.email == "alice@example.com")
        .values(status=UserStatus.suspended)
    )
    await db_session.commit()

    response = await client.post("/api/users/login", json=test_data.credentials_for("register_alice"))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_INACTIVE"


@pytest.mark.asyncio
async def test_logout_then_token_stops_working(client: AsyncClient):
    login = await register_and_login(client)
    headers = bearer(login["session"]["session_token"])

    response = await client.post("/api/users/logout", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logout successful"

    again = await client.post("/api/users/logout", headers=headers)
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "SESSION_NOT_FOUND"

    me = await client.get("/api/users/me", headers=headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_logout_with_token_in_body(client: AsyncClient):
    login = await register_and_login(client)

    response = await client.post(
        "/api/users/logout",
        json={"session_token": login["session"]["session_token"]},
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_logout_without_token(client: AsyncClient):
    response = await client.post("/api/users/logout")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_REQUIRED"


@pytest.mark.asyncio
async def test_timestamps_carry_utc_offset(client: AsyncClient):
    login = await register_and_login(client)
    headers = bearer(login["session"]["session_token"])

    me = (await client.get("/api/users/me", headers=headers)).json()
    sessions = (await client.get("/api/users/me/sessions", headers=headers)).json()

    utc_suffixes = ("Z", "+00:00")
    assert login["user"]["created_at"].endswith(utc_suffixes)
    assert me["session"]["expires_at"].endswith(utc_suffixes)
    assert sessions["sessions"][0]["expires_at"].endswith(utc_suffixes)
    assert sessions["sessions"][0]["last_activity"].endswith(utc_suffixes)


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client: AsyncClient, test_data):
    await client.post("/api/users/register", json=test_data.get_copy("register_alice"))

    response = await client.post(
        "/api/users/login",
        json={"email": "Alice@Example.com", "password": "Abc12345!"},
    )

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "alice@example.com"


@pytest.mark.asyncio
async def test_login_rejects_password_sharing_only_a_long_prefix(client: AsyncClient, test_data):
    password = "Aa1!" + "x" * 80
    payload = test_data.get_copy("register_alice")
    payload["password"] = payload["confirm_password"] = password
    assert (await client.post("/api/users/register", json=payload)).status_code == 201

    response = await client.post(
        "/api/users/login",
        json={"email": "alice@example.com", "password": password[:72] + "DIFFERENT"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"
