from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from src.domain.base import utcnow
from src.domain.entities import Session
from tests.integration.helpers import bearer, register_and_login


@pytest.mark.asyncio
async def test_sweep_requires_api_key(client: AsyncClient):
    response = await client.post("/api/admin/sessions/sweep")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_sweep_rejects_wrong_api_key(client: AsyncClient):
    response = await client.post(
        "/api/admin/sessions/sweep", headers={"X-Admin-API-Key": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_sweep_deletes_only_expired_sessions(
    client: AsyncClient, test_data, admin_headers, db_session
):
    live = await register_and_login(client)
    for _ in range(2):
        await client.post("/api/users/login", json=test_data.credentials_for("register_alice"))
    await db_session.execute(
        update(Session)
        .where(Session.session_token != live["session"]["session_token"])
        .values(expires_at=utcnow() - timedelta(minutes=1))
    )
    await db_session.commit()

    first = await client.post("/api/admin/sessions/sweep", headers=admin_headers)
    second = await client.post("/api/admin/sessions/sweep", headers=admin_headers)

    assert first.status_code == 200
    assert first.json() == {"deleted_count": 2}
    assert second.json() == {"deleted_count": 0}
    me = await client.get("/api/users/me", headers=bearer(live["session"]["session_token"]))
    assert me.status_code == 200
