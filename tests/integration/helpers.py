from httpx import AsyncClient

from tests.fixtures.json_loader import TestDataLoader


async def register_and_login(client: AsyncClient, key: str = "register_alice", headers=None):
    """Register the named fixture user and log in; returns the login payload"""
    response = await client.post("/api/users/register", json=TestDataLoader.get_copy(key))
    assert response.status_code == 201, response.text

    response = await client.post(
        "/api/users/login",
        json=TestDataLoader.credentials_for(key),
        headers=headers or {},
    )
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
