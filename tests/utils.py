from __future__ import annotations

from typing import Any

from httpx import AsyncClient

DEFAULT_PASSWORD = "secret123"


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_user(
    client: AsyncClient,
    email: str,
    *,
    name: str = "Test User",
    password: str = DEFAULT_PASSWORD,
    role: str | None = None,
) -> dict[str, Any]:
    """Register through the API and return the response body."""
    payload: dict[str, Any] = {"email": email, "password": password, "name": name}
    if role is not None:
        payload["role"] = role
    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def create_evaluation(
    client: AsyncClient, token: str, **fields: Any
) -> dict[str, Any]:
    payload = {"title": "Quarterly review", **fields}
    response = await client.post("/api/evaluations", json=payload, headers=auth_headers(token))
    assert response.status_code == 201, response.text
    return response.json()["evaluation"]
