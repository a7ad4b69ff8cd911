from __future__ import annotations

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient

from evalapi.domain.services import EvaluationService
from tests.utils import DEFAULT_PASSWORD, auth_headers, create_evaluation, register_user

pytestmark = pytest.mark.asyncio


@pytest.fixture()
async def alice_token(async_client: AsyncClient) -> str:
    return (await register_user(async_client, "alice@example.com", name="Alice"))["token"]


@pytest.fixture()
async def bob_token(async_client: AsyncClient) -> str:
    return (await register_user(async_client, "bob@example.com", name="Bob"))["token"]


@pytest.fixture()
async def admin_token(async_client: AsyncClient) -> str:
    data = await register_user(async_client, "admin@example.com", name="Admin", role="admin")
    return data["token"]


async def test_create_evaluation(async_client: AsyncClient, alice_token: str) -> None:
    response = await async_client.post(
        "/api/evaluations",
        json={"title": "Onboarding", "description": "First week", "score": 72},
        headers=auth_headers(alice_token),
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["message"] == "Evaluation created"
    evaluation = body["evaluation"]
    assert evaluation["title"] == "Onboarding"
    assert evaluation["description"] == "First week"
    assert evaluation["score"] == 72
    assert evaluation["status"] == "pending"
    assert evaluation["owner"]["email"] == "alice@example.com"
    assert evaluation["ownerId"] == evaluation["owner"]["id"]
    assert {"id", "createdAt", "updatedAt"} <= set(evaluation)


async def test_create_requires_authentication(async_client: AsyncClient) -> None:
    response = await async_client.post("/api/evaluations", json={"title": "Anonymous"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"title": ""}, "title"),
        ({"title": "   "}, "title"),
        ({"description": "no title"}, "title"),
        ({"title": "Review", "score": 150}, "score"),
        ({"title": "Review", "score": "high"}, "score"),
        ({"title": "Review", "score": True}, "score"),
        ({"title": "Review", "status": "bogus"}, "status"),
    ],
)
async def test_create_validation_errors(
    async_client: AsyncClient, alice_token: str, payload: dict, field: str
) -> None:
    response = await async_client.post(
        "/api/evaluations", json=payload, headers=auth_headers(alice_token)
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["error"] == "Validation failed"
    assert [detail["field"] for detail in body["details"]] == [field]


async def test_malformed_json_is_a_validation_error(
    async_client: AsyncClient, alice_token: str
) -> None:
    response = await async_client.post(
        "/api/evaluations",
        content=b"{not json",
        headers={**auth_headers(alice_token), "Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Validation failed"


async def test_get_update_delete_by_other_user_is_forbidden(
    async_client: AsyncClient, alice_token: str, bob_token: str
) -> None:
    evaluation = await create_evaluation(async_client, alice_token)
    url = f"/api/evaluations/{evaluation['id']}"

    get_response = await async_client.get(url, headers=auth_headers(bob_token))
    put_response = await async_client.put(
        url, json={"status": "completed"}, headers=auth_headers(bob_token)
    )
    delete_response = await async_client.delete(url, headers=auth_headers(bob_token))

    for response in (get_response, put_response, delete_response):
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"error": "Access denied"}


async def test_admin_can_read_update_and_delete_any_evaluation(
    async_client: AsyncClient, alice_token: str, admin_token: str
) -> None:
    evaluation = await create_evaluation(async_client, alice_token)
    url = f"/api/evaluations/{evaluation['id']}"

    get_response = await async_client.get(url, headers=auth_headers(admin_token))
    assert get_response.status_code == status.HTTP_200_OK
    assert get_response.json()["evaluation"]["id"] == evaluation["id"]

    put_response = await async_client.put(
        url, json={"score": 88}, headers=auth_headers(admin_token)
    )
    assert put_response.status_code == status.HTTP_200_OK
    assert put_response.json()["evaluation"]["score"] == 88
    assert put_response.json()["evaluation"]["ownerId"] == evaluation["ownerId"]

    delete_response = await async_client.delete(url, headers=auth_headers(admin_token))
    assert delete_response.status_code == status.HTTP_200_OK
    assert delete_response.json() == {"message": "Evaluation deleted"}


async def test_unknown_id_is_not_found(async_client: AsyncClient, bob_token: str) -> None:
    url = "/api/evaluations/00000000-0000-0000-0000-000000000000"

    for response in (
        await async_client.get(url, headers=auth_headers(bob_token)),
        await async_client.put(url, json={"title": "x"}, headers=auth_headers(bob_token)),
        await async_client.delete(url, headers=auth_headers(bob_token)),
    ):
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Evaluation not found"}


async def test_update_validation_errors(async_client: AsyncClient, alice_token: str) -> None:
    evaluation = await create_evaluation(async_client, alice_token)

    response = await async_client.put(
        f"/api/evaluations/{evaluation['id']}",
        json={"score": -1, "status": "done"},
        headers=auth_headers(alice_token),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert {d["field"] for d in response.json()["details"]} == {"score", "status"}


async def test_update_keeps_fields_not_sent(async_client: AsyncClient, alice_token: str) -> None:
    evaluation = await create_evaluation(
        async_client, alice_token, description="keep me", score=50
    )

    response = await async_client.put(
        f"/api/evaluations/{evaluation['id']}",
        json={"status": "in_progress"},
        headers=auth_headers(alice_token),
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"] == "Evaluation updated"
    assert body["evaluation"]["status"] == "in_progress"
    assert body["evaluation"]["description"] == "keep me"
    assert body["evaluation"]["score"] == 50
    assert body["evaluation"]["title"] == evaluation["title"]


async def test_list_is_scoped_by_owner_unless_admin(
    async_client: AsyncClient, alice_token: str, bob_token: str, admin_token: str
) -> None:
    for i in range(3):
        await create_evaluation(async_client, alice_token, title=f"Alice {i}")
    await create_evaluation(async_client, bob_token, title="Bob 0")

    alice_list = (
        await async_client.get("/api/evaluations", headers=auth_headers(alice_token))
    ).json()
    bob_list = (await async_client.get("/api/evaluations", headers=auth_headers(bob_token))).json()
    admin_list = (
        await async_client.get("/api/evaluations", headers=auth_headers(admin_token))
    ).json()

    assert {e["title"] for e in alice_list["evaluations"]} == {"Alice 0", "Alice 1", "Alice 2"}
    assert [e["title"] for e in bob_list["evaluations"]] == ["Bob 0"]
    assert admin_list["pagination"]["totalItems"] == 4


async def test_list_pagination(async_client: AsyncClient, alice_token: str) -> None:
    for i in range(25):
        await create_evaluation(async_client, alice_token, title=f"Evaluation {i}")

    pages = []
    for page in (1, 2, 3):
        response = await async_client.get(
            "/api/evaluations",
            params={"page": page, "limit": 10},
            headers=auth_headers(alice_token),
        )
        assert response.status_code == status.HTTP_200_OK
        pages.append(response.json())

    assert [len(p["evaluations"]) for p in pages] == [10, 10, 5]
    assert pages[2]["pagination"] == {
        "currentPage": 3,
        "totalPages": 3,
        "totalItems": 25,
        "itemsPerPage": 10,
    }
    # Newest first
    assert pages[0]["evaluations"][0]["title"] == "Evaluation 24"
    assert pages[2]["evaluations"][-1]["title"] == "Evaluation 0"


async def test_list_query_defaults(async_client: AsyncClient, alice_token: str) -> None:
    response = await async_client.get(
        "/api/evaluations",
        params={"page": "abc", "limit": "-3"},
        headers=auth_headers(alice_token),
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["pagination"] == {
        "currentPage": 1,
        "totalPages": 0,
        "totalItems": 0,
        "itemsPerPage": 10,
    }


async def test_list_limit_is_clamped(async_client: AsyncClient, alice_token: str) -> None:
    response = await async_client.get(
        "/api/evaluations", params={"limit": "100000"}, headers=auth_headers(alice_token)
    )

    assert response.json()["pagination"]["itemsPerPage"] == 100


async def test_list_huge_page_is_empty_not_an_error(
    async_client: AsyncClient, alice_token: str
) -> None:
    await create_evaluation(async_client, alice_token)

    response = await async_client.get(
        "/api/evaluations",
        params={"page": "99999999999999999999"},
        headers=auth_headers(alice_token),
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["evaluations"] == []
    assert body["pagination"]["totalItems"] == 1
    assert body["pagination"]["currentPage"] == 99999999999999999999


async def test_update_rejects_boolean_score(async_client: AsyncClient, alice_token: str) -> None:
    evaluation = await create_evaluation(async_client, alice_token)

    response = await async_client.put(
        f"/api/evaluations/{evaluation['id']}",
        json={"score": False},
        headers=auth_headers(alice_token),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert [d["field"] for d in response.json()["details"]] == ["score"]


async def test_end_to_end_flow(async_client: AsyncClient) -> None:
    await register_user(async_client, "flow@example.com", name="Flow")
    login = await async_client.post(
        "/api/auth/login", json={"email": "flow@example.com", "password": DEFAULT_PASSWORD}
    )
    assert login.status_code == status.HTTP_200_OK
    headers = auth_headers(login.json()["token"])

    created = await async_client.post(
        "/api/evaluations", json={"title": "Flow check"}, headers=headers
    )
    assert created.status_code == status.HTTP_201_CREATED
    evaluation_id = created.json()["evaluation"]["id"]

    listing = await async_client.get("/api/evaluations", headers=headers)
    assert [e["id"] for e in listing.json()["evaluations"]] == [evaluation_id]

    updated = await async_client.put(
        f"/api/evaluations/{evaluation_id}", json={"status": "completed"}, headers=headers
    )
    assert updated.json()["evaluation"]["status"] == "completed"

    deleted = await async_client.delete(f"/api/evaluations/{evaluation_id}", headers=headers)
    assert deleted.status_code == status.HTTP_200_OK

    missing = await async_client.get(f"/api/evaluations/{evaluation_id}", headers=headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


async def test_unexpected_error_returns_generic_500(
    app: FastAPI, alice_token: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def boom(*args, **kwargs):
        raise RuntimeError("database exploded at 10.0.0.5")

    monkeypatch.setattr(EvaluationService, "list", boom)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/evaluations", headers=auth_headers(alice_token))

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
