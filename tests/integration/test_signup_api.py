"""Integration tests for POST /api/v1/auth/signup."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from praytogether.infrastructure.persistence.models import MemberModel

pytestmark = pytest.mark.integration

SIGNUP_URL = "/api/v1/auth/signup"


async def _member_count(db_manager) -> int:
    async with db_manager.session() as session:
        return await session.scalar(select(func.count()).select_from(MemberModel))


@pytest.mark.asyncio
async def test_signup_success(client: AsyncClient, db_manager, signup_payload):
    """A valid signup returns 201 with an empty body and stores a hash."""
    response = await client.post(SIGNUP_URL, json=signup_payload)

    assert response.status_code == 201
    assert response.json() == {}

    async with db_manager.session() as session:
        member = await session.scalar(select(MemberModel).where(MemberModel.email == "minsu@example.com"))
    assert member is not None
    assert member.name == "Kim Minsu"
    assert member.password_hash.startswith("$argon2id$")


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, db_manager, signup_payload):
    first = await client.post(SIGNUP_URL, json=signup_payload)
    assert first.status_code == 201

    second = await client.post(SIGNUP_URL, json={**signup_payload, "name": "Someone Else"})

    assert second.status_code == 409
    assert second.json() == {
        "status": 409,
        "code": "MEMBER-002",
        "message": "This member is already registered.",
    }
    assert await _member_count(db_manager) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, "Must be at least 1 characters."),
        ({"email": "not-an-email"}, "Invalid email format."),
        ({"email": "a" * 45 + "@example.com"}, "Must be at most 50 characters."),
        ({"phoneNumber": "1234"}, "Invalid mobile phone number format. (010-XXXX-XXXX)"),
        ({"password": "short"}, "Must be at least 8 characters."),
        ({"password": "p" * 16}, "Must be at most 15 characters."),
    ],
)
async def test_signup_validation_errors(client: AsyncClient, db_manager, signup_payload, overrides, message):
    response = await client.post(SIGNUP_URL, json={**signup_payload, **overrides})

    assert response.status_code == 400
    assert response.json() == {"status": 400, "code": "ERROR-001", "message": message}
    assert await _member_count(db_manager) == 0


@pytest.mark.asyncio
async def test_signup_missing_field(client: AsyncClient, signup_payload):
    del signup_payload["phoneNumber"]

    response = await client.post(SIGNUP_URL, json=signup_payload)

    assert response.status_code == 400
    assert response.json()["message"] == "This field is required."


@pytest.mark.asyncio
async def test_signup_malformed_json(client: AsyncClient):
    response = await client.post(
        SIGNUP_URL,
        content=b'{"name": "Kim", "email": ',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "ERROR-002"


@pytest.mark.asyncio
async def test_signup_body_not_an_object(client: AsyncClient):
    response = await client.post(SIGNUP_URL, json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.json()["code"] == "ERROR-002"


@pytest.mark.asyncio
async def test_signup_without_body(client: AsyncClient):
    response = await client.post(SIGNUP_URL)

    assert response.status_code == 400
    assert response.json()["code"] == "ERROR-002"


@pytest.mark.asyncio
async def test_signup_response_carries_request_id(client: AsyncClient, signup_payload):
    response = await client.post(SIGNUP_URL, json=signup_payload, headers={"X-Request-ID": "signup-req-1"})

    assert response.headers["X-Request-ID"] == "signup-req-1"
