"""Integration tests for POST /api/v1/auth/login."""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from praytogether.infrastructure.auth import TokenType

pytestmark = pytest.mark.integration

SIGNUP_URL = "/api/v1/auth/signup"
LOGIN_URL = "/api/v1/auth/login"


@pytest_asyncio.fixture
async def registered(client: AsyncClient, signup_payload) -> dict[str, str]:
    response = await client.post(SIGNUP_URL, json=signup_payload)
    assert response.status_code == 201
    return signup_payload


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, registered, token_manager):
    response = await client.post(
        LOGIN_URL,
        json={"email": registered["email"], "password": registered["password"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"accessToken", "refreshToken"}

    access = token_manager.validate(data["accessToken"], expected_type=TokenType.ACCESS)
    refresh = token_manager.validate(data["refreshToken"], expected_type=TokenType.REFRESH)
    assert access.email == "minsu@example.com"
    assert access.member_id == refresh.member_id


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, registered):
    response = await client.post(
        LOGIN_URL,
        json={"email": registered["email"], "password": "wrongpass1"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "status": 400,
        "code": "AUTH-003",
        "message": "Email or password is incorrect.",
    }


@pytest.mark.asyncio
async def test_unknown_email_and_wrong_password_look_the_same(client: AsyncClient, registered):
    """The response must not reveal whether the email is registered."""
    unknown = await client.post(
        LOGIN_URL,
        json={"email": "nobody@example.com", "password": registered["password"]},
    )
    wrong = await client.post(
        LOGIN_URL,
        json={"email": registered["email"], "password": "wrongpass1"},
    )

    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == wrong.json()


@pytest.mark.asyncio
async def test_login_invalid_email_format(client: AsyncClient):
    response = await client.post(LOGIN_URL, json={"email": "nope", "password": "prayer1234"})

    assert response.status_code == 400
    assert response.json() == {"status": 400, "code": "ERROR-001", "message": "Invalid email format."}


@pytest.mark.asyncio
async def test_login_password_too_short(client: AsyncClient):
    response = await client.post(LOGIN_URL, json={"email": "minsu@example.com", "password": "short"})

    assert response.status_code == 400
    assert response.json()["message"] == "Must be at least 8 characters."


@pytest.mark.asyncio
async def test_login_malformed_json(client: AsyncClient):
    response = await client.post(
        LOGIN_URL,
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "ERROR-002"
