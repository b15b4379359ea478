"""
Auth API tests - registration, login and the error contract.
"""

import pytest
from httpx import AsyncClient

from app.core.security import decode_access_token

USER_PASSWORD = "User1234"  # matches the regular_user fixture

REGISTER = "/api/auth/register"
LOGIN = "/api/auth/login"


def _payload(**overrides) -> dict:
    data = {"name": "Ada Lovelace", "email": "a@b.com", "password": "Secret1"}
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_register_returns_token_and_public_user(client: AsyncClient):
    response = await client.post(REGISTER, json=_payload(email="  A@B.com "))
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "a@b.com"
    assert body["user"]["role"] == "user"
    assert set(body["user"]) == {"id", "name", "email", "role"}
    claims = decode_access_token(body["token"])
    assert claims.user_id == body["user"]["id"]
    assert claims.role == "user"


@pytest.mark.asyncio
async def test_register_same_email_twice_conflicts(client: AsyncClient):
    first = await client.post(REGISTER, json=_payload())
    second = await client.post(REGISTER, json=_payload(name="Someone Else"))
    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json() == {
        "success": False,
        "message": "Email already registered. Please use a different email or login.",
    }


@pytest.mark.asyncio
async def test_register_sanitizes_name(client: AsyncClient):
    response = await client.post(REGISTER, json=_payload(name="  <script>Bob</script> "))
    assert response.status_code == 201
    assert response.json()["user"]["name"] == "scriptBob/script"


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides, message", [
    ({"name": None}, "All fields (name, email, password) are required"),
    ({"password": ""}, "All fields (name, email, password) are required"),
    ({"name": "A"}, "Name must be at least 2 characters long"),
    ({"name": "x" * 51}, "Name must not exceed 50 characters"),
    ({"email": "not-an-email"}, "Please provide a valid email address"),
    ({"password": "Ab1"}, "Password must be at least 6 characters long"),
    ({"password": "secret1"}, "Password must contain at least one uppercase letter and one number"),
    ({"password": "Secrets"}, "Password must contain at least one uppercase letter and one number"),
    ({"password": "A1" + "x" * 80}, "Password must not exceed 72 bytes"),
])
async def test_register_validation_messages(client: AsyncClient, overrides, message):
    response = await client.post(REGISTER, json=_payload(**overrides))
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": message}


@pytest.mark.asyncio
@pytest.mark.parametrize("requested, expected", [
    ("admin", "admin"),
    ("user", "user"),
    ("superuser", "user"),
    ("ADMIN", "user"),
    (None, "user"),
])
async def test_register_role_selection(client: AsyncClient, requested, expected):
    response = await client.post(REGISTER, json=_payload(role=requested))
    assert response.status_code == 201
    assert response.json()["user"]["role"] == expected


@pytest.mark.asyncio
async def test_register_rejects_non_object_body(client: AsyncClient):
    response = await client.post(REGISTER, content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid request body"}


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, regular_user):
    response = await client.post(LOGIN, json={"email": " USER@example.com", "password": USER_PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["id"] == regular_user.id
    assert decode_access_token(body["token"]).user_id == regular_user.id


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client: AsyncClient, regular_user):
    wrong_password = await client.post(LOGIN, json={"email": "user@example.com", "password": "Wrong123"})
    unknown_email = await client.post(LOGIN, json={"email": "ghost@example.com", "password": USER_PASSWORD})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "message": "Invalid email or password",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("payload, message", [
    ({"email": "user@example.com"}, "Email and password are required"),
    ({"password": "Secret1"}, "Email and password are required"),
    ({"email": "nope", "password": "Secret1"}, "Please provide a valid email address"),
])
async def test_login_bad_input_is_400(client: AsyncClient, payload, message):
    response = await client.post(LOGIN, json=payload)
    assert response.status_code == 400
    assert response.json()["message"] == message


@pytest.mark.asyncio
async def test_registered_user_can_log_in(client: AsyncClient):
    await client.post(REGISTER, json=_payload())
    response = await client.post(LOGIN, json={"email": "a@b.com", "password": "Secret1"})
    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Ada Lovelace"
