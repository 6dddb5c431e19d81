"""Tests for email and national ID login."""

import pytest

from aqar_backend.modules.auth.password_service import hash_password, verify_password
from aqar_backend.modules.auth.services import (
    INVALID_CREDENTIALS_MESSAGE,
    INVALID_LOGIN_METHOD_MESSAGE,
    UNKNOWN_NATIONAL_ID_MESSAGE,
    WRONG_PASSWORD_MESSAGE,
    password_matches,
)


async def login(client, method: str, identifier: str, password: str | None = None):
    payload = {"loginMethod": method, "identifier": identifier}
    if password is not None:
        payload["password"] = password
    return await client.post("/api/login", json=payload)


@pytest.mark.asyncio
async def test_email_login(client):
    response = await login(client, "email", "admin@example.com", "password")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["id"] == "user-admin"
    assert body["user"]["role"] == "admin"
    assert "password" not in body["user"]


@pytest.mark.asyncio
async def test_system_user_has_its_own_password(client):
    assert (await login(client, "email", "system@app.com", "sys")).status_code == 200
    assert (await login(client, "email", "system@app.com", "password")).status_code == 401


@pytest.mark.asyncio
async def test_wrong_password(client):
    response = await login(client, "email", "admin@example.com", "nope")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": WRONG_PASSWORD_MESSAGE}


@pytest.mark.asyncio
async def test_unknown_email(client):
    response = await login(client, "email", "ghost@example.com", "password")

    assert response.status_code == 401
    assert response.json()["error"] == INVALID_CREDENTIALS_MESSAGE


@pytest.mark.asyncio
async def test_missing_password_is_rejected(client):
    response = await login(client, "email", "admin@example.com")

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("national_id", "user_id"),
    [("1000000001", "user-owner-1"), ("2000000001", "user-tenant-1")],
)
async def test_national_id_login(client, national_id, user_id):
    response = await login(client, "nationalId", national_id)

    assert response.status_code == 200
    assert response.json()["user"]["id"] == user_id


@pytest.mark.asyncio
async def test_unknown_national_id(client):
    response = await login(client, "nationalId", "9999999999")

    assert response.status_code == 401
    assert response.json()["error"] == UNKNOWN_NATIONAL_ID_MESSAGE


@pytest.mark.asyncio
async def test_unknown_login_method(client):
    response = await login(client, "sms", "0500000001")

    assert response.status_code == 400
    assert response.json()["error"] == INVALID_LOGIN_METHOD_MESSAGE


@pytest.mark.asyncio
async def test_saved_plaintext_password_is_hashed(client):
    user = {
        "id": "user-new",
        "name": "مستخدم",
        "email": "new@example.com",
        "role": "tenant",
        "password": "s3cret",
    }
    assert (await client.post("/api/save-item/users", json=[user])).status_code == 200

    assert (await login(client, "email", "new@example.com", "s3cret")).status_code == 200


def test_password_matches_hash_and_legacy_plaintext():
    stored = hash_password("secret", rounds=4)

    assert verify_password("secret", stored)
    assert password_matches("secret", stored)
    assert password_matches("legacy", "legacy")
    assert not password_matches("other", "legacy")
    assert not password_matches(None, stored)


@pytest.mark.asyncio
async def test_missing_login_method_is_a_client_error(client):
    response = await client.post(
        "/api/login", json={"identifier": "admin@example.com", "password": "password"}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": INVALID_LOGIN_METHOD_MESSAGE}


@pytest.mark.asyncio
async def test_numeric_national_id_is_read_as_text(client):
    response = await client.post(
        "/api/login", json={"loginMethod": "nationalId", "identifier": 1000000001}
    )

    assert response.status_code == 200
    assert response.json()["user"]["id"] == "user-owner-1"


@pytest.mark.asyncio
async def test_malformed_login_body_is_a_client_error(client):
    response = await client.post(
        "/api/login", json={"loginMethod": "email", "identifier": ["admin@example.com"]}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert isinstance(body["error"], str)


@pytest.mark.asyncio
async def test_password_longer_than_bcrypt_limit(client):
    long_password = "كلمة مرور طويلة جدا لا يمكن تخمينها بسهولة أبدا " * 2
    assert len(long_password.encode("utf-8")) > 72
    user = {
        "id": "user-long",
        "name": "مستخدم",
        "email": "long@example.com",
        "role": "tenant",
        "password": long_password,
    }

    response = await client.post("/api/save-item/users", json=[user])
    assert response.status_code == 200

    assert (await login(client, "email", "long@example.com", long_password)).status_code == 200


def test_hash_uses_the_first_72_bytes():
    secret = "x" * 72
    stored = hash_password(secret + "tail", rounds=4)

    assert verify_password(secret + "tail", stored)
    assert verify_password(secret, stored)
