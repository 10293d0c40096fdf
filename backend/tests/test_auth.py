"""
DevConnector Backend — Registration, Login & Auth Guard Tests
===============================================================

What we test:
    ✅ Register → token; login with wrong / right password
    ✅ Duplicate email is rejected and never stored twice
    ✅ Field validation messages (400)
    ✅ GET /api/auth returns the user without the password hash
    ✅ Auth guard: missing token, bad token, x-auth-token and Bearer headers
    ✅ Gravatar avatar is derived from the email
"""

import hashlib

import pytest
from bson import ObjectId

from devconnector.security import TokenService
from devconnector.services.user_service import gravatar_url


class TestRegistrationAndLogin:
    @pytest.mark.asyncio
    async def test_register_then_login_scenario(self, test_client):
        response = await test_client.post(
            "/api/users", json={"name": "A", "email": "a@x.com", "password": "secret1"}
        )
        assert response.status_code == 200
        assert response.json()["token"]

        response = await test_client.post(
            "/api/auth", json={"email": "a@x.com", "password": "wrong-password"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_credentials"
        assert response.json()["message"] == "Invalid credentials"

        response = await test_client.post(
            "/api/auth", json={"email": "a@x.com", "password": "secret1"}
        )
        assert response.status_code == 200
        assert response.json()["token"]

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, test_client):
        response = await test_client.post(
            "/api/auth", json={"email": "nobody@x.com", "password": "secret1"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, test_client, database, register_user):
        await register_user("A", "a@x.com")

        response = await test_client.post(
            "/api/users", json={"name": "B", "email": "a@x.com", "password": "another1"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "user_exists"
        assert await database.users.count_documents({"email": "a@x.com"}) == 1

    @pytest.mark.asyncio
    async def test_password_is_hashed_at_rest(self, database, register_user):
        await register_user("A", "a@x.com", password="secret1")
        stored = await database.users.find_one({"email": "a@x.com"})
        assert stored["password"] != "secret1"
        assert stored["password"].startswith("$2b$")

    @pytest.mark.asyncio
    async def test_password_longer_than_72_bytes(self, test_client, register_user):
        password = "p" * 80
        await register_user("A", "long@x.com", password=password)

        response = await test_client.post(
            "/api/auth", json={"email": "long@x.com", "password": password}
        )
        assert response.status_code == 200
        assert response.json()["token"]

    @pytest.mark.asyncio
    async def test_email_is_case_insensitive(self, test_client, database, register_user):
        await register_user("Ada", " Ada@X.com ")
        stored = await database.users.find_one({})
        assert stored["email"] == "ada@x.com"

        response = await test_client.post(
            "/api/users", json={"name": "Ada", "email": "ADA@x.com", "password": "secret1"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "user_exists"

        response = await test_client.post(
            "/api/auth", json={"email": "aDa@x.COM", "password": "secret1"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_registration_trims_name(self, database, register_user):
        await register_user("  Ada Lovelace  ", "ada@x.com")
        stored = await database.users.find_one({"email": "ada@x.com"})
        assert stored["name"] == "Ada Lovelace"
        assert stored["avatar"] == gravatar_url("ada@x.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, field, message",
        [
            ({"email": "a@x.com", "password": "secret1"}, "name", "Name is required"),
            ({"name": "  ", "email": "a@x.com", "password": "secret1"}, "name", "Name is required"),
            ({"name": "A", "email": "not-an-email", "password": "secret1"}, "email", "Enter a valid email"),
            (
                {"name": "A", "email": "a@x.com", "password": "12345"},
                "password",
                "Password should have at least 6 characters",
            ),
        ],
    )
    async def test_register_validation(self, test_client, body, field, message):
        response = await test_client.post("/api/users", json=body)
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert {"field": field, "msg": message} in data["details"]["errors"]

    @pytest.mark.asyncio
    async def test_login_requires_password(self, test_client):
        response = await test_client.post("/api/auth", json={"email": "a@x.com"})
        assert response.status_code == 400
        assert {"field": "password", "msg": "Password is required"} in response.json()["details"]["errors"]


class TestCurrentUser:
    @pytest.mark.asyncio
    async def test_me_excludes_password(self, test_client, register_user):
        headers = await register_user("A", "a@x.com")

        response = await test_client.get("/api/auth", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "A"
        assert data["email"] == "a@x.com"
        assert data["avatar"].startswith("//www.gravatar.com/avatar/")
        assert ObjectId.is_valid(data["_id"])
        assert "password" not in data

    @pytest.mark.asyncio
    async def test_bearer_header_is_accepted(self, test_client, register_user):
        headers = await register_user("A", "a@x.com")
        bearer = {"Authorization": f"Bearer {headers['x-auth-token']}"}

        response = await test_client.get("/api/auth", headers=bearer)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_deleted_user_is_not_found(self, test_client, settings):
        token = TokenService(settings).issue(ObjectId())
        response = await test_client.get("/api/auth", headers={"x-auth-token": token})
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestAuthGuard:
    @pytest.mark.asyncio
    async def test_missing_token(self, test_client):
        response = await test_client.get("/api/auth")
        assert response.status_code == 401
        assert response.json()["message"] == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_invalid_token(self, test_client):
        response = await test_client.get("/api/posts", headers={"x-auth-token": "garbage"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token is not valid"

    @pytest.mark.asyncio
    async def test_error_carries_request_id(self, test_client):
        response = await test_client.get("/api/auth", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
        assert response.json()["request_id"] == "abc123"


def test_gravatar_url_is_deterministic():
    digest = hashlib.md5(b"ada@x.com").hexdigest()
    assert gravatar_url(" Ada@X.com ") == f"//www.gravatar.com/avatar/{digest}?s=200&r=pg&d=mm"
