"""
DevConnector Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the test suite.
How:   Every test gets a fresh application built with `create_app()` on top
       of an in-memory motor-compatible MongoDB (mongomock-motor) and an
       httpx MockTransport standing in for the GitHub API.

Fixture Hierarchy (all function-scoped):
    settings          → test Settings (fast bcrypt, fixed secret)
    database          → Database over AsyncMongoMockClient, indexes ensured
    github_handler    → request handler the GitHub MockTransport calls
    app               → FastAPI app wired to the above
    test_client       → httpx AsyncClient talking to the app in-process
    register_user     → async helper: register and return auth headers
"""

import os
from typing import Callable, Dict

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Before any devconnector import: the module-level app reads the environment
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["GITHUB_TOKEN"] = "test-github-token"
os.environ["LOG_LEVEL"] = "WARNING"

from devconnector.config import Settings  # noqa: E402
from devconnector.database import Database  # noqa: E402
from devconnector.main import create_app  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongo_db_name="devconnector_test",
        jwt_secret="test-secret-not-real",
        bcrypt_rounds=4,
        github_token="test-github-token",
        github_api_url="https://api.github.test",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings, client=AsyncMongoMockClient())
    await db.ensure_indexes()
    return db


@pytest.fixture
def github_handler() -> Dict[str, Callable]:
    """
    Holds the function the GitHub MockTransport delegates to.

    Tests replace `github_handler["handler"]` to script upstream answers.
    """
    return {"handler": lambda request: httpx.Response(200, json=[])}


@pytest.fixture
def app(settings, database, github_handler):
    transport = httpx.MockTransport(lambda request: github_handler["handler"](request))
    return create_app(
        settings=settings,
        database=database,
        http_client=httpx.AsyncClient(transport=transport),
    )


@pytest_asyncio.fixture
async def test_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """
    Returns an async helper that registers a user and returns the
    `x-auth-token` headers for them.

    Usage:
        headers = await register_user("Ada", "ada@dev.io")
    """

    async def _register(name: str, email: str, password: str = "secret1") -> Dict[str, str]:
        response = await test_client.post(
            "/api/users", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"x-auth-token": response.json()["token"]}

    return _register
