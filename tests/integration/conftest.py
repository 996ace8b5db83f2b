"""
Integration test configuration.

Builds the real application stack (middleware, error handlers, routers)
with in-memory repositories on app.state and a no-op lifespan, so no
network connections are made.
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import include_routers, install_middleware
from errors import register_error_handlers
from shared.crypto import build_password_hasher

TEST_ORIGIN = "http://localhost:5173"


@pytest.fixture
def app(settings, user_repo, origin_repo, experience_repo, education_repo) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.password_hasher = build_password_hasher(settings.password)
    app.state.db = MagicMock()
    app.state.db.client.admin.command = AsyncMock(return_value={"ok": 1})
    app.state.user_repository = user_repo
    app.state.origin_repository = origin_repo
    app.state.experience_repository = experience_repo
    app.state.education_repository = education_repo

    install_middleware(app)
    register_error_handlers(app)
    include_routers(app, prefix=settings.api_prefix)
    return app


@pytest.fixture
def client(app):
    with TestClient(app, headers={"Origin": TEST_ORIGIN}) as c:
        yield c


@pytest.fixture
def signup(client):
    """Register a user and return ``(token, auth_headers, body)``."""

    def _signup(email: str = "a@b.com", password: str = "Secret123"):
        resp = client.post(
            "/users/signup",
            json={
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": email,
                "password": password,
            },
        )
        assert resp.status_code == 201, resp.text
        token = resp.json()["token"]
        return token, {"Authorization": f"Bearer {token}"}, resp.json()

    return _signup
