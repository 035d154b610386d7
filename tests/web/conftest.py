"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from cli.config_models import PacefulConfig


@pytest.fixture
def jwt_secret():
    return "test-paceful-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com", name="U"):
    return jwt.encode(
        {"sub": user_id, "email": email, "name": name},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers(jwt_secret):
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, 'user-123')}"}


@pytest.fixture
def auth_headers_b(jwt_secret):
    """Second user for isolation tests."""
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, 'user-456')}"}


@pytest.fixture
def web_config(tmp_path):
    return PacefulConfig.from_dict({"paths": {"db_path": str(tmp_path / "web.db")}})


@pytest.fixture
def client(jwt_secret, store, web_config):
    """Test client wired to a temp store."""
    from web.app import app
    from web.deps import get_config, get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_config] = lambda: web_config

    with patch.dict(os.environ, {"PACEFUL_JWT_SECRET": jwt_secret}):
        yield TestClient(app)

    app.dependency_overrides.clear()
