"""
Pytest configuration for google_login. Tests build their own Settings; nothing is read from .env.
"""
import os

import pytest
from fastapi.testclient import TestClient

# Module-level app in google_login.main is created at import; keep it in test mode
os.environ["APP_ENV"] = "test"
for _name in ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REDIRECT_URI", "GOOGLE_SCOPES"):
    os.environ.pop(_name, None)

from google_login.config import Settings  # noqa: E402
from google_login.main import create_app  # noqa: E402


@pytest.fixture
def settings(tmp_path):
    return Settings(
        client_id="test-client.apps.googleusercontent.com",
        client_secret="test-secret",
        redirect_uri="http://localhost:5001/login/google",
        app_env="test",
        # No static mount unless a test asks for one
        static_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
