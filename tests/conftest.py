"""
Pytest configuration and fixtures
"""
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Feature packages import each other as top-level modules (`from core import db`).
api_dir = Path(__file__).parent.parent / "api"
if str(api_dir) not in sys.path:
    sys.path.insert(0, str(api_dir))

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("STORAGE_URL", "https://storage.example.test")
os.environ.setdefault("STORAGE_SERVICE_KEY", "service-key")

from auth import dependencies as auth_dependencies  # noqa: E402
from main import app  # noqa: E402

NOW = datetime(2025, 3, 5, 10, 0, tzinfo=timezone.utc)


def returning(value):
    """Async stand-in for a repository function that returns `value`."""

    async def _fake(*args, **kwargs):
        return value

    return _fake


class Recorder:
    """Async stand-in that remembers its calls."""

    def __init__(self, value=None):
        self.value = value
        self.calls = []

    async def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self.value(*args, **kwargs) if callable(self.value) else self.value


def make_user(**overrides):
    user = {
        "id": 1,
        "email": "admin@example.org",
        "full_name": "Site Admin",
        "is_admin": True,
        "is_active": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    user.update(overrides)
    return user


@pytest.fixture
def client():
    """Test client without the lifespan, so no DB pool is opened."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def as_admin(client):
    app.dependency_overrides[auth_dependencies.get_current_user] = lambda: make_user()
    return client


@pytest.fixture
def as_member(client):
    app.dependency_overrides[auth_dependencies.get_current_user] = lambda: make_user(
        id=2, email="member@example.org", is_admin=False
    )
    return client
