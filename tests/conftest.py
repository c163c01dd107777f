"""
Todo API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import asyncio
from typing import Dict, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from todo_api.main import app
from todo_api.auth.dependencies import get_user_repository
from todo_api.auth.models import User
from todo_api.auth.repository import UserRepositoryInterface
from todo_api.database import get_database
from todo_api.errors import ConflictError
from todo_api.tasks.repository import InMemoryTaskRepository
from todo_api.tasks.router import get_task_repository


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self):
        self._users_by_username: Dict[str, User] = {}

    async def create(self, user: User) -> User:
        """Create a new user, rejecting duplicates like the unique index does."""
        if user.username in self._users_by_username:
            raise ConflictError("Username already exists")
        self._users_by_username[user.username] = user
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        return self._users_by_username.get(username)

    async def exists_by_username(self, username: str) -> bool:
        return username in self._users_by_username

    def clear(self) -> None:
        """Clear all users (synchronous helper for tests)."""
        self._users_by_username.clear()

    def get_by_username_sync(self, username: str) -> Optional[User]:
        """Synchronous helper for tests that need direct access."""
        return asyncio.run(self.get_by_username(username))


# Global in-memory repositories for tests
_test_task_repository = InMemoryTaskRepository()
_test_user_repository = InMemoryUserRepository()


async def override_get_user_repository():
    """Override dependency to use in-memory user repository."""
    return _test_user_repository


async def override_get_task_repository():
    """Override dependency to use in-memory task repository."""
    return _test_task_repository


async def override_get_database():
    """Override database dependency; the in-memory repositories never touch it."""
    return MagicMock()


@pytest.fixture
def task_repository():
    """Provide a fresh in-memory task repository for each test."""
    _test_task_repository.clear()
    return _test_task_repository


@pytest.fixture
def user_repository():
    """Provide a fresh in-memory user repository for each test."""
    _test_user_repository.clear()
    return _test_user_repository


@pytest.fixture
def app_overrides(task_repository, user_repository):
    """Point the app's repository dependencies at the in-memory stores."""
    app.dependency_overrides[get_task_repository] = override_get_task_repository
    app.dependency_overrides[get_user_repository] = override_get_user_repository
    app.dependency_overrides[get_database] = override_get_database
    yield app
    # Clean up overrides after test
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_overrides):
    """Create test client with in-memory repositories."""
    return TestClient(app_overrides)


@pytest.fixture
def asgi_transport(app_overrides):
    """Transport that lets httpx clients call the app in-process."""
    return httpx.ASGITransport(app=app_overrides)


@pytest.fixture
def registered_user(client):
    """Register a test user and return credentials."""
    credentials = {"username": "testuser", "password": "testpassword123"}
    client.post("/api/register", json=credentials)
    return credentials


@pytest.fixture
def auth_token(client, registered_user):
    """Get an auth token for the registered user."""
    response = client.post("/api/login", json=registered_user)
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def second_user_credentials():
    """Credentials for a second test user."""
    return {"username": "seconduser", "password": "secondpassword123"}


@pytest.fixture
def second_user_token(client, second_user_credentials):
    """Register a second user and get their auth token."""
    client.post("/api/register", json=second_user_credentials)
    response = client.post("/api/login", json=second_user_credentials)
    return response.json()["token"]


@pytest.fixture
def second_auth_headers(second_user_token):
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {second_user_token}"}
