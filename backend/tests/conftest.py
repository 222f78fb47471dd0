"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_auth_service, reset_container
from shared.config import Settings
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService
from modules.files.models import FileItem, FileType
from modules.users.models import Plan, Role, User


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

TEST_USER_ID = "test-user-123"
ADMIN_USER_ID = "admin-user-1"


def create_test_token(
    user_id: str = TEST_USER_ID,
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token the way TokenService issues them.

    Args:
        user_id: User ID to put in `sub`
        expired: If True, creates an expired token
        secret: Signing secret
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)
    payload = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = {
        "jwt_secret": TEST_JWT_SECRET,
        "razorpay_key_id": "rzp_test_key",
        "razorpay_key_secret": "rzp-key-secret",
        "razorpay_webhook_secret": "rzp-webhook-secret",
        "smtp_host": "smtp.test",
        "app_url": "https://notta.test",
        **overrides,
    }
    return Settings(_env_file=None, **values)


def make_user(**overrides) -> User:
    now = datetime.now(timezone.utc)
    values = {
        "id": TEST_USER_ID,
        "username": "testuser",
        "email": "test@example.com",
        "name": "Test User",
        "password_hash": "$2b$12$notarealhashnotarealhashnotarealhashnotarealhash00",
        "plan": Plan.FREE,
        "role": Role.USER,
        "created_at": now,
        "updated_at": now,
        **overrides,
    }
    return User(**values)


def make_file(**overrides) -> FileItem:
    now = datetime.now(timezone.utc)
    values = {
        "id": "file-1",
        "name": "notes.md",
        "type": FileType.FILE,
        "content": "# hello",
        "language": "markdown",
        "size": 7,
        "owner_id": TEST_USER_ID,
        "path": "/notes.md",
        "created_at": now,
        "updated_at": now,
        **overrides,
    }
    return FileItem(**values)


def make_folder(**overrides) -> FileItem:
    values = {
        "id": "folder-1",
        "name": "docs",
        "type": FileType.FOLDER,
        "content": "",
        "language": "plaintext",
        "size": 0,
        "path": "/docs",
        **overrides,
    }
    return make_file(**values)


def make_principal(
    user_id: str = TEST_USER_ID,
    role: str = "user",
    email: Optional[str] = "test@example.com",
) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=user_id,
        email=email,
        username="admin" if role == "admin" else "testuser",
        name="Test User",
        role=role,
    )


def rejecting_db() -> MagicMock:
    """A Supabase client that fails any query, like PostgREST on a malformed UUID."""
    db = MagicMock()
    db.table.side_effect = AssertionError("query reached the database")
    return db


def signed_in_client(app, principal: AuthenticatedUser) -> TestClient:
    """
    A TestClient whose `token` cookie resolves to principal.

    The auth service is overridden, so the token only needs the right shape.
    """
    auth = AsyncMock(spec=IAuthService)
    auth.authenticate.return_value = principal
    app.dependency_overrides[get_auth_service] = lambda: auth
    client = TestClient(app)
    client.cookies.set("token", create_test_token(principal.id))
    return client


@pytest.fixture(autouse=True)
def reset_services():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return TEST_USER_ID


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id)
