"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Optional
from unittest.mock import patch
from jose import jwt

from api.dependencies import reset_container
from shared.config import Settings
from modules.subscribers.models import Subscriber
from modules.subscribers.service import InMemorySubscriberDirectory


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Fixed clock for policy tests
NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    app_metadata: Optional[dict[str, Any]] = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        app_metadata: Supabase app_metadata claim (grace tier etc.)

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "app_metadata": app_metadata or {},
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def make_token():
    """Factory for signed test tokens."""
    return create_test_token


@pytest.fixture
def auth_settings():
    """Patch the auth middleware settings to accept test tokens."""
    with patch("api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        mock_settings.return_value.jwt_audience = "authenticated"
        yield mock_settings


@pytest.fixture
def now() -> datetime:
    """Fixed clock for policy tests."""
    return NOW


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only, independent of the environment."""
    return Settings(
        _env_file=None,
        supabase_url="",
        supabase_service_role_key="",
        frontend_url="https://dash.example.com",
        upgrade_path="/upgrade",
        access_grace_period_seconds=30,
        enable_admin_override=True,
        enable_grace_period=True,
    )


@pytest.fixture
def directory() -> InMemorySubscriberDirectory:
    """In-memory directory with one subscriber per tier and one admin."""
    return InMemorySubscriberDirectory(
        subscribers=[
            Subscriber(id="sub-free", email="free@example.com", subscription_tier="free"),
            Subscriber(id="sub-paid", email="paid@example.com", subscription_tier="paid"),
            Subscriber(id="sub-premium", email="premium@example.com", subscription_tier="premium"),
            Subscriber(id="sub-admin", email="admin@example.com", subscription_tier="free"),
        ],
        admin_emails=["admin@example.com"],
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}

