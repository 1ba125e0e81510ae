"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from jose import jwt

from api.dependencies import reset_container
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def make_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    user_metadata: dict | None = None,
) -> str:
    """Create a Supabase-style JWT signed with the test secret."""
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
        "user_metadata": user_metadata or {},
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and services around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def create_token():
    """Factory fixture for test access tokens."""
    return make_token


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def demo_accounts() -> list[dict]:
    """Accounts in the DEMO_ACCOUNTS shape."""
    return [
        {
            "id": "seller-1",
            "email": "seller@example.com",
            "password": "seller-pass",
            "email_verified": True,
            "created_at": "2024-01-15T10:00:00Z",
            "name": "Sam Seller",
            "type": "seller",
            "needs_onboarding": False,
            "verified": True,
            "rating": 4.8,
            "total_sales": 42,
        },
        {
            "id": "buyer-1",
            "email": "buyer@example.com",
            "password": "buyer-pass",
            "email_verified": True,
            "created_at": "2024-02-01T10:00:00Z",
            "name": "Bea Buyer",
            "type": "buyer",
            "company": "Acme Corp",
            "needs_onboarding": False,
        },
        {
            "id": "fresh-1",
            "email": "fresh@example.com",
            "password": "fresh-pass",
            "name": "Fresh Face",
            "signup_type": "buyer",
            "signup_company": "Startup Inc",
            "needs_onboarding": True,
        },
    ]
