"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Settings are read once; configure the test environment before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("ADMIN_USER_IDS", '["admin-user"]')
os.environ.setdefault("STORAGE_BACKEND", "local")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.nexus.core.config import get_settings
from src.nexus.core.security import get_identity_resolver
from tests.fakes import FakeStorageGateway
from tests.helpers import ADMIN_USER_ID, OTHER_USER_ID, OWNER_ID, bearer

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()
get_identity_resolver.cache_clear()


@pytest.fixture
def fake_storage() -> FakeStorageGateway:
    """In-memory storage gateway."""
    return FakeStorageGateway()


@pytest.fixture
def owner_headers() -> dict[str, str]:
    return bearer(OWNER_ID, name="Ada Owner", email="ada@example.com")


@pytest.fixture
def other_headers() -> dict[str, str]:
    return bearer(OTHER_USER_ID, name="Olga Other")


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer(ADMIN_USER_ID, name="Admin")
