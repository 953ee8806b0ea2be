"""Settings validation."""

from typing import Any

import pytest
from pydantic import ValidationError

from src.nexus.core.config import Settings

pytestmark = pytest.mark.unit

REQUIRED: dict[str, Any] = {
    "database_url": "sqlite+aiosqlite:///:memory:",
    "auth_jwt_secret": "x" * 32,
}


def make_settings(**overrides: Any) -> Settings:
    return Settings(_env_file=None, **{**REQUIRED, **overrides})  # type: ignore[call-arg]


def test_defaults() -> None:
    settings = make_settings()

    assert settings.storage_root_folder == "ctein-nexus"
    assert settings.upload_max_files == 5
    assert settings.attachment_cleanup_policy == "log-and-continue"
    assert (settings.public_default_limit, settings.public_showcase_limit) == (10, 6)
    assert settings.public_max_limit == 50


@pytest.mark.parametrize(
    "secret", ["short", "change-this-to-a-secure-random-string"]
)
def test_weak_jwt_secret_rejected(secret: str) -> None:
    with pytest.raises(ValidationError):
        make_settings(auth_jwt_secret=secret)


def test_placeholder_identity_refused_in_production() -> None:
    with pytest.raises(ValidationError, match="AUTH_PLACEHOLDER_USER_ID"):
        make_settings(app_env="production", auth_placeholder_user_id="dev-user")


def test_placeholder_identity_allowed_in_development() -> None:
    settings = make_settings(app_env="development", auth_placeholder_user_id="dev-user")

    assert settings.auth_placeholder_user_id == "dev-user"


def test_blank_placeholder_means_none() -> None:
    assert make_settings(auth_placeholder_user_id="  ").auth_placeholder_user_id is None


def test_cors_wildcard_rejected() -> None:
    with pytest.raises(ValidationError, match="CORS wildcard"):
        make_settings(cors_origins=["*"])


@pytest.mark.parametrize(
    "override",
    [
        {"storage_backend": "s3"},
        {"attachment_cleanup_policy": "ignore"},
        {"public_max_limit": 0},
    ],
)
def test_invalid_choices_rejected(override: dict) -> None:
    with pytest.raises(ValidationError):
        make_settings(**override)


def test_admin_ids_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_USER_IDS", '["alice", "bob"]')

    assert make_settings().admin_user_ids == ["alice", "bob"]
