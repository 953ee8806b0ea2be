"""Identity token handling.

Tokens are minted by the identity provider; this service only verifies them.
``create_identity_token`` exists for local tooling and tests that need to
impersonate the provider.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from src.nexus.core.config import get_settings

DEFAULT_TOKEN_EXPIRE_MINUTES = 60


def create_identity_token(
    subject: str,
    name: str | None = None,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed identity token the way the identity provider does."""
    settings = get_settings()
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=DEFAULT_TOKEN_EXPIRE_MINUTES))

    to_encode: dict[str, Any] = {"sub": subject, "exp": expire}
    if name is not None:
        to_encode["name"] = name
    if email is not None:
        to_encode["email"] = email
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
    )


def decode_identity_token(token: str, secret: str, algorithm: str) -> dict[str, Any] | None:
    """Decode and validate an identity token. Returns None on any error."""
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            secret,
            algorithms=[algorithm],
        )
    except JWTError:
        return None
