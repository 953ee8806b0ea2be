"""Caller identity resolution."""

from dataclasses import dataclass
from functools import lru_cache

from src.nexus.core.config import get_settings
from src.nexus.core.exceptions import Unauthenticated
from src.nexus.core.security.crypto import decode_identity_token


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by the identity provider."""

    user_id: str
    name: str | None = None
    email: str | None = None
    is_placeholder: bool = False


class IdentityResolver:
    """Turns an Authorization header into an Identity.

    ``placeholder_user_id`` is only ever set from configuration at startup; when
    present, requests without a bearer token act as that fixed identity.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        placeholder_user_id: str | None = None,
        placeholder_user_name: str | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.placeholder_user_id = placeholder_user_id
        self.placeholder_user_name = placeholder_user_name

    def resolve(self, authorization: str | None) -> Identity:
        if not authorization:
            if self.placeholder_user_id is not None:
                return Identity(
                    user_id=self.placeholder_user_id,
                    name=self.placeholder_user_name,
                    is_placeholder=True,
                )
            raise Unauthenticated("Missing authorization header")

        if not authorization.startswith("Bearer "):
            raise Unauthenticated("Missing or invalid authorization header")

        payload = decode_identity_token(authorization[7:], self.secret, self.algorithm)
        if payload is None:
            raise Unauthenticated("Invalid or expired token")

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            raise Unauthenticated("Invalid token payload")

        return Identity(
            user_id=subject,
            name=payload.get("name"),
            email=payload.get("email"),
        )


@lru_cache
def get_identity_resolver() -> IdentityResolver:
    settings = get_settings()
    return IdentityResolver(
        secret=settings.auth_jwt_secret,
        algorithm=settings.auth_jwt_algorithm,
        placeholder_user_id=settings.auth_placeholder_user_id,
        placeholder_user_name=settings.auth_placeholder_user_name,
    )
