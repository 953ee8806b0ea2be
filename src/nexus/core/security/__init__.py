"""Security utilities - identity tokens and caller resolution.

Re-exports all security-related functions for convenience.
"""

from src.nexus.core.security.crypto import (
    create_identity_token,
    decode_identity_token,
)
from src.nexus.core.security.identity import (
    Identity,
    IdentityResolver,
    get_identity_resolver,
)

__all__ = [
    # Crypto
    "create_identity_token",
    "decode_identity_token",
    # Identity
    "Identity",
    "IdentityResolver",
    "get_identity_resolver",
]
