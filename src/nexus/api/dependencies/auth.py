"""Authentication dependencies."""

from typing import Annotated

from fastapi import Depends, Header

from src.nexus.api.dependencies.db import DBSession
from src.nexus.api.dependencies.repositories import UserRepo
from src.nexus.core.logging import bind_user_context
from src.nexus.core.security import Identity, IdentityResolver, get_identity_resolver
from src.nexus.services.user_service import UserService

IdentityResolverDep = Annotated[IdentityResolver, Depends(get_identity_resolver)]


async def get_current_identity(
    resolver: IdentityResolverDep,
    user_repo: UserRepo,
    session: DBSession,
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Resolve the caller and make sure the user mirror row exists.

    Raises:
        Unauthenticated: If there is no usable bearer token and no placeholder identity
    """
    identity = resolver.resolve(authorization)
    await UserService(user_repo, session).ensure_user(identity)
    bind_user_context(identity.user_id, placeholder=identity.is_placeholder)
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
