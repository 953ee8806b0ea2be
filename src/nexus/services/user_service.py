from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.logging import get_logger
from src.nexus.core.security import Identity
from src.nexus.models import User
from src.nexus.repositories import UserRepository

logger = get_logger(__name__)


class UserService:
    """Keeps the local user mirror in step with the identity provider."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def ensure_user(self, identity: Identity) -> User:
        """Insert the user on first sight; refresh name/email when the token carries new ones."""
        user = await self.user_repo.get_by_id(identity.user_id)
        if user is None:
            user = User(id=identity.user_id, name=identity.name, email=identity.email)
            self.user_repo.add(user)
            try:
                await self.session.commit()
            except IntegrityError:
                # Concurrent first request for the same identity already inserted it
                await self.session.rollback()
                existing = await self.user_repo.get_by_id(identity.user_id)
                if existing is None:
                    raise
                return existing
            logger.info("User registered", user_id=identity.user_id)
            return user

        changed = False
        if identity.name and identity.name != user.name:
            user.name = identity.name
            changed = True
        if identity.email and identity.email != user.email:
            user.email = identity.email
            changed = True
        if changed:
            await self.session.commit()
        return user
