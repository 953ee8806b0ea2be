"""Repository for User entity."""

from src.nexus.models import User
from src.nexus.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for the identity-provider user mirror."""

    model = User
