"""User model - local mirror of identity-provider users."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.nexus.models.base import utc_now


class User(SQLModel, table=True):
    """Identity-provider user, inserted the first time the identity is seen.

    ``id`` is the provider's subject, so it is an opaque string rather than a UUID.
    """

    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255, index=True)
    created_at: datetime = Field(default_factory=utc_now)
