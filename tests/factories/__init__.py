"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, short_suffix, utc_now
from tests.factories.registry import (
    AttachmentFactory,
    ProductFactory,
    ProductTypeFactory,
    ProjectFactory,
)
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "short_suffix",
    "utc_now",
    # User
    "UserFactory",
    # Registry
    "AttachmentFactory",
    "ProductFactory",
    "ProductTypeFactory",
    "ProjectFactory",
]
