"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Research project lifecycle status."""

    PROPOSED = "PROPOSED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AttachmentEntityType(str, Enum):
    """Entity kinds an attachment can hang from."""

    PROJECT = "project"
    PRODUCT = "product"
