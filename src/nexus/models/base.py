"""Timestamp helpers shared by the table models."""

from datetime import UTC, datetime
from typing import Protocol


class Timestamped(Protocol):
    updated_at: datetime


def utc_now() -> datetime:
    """Current UTC time as a naive datetime.

    Columns are TIMESTAMP WITHOUT TIME ZONE and always hold UTC.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def touch(entity: Timestamped) -> None:
    """Mark a row as modified now."""
    entity.updated_at = utc_now()
