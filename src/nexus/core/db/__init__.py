"""Database utilities - engine and session."""

from src.nexus.core.db.engine import (
    create_engine_for_url,
    dispose_engine,
    enable_sqlite_foreign_keys,
    get_engine,
)
from src.nexus.core.db.session import get_session

__all__ = [
    # Engine
    "create_engine_for_url",
    "dispose_engine",
    "enable_sqlite_foreign_keys",
    "get_engine",
    # Session
    "get_session",
]
