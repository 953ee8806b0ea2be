"""Alembic upgrades callable from the seed command."""

import asyncio

from alembic.config import Config

from alembic import command
from src.nexus.core.logging import get_logger

logger = get_logger(__name__)


def upgrade_schema(revision: str = "head", config_path: str = "alembic.ini") -> None:
    logger.info("Upgrading database schema", revision=revision)
    command.upgrade(Config(config_path), revision)


async def run_migrations_async(revision: str = "head") -> None:
    """Upgrade from async code.

    env.py calls ``asyncio.run`` itself, so the upgrade runs on a worker thread
    with its own event loop.
    """
    await asyncio.to_thread(upgrade_schema, revision)
