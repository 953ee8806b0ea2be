"""Filesystem-backed storage for development and single-node deployments."""

import asyncio
from pathlib import Path

from src.nexus.core.logging import get_logger
from src.nexus.core.storage.base import StorageError, StoredObject, build_object_key

logger = get_logger(__name__)


class LocalStorageGateway:
    """Stores objects below ``root_dir`` and serves them from ``base_url``."""

    def __init__(self, root_dir: str | Path, base_url: str):
        self.root_dir = Path(root_dir).resolve()
        self.base_url = base_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root_dir / key).resolve()
        if not path.is_relative_to(self.root_dir):
            raise StorageError(f"Key escapes storage root: {key}")
        return path

    async def upload(
        self, data: bytes, folder: str, file_name: str, content_type: str | None = None
    ) -> StoredObject:
        key = build_object_key(folder, file_name)
        path = self._path_for(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise StorageError(f"Could not write {key}") from e

        logger.debug("Stored object on local disk", key=key, size=len(data))
        return StoredObject(url=f"{self.base_url}/{key}", key=key)

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError as e:
            raise StorageError(f"Object not found: {key}") from e
        except OSError as e:
            raise StorageError(f"Could not delete {key}") from e

    async def close(self) -> None:
        return None
