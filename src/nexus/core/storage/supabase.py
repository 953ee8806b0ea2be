"""Supabase Storage backend."""

import asyncio
from collections.abc import Callable
from typing import Any

from supabase import Client, create_client

from src.nexus.core.logging import get_logger
from src.nexus.core.storage.base import StorageError, StoredObject, build_object_key

logger = get_logger(__name__)


class SupabaseStorageGateway:
    """Stores attachments in a Supabase Storage bucket.

    The Supabase client is synchronous; every call runs in a worker thread and
    is bounded by ``timeout_seconds``.
    """

    def __init__(self, client: Client, bucket: str, timeout_seconds: float = 30):
        self.client = client
        self.bucket = bucket
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_credentials(
        cls, url: str, service_key: str, bucket: str, timeout_seconds: float = 30
    ) -> "SupabaseStorageGateway":
        return cls(create_client(url, service_key), bucket, timeout_seconds)

    async def _call(self, fn: Callable[[], Any]) -> Any:
        return await asyncio.wait_for(asyncio.to_thread(fn), timeout=self.timeout_seconds)

    async def upload(
        self, data: bytes, folder: str, file_name: str, content_type: str | None = None
    ) -> StoredObject:
        key = build_object_key(folder, file_name)
        bucket = self.client.storage.from_(self.bucket)

        try:
            await self._call(
                lambda: bucket.upload(
                    path=key,
                    file=data,
                    file_options={
                        "content-type": content_type or "application/octet-stream",
                        # Supabase expects the flag as a string
                        "upsert": "false",
                    },
                )
            )
            url = await self._call(lambda: bucket.get_public_url(key))
        except TimeoutError as e:
            raise StorageError(f"Upload timed out after {self.timeout_seconds}s: {key}") from e
        except Exception as e:
            raise StorageError(f"Upload failed: {key}") from e

        logger.debug("Stored object in Supabase", bucket=self.bucket, key=key, size=len(data))
        return StoredObject(url=str(url).rstrip("?"), key=key)

    async def delete(self, key: str) -> None:
        bucket = self.client.storage.from_(self.bucket)
        try:
            await self._call(lambda: bucket.remove([key]))
        except TimeoutError as e:
            raise StorageError(f"Delete timed out after {self.timeout_seconds}s: {key}") from e
        except Exception as e:
            raise StorageError(f"Delete failed: {key}") from e

    async def close(self) -> None:
        return None
