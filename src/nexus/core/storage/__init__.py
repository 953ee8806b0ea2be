"""Blob storage gateway.

The backend is chosen once from settings; callers receive it through the
``get_storage_gateway`` dependency and never construct one themselves.
"""

from urllib.parse import urlsplit

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.nexus.core.config import Settings, get_settings
from src.nexus.core.storage.base import (
    StorageError,
    StorageGateway,
    StoredObject,
    build_object_key,
)
from src.nexus.core.storage.local import LocalStorageGateway

_gateway: StorageGateway | None = None


def _create_gateway() -> StorageGateway:
    settings = get_settings()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise RuntimeError(
                "STORAGE_BACKEND=supabase requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        # Imported lazily so the local backend works without the Supabase SDK configured
        from src.nexus.core.storage.supabase import SupabaseStorageGateway

        return SupabaseStorageGateway.from_credentials(
            settings.supabase_url,
            settings.supabase_service_key,
            settings.supabase_bucket,
            settings.storage_timeout_seconds,
        )
    return LocalStorageGateway(settings.storage_local_dir, settings.storage_local_base_url)


def get_storage_gateway() -> StorageGateway:
    """Get or create the storage gateway singleton."""
    global _gateway
    if _gateway is None:
        _gateway = _create_gateway()
    return _gateway


def setup_local_file_serving(app: FastAPI, settings: Settings) -> None:
    """Serve the local backend's files at the path of ``storage_local_base_url``.

    Nothing is mounted for other backends, or when the base URL has no path
    (files are then served by another host).
    """
    if settings.storage_backend != "local":
        return
    mount_path = urlsplit(settings.storage_local_base_url).path.rstrip("/")
    if not mount_path:
        return
    app.mount(
        mount_path,
        StaticFiles(directory=settings.storage_local_dir, check_dir=False),
        name="local-files",
    )


async def close_storage_gateway() -> None:
    """Release the storage gateway. Call during shutdown."""
    global _gateway
    if _gateway is not None:
        await _gateway.close()
        _gateway = None


__all__ = [
    "LocalStorageGateway",
    "StorageError",
    "StorageGateway",
    "StoredObject",
    "build_object_key",
    "close_storage_gateway",
    "get_storage_gateway",
    "setup_local_file_serving",
]
