"""Storage gateway contract shared by all blob-store backends."""

import re
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
MAX_KEY_NAME_LENGTH = 100


class StorageError(Exception):
    """Raised by a backend when the blob store rejects or fails an operation."""


@dataclass(frozen=True)
class StoredObject:
    """Result of a successful upload."""

    url: str
    key: str


class StorageGateway(Protocol):
    """Blob store capability: put bytes under a folder, delete by key."""

    async def upload(
        self, data: bytes, folder: str, file_name: str, content_type: str | None = None
    ) -> StoredObject: ...

    async def delete(self, key: str) -> None: ...

    async def close(self) -> None: ...


def build_object_key(folder: str, file_name: str) -> str:
    """Unique key inside ``folder`` that keeps a readable, sanitized file name."""
    safe_name = _UNSAFE_CHARS.sub("_", file_name).strip("._") or "file"
    return f"{folder.strip('/')}/{uuid4().hex}-{safe_name[-MAX_KEY_NAME_LENGTH:]}"
