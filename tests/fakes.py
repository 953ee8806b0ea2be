"""In-memory test doubles for external collaborators."""

from src.nexus.core.storage import StorageError, StoredObject, build_object_key


class FakeStorageGateway:
    """Blob store kept in a dict, with switches to simulate failures."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.failing_uploads: set[str] = set()
        self.fail_deletes = False
        self.deleted: list[str] = []

    async def upload(
        self, data: bytes, folder: str, file_name: str, content_type: str | None = None
    ) -> StoredObject:
        if file_name in self.failing_uploads:
            raise StorageError(f"Simulated upload failure for {file_name}")
        key = build_object_key(folder, file_name)
        self.objects[key] = data
        return StoredObject(url=f"https://files.test/{key}", key=key)

    async def delete(self, key: str) -> None:
        if self.fail_deletes:
            raise StorageError(f"Simulated delete failure for {key}")
        if key not in self.objects:
            raise StorageError(f"Object not found: {key}")
        del self.objects[key]
        self.deleted.append(key)

    async def close(self) -> None:
        return None
