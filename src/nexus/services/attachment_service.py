"""Attachment lifecycle: blob store first, database row second."""

import asyncio
import mimetypes
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.nexus.core.exceptions import DomainError, UpstreamFailure, ValidationError
from src.nexus.core.logging import get_logger
from src.nexus.core.storage import StorageError, StorageGateway, StoredObject
from src.nexus.models import Attachment, AttachmentEntityType
from src.nexus.repositories import AttachmentRepository
from src.nexus.services.authorization import AuthorizationGuard

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class CleanupPolicy(str, Enum):
    """What ``detach`` does when the blob store refuses to delete a file."""

    LOG_AND_CONTINUE = "log-and-continue"
    RAISE = "raise"

    def handle_failure(self, attachment: Attachment, error: Exception) -> None:
        """Either log the orphaned blob and let the row deletion go ahead, or abort."""
        if self is CleanupPolicy.RAISE:
            raise UpstreamFailure("Could not delete stored file") from error
        logger.warning(
            "Blob deletion failed, removing attachment row anyway",
            attachment_id=str(attachment.id),
            storage_key=attachment.storage_key,
            error=str(error),
        )


@dataclass(frozen=True)
class UploadedFile:
    """One file as received from the client."""

    file_name: str
    data: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def mime_type(self) -> str:
        if self.content_type and self.content_type != DEFAULT_MIME_TYPE:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.file_name)
        return guessed or self.content_type or DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class AttachmentResult:
    """Settled outcome of one file in ``attach_many``."""

    file_name: str
    attachment: Attachment | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.attachment is not None


class AttachmentService:
    """Coordinates attachment rows with the storage gateway.

    There is no transaction across the blob store and the database. A row is
    only written after its upload succeeded; a blob whose row could not be
    written is removed again on a best-effort basis.
    """

    def __init__(
        self,
        attachment_repo: AttachmentRepository,
        guard: AuthorizationGuard,
        storage: StorageGateway,
        session: AsyncSession,
        *,
        root_folder: str,
        max_bytes: int,
        max_files: int,
        cleanup_policy: CleanupPolicy = CleanupPolicy.LOG_AND_CONTINUE,
    ):
        self.attachment_repo = attachment_repo
        self.guard = guard
        self.storage = storage
        self.session = session
        self.root_folder = root_folder.strip("/")
        self.max_bytes = max_bytes
        self.max_files = max_files
        self.cleanup_policy = cleanup_policy

    def folder_for(self, entity_type: AttachmentEntityType, entity_id: UUID) -> str:
        """Blob folder of an entity, e.g. ``ctein-nexus/projects/<id>``."""
        return f"{self.root_folder}/{entity_type.value}s/{entity_id}"

    async def attach(
        self,
        entity_type: AttachmentEntityType,
        entity_id: UUID,
        upload: UploadedFile,
        owner_id: str,
    ) -> Attachment:
        """Store one file and record it against an owned project or product.

        Raises:
            ValidationError: If the file is empty or too large
            NotFound: If the parent entity is missing or not owned
            UpstreamFailure: If the upload or the row write failed
        """
        self._check_file(upload)
        await self.guard.require_parent(entity_type, entity_id, owner_id)
        stored = await self._upload(entity_type, entity_id, upload)
        return await self._record(entity_type, entity_id, upload, stored)

    async def check_batch(
        self,
        entity_type: AttachmentEntityType,
        entity_id: UUID,
        file_count: int,
        owner_id: str,
    ) -> None:
        """Reject a batch by size or parent before any file is read."""
        if file_count < 1:
            raise ValidationError(
                details=[{"field": "files", "message": "At least one file is required"}]
            )
        if file_count > self.max_files:
            raise ValidationError(
                details=[
                    {"field": "files", "message": f"At most {self.max_files} files per upload"}
                ]
            )
        await self.guard.require_parent(entity_type, entity_id, owner_id)

    async def attach_many(
        self,
        entity_type: AttachmentEntityType,
        entity_id: UUID,
        uploads: Sequence[UploadedFile],
        owner_id: str,
    ) -> list[AttachmentResult]:
        """Attach several files independently.

        Uploads run concurrently; rows are written one at a time on this
        session, each committed on its own. A failing file never affects the
        others.

        Returns:
            One result per input file, in input order
        """
        await self.check_batch(entity_type, entity_id, len(uploads), owner_id)

        accepted: list[int] = []
        results: list[AttachmentResult | None] = [None] * len(uploads)
        for index, upload in enumerate(uploads):
            try:
                self._check_file(upload)
            except ValidationError as e:
                results[index] = AttachmentResult(upload.file_name, error=_describe(e))
            else:
                accepted.append(index)

        settled = await asyncio.gather(
            *(self._upload(entity_type, entity_id, uploads[i]) for i in accepted),
            return_exceptions=True,
        )

        for index, outcome in zip(accepted, settled, strict=True):
            upload = uploads[index]
            if isinstance(outcome, BaseException):
                results[index] = AttachmentResult(upload.file_name, error=_describe(outcome))
                continue
            try:
                attachment = await self._record(entity_type, entity_id, upload, outcome)
            except UpstreamFailure as e:
                results[index] = AttachmentResult(upload.file_name, error=_describe(e))
            else:
                results[index] = AttachmentResult(upload.file_name, attachment=attachment)

        succeeded = sum(1 for result in results if result is not None and result.success)
        logger.info(
            "Batch upload settled",
            entity_type=entity_type.value,
            entity_id=str(entity_id),
            succeeded=succeeded,
            failed=len(uploads) - succeeded,
        )
        return [result for result in results if result is not None]

    async def detach(self, attachment_id: UUID, owner_id: str) -> None:
        """Delete an attachment's blob and row.

        A blob deletion failure is handed to the cleanup policy; under the
        default policy the row is deleted anyway.

        Raises:
            NotFound: If the attachment's parent is missing or not owned
            UpstreamFailure: If the policy is RAISE and the blob could not be deleted,
                or the row deletion failed
        """
        attachment = await self.guard.require_attachment(attachment_id, owner_id)
        try:
            await self.storage.delete(attachment.storage_key)
        except StorageError as e:
            self.cleanup_policy.handle_failure(attachment, e)

        await self.attachment_repo.delete(attachment)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise UpstreamFailure("Could not delete attachment") from e
        logger.info("Attachment deleted", attachment_id=str(attachment_id))

    def _check_file(self, upload: UploadedFile) -> None:
        if upload.size == 0:
            raise ValidationError(details=[{"field": "file", "message": "File is empty"}])
        if upload.size > self.max_bytes:
            raise ValidationError(
                details=[
                    {
                        "field": "file",
                        "message": f"File exceeds the maximum size of {self.max_bytes} bytes",
                    }
                ]
            )

    async def _upload(
        self, entity_type: AttachmentEntityType, entity_id: UUID, upload: UploadedFile
    ) -> StoredObject:
        try:
            return await self.storage.upload(
                upload.data,
                self.folder_for(entity_type, entity_id),
                upload.file_name,
                content_type=upload.mime_type,
            )
        except StorageError as e:
            logger.error(
                "Blob upload failed",
                entity_type=entity_type.value,
                entity_id=str(entity_id),
                file_name=upload.file_name,
                error=str(e),
            )
            raise UpstreamFailure("Upload failed") from e

    async def _record(
        self,
        entity_type: AttachmentEntityType,
        entity_id: UUID,
        upload: UploadedFile,
        stored: StoredObject,
    ) -> Attachment:
        attachment = Attachment(
            url=stored.url,
            storage_key=stored.key,
            file_name=upload.file_name,
            file_size=upload.size,
            mime_type=upload.mime_type,
            project_id=entity_id if entity_type == AttachmentEntityType.PROJECT else None,
            product_id=entity_id if entity_type == AttachmentEntityType.PRODUCT else None,
        )
        self.attachment_repo.add(attachment)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Attachment row write failed, removing stored blob",
                storage_key=stored.key,
                error=str(e),
            )
            await self._discard_blob(stored.key)
            raise UpstreamFailure("Could not record attachment") from e
        # A later rollback on this session must not expire the returned object
        self.session.expunge(attachment)

        logger.info(
            "Attachment stored",
            attachment_id=str(attachment.id),
            entity_type=entity_type.value,
            entity_id=str(entity_id),
            file_size=attachment.file_size,
        )
        return attachment

    async def _discard_blob(self, key: str) -> None:
        try:
            await self.storage.delete(key)
        except StorageError as e:
            logger.warning("Orphaned blob left in storage", storage_key=key, error=str(e))


def _describe(error: BaseException) -> str:
    if isinstance(error, ValidationError) and error.details:
        return "; ".join(detail["message"] for detail in error.details)
    if isinstance(error, DomainError):
        return error.message
    return "Upload failed"
