"""Attachment upload endpoints (multipart)."""

from pathlib import PurePath
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, Query, UploadFile

from src.nexus.api.dependencies import AttachmentServiceDep, CurrentIdentity
from src.nexus.core.validation import validate_payload
from src.nexus.schemas.attachment import (
    AttachmentBatchResponse,
    AttachmentOutcome,
    AttachmentRead,
    AttachmentTarget,
    AttachmentUpload,
    AttachmentUploadResponse,
    MessageResponse,
)
from src.nexus.services import AttachmentService, UploadedFile

router = APIRouter(prefix="/upload", tags=["attachments"])


async def _read_upload(
    file: UploadFile, service: AttachmentService, file_name: str
) -> UploadedFile:
    # One byte past the limit is enough for the service to reject the file
    data = await file.read(service.max_bytes + 1)
    return UploadedFile(file_name=file_name, data=data, content_type=file.content_type)


def _client_file_name(file: UploadFile) -> str:
    return PurePath(file.filename or "").name or "file"


@router.post(
    "",
    response_model=AttachmentUploadResponse,
    summary="Upload attachment",
    description="Store one file and attach it to an owned project or product.",
    responses={
        200: {"description": "File stored and attachment recorded"},
        400: {"description": "Invalid form fields or file"},
        404: {"description": "Project or product not found"},
        500: {"description": "Blob store failure"},
    },
)
async def upload_attachment(
    service: AttachmentServiceDep,
    identity: CurrentIdentity,
    file: Annotated[UploadFile, File()],
    entity_type: Annotated[str, Form()],
    entity_id: Annotated[str, Form()],
    file_name: Annotated[str | None, Form()] = None,
) -> AttachmentUploadResponse:
    form = validate_payload(
        AttachmentUpload,
        {
            "entity_type": entity_type,
            "entity_id": entity_id,
            "file_name": file_name if file_name is not None else _client_file_name(file),
        },
    ).unwrap()
    upload = await _read_upload(file, service, form.file_name)
    attachment = await service.attach(form.entity_type, form.entity_id, upload, identity.user_id)
    return AttachmentUploadResponse(attachment=AttachmentRead.model_validate(attachment))


@router.post(
    "/batch",
    response_model=AttachmentBatchResponse,
    summary="Upload several attachments",
    description="Each file succeeds or fails on its own; the response lists one outcome per file.",
    responses={
        200: {"description": "Per-file outcomes"},
        400: {"description": "Invalid form fields or too many files"},
        404: {"description": "Project or product not found"},
    },
)
async def upload_attachments(
    service: AttachmentServiceDep,
    identity: CurrentIdentity,
    files: Annotated[list[UploadFile], File()],
    entity_type: Annotated[str, Form()],
    entity_id: Annotated[str, Form()],
) -> AttachmentBatchResponse:
    target = validate_payload(
        AttachmentTarget, {"entity_type": entity_type, "entity_id": entity_id}
    ).unwrap()
    # Count and ownership are settled before any file body is buffered
    await service.check_batch(target.entity_type, target.entity_id, len(files), identity.user_id)
    uploads = [await _read_upload(f, service, _client_file_name(f)) for f in files]
    results = await service.attach_many(
        target.entity_type, target.entity_id, uploads, identity.user_id
    )
    outcomes = [
        AttachmentOutcome(
            file_name=result.file_name,
            success=result.success,
            attachment=AttachmentRead.model_validate(result.attachment)
            if result.attachment
            else None,
            error=result.error,
        )
        for result in results
    ]
    succeeded = sum(1 for outcome in outcomes if outcome.success)
    return AttachmentBatchResponse(
        results=outcomes, succeeded=succeeded, failed=len(outcomes) - succeeded
    )


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete attachment",
    responses={
        200: {"description": "Attachment deleted"},
        400: {"description": "Missing or malformed id"},
        404: {"description": "Attachment not found"},
    },
)
async def delete_attachment(
    service: AttachmentServiceDep,
    identity: CurrentIdentity,
    id: Annotated[UUID, Query(description="Attachment ID")],
) -> MessageResponse:
    await service.detach(id, identity.user_id)
    return MessageResponse(message="Attachment deleted")
