"""Attachment schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.nexus.models.enums import AttachmentEntityType


class AttachmentTarget(BaseModel):
    """Project or product an upload is attached to."""

    entity_type: AttachmentEntityType
    entity_id: UUID


class AttachmentUpload(AttachmentTarget):
    """Form fields accompanying a single uploaded file."""

    file_name: str = Field(min_length=1, max_length=255)

    @field_validator("file_name")
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("File name cannot be empty or whitespace only")
        if "/" in v or "\\" in v:
            raise ValueError("File name cannot contain path separators")
        return v


class AttachmentRead(BaseModel):
    id: UUID
    url: str
    file_name: str
    file_size: int
    mime_type: str
    project_id: UUID | None
    product_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class AttachmentUploadResponse(BaseModel):
    success: bool = True
    attachment: AttachmentRead


class AttachmentOutcome(BaseModel):
    """Settled result of one file in a multi-file upload."""

    file_name: str
    success: bool
    attachment: AttachmentRead | None = None
    error: str | None = None


class AttachmentBatchResponse(BaseModel):
    results: list[AttachmentOutcome]
    succeeded: int
    failed: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
