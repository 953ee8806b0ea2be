"""Project schemas for API request/response."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.nexus.models.enums import ProjectStatus
from src.nexus.schemas.attachment import AttachmentRead
from src.nexus.schemas.product import ProductRead

MAX_KEYWORDS = 50
MAX_KEYWORD_LENGTH = 100


def parse_calendar_date(v: Any) -> Any:
    """Accept ISO dates and ISO datetimes, keeping only the calendar date.

    Empty strings mean "no date". Anything else is left to pydantic.
    """
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
        try:
            return date.fromisoformat(v)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        except ValueError as e:
            raise ValueError("Invalid date, expected ISO format (YYYY-MM-DD)") from e
    return v


def _clean_keywords(v: list[str]) -> list[str]:
    cleaned = [keyword.strip() for keyword in v]
    if any(not keyword for keyword in cleaned):
        raise ValueError("Keywords cannot be empty")
    if any(len(keyword) > MAX_KEYWORD_LENGTH for keyword in cleaned):
        raise ValueError(f"Keywords must be at most {MAX_KEYWORD_LENGTH} characters")
    return cleaned


def _required_text(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label} is required")
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    summary: str = Field(min_length=1, max_length=5000)
    keywords: list[str] = Field(min_length=1, max_length=MAX_KEYWORDS)
    proponent_entity: str = Field(min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    budget: float | None = Field(default=None, ge=0)
    is_public: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _required_text(v, "Title")

    @field_validator("summary")
    @classmethod
    def validate_summary(cls, v: str) -> str:
        return _required_text(v, "Summary")

    @field_validator("proponent_entity")
    @classmethod
    def validate_proponent_entity(cls, v: str) -> str:
        return _required_text(v, "Proponent entity")

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: list[str]) -> list[str]:
        return _clean_keywords(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_dates(cls, v: Any) -> Any:
        return parse_calendar_date(v)

    @model_validator(mode="after")
    def validate_date_range(self) -> "ProjectCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ProjectUpdate(BaseModel):
    """Schema for updating a project.

    Every field is optional. Required columns reject an explicit null; the
    optional ones (dates, budget) accept null to clear the value.
    """

    title: str | None = Field(default=None, min_length=1, max_length=200)
    summary: str | None = Field(default=None, min_length=1, max_length=5000)
    keywords: list[str] | None = Field(default=None, min_length=1, max_length=MAX_KEYWORDS)
    status: ProjectStatus | None = None
    proponent_entity: str | None = Field(default=None, min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    budget: float | None = Field(default=None, ge=0)
    is_public: bool | None = None

    @field_validator("title", "summary", "proponent_entity", mode="before")
    @classmethod
    def reject_null_text(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        if isinstance(v, str) and not v.strip():
            raise ValueError("Field cannot be empty or whitespace only")
        return v.strip() if isinstance(v, str) else v

    @field_validator("keywords", mode="before")
    @classmethod
    def reject_null_keywords(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v: list[str] | None) -> list[str] | None:
        return _clean_keywords(v) if v is not None else v

    @field_validator("status", "is_public", mode="before")
    @classmethod
    def reject_null_flags(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_dates(cls, v: Any) -> Any:
        return parse_calendar_date(v)


class ProjectRead(BaseModel):
    """Schema for reading a project without its relations."""

    id: UUID
    title: str
    summary: str
    keywords: list[str]
    status: ProjectStatus
    proponent_entity: str
    start_date: date | None
    end_date: date | None
    budget: float | None
    is_public: bool
    owner_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectDetail(ProjectRead):
    """Owner view of a project: products (with type and attachments) and attachments."""

    products: list[ProductRead] = []
    attachments: list[AttachmentRead] = []


class ProjectSummary(ProjectRead):
    """List entry with derived counts."""

    products_count: int
    attachments_count: int

    @classmethod
    def from_row(cls, row: tuple[Any, int, int]) -> "ProjectSummary":
        project, products_count, attachments_count = row
        return cls.model_validate(
            {
                **ProjectRead.model_validate(project).model_dump(),
                "products_count": products_count,
                "attachments_count": attachments_count,
            }
        )


class ProjectList(BaseModel):
    projects: list[ProjectSummary]
    total: int
