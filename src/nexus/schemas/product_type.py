"""Product type schemas for API request/response."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProductTypeCreate(BaseModel):
    """Schema for creating a product type. All fields are required."""

    code: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    quality: str = Field(min_length=1, max_length=50)
    category: str = Field(min_length=1, max_length=100)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Code cannot be empty or whitespace only")
        if any(ch.isspace() for ch in v):
            raise ValueError("Code cannot contain whitespace")
        return v

    @field_validator("description", "quality", "category")
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty or whitespace only")
        return v


class ProductTypeRead(BaseModel):
    id: UUID
    code: str
    description: str
    quality: str
    category: str

    model_config = {"from_attributes": True}
