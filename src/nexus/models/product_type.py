"""ProductType model - reference catalogue of research product kinds."""

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class ProductType(SQLModel, table=True):
    __tablename__ = "product_types"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(max_length=100, unique=True, index=True)
    description: str = Field(max_length=500)
    quality: str = Field(max_length=50)
    category: str = Field(max_length=100, index=True)
