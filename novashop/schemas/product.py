# novashop/schemas/product.py
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductCreate(BaseModel):
    """
    Payload for creating a product (built from the multipart form).

    The image, if any, is uploaded separately and not part of this model.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    category: str = Field(max_length=50)
    price: float = Field(gt=0)
    qty: int = Field(default=0, ge=0)
    warranty: str | None = Field(default=None, max_length=100)
    description: str | None = None

    @field_validator("title", "category")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("warranty", "description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class ProductRead(BaseModel):
    """
    Product representation for clients.
    """

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    category: str
    price: float
    qty: int
    warranty: str | None = None
    description: str | None = None
    image_url: str | None = None
    created_at: datetime


class ProductListResponse(BaseModel):
    Status: str = "success"
    Result: list[ProductRead]


class ProductDetailResponse(BaseModel):
    Status: str = "Success"
    Result: ProductRead


class MessageResponse(BaseModel):
    Status: str = "success"
    message: str
