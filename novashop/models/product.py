# novashop/models/product.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Fields:
      - id, title, category, price, qty, warranty,
        description, image_url, created_at
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    category: str = Field(
        max_length=50,
        index=True,
    )

    price: float = Field(
        gt=0,
        description="Unit price",
    )

    qty: int = Field(
        default=0,
        ge=0,
        description="Units listed as available",
    )

    warranty: str | None = Field(
        default=None,
        max_length=100,
        description="Warranty terms, e.g. '12 months'",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    image_url: str | None = Field(
        default=None,
        description="Public URL of the product image",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
