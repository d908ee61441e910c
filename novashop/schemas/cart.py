# novashop/schemas/cart.py
import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class WishlistItemCreate(BaseModel):
    """
    Payload for saving a product to the wishlist.
    """

    product_id: uuid.UUID


class CartItemCreate(BaseModel):
    """
    Payload for adding to cart.
    """

    product_id: uuid.UUID
    qty: int = Field(default=1, gt=0)


class SavedProductRead(BaseModel):
    """
    A product as listed in the wishlist or cart.

    `qty` is only set for cart rows.
    """

    id: uuid.UUID
    title: str
    category: str
    price: float
    image_url: str | None = None
    created_at: datetime
    qty: int | None = None


class SavedProductsResponse(BaseModel):
    success: bool = True
    Result: list[SavedProductRead]


class AddResult(BaseModel):
    """
    Outcome of an add: {"exists": true} when already saved,
    otherwise {"success": true}.
    """

    exists: bool | None = None
    success: bool | None = None


class RemoveResult(BaseModel):
    success: bool = True
    message: str


class WishlistCount(BaseModel):
    Status: str = "Success"
    likes: int


class CartCount(BaseModel):
    Status: str = "Success"
    cart: int
