# novashop/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OrderStatus = Literal["pending", "paid"]


class OrderLineCreate(BaseModel):
    """
    One line of a new order.

    `total_price` is the line amount as computed by the client.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: uuid.UUID
    qty: int = Field(gt=0)
    total_price: float = Field(ge=0)


class OrderPlaced(BaseModel):
    Status: str = "success"
    message: str = "Order placed successfully."
    orderId: str


class PendingLineRead(BaseModel):
    """
    A pending order line joined with its product, for the customer view.
    """

    id: uuid.UUID
    title: str
    image_url: str | None = None
    qty: int
    amount: float
    order_reference: str


class PendingLinesResponse(BaseModel):
    Status: str = "success"
    Result: list[PendingLineRead]


class PendingTotal(BaseModel):
    Status: str = "success"
    total_amount: float


class StatusUpdated(BaseModel):
    Status: str = "updated"
    message: str = "Order status updated"
    updated: int


class OrderLineAdminRead(BaseModel):
    """
    Admin view of a single order line with product and customer info.
    """

    order_id: str
    qty: int
    amount: float
    status: OrderStatus
    date: datetime
    title: str | None = None
    image_url: str | None = None
    price: float | None = None
    customer_name: str | None = None
    customer_photo: str | None = None


class AllOrdersResponse(BaseModel):
    Status: str = "success"
    Result: list[OrderLineAdminRead]


class CheckoutRequest(BaseModel):
    """
    Claimed payment for the caller's orders.

    Only the last four digits of `card_number` are persisted.
    """

    model_config = ConfigDict(extra="forbid")

    payment_method: str = Field(max_length=50)
    card_number: str
    total_amount: float = Field(gt=0)

    @field_validator("payment_method")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("card_number")
    @classmethod
    def digits_only(cls, v: str) -> str:
        digits = "".join(ch for ch in v if not ch.isspace() and ch != "-")
        if len(digits) < 4 or not digits.isdigit():
            raise ValueError("card_number must contain at least 4 digits")
        return digits


class CheckoutResponse(BaseModel):
    Status: str = "success"
    transactionId: str
