# novashop/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order.

    One order groups the lines submitted together; all of them share
    the human-readable `reference` ("nova-xxxxxxx").
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    reference: str = Field(
        max_length=20,
        unique=True,
        index=True,
        description="Public order id returned to the client",
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    # pending | paid
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    total_amount: float = Field(
        default=0,
        description="Sum of line amounts",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    # As submitted by the client (line total, not unit price)
    amount: float = Field(
        ge=0,
        description="Line amount",
    )


class Payment(SQLModel, table=True):
    """
    Claimed payment recorded at checkout.

    No payment processor is involved; only the last four digits of the
    card are kept.
    """

    __tablename__ = "payments"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    transaction_id: str = Field(
        max_length=20,
        unique=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    payment_method: str = Field(max_length=50)

    card_last4: str = Field(max_length=4)

    total_amount: float = Field(gt=0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
