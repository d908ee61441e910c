# novashop/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered account (the credential store).

    Identity:
      - id: server-assigned UUID, embedded in session tokens as "id"
      - email: unique, stored stripped and lower-cased

    Role:
      - "customer" | "admin"

    Only the bcrypt hash of the password is stored; the plaintext never
    reaches this table.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=50,
        description="Customer display name",
    )

    # Unique constraint is the source of truth for duplicate registrations
    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
        description="Login email (lower-cased)",
    )

    password_hash: str = Field(
        max_length=255,
        description="bcrypt hash of the password",
    )

    role: str = Field(
        default="customer",
        index=True,
        description="Application role: customer | admin",
    )

    photo_url: str | None = Field(
        default=None,
        description="Public URL of the profile photo",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
