# novashop/schemas/user.py
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    """Response schema returned to admins (never includes the hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: str
    photo_url: str | None = None
    created_at: datetime


class UserListResponse(BaseModel):
    Status: str = "success"
    Result: list[UserRead]
