# novashop/schemas/auth.py
import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

Role = Literal["customer", "admin"]


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class UserRegister(BaseModel):
    """
    Registration form (multipart).

    Validation rules:
      - name cannot be empty or whitespace
      - email must be a valid EmailStr, stored lower-cased
      - password cannot be empty
      - role defaults to "customer" when omitted or blank
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    email: EmailStr
    password: str
    role: Role = "customer"

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        if len(v) > 50:
            raise ValueError("name must be at most 50 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("password cannot be empty")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, v: str | None) -> str:
        if v is None or not str(v).strip():
            return "customer"
        return str(v).strip().lower()


class LoginRequest(BaseModel):
    """Credentials for login (JSON body)."""

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("password cannot be empty")
        return v


class UserPublic(BaseModel):
    """Identity fields that are safe to hand back to the client."""

    id: uuid.UUID
    name: str
    email: str
    photo: str | None = None
    role: str


class TokenClaims(UserPublic):
    """
    Claims embedded in a session token.

    iat/exp are added by TokenService and ignored when reading back.
    """


class RegisterResponse(BaseModel):
    Status: str = "success"
    message: str


class LoginResponse(BaseModel):
    Status: str = "Success"
    message: str
    token: str
    user: UserPublic


class AdminResponse(BaseModel):
    """Echo of the verified identity for GET /admin."""

    Status: str = "success"
    role: str
    message: str
    user: TokenClaims
