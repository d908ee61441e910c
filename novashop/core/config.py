# novashop/core/config.py
from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string; sqlite:// for local runs)
      - JWT_SECRET (session token signing secret, never committed)

    Optional:
      - SUPABASE_URL + SUPABASE_SERVICE_ROLE_KEY (image uploads)
      - ADMIN_ROUTE_ROLES (JSON list, e.g. ["admin"])
    """

    PROJECT_NAME: str = "Nova Shop API"
    # Auth routes are mounted at the root by default (/register, /login, /admin)
    API_PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_CONNECT_TIMEOUT: int = 30
    DB_REQUIRE_SSL: bool = False

    # Session tokens
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"

    # Password hashing cost (bcrypt log rounds)
    BCRYPT_ROUNDS: int = 10

    # Login cookie
    COOKIE_SECURE: bool = False

    # Access policy
    ALLOW_ADMIN_SIGNUP: bool = False
    # Roles allowed on GET /admin; empty means any authenticated user
    ADMIN_ROUTE_ROLES: list[str] = []

    # Supabase Storage (user photos, product images)
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    STORAGE_BUCKET: str = "assets"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DATABASE_URL must be set and non-empty")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
