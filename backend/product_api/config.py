"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Secrets come from environment variables; the JWT default is for local use only
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Open choices from earlier API revisions (listing order, duplicate-email status)
      are settings rather than hardcoded constants
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from product_api.core.domain_types import ProductOrder


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://products:products@db:5432/products"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # Alembic owns the schema unless this is set
    database_create_schema: bool = False

    # Auth
    jwt_secret: str = "dev-only-jwt-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24
    bcrypt_rounds: int = 10

    # Products
    product_list_order: ProductOrder = ProductOrder.ID_DESC

    # Registration
    duplicate_email_status: int = 409

    @field_validator("duplicate_email_status")
    @classmethod
    def check_duplicate_email_status(cls, v: int) -> int:
        if v not in (400, 409):
            raise ValueError("duplicate_email_status must be 400 or 409")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
