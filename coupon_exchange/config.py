"""Settings - environment-driven configuration for the API and maintenance jobs.

Invariants:
    - Read from environment variables or `.env`; names are case-insensitive
    - get_settings() is cached: one instance per process
    - Business constants (partner deal limit, expiry window, batch size) are
      passed into services as arguments, never imported as globals
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://coupons:coupons@db:5432/coupons"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_pool_timeout_seconds: int = Field(10, ge=1)

    # Store pages and coupons
    partner_deal_limit: int = Field(3, ge=1)
    coupon_expiry_days: int = Field(7, ge=1)
    enforce_coupon_expiry: bool = False

    # Affiliation regeneration; 3 bound values per row must fit SQLite's 999 limit
    affiliation_batch_size: int = Field(300, ge=1, le=333)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql://; the async engine needs +asyncpg."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
