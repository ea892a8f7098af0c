"""
Configuration and settings for the help center backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # JSON documents on disk
    content_db_path: str = Field(default="data/db.json")
    tokens_db_path: str = Field(default="data/tokens.json")

    # Optional SQL backend for both documents (any SQLAlchemy URL)
    database_url: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Single admin identity
    admin_email: str = Field(default="admin@example.com")
    admin_password: str = Field(default="change-me")
    token_ttl_seconds: int = Field(default=24 * 60 * 60, ge=1)

    # HTTP
    cors_allowed_origins: str = Field(default="*")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001)
    log_level: str = Field(default="INFO")

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.cors_allowed_origins.split(",")]
        return [o for o in origins if o] or ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
