"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) - single instance per process
    - openapi_info() is the caller-supplied `info` object of the document

Design Decisions:
    - Defaults provided for all settings: local SQLite works out-of-the-box
"""

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./lamp.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # API document
    api_title: str = "LAMP Platform API"
    api_version: str = "1.0.0"
    api_description: str | None = None
    openapi_path: str = "/api/v1/openapi.json"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def openapi_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "title": self.api_title,
            "version": self.api_version,
        }
        if self.api_description:
            info["description"] = self.api_description
        return info


@lru_cache
def get_settings() -> Settings:
    return Settings()
