"""Process-level configuration read from ``GLUESTICK_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GluestickSettings(BaseSettings):
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/gluestick",
        description="MongoDB URI, including the database name",
    )
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"
    tracing: bool = False
    slow_query_ms: float = Field(default=100.0, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="GLUESTICK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> GluestickSettings:
    """Get cached settings instance."""
    return GluestickSettings()
