"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Settings loaded from environment variables prefixed ``NUTRITION_``."""

    environment: str = _ENVIRONMENT
    debug: bool = False
    log_level: str = "INFO"
    max_custom_size_depth: int = Field(default=16, ge=1)
    catalog_ttl_seconds: int = Field(default=300, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="NUTRITION_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
