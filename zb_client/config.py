"""Configuration management for the gateway client."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ZEEBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gateway
    gateway_address: str = "localhost:26500"
    plaintext: bool = True
    ca_certificate_path: str | None = None

    # Requests (seconds)
    request_timeout: float = Field(default=20.0, gt=0)
    request_timeout_offset: float = Field(default=10.0, ge=0)
    max_retries: int = Field(default=3, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
