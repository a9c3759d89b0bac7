"""Environment-based configuration for SwatchX."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from swatchx.discovery.engine import MAX_COARSE_STEP


class Settings(BaseSettings):
    """Application settings loaded from SWATCHX_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SWATCHX_",
        case_sensitive=False,
    )

    # Authentication (None = disabled)
    api_key: str | None = None

    # Remote color-naming API
    color_api_url: str = "https://www.thecolorapi.com"
    request_timeout: float = Field(default=10.0, gt=0)

    # Discovery
    batch_size: int = Field(default=20, ge=1)
    coarse_step: int = Field(default=10, ge=1, le=MAX_COARSE_STEP)

    # Concurrency
    max_concurrent: int = Field(default=20, ge=1)

    log_level: str = "INFO"


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
