"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfidenceSettings(BaseModel):
    """Ancillary signals feeding the confidence estimate.

    Controls when the sample-density and freshness bonuses apply.
    """

    staleness_threshold_hours: int = 24
    """Data collected more recently than this earns the freshness bonus."""

    high_sample_density_threshold: int = 20
    """Route sample points above this count earn the density bonus."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application Configuration
    ENVIRONMENT: Literal["development", "test", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Factor collection
    factor_timeout_seconds: float = Field(default=10.0, gt=0)

    # Batch processing
    max_batch_size: int = Field(default=10, ge=1)
    max_concurrent_routes: int = Field(default=5, ge=1)

    # Confidence estimation
    confidence: ConfidenceSettings = ConfidenceSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
