"""
Application configuration using Pydantic settings.
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Data Source Configuration
    data_dir: str = Field(
        default="data",
        description="Root directory holding the Bhuvan and water-quality data"
    )
    bhuvan_subdir: str = Field(
        default="bhuvan-wbis",
        description="Sub-directory (or URL path) holding one folder per Bhuvan water body"
    )
    bhuvan_base_url: Optional[str] = Field(
        default=None,
        description="Remote mirror of the Bhuvan folders; local files are used when unset"
    )
    water_quality_csv: str = Field(
        default="water-quality/hyderabad_lakes_water_quality.csv",
        description="Water-quality CSV path, relative to data_dir"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for remote data fetches"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for remote data fetches"
    )

    # Historical Boundaries
    boundary_start_year: int = Field(
        default=1984,
        description="First year with a published lake boundary layer"
    )
    boundary_end_year: int = Field(
        default=2024,
        description="Last year with a published lake boundary layer"
    )
    boundary_url_template: str = Field(
        default="/data/lakes/lakes_{year}.geojson",
        description="Client-side URL of a yearly boundary layer"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Hyderabad Lake Analytics",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


# Global settings instance
settings = Settings()
