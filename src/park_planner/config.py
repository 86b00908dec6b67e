"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
None of the settings are required; the defaults talk to the public
Open-Meteo endpoints, which need no API key.

## Optional Environment Variables

- FORECAST_API_URL: Live forecast endpoint (default: Open-Meteo forecast)
- ARCHIVE_API_URL: Historical archive endpoint (default: Open-Meteo archive)
- REQUEST_TIMEOUT_SECONDS: httpx timeout per network operation
- FETCH_TIMEOUT_SECONDS: Overall bound for a single upstream fetch
- RETRY_ATTEMPTS: Attempts per fetch on transport errors (1 = no retry)
- HISTORICAL_YEARS: Number of past years averaged for far-out dates
- LOG_LEVEL: Logging level for the CLI and server (default: INFO)
- DEBUG: Enable debug mode (default: false)

## Example .env file

```
FETCH_TIMEOUT_SECONDS=10
HISTORICAL_YEARS=5
LOG_LEVEL=DEBUG
```
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Park Planner"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:8000"],
        description="CORS allowed origins",
    )

    # Weather sources
    forecast_api_url: str = "https://api.open-meteo.com/v1/forecast"
    archive_api_url: str = "https://archive-api.open-meteo.com/v1/archive"
    user_agent: str = Field(
        default="park-planner/0.1.0",
        description="User-Agent sent with every upstream request",
    )
    request_timeout_seconds: float = Field(default=15.0, gt=0)
    fetch_timeout_seconds: float = Field(default=20.0, gt=0)
    retry_attempts: int = Field(default=1, ge=1, le=5)

    # Forecast / historical policy
    forecast_horizon_days: int = Field(default=16, ge=1, le=16)
    default_forecast_days: int = Field(default=7, ge=1, le=16)
    historical_years: int = Field(default=5, ge=1, le=10)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return str(v).upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
