"""Weather data providers."""

from park_planner.providers.base import (
    HistoricalDataUnavailableError,
    ProviderError,
    RateLimitError,
    WeatherProvider,
)
from park_planner.providers.openmeteo import (
    OpenMeteoArchiveProvider,
    OpenMeteoForecastProvider,
)

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "RateLimitError",
    "HistoricalDataUnavailableError",
    "OpenMeteoForecastProvider",
    "OpenMeteoArchiveProvider",
]
