"""Weather lookup for a trip.

Picks between two sources depending on how far out the trip ends:

- **Forecast**: no dates given, or the last day is within the forecast
  horizon (16 days). One request for the exact span.
- **Historical**: anything further out. The same month/day span is fetched
  for each of the last few complete years, concurrently, and averaged per
  calendar date. A year that fails or times out is logged and left out;
  only when every year fails does the lookup fail.

Both branches produce chronologically ordered `WeatherDay` lists with fire
danger already derived.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from park_planner.config import Settings, get_settings
from park_planner.models.location import Coordinates
from park_planner.models.weather import (
    DailyObservation,
    DataSource,
    WeatherDateRange,
    WeatherDay,
)
from park_planner.providers.base import (
    HistoricalDataUnavailableError,
    ProviderError,
    WeatherProvider,
)
from park_planner.providers.openmeteo import (
    OpenMeteoArchiveProvider,
    OpenMeteoForecastProvider,
)
from park_planner.weather.codes import describe
from park_planner.weather.fire import danger_level, estimate_fire_weather_index, round_half_up
from park_planner.weather.history import archive_window, average_historical_days

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_forecast_day(observation: DailyObservation) -> WeatherDay:
    """Derive a display day from one live forecast observation."""
    fire_index = estimate_fire_weather_index(
        observation.temp_max_c,
        observation.humidity_min_percent,
        observation.wind_max_kph,
        observation.precipitation_mm,
    )
    probability = observation.precipitation_probability_percent or 0
    return WeatherDay(
        date=observation.date,
        temp_max=round_half_up(observation.temp_max_c),
        temp_min=round_half_up(observation.temp_min_c),
        precip_probability=min(100, max(0, round_half_up(probability))),
        weather_code=observation.weather_code,
        weather_description=describe(observation.weather_code).description,
        data_source=DataSource.FORECAST,
        fire_weather_index=fire_index,
        fire_danger_level=danger_level(fire_index),
        precipitation_mm=observation.precipitation_mm,
        humidity_min_percent=observation.humidity_min_percent,
        wind_max_kph=observation.wind_max_kph,
    )


class WeatherService:
    """Fetches trip weather from a forecast and an archive provider.

    A service may be shared between requests: it holds no per-request
    state beyond the providers' HTTP client.

    Example:
        ```python
        async with WeatherService.from_settings() as service:
            days = await service.fetch_weather(
                Coordinates(latitude=51.4968, longitude=-115.9281),
                WeatherDateRange(start_date=date(2027, 1, 10), end_date=date(2027, 1, 14)),
            )
        ```
    """

    def __init__(
        self,
        forecast_provider: WeatherProvider,
        archive_provider: WeatherProvider,
        forecast_horizon_days: int = 16,
        historical_years: int = 5,
        fetch_timeout: float = 20.0,
        today: Callable[[], date] | None = None,
    ):
        """Initialize the service.

        Args:
            forecast_provider: Source of live forecasts
            archive_provider: Source of past daily data
            forecast_horizon_days: Furthest end date served by the forecast
            historical_years: Number of past years to average
            fetch_timeout: Seconds before a single fetch counts as failed
            today: Clock override, mainly for tests
        """
        self.forecast_provider = forecast_provider
        self.archive_provider = archive_provider
        self.forecast_horizon_days = forecast_horizon_days
        self.historical_years = historical_years
        self.fetch_timeout = fetch_timeout
        self._today = today or date.today

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> WeatherService:
        """Build a service backed by Open-Meteo, configured from settings."""
        settings = settings or get_settings()
        common: dict[str, Any] = {
            "user_agent": settings.user_agent,
            "timeout": settings.request_timeout_seconds,
            "retry_attempts": settings.retry_attempts,
            "client": client,
        }
        return cls(
            forecast_provider=OpenMeteoForecastProvider(
                base_url=settings.forecast_api_url,
                forecast_days=settings.default_forecast_days,
                **common,
            ),
            archive_provider=OpenMeteoArchiveProvider(
                base_url=settings.archive_api_url,
                **common,
            ),
            forecast_horizon_days=settings.forecast_horizon_days,
            historical_years=settings.historical_years,
            fetch_timeout=settings.fetch_timeout_seconds,
        )

    async def __aenter__(self) -> WeatherService:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close provider HTTP clients."""
        await self.forecast_provider.aclose()
        await self.archive_provider.aclose()

    def today(self) -> date:
        """Current date according to the service clock."""
        return self._today()

    def uses_forecast(self, date_range: WeatherDateRange | None) -> bool:
        """Check whether a range is served by the live forecast."""
        if date_range is None:
            return True
        days_out = (date_range.end_date - self.today()).days
        return days_out <= self.forecast_horizon_days

    def source_years(self) -> list[int]:
        """Complete past years averaged by the historical branch, newest first."""
        current_year = self.today().year
        return [current_year - offset for offset in range(1, self.historical_years + 1)]

    async def fetch_weather(
        self,
        coordinates: Coordinates,
        date_range: WeatherDateRange | None = None,
    ) -> list[WeatherDay]:
        """Get weather for a location and optional trip dates.

        Args:
            coordinates: Park location
            date_range: Trip dates; None means the default forecast window

        Returns:
            Chronologically ordered days, all forecast or all historical

        Raises:
            ProviderError: If the forecast fetch fails
            HistoricalDataUnavailableError: If every historical year fails
        """
        if date_range is None or self.uses_forecast(date_range):
            logger.debug(f"Using live forecast for {coordinates} ({date_range})")
            return await self.fetch_forecast(coordinates, date_range)

        logger.debug(f"Using historical averages for {coordinates} ({date_range})")
        return await self.fetch_historical_averages(coordinates, date_range)

    async def fetch_forecast(
        self,
        coordinates: Coordinates,
        date_range: WeatherDateRange | None = None,
    ) -> list[WeatherDay]:
        """Get live forecast days for the exact range (or the default window)."""
        start = date_range.start_date if date_range else None
        end = date_range.end_date if date_range else None
        observations = await self._bounded(
            self.forecast_provider.get_daily(coordinates, start, end),
            provider=self.forecast_provider,
        )
        return [to_forecast_day(o) for o in observations]

    async def fetch_historical_averages(
        self,
        coordinates: Coordinates,
        date_range: WeatherDateRange,
    ) -> list[WeatherDay]:
        """Average the same dates over past years.

        Every year is fetched concurrently; failures are dropped so slow or
        broken years cannot hold back the ones that succeeded.
        """
        years = self.source_years()
        results = await asyncio.gather(
            *(self._fetch_archive_year(coordinates, date_range, year) for year in years),
            return_exceptions=True,
        )

        surviving: list[list[DailyObservation]] = []
        for year, result in zip(years, results):
            if isinstance(result, BaseException):
                logger.warning(f"Failed to fetch archive for {year}: {result}")
                continue
            surviving.append(result)

        if not surviving:
            raise HistoricalDataUnavailableError(self.archive_provider.name)

        logger.info(
            f"Averaged {len(surviving)} of {len(years)} years for {coordinates} "
            f"{date_range.start_date}..{date_range.end_date}"
        )
        return average_historical_days(surviving, date_range)

    async def _fetch_archive_year(
        self,
        coordinates: Coordinates,
        date_range: WeatherDateRange,
        year: int,
    ) -> list[DailyObservation]:
        start, end = archive_window(date_range, year)
        return await self._bounded(
            self.archive_provider.get_daily(coordinates, start, end),
            provider=self.archive_provider,
        )

    async def _bounded(self, fetch: Awaitable[T], provider: WeatherProvider) -> T:
        """Await a fetch, turning a timeout into a ProviderError."""
        try:
            return await asyncio.wait_for(fetch, timeout=self.fetch_timeout)
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"{provider.name} did not respond within {self.fetch_timeout:g}s",
                provider=provider.name,
            ) from e
