"""Open-Meteo weather providers.

## API Documentation Summary
Source: https://open-meteo.com/en/docs
Source: https://open-meteo.com/en/docs/historical-weather-api

## Endpoints
- Forecast: https://api.open-meteo.com/v1/forecast
- Archive: https://archive-api.open-meteo.com/v1/archive
- Example: /v1/forecast?latitude=51.5&longitude=-115.9&daily=temperature_2m_max&timezone=auto

## Authentication
- No API key for non-commercial use

## Response Format
Both endpoints answer with one time-aligned bundle of per-day arrays:
```json
{
  "latitude": 51.5,
  "longitude": -115.9,
  "timezone": "America/Edmonton",
  "daily": {
    "time": ["2026-07-01", "2026-07-02"],
    "temperature_2m_max": [24.1, 26.3],
    "temperature_2m_min": [8.2, 9.0],
    ...
  }
}
```
Any array may contain nulls for days the model has no value for.

## Variable Translation (Open-Meteo daily -> Canonical)
| Open-Meteo Field | Canonical Field | Unit | Notes |
|------------------|-----------------|------|-------|
| time | date | ISO date | Local to `timezone=auto` |
| temperature_2m_max | temp_max_c | °C | Required |
| temperature_2m_min | temp_min_c | °C | Required |
| precipitation_sum | precipitation_mm | mm | |
| precipitation_probability_max | precipitation_probability_percent | % | Forecast only |
| weathercode / weather_code | weather_code | WMO | Forecast uses the legacy name |
| relative_humidity_2m_min | humidity_min_percent | % | |
| wind_speed_10m_max | wind_max_kph | km/h | Default unit |
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from park_planner.models.location import Coordinates
from park_planner.models.weather import DailyObservation
from park_planner.providers.base import ProviderError, WeatherProvider

logger = logging.getLogger(__name__)

COMMON_DAILY_VARIABLES = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "relative_humidity_2m_min",
    "wind_speed_10m_max",
]

WEATHER_CODE_KEYS = ("weather_code", "weathercode")


def _value_at(daily: dict[str, Any], key: str, index: int) -> Any:
    """Read one day from a daily array, tolerating missing or short arrays."""
    values = daily.get(key)
    if not values or index >= len(values):
        return None
    return values[index]


class OpenMeteoProvider(WeatherProvider):
    """Shared request and translation logic for the Open-Meteo endpoints."""

    daily_variables: list[str] = COMMON_DAILY_VARIABLES
    weather_code_variable: str = "weather_code"

    def _build_params(
        self,
        coordinates: Coordinates,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[str, Any]:
        point = coordinates.rounded()
        params: dict[str, Any] = {
            "latitude": point.latitude,
            "longitude": point.longitude,
            "daily": ",".join(self.daily_variables),
            "timezone": "auto",
        }
        if start_date is not None:
            params["start_date"] = start_date.isoformat()
        if end_date is not None:
            params["end_date"] = end_date.isoformat()
        return params

    async def get_daily(
        self,
        coordinates: Coordinates,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[DailyObservation]:
        """Get daily weather from Open-Meteo.

        Args:
            coordinates: Location (lat/lon), rounded to 4 decimal places
            start_date: First day to fetch
            end_date: Last day to fetch, inclusive

        Returns:
            Daily observations in canonical format

        Raises:
            ProviderError: If the request fails or the body is unusable
        """
        params = self._build_params(coordinates, start_date, end_date)
        response = await self._fetch(self.base_url, params=params)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                response_body=response.text,
            )

        return self._translate_response(data)

    def _translate_response(self, response_data: dict[str, Any]) -> list[DailyObservation]:
        """Translate an Open-Meteo daily bundle to canonical format.

        See module docstring for detailed field mapping. Days missing a
        temperature or weather code are dropped.
        """
        daily = response_data.get("daily") if isinstance(response_data, dict) else None
        if not isinstance(daily, dict) or not isinstance(daily.get("time"), list):
            raise ProviderError(
                "Response has no daily data",
                provider=self.name,
                response_body=str(response_data)[:500],
            )

        observations: list[DailyObservation] = []
        for i, day in enumerate(daily["time"]):
            temp_max = _value_at(daily, "temperature_2m_max", i)
            temp_min = _value_at(daily, "temperature_2m_min", i)
            # The forecast answers with either the legacy or the current key
            code = None
            for key in (self.weather_code_variable, *WEATHER_CODE_KEYS):
                code = _value_at(daily, key, i)
                if code is not None:
                    break

            if temp_max is None or temp_min is None or code is None:
                logger.debug(f"{self.name}: skipping {day}, incomplete daily values")
                continue

            observations.append(
                DailyObservation(
                    date=date.fromisoformat(day),
                    temp_max_c=temp_max,
                    temp_min_c=temp_min,
                    precipitation_mm=_value_at(daily, "precipitation_sum", i),
                    precipitation_probability_percent=_value_at(
                        daily, "precipitation_probability_max", i
                    ),
                    weather_code=int(code),
                    humidity_min_percent=_value_at(daily, "relative_humidity_2m_min", i),
                    wind_max_kph=_value_at(daily, "wind_speed_10m_max", i),
                )
            )

        if daily["time"] and not observations:
            raise ProviderError(
                f"Response has no complete days out of {len(daily['time'])}",
                provider=self.name,
                response_body=str(response_data)[:500],
            )

        return observations


class OpenMeteoForecastProvider(OpenMeteoProvider):
    """Open-Meteo short-range forecast provider.

    With no dates, fetches the next `forecast_days` days starting today.

    Example:
        ```python
        async with OpenMeteoForecastProvider() as provider:
            days = await provider.get_daily(
                Coordinates(latitude=45.5843, longitude=-78.3585)
            )
        ```
    """

    name = "open-meteo"
    base_url = "https://api.open-meteo.com/v1/forecast"
    daily_variables = [
        *COMMON_DAILY_VARIABLES,
        "precipitation_probability_max",
        "weathercode",
    ]
    weather_code_variable = "weathercode"

    def __init__(self, *args: Any, forecast_days: int = 7, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.forecast_days = forecast_days

    def _build_params(
        self,
        coordinates: Coordinates,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[str, Any]:
        params = super()._build_params(coordinates, start_date, end_date)
        if start_date is None and end_date is None:
            params["forecast_days"] = self.forecast_days
        return params


class OpenMeteoArchiveProvider(OpenMeteoProvider):
    """Open-Meteo historical archive provider (reanalysis daily values)."""

    name = "open-meteo-archive"
    base_url = "https://archive-api.open-meteo.com/v1/archive"
    daily_variables = [*COMMON_DAILY_VARIABLES, "weather_code"]
    weather_code_variable = "weather_code"

    async def get_daily(
        self,
        coordinates: Coordinates,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[DailyObservation]:
        """Get archived daily weather; both dates are required."""
        if start_date is None or end_date is None:
            raise ValueError("Archive requests need both start_date and end_date")
        return await super().get_daily(coordinates, start_date, end_date)
