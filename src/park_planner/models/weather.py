"""Weather and forecast models."""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Iterator, Self

from pydantic import BaseModel, Field, model_validator


class DataSource(str, Enum):
    """Where a day's numbers came from.

    Historical days are multi-year averages for the same calendar date,
    not observations.
    """

    FORECAST = "forecast"
    HISTORICAL = "historical"


class FireDangerLevel(str, Enum):
    """Fire danger classification, ordered from least to most dangerous."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"
    EXTREME = "extreme"

    @property
    def rank(self) -> int:
        """Position in the danger ordering (low = 0)."""
        return list(FireDangerLevel).index(self)

    def is_elevated(self) -> bool:
        """Check if campfire restrictions are plausible at this level."""
        return self.rank >= FireDangerLevel.HIGH.rank


class WeatherSeverity(str, Enum):
    """How disruptive a weather code is for camping."""

    CLEAR = "clear"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class WeatherCodeInfo(BaseModel):
    """Display information for a WMO weather code."""

    description: str
    icon: str
    severity: WeatherSeverity


class InvalidDateRangeError(ValueError):
    """Raised when a date range ends before it starts."""


class WeatherDateRange(BaseModel):
    """An inclusive range of calendar dates for a trip."""

    start_date: date = Field(..., description="First day of the trip")
    end_date: date = Field(..., description="Last day of the trip (inclusive)")

    @model_validator(mode="after")
    def validate_order(self) -> Self:
        """Ensure the range does not end before it starts."""
        if self.end_date < self.start_date:
            raise InvalidDateRangeError(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )
        return self

    @property
    def days(self) -> int:
        """Number of calendar days covered, inclusive."""
        return (self.end_date - self.start_date).days + 1

    def iter_dates(self) -> Iterator[date]:
        """Yield every calendar date in the range, in order."""
        for offset in range(self.days):
            yield self.start_date + timedelta(days=offset)


class DailyObservation(BaseModel):
    """One day of raw upstream data, before any derivation.

    Used for both live forecast days and archive days. Units are those of
    the upstream source: Celsius, millimetres, percent and km/h.
    """

    date: date
    temp_max_c: float
    temp_min_c: float
    precipitation_mm: float | None = None
    precipitation_probability_percent: float | None = None
    weather_code: int
    humidity_min_percent: float | None = None
    wind_max_kph: float | None = None


class WeatherDay(BaseModel):
    """One calendar day's conditions for one location.

    `fire_danger_level` is always the bucketed `fire_weather_index`; the
    estimator inputs are kept alongside so the index can be re-derived.
    """

    date: date
    temp_max: int = Field(..., description="Daily high, rounded °C")
    temp_min: int = Field(..., description="Daily low, rounded °C")
    precip_probability: int = Field(..., ge=0, le=100)
    weather_code: int
    weather_description: str
    data_source: DataSource = DataSource.FORECAST
    fire_weather_index: int | None = Field(default=None, ge=0)
    fire_danger_level: FireDangerLevel = FireDangerLevel.LOW

    # Inputs fed to the fire-weather estimator
    precipitation_mm: float | None = Field(default=None, ge=0)
    humidity_min_percent: float | None = Field(default=None, ge=0, le=100)
    wind_max_kph: float | None = Field(default=None, ge=0)

    @property
    def is_historical(self) -> bool:
        """Check if this day is a multi-year average."""
        return self.data_source == DataSource.HISTORICAL
