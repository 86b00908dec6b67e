"""Pytest fixtures for park planner tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Open-Meteo is replaced by httpx.MockTransport)
2. Isolated test environment with controlled configuration
3. Fixed "today" so forecast/historical branching is deterministic
"""

import asyncio
import os
from datetime import date, timedelta
from typing import Any, Callable

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("FETCH_TIMEOUT_SECONDS", "5")

from park_planner.models.park import (
    Activity,
    Amenity,
    Campground,
    Park,
    ParkType,
    Province,
    Season,
)
from park_planner.models.weather import DataSource, WeatherDay
from park_planner.providers.openmeteo import (
    OpenMeteoArchiveProvider,
    OpenMeteoForecastProvider,
)
from park_planner.weather.codes import describe
from park_planner.weather.fire import danger_level
from park_planner.weather.service import WeatherService

TODAY = date(2026, 10, 19)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from park_planner.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def today() -> date:
    """The fixed date tests treat as today."""
    return TODAY


# =============================================================================
# Weather Fixtures
# =============================================================================


def _make_day(
    day: date | int = 0,
    temp_max: int = 20,
    temp_min: int = 10,
    precip_probability: int = 0,
    weather_code: int = 1,
    fire_weather_index: int | None = 3,
    data_source: DataSource = DataSource.FORECAST,
) -> WeatherDay:
    if isinstance(day, int):
        day = TODAY + timedelta(days=day)
    return WeatherDay(
        date=day,
        temp_max=temp_max,
        temp_min=temp_min,
        precip_probability=precip_probability,
        weather_code=weather_code,
        weather_description=describe(weather_code).description,
        data_source=data_source,
        fire_weather_index=fire_weather_index,
        fire_danger_level=danger_level(fire_weather_index),
    )


@pytest.fixture
def make_day() -> Callable[..., WeatherDay]:
    """Factory for WeatherDay values; `day` is a date or an offset from today."""
    return _make_day


@pytest.fixture
def mild_week() -> list[WeatherDay]:
    """Three mild, dry forecast days."""
    return [_make_day(i, temp_max=21, temp_min=9) for i in range(3)]


def open_meteo_payload(
    dates: list[date],
    temp_max: float | list[float] = 20.0,
    temp_min: float | list[float] = 8.0,
    precipitation: float | list[float | None] = 0.0,
    weather_code: int | list[int] = 1,
    humidity: float | list[float | None] | None = 60.0,
    wind: float | list[float | None] | None = 12.0,
    probability: float | list[float] | None = 10.0,
    legacy_code_key: bool = False,
) -> dict[str, Any]:
    """Build an Open-Meteo style daily bundle for the given dates."""

    def column(value: Any) -> list[Any]:
        return list(value) if isinstance(value, list) else [value] * len(dates)

    daily: dict[str, Any] = {
        "time": [d.isoformat() for d in dates],
        "temperature_2m_max": column(temp_max),
        "temperature_2m_min": column(temp_min),
        "precipitation_sum": column(precipitation),
        "weathercode" if legacy_code_key else "weather_code": column(weather_code),
    }
    if humidity is not None:
        daily["relative_humidity_2m_min"] = column(humidity)
    if wind is not None:
        daily["wind_speed_10m_max"] = column(wind)
    if probability is not None:
        daily["precipitation_probability_max"] = column(probability)
    return {"latitude": 51.5, "longitude": -115.9, "timezone": "America/Edmonton", "daily": daily}


@pytest.fixture
def payload_builder() -> Callable[..., dict[str, Any]]:
    """Factory for Open-Meteo daily payloads."""
    return open_meteo_payload


def date_span(start: str, end: str) -> list[date]:
    """Every date from start to end inclusive, from ISO strings."""
    first, last = date.fromisoformat(start), date.fromisoformat(end)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


class StubWeatherService:
    """Stands in for WeatherService where no HTTP is wanted.

    Returns the given days (or raises the given error); `delays` are
    consumed one per call so concurrent requests can finish out of order.
    """

    def __init__(
        self,
        days: list[WeatherDay] | None = None,
        error: Exception | None = None,
        delays: list[float] | None = None,
    ):
        self.days = days or []
        self.error = error
        self.delays = list(delays or [])
        self.calls: list[tuple[Any, Any]] = []

    async def fetch_weather(self, coordinates, date_range=None) -> list[WeatherDay]:
        self.calls.append((coordinates, date_range))
        if self.delays:
            await asyncio.sleep(self.delays.pop(0))
        if self.error is not None:
            raise self.error
        return [day.model_copy() for day in self.days]

    def source_years(self) -> list[int]:
        return [TODAY.year - offset for offset in range(1, 6)]


@pytest.fixture
def stub_service(mild_week: list[WeatherDay]) -> StubWeatherService:
    """Weather service stub returning three mild forecast days."""
    return StubWeatherService(days=mild_week)


@pytest.fixture
def make_service() -> Callable[..., WeatherService]:
    """Factory for a WeatherService whose providers talk to a mock handler.

    The handler receives the httpx.Request and returns an httpx.Response
    (it may be async). Build the service inside the running event loop.
    """

    def factory(
        handler: Callable[[httpx.Request], Any],
        today: date = TODAY,
        fetch_timeout: float = 5.0,
    ) -> WeatherService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return WeatherService(
            forecast_provider=OpenMeteoForecastProvider(client=client),
            archive_provider=OpenMeteoArchiveProvider(client=client),
            fetch_timeout=fetch_timeout,
            today=lambda: today,
        )

    return factory


# =============================================================================
# Park Fixtures
# =============================================================================


@pytest.fixture
def backcountry_campground() -> Campground:
    """Primitive bear-country site: no water, no fire pits, no lockers."""
    return Campground(
        name="Egypt Lake",
        sites=15,
        amenities={Amenity.TRAILS},
        terrain="alpine",
        bear_country=True,
    )


@pytest.fixture
def frontcountry_campground() -> Campground:
    """Serviced lakeside site with fire pits and bear lockers."""
    return Campground(
        name="Two Jack Lakeside",
        sites=74,
        amenities={
            Amenity.FIRE_PIT,
            Amenity.POTABLE_WATER,
            Amenity.FLUSH_TOILETS,
            Amenity.SHOWERS,
            Amenity.BEAR_LOCKER,
            Amenity.ELECTRICITY,
        },
        terrain="lakeside",
        bear_country=True,
    )


@pytest.fixture
def sample_park(
    frontcountry_campground: Campground,
    backcountry_campground: Campground,
) -> Park:
    """Mountain park with two campgrounds and a handful of activities."""
    return Park(
        id="banff",
        name="Banff National Park",
        province=Province.ALBERTA,
        type=ParkType.NATIONAL,
        lat=51.4968,
        lng=-115.9281,
        description="Canada's first national park.",
        season=Season(open="May 15", close="October 15"),
        campgrounds=[frontcountry_campground, backcountry_campground],
        activities=[
            Activity.HIKING,
            Activity.CANOEING,
            Activity.KAYAKING,
            Activity.WILDLIFE_VIEWING,
            Activity.STARGAZING,
        ],
    )


@pytest.fixture
def coastal_park() -> Park:
    """Coastal park with surfing and a single serviced campground."""
    return Park(
        id="pacific-rim",
        name="Pacific Rim National Park Reserve",
        province=Province.BRITISH_COLUMBIA,
        type=ParkType.NATIONAL,
        lat=49.0428,
        lng=-125.7283,
        campgrounds=[
            Campground(
                name="Green Point",
                sites=94,
                amenities={Amenity.POTABLE_WATER, Amenity.FLUSH_TOILETS, Amenity.FIRE_PIT},
                terrain="coastal",
                bear_country=False,
            )
        ],
        activities=[Activity.SURFING, Activity.FISHING, Activity.SWIMMING],
    )


@pytest.fixture
def park_without_campgrounds() -> Park:
    """Day-use park with no campgrounds at all."""
    return Park(
        id="day-use",
        name="Day Use Provincial Park",
        province=Province.ONTARIO,
        type=ParkType.PROVINCIAL,
        lat=45.58,
        lng=-78.36,
        activities=[Activity.CROSS_COUNTRY_SKIING],
    )
