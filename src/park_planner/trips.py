"""Trip planning: weather, alerts and packing list in one pass.

`plan_trip` is the single entry point the API and CLI use. Weather is
fetched first; alerts and the packing list are only derived from a
successful fetch, never from a partial one.

`TripPlanSession` serves a single user who may change dates or campground
faster than the weather arrives: each new request cancels the one in
flight, and only the newest request's plan is ever returned.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel, Field

from park_planner.models.park import Park
from park_planner.models.recommendation import (
    FireDangerSummary,
    PackingItem,
    WeatherAlert,
    WeatherSourceSummary,
)
from park_planner.models.weather import DataSource, WeatherDateRange, WeatherDay
from park_planner.recommendations.alerts import generate_alerts
from park_planner.recommendations.packing import generate_packing_list, merge_checked
from park_planner.weather.fire import summarize_fire_danger
from park_planner.weather.service import WeatherService

logger = logging.getLogger(__name__)


class TripPlan(BaseModel):
    """Everything shown for a trip to one park."""

    park_id: str
    date_range: WeatherDateRange | None = None
    campground: str | None = Field(default=None, description="Selected campground name")
    weather: list[WeatherDay] = Field(default_factory=list)
    alerts: list[WeatherAlert] = Field(default_factory=list)
    packing_list: list[PackingItem] = Field(default_factory=list)
    fire_danger: FireDangerSummary | None = None
    source: WeatherSourceSummary | None = None


class RequestSupersededError(Exception):
    """Raised to a caller whose request was replaced by a newer one."""


def describe_weather_source(
    days: list[WeatherDay],
    years: list[int],
) -> WeatherSourceSummary | None:
    """Explain where the trip weather came from, or None with no weather."""
    if not days:
        return None

    if any(day.is_historical for day in days):
        ordered = sorted(years)
        span = f"{ordered[0]}-{ordered[-1]}" if ordered else "past years"
        return WeatherSourceSummary(
            data_source=DataSource.HISTORICAL,
            message=f"Based on historical averages ({span}). Actual conditions may vary.",
            years=ordered,
        )

    return WeatherSourceSummary(
        data_source=DataSource.FORECAST,
        message="Live forecast from Open-Meteo",
    )


async def plan_trip(
    service: WeatherService,
    park: Park,
    date_range: WeatherDateRange | None = None,
    campground_index: int | None = None,
    previous_items: list[PackingItem] | None = None,
) -> TripPlan:
    """Fetch weather and derive alerts and packing list for a trip.

    Args:
        service: Weather lookup
        park: Park being visited
        date_range: Trip dates; None means the next few days
        campground_index: Selected campground (defaults to the first)
        previous_items: Earlier list whose checked flags should carry over

    Returns:
        Complete trip plan

    Raises:
        ProviderError: If weather cannot be loaded
    """
    weather = await service.fetch_weather(park.coordinates, date_range)

    packing_list = generate_packing_list(park, weather, campground_index)
    if previous_items:
        packing_list = merge_checked(previous_items, packing_list)

    campground = park.campground(campground_index)
    return TripPlan(
        park_id=park.id,
        date_range=date_range,
        campground=campground.name if campground else None,
        weather=weather,
        alerts=generate_alerts(weather),
        packing_list=packing_list,
        fire_danger=summarize_fire_danger(weather),
        source=describe_weather_source(weather, service.source_years()),
    )


class TripPlanSession:
    """Last-request-wins wrapper around `plan_trip` for one user.

    Example:
        ```python
        session = TripPlanSession(service)
        plan = await session.request(park, date_range=new_dates)
        ```
    """

    def __init__(self, service: WeatherService):
        self.service = service
        self.latest: TripPlan | None = None
        self._generation = 0
        self._task: asyncio.Task[TripPlan] | None = None

    async def request(
        self,
        park: Park,
        date_range: WeatherDateRange | None = None,
        campground_index: int | None = None,
    ) -> TripPlan:
        """Plan a trip, cancelling any request still in flight.

        Raises:
            RequestSupersededError: If a newer request arrived first
            ProviderError: If weather cannot be loaded
        """
        self._generation += 1
        generation = self._generation

        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded trip plan request")
            self._task.cancel()

        previous_items = self.latest.packing_list if self.latest else None
        task = asyncio.create_task(
            plan_trip(self.service, park, date_range, campground_index, previous_items)
        )
        self._task = task

        try:
            plan = await task
        except asyncio.CancelledError:
            if task.cancelled() and generation != self._generation:
                raise RequestSupersededError("A newer trip request replaced this one") from None
            raise

        if generation != self._generation:
            raise RequestSupersededError("A newer trip request replaced this one")

        self.latest = plan
        return plan
