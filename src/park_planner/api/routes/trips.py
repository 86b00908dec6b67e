"""Trip routes.

Weather, alerts and packing list for a park visit. The park itself is sent
in the request body; this service does not own the park dataset.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, model_validator

from park_planner.api.dependencies import get_weather_service
from park_planner.models.location import Coordinates
from park_planner.models.park import Park
from park_planner.models.recommendation import (
    FireDangerSummary,
    PackingItem,
    PackingProgress,
    WeatherAlert,
)
from park_planner.models.weather import WeatherDateRange, WeatherDay
from park_planner.providers.base import HistoricalDataUnavailableError, ProviderError
from park_planner.recommendations.alerts import generate_alerts
from park_planner.recommendations.packing import (
    generate_packing_list,
    merge_checked,
    packing_progress,
)
from park_planner.trips import TripPlan, plan_trip
from park_planner.weather.fire import summarize_fire_danger
from park_planner.weather.service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter()


class WeatherRequest(BaseModel):
    """Weather lookup request."""

    coordinates: Coordinates
    date_range: WeatherDateRange | None = None


class AlertsRequest(BaseModel):
    """Alerts for already-fetched weather."""

    weather: list[WeatherDay]


class AlertsResponse(BaseModel):
    """Alerts plus the fire danger banner."""

    alerts: list[WeatherAlert]
    fire_danger: FireDangerSummary | None


class _ParkRequest(BaseModel):
    park: Park
    campground_index: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_campground_index(self) -> _ParkRequest:
        """Reject an index past the end of a non-empty campground list."""
        if self.park.campgrounds and self.campground_index >= len(self.park.campgrounds):
            raise ValueError(
                f"campground_index {self.campground_index} out of range "
                f"for {len(self.park.campgrounds)} campgrounds"
            )
        return self


class PackingRequest(_ParkRequest):
    """Packing list for already-fetched weather."""

    weather: list[WeatherDay] = Field(default_factory=list)
    previous_items: list[PackingItem] = Field(
        default_factory=list, description="Earlier list; checked flags carry over by id"
    )


class PackingResponse(BaseModel):
    """Packing list with progress counts."""

    items: list[PackingItem]
    progress: PackingProgress


class PlanRequest(_ParkRequest):
    """Full trip plan request."""

    date_range: WeatherDateRange | None = None
    previous_items: list[PackingItem] = Field(default_factory=list)


def _provider_http_error(e: ProviderError) -> HTTPException:
    if isinstance(e, HistoricalDataUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Weather unavailable from {e.provider}: {e}",
    )


@router.post("/weather", response_model=list[WeatherDay])
async def get_weather(
    body: WeatherRequest,
    service: WeatherService = Depends(get_weather_service),
) -> list[WeatherDay]:
    """Get forecast or historical-average days for a location."""
    try:
        return await service.fetch_weather(body.coordinates, body.date_range)
    except ProviderError as e:
        logger.error(f"Weather lookup failed: {e}")
        raise _provider_http_error(e) from e


@router.post("/alerts", response_model=AlertsResponse)
async def get_alerts(body: AlertsRequest) -> AlertsResponse:
    """Derive alerts from weather days."""
    return AlertsResponse(
        alerts=generate_alerts(body.weather),
        fire_danger=summarize_fire_danger(body.weather),
    )


@router.post("/packing", response_model=PackingResponse)
async def get_packing_list(body: PackingRequest) -> PackingResponse:
    """Build a packing list from a park, campground and weather."""
    items = generate_packing_list(body.park, body.weather, body.campground_index)
    if body.previous_items:
        items = merge_checked(body.previous_items, items)
    return PackingResponse(items=items, progress=packing_progress(items))


@router.post("/plan", response_model=TripPlan)
async def get_trip_plan(
    body: PlanRequest,
    service: WeatherService = Depends(get_weather_service),
) -> TripPlan:
    """Weather, alerts and packing list for a trip in one call."""
    try:
        return await plan_trip(
            service,
            body.park,
            body.date_range,
            body.campground_index,
            body.previous_items,
        )
    except ProviderError as e:
        logger.error(f"Trip plan for {body.park.id} failed: {e}")
        raise _provider_http_error(e) from e
