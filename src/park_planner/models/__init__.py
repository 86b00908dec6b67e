"""Domain models for park trip planning."""

from park_planner.models.location import Coordinates
from park_planner.models.park import (
    Activity,
    Amenity,
    Campground,
    Park,
    ParkType,
    Province,
    Season,
)
from park_planner.models.weather import (
    DailyObservation,
    DataSource,
    FireDangerLevel,
    InvalidDateRangeError,
    WeatherCodeInfo,
    WeatherDateRange,
    WeatherDay,
    WeatherSeverity,
)
from park_planner.models.recommendation import (
    AlertSeverity,
    AlertType,
    CategoryProgress,
    FireDangerSummary,
    PackingCategory,
    PackingItem,
    PackingProgress,
    WeatherAlert,
    WeatherSourceSummary,
)

__all__ = [
    # Location
    "Coordinates",
    # Park
    "Activity",
    "Amenity",
    "Campground",
    "Park",
    "ParkType",
    "Province",
    "Season",
    # Weather
    "DailyObservation",
    "DataSource",
    "FireDangerLevel",
    "InvalidDateRangeError",
    "WeatherCodeInfo",
    "WeatherDateRange",
    "WeatherDay",
    "WeatherSeverity",
    # Recommendation
    "AlertSeverity",
    "AlertType",
    "CategoryProgress",
    "FireDangerSummary",
    "PackingCategory",
    "PackingItem",
    "PackingProgress",
    "WeatherAlert",
    "WeatherSourceSummary",
]
