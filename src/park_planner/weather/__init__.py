"""Weather derivation: code table, fire danger, historical averages, lookup."""

from park_planner.weather.codes import SNOW_CODES, STORM_CODES, describe
from park_planner.weather.fire import (
    danger_level,
    estimate_fire_weather_index,
    peak_danger_level,
    summarize_fire_danger,
)
from park_planner.weather.history import average_historical_days
from park_planner.weather.service import WeatherService

__all__ = [
    "SNOW_CODES",
    "STORM_CODES",
    "describe",
    "danger_level",
    "estimate_fire_weather_index",
    "peak_danger_level",
    "summarize_fire_danger",
    "average_historical_days",
    "WeatherService",
]
