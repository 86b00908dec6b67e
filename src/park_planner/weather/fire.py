"""Simplified fire weather estimate.

This is not the Canadian Forest Fire Weather Index, which needs a running
daily moisture-code state. It is a single-day proxy on roughly the same
0-50+ scale: hot, dry, windy days without rain score higher. Historical
averages go through the same function, so both branches bucket alike.

## Components

| Input | Score 0 at | Score 1 at | Default when missing |
|-------|-----------|-----------|----------------------|
| Max temperature | 15°C | 35°C | (required) |
| Min relative humidity | 70% | 20% | 50% |
| Max wind speed | 0 km/h | 40 km/h | 10 km/h |

Index = round((temp * 20 + humidity * 15 + wind * 10) * dampening), where
dampening is 1.0 up to 0.5 mm of precipitation and max(0.1, 1 - mm / 10)
above it. Below 5°C the index is 0; above 5 mm of precipitation it is 1.
"""

from __future__ import annotations

import math
from typing import Iterable

from park_planner.models.recommendation import FireDangerSummary
from park_planner.models.weather import FireDangerLevel, WeatherDay

COLD_CUTOFF_C = 5.0
WET_CUTOFF_MM = 5.0
DAMPENING_THRESHOLD_MM = 0.5

DEFAULT_HUMIDITY_PERCENT = 50.0
DEFAULT_WIND_KPH = 10.0

# Upper bounds (exclusive) for each bucket; anything above is EXTREME
DANGER_THRESHOLDS: list[tuple[float, FireDangerLevel]] = [
    (5, FireDangerLevel.LOW),
    (12, FireDangerLevel.MODERATE),
    (22, FireDangerLevel.HIGH),
    (38, FireDangerLevel.VERY_HIGH),
]

FIRE_DANGER_LABELS: dict[FireDangerLevel, tuple[str, str]] = {
    FireDangerLevel.LOW: ("Low", "Campfires likely permitted"),
    FireDangerLevel.MODERATE: ("Moderate", "Campfires likely permitted, stay cautious"),
    FireDangerLevel.HIGH: ("High", "Campfire restrictions may be in effect"),
    FireDangerLevel.VERY_HIGH: ("Very High", "Campfire bans likely, check with park staff"),
    FireDangerLevel.EXTREME: ("Extreme", "Campfire bans highly likely, bring a stove"),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity.

    Python's round() uses banker's rounding; the displayed values follow
    the usual half-up convention instead (2.5 -> 3, -2.5 -> -2).
    """
    return math.floor(value + 0.5)


def _clamp01(value: float) -> float:
    return max(0.0, min(value, 1.0))


def estimate_fire_weather_index(
    temp_max_c: float,
    humidity_min_percent: float | None = None,
    wind_max_kph: float | None = None,
    precipitation_mm: float | None = None,
) -> int:
    """Estimate fire danger for one day.

    Args:
        temp_max_c: Daily maximum temperature
        humidity_min_percent: Daily minimum relative humidity
        wind_max_kph: Daily maximum wind speed
        precipitation_mm: Daily precipitation total

    Returns:
        Non-negative integer index
    """
    if temp_max_c < COLD_CUTOFF_C:
        return 0
    if precipitation_mm is not None and precipitation_mm > WET_CUTOFF_MM:
        return 1

    temp_score = _clamp01((temp_max_c - 15) / 20)

    humidity = DEFAULT_HUMIDITY_PERCENT if humidity_min_percent is None else humidity_min_percent
    humidity_score = _clamp01((70 - humidity) / 50)

    wind = DEFAULT_WIND_KPH if wind_max_kph is None else wind_max_kph
    wind_score = _clamp01(wind / 40)

    dampening = 1.0
    if precipitation_mm is not None and precipitation_mm > DAMPENING_THRESHOLD_MM:
        dampening = max(0.1, 1 - precipitation_mm / 10)

    raw = (temp_score * 20 + humidity_score * 15 + wind_score * 10) * dampening
    return round_half_up(raw)


def danger_level(index: float | None) -> FireDangerLevel:
    """Bucket a fire weather index into a danger level (None -> LOW)."""
    if index is None:
        return FireDangerLevel.LOW
    for upper, level in DANGER_THRESHOLDS:
        if index < upper:
            return level
    return FireDangerLevel.EXTREME


def peak_danger_level(days: Iterable[WeatherDay]) -> FireDangerLevel:
    """Worst danger level across a sequence of days (LOW when empty)."""
    peak = FireDangerLevel.LOW
    for day in days:
        if day.fire_danger_level.rank > peak.rank:
            peak = day.fire_danger_level
    return peak


def summarize_fire_danger(days: list[WeatherDay]) -> FireDangerSummary | None:
    """Build the fire danger banner for a trip, or None with no weather."""
    if not days:
        return None
    level = peak_danger_level(days)
    label, message = FIRE_DANGER_LABELS[level]
    return FireDangerSummary(level=level, label=label, message=message)
