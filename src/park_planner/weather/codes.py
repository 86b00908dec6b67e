"""WMO weather code table.

Open-Meteo reports daily conditions as WMO 4677 "present weather" codes.
Only the subset Open-Meteo emits is listed; anything else resolves to a
neutral "Unknown" entry instead of raising.

| Codes | Meaning |
|-------|---------|
| 0-3 | Clear to overcast |
| 45, 48 | Fog |
| 51-57 | Drizzle (56/57 freezing) |
| 61-67 | Rain (66/67 freezing) |
| 71-77 | Snow |
| 80-82 | Rain showers |
| 85, 86 | Snow showers |
| 95-99 | Thunderstorm |
"""

from __future__ import annotations

from park_planner.models.weather import WeatherCodeInfo, WeatherSeverity


def _entry(description: str, icon: str, severity: WeatherSeverity) -> WeatherCodeInfo:
    return WeatherCodeInfo(description=description, icon=icon, severity=severity)


_CLEAR = WeatherSeverity.CLEAR
_MILD = WeatherSeverity.MILD
_MODERATE = WeatherSeverity.MODERATE
_SEVERE = WeatherSeverity.SEVERE

WMO_CODES: dict[int, WeatherCodeInfo] = {
    0: _entry("Clear sky", "Sun", _CLEAR),
    1: _entry("Mainly clear", "Sun", _CLEAR),
    2: _entry("Partly cloudy", "CloudSun", _CLEAR),
    3: _entry("Overcast", "Cloud", _MILD),
    45: _entry("Fog", "CloudFog", _MILD),
    48: _entry("Depositing rime fog", "CloudFog", _MILD),
    51: _entry("Light drizzle", "CloudDrizzle", _MILD),
    53: _entry("Moderate drizzle", "CloudDrizzle", _MODERATE),
    55: _entry("Dense drizzle", "CloudDrizzle", _MODERATE),
    56: _entry("Light freezing drizzle", "CloudHail", _MODERATE),
    57: _entry("Dense freezing drizzle", "CloudHail", _SEVERE),
    61: _entry("Slight rain", "CloudRain", _MILD),
    63: _entry("Moderate rain", "CloudRain", _MODERATE),
    65: _entry("Heavy rain", "CloudRainWind", _SEVERE),
    66: _entry("Light freezing rain", "CloudHail", _MODERATE),
    67: _entry("Heavy freezing rain", "CloudHail", _SEVERE),
    71: _entry("Slight snow", "CloudSnow", _MODERATE),
    73: _entry("Moderate snow", "CloudSnow", _MODERATE),
    75: _entry("Heavy snow", "Snowflake", _SEVERE),
    77: _entry("Snow grains", "Snowflake", _MODERATE),
    80: _entry("Slight rain showers", "CloudSunRain", _MILD),
    81: _entry("Moderate rain showers", "CloudRain", _MODERATE),
    82: _entry("Violent rain showers", "CloudRainWind", _SEVERE),
    85: _entry("Slight snow showers", "CloudSnow", _MODERATE),
    86: _entry("Heavy snow showers", "Snowflake", _SEVERE),
    95: _entry("Thunderstorm", "CloudLightning", _SEVERE),
    96: _entry("Thunderstorm with slight hail", "CloudLightning", _SEVERE),
    99: _entry("Thunderstorm with heavy hail", "CloudLightning", _SEVERE),
}

UNKNOWN_CODE = _entry("Unknown", "Cloud", _MILD)

SNOW_CODES: frozenset[int] = frozenset({71, 73, 75, 77, 85, 86})
STORM_CODES: frozenset[int] = frozenset({95, 96, 99})


def describe(code: int | None) -> WeatherCodeInfo:
    """Look up a weather code, falling back to the 'Unknown' entry."""
    if code is None:
        return UNKNOWN_CODE
    return WMO_CODES.get(code, UNKNOWN_CODE)


def is_snow(code: int) -> bool:
    """Check if a code reports snowfall."""
    return code in SNOW_CODES


def is_storm(code: int) -> bool:
    """Check if a code reports a thunderstorm."""
    return code in STORM_CODES
