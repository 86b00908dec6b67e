"""Weather alerts for a trip.

Alerts look at the whole trip at once: each hazard produces at most one
alert, however many days trigger it.

| Hazard | Trigger | Severity |
|--------|---------|----------|
| cold | any low <= -5°C | danger |
| cold | otherwise any low <= 2°C | warning |
| storm | any thunderstorm code | danger |
| snow | any snow code | warning |
| rain | any day with precipitation probability >= 50% | info |
| heat | any high >= 32°C | warning |
| fire | peak danger extreme | danger |
| fire | peak danger high or very high | warning |

If any day is a historical average, every message is phrased as what is
historically typical rather than what is expected.
"""

from __future__ import annotations

from park_planner.models.recommendation import AlertSeverity, AlertType, WeatherAlert
from park_planner.models.weather import FireDangerLevel, WeatherDay
from park_planner.weather.codes import is_snow, is_storm
from park_planner.weather.fire import peak_danger_level

EXTREME_COLD_C = -5
COLD_C = 2
HEAT_C = 32
RAIN_PROBABILITY_PERCENT = 50


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def generate_alerts(forecast: list[WeatherDay]) -> list[WeatherAlert]:
    """Generate alerts for a sequence of days.

    Args:
        forecast: Trip days, forecast or historical

    Returns:
        Alerts in hazard order (cold, storm, snow, rain, heat, fire)
    """
    alerts: list[WeatherAlert] = []
    historical = any(day.is_historical for day in forecast)
    day_count = len(forecast)

    cold_danger = [d for d in forecast if d.temp_min <= EXTREME_COLD_C]
    cold_warning = [d for d in forecast if EXTREME_COLD_C < d.temp_min <= COLD_C]
    rainy_days = [d for d in forecast if d.precip_probability >= RAIN_PROBABILITY_PERCENT]
    snow_days = [d for d in forecast if is_snow(d.weather_code)]
    storm_days = [d for d in forecast if is_storm(d.weather_code)]
    hot_days = [d for d in forecast if d.temp_max >= HEAT_C]

    if cold_danger:
        lowest = min(d.temp_min for d in cold_danger)
        alerts.append(
            WeatherAlert(
                type=AlertType.COLD,
                severity=AlertSeverity.DANGER,
                message=(
                    f"Historically extreme cold: overnight lows around {lowest}°C. "
                    if historical
                    else f"Extreme cold expected: overnight lows dropping to {lowest}°C. "
                )
                + "Pack a four-season sleeping bag and insulated layers.",
            )
        )
    elif cold_warning:
        lowest = min(d.temp_min for d in cold_warning)
        alerts.append(
            WeatherAlert(
                type=AlertType.COLD,
                severity=AlertSeverity.WARNING,
                message=(
                    f"Overnight lows historically around {lowest}°C. "
                    if historical
                    else f"Overnight lows near {lowest}°C. "
                )
                + "Pack warm layers and a three-season sleeping bag.",
            )
        )

    if storm_days:
        alerts.append(
            WeatherAlert(
                type=AlertType.STORM,
                severity=AlertSeverity.DANGER,
                message=(
                    "Thunderstorms are historically common during these dates. "
                    if historical
                    else "Thunderstorms in the forecast. "
                )
                + "Avoid exposed ridges and have a plan for shelter.",
            )
        )

    if snow_days:
        days = _plural(len(snow_days), "day")
        alerts.append(
            WeatherAlert(
                type=AlertType.SNOW,
                severity=AlertSeverity.WARNING,
                message=(
                    f"Snow historically common on {days}. "
                    if historical
                    else f"Snow expected on {days}. "
                )
                + "Roads may be affected, so check conditions before heading out.",
            )
        )

    if rainy_days:
        alerts.append(
            WeatherAlert(
                type=AlertType.RAIN,
                severity=AlertSeverity.INFO,
                message=(
                    f"Rain historically likely on {len(rainy_days)} of {day_count} days. "
                    if historical
                    else f"Rain likely on {len(rainy_days)} of {day_count} days. "
                )
                + "Bring waterproof layers and a tarp for your campsite.",
            )
        )

    if hot_days:
        highest = max(d.temp_max for d in hot_days)
        alerts.append(
            WeatherAlert(
                type=AlertType.HEAT,
                severity=AlertSeverity.WARNING,
                message=(
                    f"Historically high temperatures around {highest}°C. "
                    if historical
                    else f"High of {highest}°C expected. "
                )
                + "Stay hydrated, seek shade midday, and store food carefully.",
            )
        )

    fire_alert = _fire_alert(peak_danger_level(forecast), historical)
    if fire_alert:
        alerts.append(fire_alert)

    return alerts


def _fire_alert(peak: FireDangerLevel, historical: bool) -> WeatherAlert | None:
    if peak == FireDangerLevel.EXTREME:
        return WeatherAlert(
            type=AlertType.FIRE,
            severity=AlertSeverity.DANGER,
            message=(
                "Historically extreme fire danger during these dates. "
                if historical
                else "Extreme fire danger. "
            )
            + "Campfire bans are highly likely. Bring a camp stove for cooking "
            "and avoid all open flames.",
        )
    if peak in (FireDangerLevel.HIGH, FireDangerLevel.VERY_HIGH):
        return WeatherAlert(
            type=AlertType.FIRE,
            severity=AlertSeverity.WARNING,
            message=(
                "Historically elevated fire danger. Campfire restrictions may apply. "
                if historical
                else "Fire danger is elevated. Campfire restrictions may be in effect. "
            )
            + "Check with park staff before lighting fires and never leave a fire unattended.",
        )
    return None
