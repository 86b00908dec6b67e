"""Historical daily averages.

When a trip is too far out for a live forecast, each requested date is
filled with the average of the same calendar date over the last few
years. Years that failed to download simply contribute nothing; dates no
surviving year covers (Feb 29 outside leap years) are left out of the
result rather than invented.
"""

from __future__ import annotations

import calendar
from collections import Counter
from datetime import date
from statistics import mean

from park_planner.models.weather import (
    DailyObservation,
    DataSource,
    WeatherDateRange,
    WeatherDay,
)
from park_planner.weather.codes import describe
from park_planner.weather.fire import danger_level, estimate_fire_weather_index, round_half_up

RAINY_DAY_THRESHOLD_MM = 0.5


def month_day(day: date) -> str:
    """Calendar key shared by the same date in every year ('MM-DD')."""
    return day.strftime("%m-%d")


def shift_to_year(day: date, year: int) -> date:
    """Move a date to another year, clamping Feb 29 to Feb 28."""
    if day.month == 2 and day.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return day.replace(year=year)


def archive_window(date_range: WeatherDateRange, year: int) -> tuple[date, date]:
    """The same month/day span as `date_range`, starting in `year`.

    A range that crosses New Year keeps crossing it, so the end date lands
    in the following year.
    """
    year_span = date_range.end_date.year - date_range.start_date.year
    return (
        shift_to_year(date_range.start_date, year),
        shift_to_year(date_range.end_date, year + year_span),
    )


def most_common_code(codes: list[int]) -> int:
    """Most frequent weather code; ties go to the code seen first."""
    # Counter.most_common orders equal counts by first insertion
    return Counter(codes).most_common(1)[0][0]


def _mean_or_none(values: list[float | None]) -> float | None:
    present = [v for v in values if v is not None]
    return mean(present) if present else None


def group_by_month_day(
    years: list[list[DailyObservation]],
) -> dict[str, list[DailyObservation]]:
    """Index every observation by its month-day key, across all years."""
    by_month_day: dict[str, list[DailyObservation]] = {}
    for observations in years:
        for observation in observations:
            by_month_day.setdefault(month_day(observation.date), []).append(observation)
    return by_month_day


def average_day(day: date, entries: list[DailyObservation]) -> WeatherDay:
    """Collapse one calendar date's observations into a synthetic day.

    Args:
        day: The requested (future) date the average stands in for
        entries: Observations of the same month-day, one per year

    Returns:
        WeatherDay tagged as historical
    """
    temp_max = round_half_up(mean(e.temp_max_c for e in entries))
    temp_min = round_half_up(mean(e.temp_min_c for e in entries))

    precipitation = [e.precipitation_mm or 0.0 for e in entries]
    rainy_years = sum(1 for mm in precipitation if mm > RAINY_DAY_THRESHOLD_MM)
    precip_probability = round_half_up(rainy_years / len(entries) * 100)

    weather_code = most_common_code([e.weather_code for e in entries])

    avg_precipitation = mean(precipitation)
    avg_humidity = _mean_or_none([e.humidity_min_percent for e in entries])
    avg_wind = _mean_or_none([e.wind_max_kph for e in entries])

    fire_index = estimate_fire_weather_index(temp_max, avg_humidity, avg_wind, avg_precipitation)

    return WeatherDay(
        date=day,
        temp_max=temp_max,
        temp_min=temp_min,
        precip_probability=precip_probability,
        weather_code=weather_code,
        weather_description=describe(weather_code).description,
        data_source=DataSource.HISTORICAL,
        fire_weather_index=fire_index,
        fire_danger_level=danger_level(fire_index),
        precipitation_mm=avg_precipitation,
        humidity_min_percent=avg_humidity,
        wind_max_kph=avg_wind,
    )


def average_historical_days(
    years: list[list[DailyObservation]],
    date_range: WeatherDateRange,
) -> list[WeatherDay]:
    """Average several years of observations over a requested date range.

    Args:
        years: One list of observations per successfully fetched year
        date_range: The trip dates to fill

    Returns:
        Chronological days; dates with no matching observations are skipped
    """
    by_month_day = group_by_month_day(years)

    result: list[WeatherDay] = []
    for day in date_range.iter_dates():
        entries = by_month_day.get(month_day(day))
        if not entries:
            continue
        result.append(average_day(day, entries))

    return result
