"""Tests for historical daily averaging."""

from datetime import date

import pytest

from park_planner.models.weather import DailyObservation, DataSource, WeatherDateRange
from park_planner.weather.fire import danger_level, estimate_fire_weather_index
from park_planner.weather.history import (
    archive_window,
    average_day,
    average_historical_days,
    month_day,
    most_common_code,
    shift_to_year,
)


def observation(day: date, **overrides) -> DailyObservation:
    values = {
        "temp_max_c": 20.0,
        "temp_min_c": 8.0,
        "precipitation_mm": 0.0,
        "weather_code": 1,
        "humidity_min_percent": 45.0,
        "wind_max_kph": 15.0,
    }
    values.update(overrides)
    return DailyObservation(date=day, **values)


class TestDateHelpers:
    """Tests for calendar key and year shifting."""

    def test_month_day(self):
        """Test the key ignores the year."""
        assert month_day(date(2021, 7, 4)) == "07-04"
        assert month_day(date(2025, 7, 4)) == month_day(date(2021, 7, 4))

    def test_shift_to_year(self):
        """Test an ordinary date keeps month and day."""
        assert shift_to_year(date(2027, 7, 4), 2023) == date(2023, 7, 4)

    def test_leap_day_clamped(self):
        """Test Feb 29 becomes Feb 28 in a non-leap year."""
        assert shift_to_year(date(2028, 2, 29), 2025) == date(2025, 2, 28)
        assert shift_to_year(date(2028, 2, 29), 2024) == date(2024, 2, 29)

    def test_archive_window(self):
        """Test a window within one year."""
        dates = WeatherDateRange(start_date=date(2027, 7, 1), end_date=date(2027, 7, 4))
        assert archive_window(dates, 2022) == (date(2022, 7, 1), date(2022, 7, 4))

    def test_archive_window_across_new_year(self):
        """Test a window crossing New Year ends in the following year."""
        dates = WeatherDateRange(start_date=date(2026, 12, 30), end_date=date(2027, 1, 2))
        assert archive_window(dates, 2024) == (date(2024, 12, 30), date(2025, 1, 2))


class TestMostCommonCode:
    """Tests for the weather code mode."""

    def test_clear_winner(self):
        """Test the most frequent code wins."""
        assert most_common_code([61, 3, 3, 1]) == 3

    def test_tie_goes_to_first_seen(self):
        """Test equal counts resolve to the code seen first."""
        assert most_common_code([3, 1, 1, 3]) == 3
        assert most_common_code([1, 3, 3, 1]) == 1


class TestAverageDay:
    """Tests for collapsing one date's observations."""

    def test_temperatures_are_rounded_means(self):
        """Test highs and lows are half-up rounded means."""
        entries = [
            observation(date(2025, 7, 4), temp_max_c=20.0, temp_min_c=10.25),
            observation(date(2024, 7, 4), temp_max_c=21.0, temp_min_c=10.75),
        ]
        day = average_day(date(2027, 7, 4), entries)
        assert day.temp_max == 21  # 20.5 rounds up
        assert day.temp_min == 11  # 10.5 rounds up
        assert day.date == date(2027, 7, 4)
        assert day.data_source == DataSource.HISTORICAL

    def test_precip_probability_is_share_of_rainy_years(self):
        """Test probability is the percentage of years above 0.5 mm."""
        entries = [
            observation(date(2025, 7, 4), precipitation_mm=1.0),
            observation(date(2024, 7, 4), precipitation_mm=0.0),
            observation(date(2023, 7, 4), precipitation_mm=None),
            observation(date(2022, 7, 4), precipitation_mm=0.6),
            observation(date(2021, 7, 4), precipitation_mm=0.5),
        ]
        day = average_day(date(2027, 7, 4), entries)
        assert day.precip_probability == 40
        # Missing precipitation counts as a dry year
        assert day.precipitation_mm == pytest.approx((1.0 + 0.6 + 0.5) / 5)

    def test_weather_code_is_mode(self):
        """Test the representative code is the most common one."""
        entries = [
            observation(date(2025, 7, 4), weather_code=61),
            observation(date(2024, 7, 4), weather_code=2),
            observation(date(2023, 7, 4), weather_code=2),
        ]
        day = average_day(date(2027, 7, 4), entries)
        assert day.weather_code == 2
        assert day.weather_description == "Partly cloudy"

    def test_missing_humidity_and_wind(self):
        """Test absent humidity and wind stay absent in the average."""
        entries = [observation(date(2025, 7, 4), humidity_min_percent=None, wind_max_kph=None)]
        day = average_day(date(2027, 7, 4), entries)
        assert day.humidity_min_percent is None
        assert day.wind_max_kph is None
        assert day.fire_weather_index == estimate_fire_weather_index(20, None, None, 0.0)

    def test_fire_index_reproducible_from_stored_inputs(self):
        """Test the stored inputs re-derive the stored fire index exactly."""
        entries = [
            observation(date(2025, 8, 10), temp_max_c=29.3, humidity_min_percent=22.0,
                        wind_max_kph=31.0, precipitation_mm=0.0),
            observation(date(2024, 8, 10), temp_max_c=31.8, humidity_min_percent=18.5,
                        wind_max_kph=24.4, precipitation_mm=1.2),
            observation(date(2023, 8, 10), temp_max_c=27.1, humidity_min_percent=35.0,
                        wind_max_kph=None, precipitation_mm=None),
        ]
        day = average_day(date(2027, 8, 10), entries)

        recomputed = estimate_fire_weather_index(
            day.temp_max,
            day.humidity_min_percent,
            day.wind_max_kph,
            day.precipitation_mm,
        )
        assert recomputed == day.fire_weather_index
        assert day.fire_danger_level == danger_level(day.fire_weather_index)


class TestAverageHistoricalDays:
    """Tests for averaging a whole trip."""

    def test_one_day_per_requested_date(self):
        """Test each date is filled from every year that has it."""
        dates = WeatherDateRange(start_date=date(2027, 7, 1), end_date=date(2027, 7, 3))
        years = [
            [observation(date(year, 7, d), temp_max_c=float(20 + d)) for d in (1, 2, 3)]
            for year in (2025, 2024, 2023)
        ]
        days = average_historical_days(years, dates)
        assert [d.date for d in days] == [date(2027, 7, 1), date(2027, 7, 2), date(2027, 7, 3)]
        assert [d.temp_max for d in days] == [21, 22, 23]
        assert all(d.is_historical for d in days)

    def test_dates_without_data_are_skipped(self):
        """Test dates no year covers are left out."""
        dates = WeatherDateRange(start_date=date(2027, 7, 1), end_date=date(2027, 7, 3))
        years = [[observation(date(2025, 7, 1)), observation(date(2025, 7, 3))]]
        days = average_historical_days(years, dates)
        assert [d.date for d in days] == [date(2027, 7, 1), date(2027, 7, 3)]

    def test_leap_day_uses_only_leap_years(self):
        """Test Feb 29 averages only the years that had one."""
        dates = WeatherDateRange(start_date=date(2028, 2, 28), end_date=date(2028, 2, 29))
        years = [
            [observation(date(2027, 2, 28), temp_max_c=0.0)],
            [observation(date(2026, 2, 28), temp_max_c=2.0)],
            [observation(date(2024, 2, 28), temp_max_c=4.0),
             observation(date(2024, 2, 29), temp_max_c=7.0)],
        ]
        days = average_historical_days(years, dates)
        assert [d.date for d in days] == [date(2028, 2, 28), date(2028, 2, 29)]
        assert days[0].temp_max == 2
        assert days[1].temp_max == 7

    def test_leap_day_gap(self):
        """Test Feb 29 is dropped when no year had one."""
        dates = WeatherDateRange(start_date=date(2028, 2, 28), end_date=date(2028, 3, 1))
        years = [
            [observation(date(2027, 2, 28)), observation(date(2027, 3, 1))],
            [observation(date(2026, 2, 28)), observation(date(2026, 3, 1))],
        ]
        days = average_historical_days(years, dates)
        assert [d.date for d in days] == [date(2028, 2, 28), date(2028, 3, 1)]

    def test_no_years(self):
        """Test nothing to average gives no days."""
        dates = WeatherDateRange(start_date=date(2027, 7, 1), end_date=date(2027, 7, 3))
        assert average_historical_days([], dates) == []
