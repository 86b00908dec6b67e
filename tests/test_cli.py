"""Tests for the command-line interface."""

import json

import pytest

from conftest import StubWeatherService
from park_planner import cli
from park_planner.providers.base import HistoricalDataUnavailableError
from park_planner.weather.service import WeatherService


@pytest.fixture
def use_stub(monkeypatch):
    """Make the CLI build the given stub instead of a real service."""

    def install(stub: StubWeatherService) -> StubWeatherService:
        wrapper = _AsyncStub(stub)
        monkeypatch.setattr(WeatherService, "from_settings", classmethod(lambda cls: wrapper))
        return stub

    return install


class _AsyncStub:
    """Async context manager around a StubWeatherService."""

    def __init__(self, stub: StubWeatherService):
        self.stub = stub

    async def __aenter__(self) -> StubWeatherService:
        return self.stub

    async def __aexit__(self, *exc) -> None:
        return None


class TestCli:
    """Tests for CLI commands."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a command shows usage."""
        assert cli.main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_weather(self, use_stub, stub_service, capsys):
        """Test the weather command prints days as JSON."""
        use_stub(stub_service)
        code = cli.main(["weather", "51.4968,-115.9281",
                         "--start", "2026-10-19", "--end", "2026-10-21"])
        assert code == 0
        days = json.loads(capsys.readouterr().out)
        assert len(days) == 3
        assert stub_service.calls[0][1].days == 3

    def test_start_without_end(self, use_stub, stub_service, capsys):
        """Test half a date range is a usage error."""
        use_stub(stub_service)
        assert cli.main(["weather", "51.4968,-115.9281", "--start", "2026-10-19"]) == 2
        assert "--start and --end" in capsys.readouterr().err

    def test_bad_location(self, use_stub, stub_service, capsys):
        """Test an unparseable location is a usage error."""
        use_stub(stub_service)
        assert cli.main(["weather", "Banff"]) == 2
        assert "Invalid coordinate format" in capsys.readouterr().err

    def test_plan(self, use_stub, stub_service, sample_park, tmp_path, capsys):
        """Test the plan command reads a park file and prints the plan."""
        use_stub(stub_service)
        park_file = tmp_path / "banff.json"
        park_file.write_text(sample_park.model_dump_json(), encoding="utf-8")

        assert cli.main(["plan", str(park_file), "--campground", "1"]) == 0
        plan = json.loads(capsys.readouterr().out)
        assert plan["campground"] == "Egypt Lake"
        assert plan["packing_list"]

    def test_weather_unavailable(self, use_stub, capsys):
        """Test upstream failures exit with status 1."""
        use_stub(StubWeatherService(error=HistoricalDataUnavailableError("open-meteo-archive")))
        assert cli.main(["weather", "51.4968,-115.9281"]) == 1
        assert "Unable to load historical weather data" in capsys.readouterr().err

    def test_plan_campground_out_of_range(self, use_stub, stub_service, sample_park,
                                          tmp_path, capsys):
        """Test a campground index past the park's list is a usage error."""
        use_stub(stub_service)
        park_file = tmp_path / "banff.json"
        park_file.write_text(sample_park.model_dump_json(), encoding="utf-8")

        assert cli.main(["plan", str(park_file), "--campground", "2"]) == 2
        assert "--campground 2 out of range for 2 campgrounds" in capsys.readouterr().err
        assert stub_service.calls == []

    def test_plan_without_campgrounds_ignores_index(self, use_stub, stub_service,
                                                    park_without_campgrounds, tmp_path):
        """Test a park with no campgrounds accepts the default index."""
        use_stub(stub_service)
        park_file = tmp_path / "day-use.json"
        park_file.write_text(park_without_campgrounds.model_dump_json(), encoding="utf-8")

        assert cli.main(["plan", str(park_file)]) == 0
