"""Command-line interface for the park trip planner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from park_planner import __version__
from park_planner.config import get_settings
from park_planner.models.location import Coordinates
from park_planner.models.park import Park
from park_planner.models.weather import WeatherDateRange, WeatherDay
from park_planner.providers.base import ProviderError
from park_planner.trips import plan_trip
from park_planner.weather.service import WeatherService

_WEATHER_DAYS = TypeAdapter(list[WeatherDay])


def _date_range(args: argparse.Namespace) -> WeatherDateRange | None:
    if args.start is None and args.end is None:
        return None
    if args.start is None or args.end is None:
        raise ValueError("--start and --end must be given together")
    return WeatherDateRange(start_date=args.start, end_date=args.end)


async def _run_weather(args: argparse.Namespace) -> str:
    coordinates = Coordinates.from_string(args.location)
    async with WeatherService.from_settings() as service:
        days = await service.fetch_weather(coordinates, _date_range(args))
    return _WEATHER_DAYS.dump_json(days, indent=2).decode()


async def _run_plan(args: argparse.Namespace) -> str:
    park = Park.model_validate_json(Path(args.park).read_text(encoding="utf-8"))
    if park.campgrounds and not 0 <= args.campground < len(park.campgrounds):
        raise ValueError(
            f"--campground {args.campground} out of range "
            f"for {len(park.campgrounds)} campgrounds"
        )
    async with WeatherService.from_settings() as service:
        plan = await plan_trip(service, park, _date_range(args), args.campground)
    return plan.model_dump_json(indent=2)


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from park_planner.api import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Park Planner - Weather and packing lists for Canadian park trips"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Weather command
    weather_parser = subparsers.add_parser(
        "weather", help="Get trip weather for a location"
    )
    weather_parser.add_argument(
        "location",
        help="Location as lat,lon coordinates",
    )

    # Plan command
    plan_parser = subparsers.add_parser(
        "plan", help="Weather, alerts and packing list for a park"
    )
    plan_parser.add_argument(
        "park",
        help="Path to a park JSON file",
    )
    plan_parser.add_argument(
        "--campground",
        type=int,
        default=0,
        help="Index of the selected campground",
    )

    for sub in (weather_parser, plan_parser):
        sub.add_argument("--start", type=date.fromisoformat, help="First trip day (YYYY-MM-DD)")
        sub.add_argument("--end", type=date.fromisoformat, help="Last trip day (YYYY-MM-DD)")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(level=get_settings().log_level)

    if args.command == "serve":
        _serve(args)
        return 0

    runner = _run_weather if args.command == "weather" else _run_plan
    try:
        output = asyncio.run(runner(args))
    except (ValueError, ValidationError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ProviderError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
