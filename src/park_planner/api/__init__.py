"""FastAPI application and routes.

This module provides the REST API for the park trip planner.

## API Structure

- /health - Liveness check
- /api/trips/weather - Forecast or historical-average days for a location
- /api/trips/alerts - Alerts and fire danger for weather days
- /api/trips/packing - Packing checklist for a park, campground and weather
- /api/trips/plan - All of the above for a trip in one call

## Data

Parks are supplied by the caller in request bodies; the API keeps no
state between requests.
"""

from park_planner.api.app import create_app

__all__ = ["create_app"]
