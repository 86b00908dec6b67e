"""FastAPI dependencies.

## Usage

```python
from fastapi import Depends
from park_planner.api.dependencies import get_weather_service

@router.post("/weather")
async def weather(service: WeatherService = Depends(get_weather_service)):
    ...
```

Tests swap the service out with `app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from park_planner.weather.service import WeatherService


async def get_weather_service(request: Request) -> WeatherService:
    """Get the weather service created by the app lifespan."""
    service: WeatherService | None = getattr(request.app.state, "weather_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Weather service is not ready",
        )
    return service
