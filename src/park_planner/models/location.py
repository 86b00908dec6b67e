"""Park locations as latitude/longitude pairs."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field

# "lat,lon" with optional signs and spaces around the comma
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)

# Four decimal places is about 11 m, finer than any weather grid
REQUEST_PRECISION = 4


class Coordinates(BaseModel):
    """A point on the globe in decimal degrees.

    Canadian parks sit at positive latitudes and negative longitudes,
    but any valid point is accepted.
    """

    latitude: float = Field(..., ge=-90, le=90, description="Decimal degrees, north positive")
    longitude: float = Field(..., ge=-180, le=180, description="Decimal degrees, east positive")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse 'latitude,longitude', e.g. '51.4968,-115.9281' for Banff."""
        match = COORDINATE_PATTERN.match(value.strip())
        if match is None:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected 'latitude,longitude' such as '45.5843,-78.3585'"
            )
        return cls(latitude=float(match["lat"]), longitude=float(match["lon"]))

    def rounded(self, places: int = REQUEST_PRECISION) -> Self:
        """Same point with both values rounded, as sent upstream."""
        return self.model_copy(
            update={
                "latitude": round(self.latitude, places),
                "longitude": round(self.longitude, places),
            }
        )

    def to_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"
