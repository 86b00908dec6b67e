"""Park and campground models.

The park dataset itself is loaded elsewhere and treated as read-only input;
these models only describe its shape so packing rules can be evaluated
against it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from park_planner.models.location import Coordinates


class Amenity(str, Enum):
    """Facilities a campground may offer."""

    FIRE_PIT = "fire_pit"
    POTABLE_WATER = "potable_water"
    FLUSH_TOILETS = "flush_toilets"
    VAULT_TOILETS = "vault_toilets"
    SHOWERS = "showers"
    SWIMMING = "swimming"
    TRAILS = "trails"
    BOAT_LAUNCH = "boat_launch"
    BEAR_LOCKER = "bear_locker"
    ELECTRICITY = "electricity"
    WHEELCHAIR_ACCESSIBLE = "wheelchair_accessible"
    PLAYGROUND = "playground"
    LAUNDRY = "laundry"
    DUMP_STATION = "dump_station"


class Activity(str, Enum):
    """Activities available somewhere in a park."""

    HIKING = "hiking"
    CANOEING = "canoeing"
    KAYAKING = "kayaking"
    FISHING = "fishing"
    SWIMMING = "swimming"
    WILDLIFE_VIEWING = "wildlife_viewing"
    CYCLING = "cycling"
    ROCK_CLIMBING = "rock_climbing"
    CROSS_COUNTRY_SKIING = "cross_country_skiing"
    SNOWSHOEING = "snowshoeing"
    SURFING = "surfing"
    SCUBA_DIVING = "scuba_diving"
    STARGAZING = "stargazing"
    PHOTOGRAPHY = "photography"


class Province(str, Enum):
    """Canadian provinces and territories."""

    BRITISH_COLUMBIA = "British Columbia"
    ALBERTA = "Alberta"
    SASKATCHEWAN = "Saskatchewan"
    MANITOBA = "Manitoba"
    ONTARIO = "Ontario"
    QUEBEC = "Quebec"
    NEW_BRUNSWICK = "New Brunswick"
    NOVA_SCOTIA = "Nova Scotia"
    PRINCE_EDWARD_ISLAND = "Prince Edward Island"
    NEWFOUNDLAND_AND_LABRADOR = "Newfoundland and Labrador"
    YUKON = "Yukon"
    NORTHWEST_TERRITORIES = "Northwest Territories"
    NUNAVUT = "Nunavut"


class ParkType(str, Enum):
    """Which level of government runs the park."""

    NATIONAL = "national"
    PROVINCIAL = "provincial"
    TERRITORIAL = "territorial"


class Season(BaseModel):
    """Operating season, as free-form open/close labels (e.g. 'May 15')."""

    open: str
    close: str


class Campground(BaseModel):
    """A campground within a park.

    Terrain is kept as a plain string: the dataset uses values such as
    'coastal', 'alpine', 'lakeside' and 'forest', and only some of them
    drive packing rules.
    """

    name: str
    sites: int = Field(default=0, ge=0)
    amenities: set[Amenity] = Field(default_factory=set)
    terrain: str = "forest"
    bear_country: bool = False

    def has(self, amenity: Amenity) -> bool:
        """Check whether the campground offers an amenity."""
        return amenity in self.amenities


class Park(BaseModel):
    """A park with its campgrounds and activities."""

    id: str
    name: str
    province: Province
    type: ParkType
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    description: str = ""
    season: Season | None = None
    image_url: str | None = None
    booking_url: str | None = None
    campgrounds: list[Campground] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)

    @property
    def coordinates(self) -> Coordinates:
        """Park location as coordinates for weather lookups."""
        return Coordinates(latitude=self.lat, longitude=self.lng)

    def campground(self, index: int | None = None) -> Campground | None:
        """Get a campground by index, or None if there is no such campground."""
        index = 0 if index is None else index
        if 0 <= index < len(self.campgrounds):
            return self.campgrounds[index]
        return None
