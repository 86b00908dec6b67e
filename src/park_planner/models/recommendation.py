"""Recommendation models: weather alerts, packing items and summaries.

Everything here is plain, serializable data handed to the UI layer.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from park_planner.models.weather import DataSource, FireDangerLevel


class AlertType(str, Enum):
    """Hazard categories; at most one alert per type is produced."""

    COLD = "cold"
    STORM = "storm"
    SNOW = "snow"
    RAIN = "rain"
    HEAT = "heat"
    FIRE = "fire"


class AlertSeverity(str, Enum):
    """Severity level for weather alerts."""

    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class WeatherAlert(BaseModel):
    """A human-readable advisory for one hazard category."""

    type: AlertType = Field(..., description="Hazard category")
    severity: AlertSeverity = Field(..., description="How serious the hazard is")
    message: str = Field(..., description="Advice shown to the camper")


class PackingCategory(str, Enum):
    """Packing list sections, in display order."""

    SHELTER_SLEEP = "shelter_sleep"
    CLOTHING = "clothing"
    COOKING_FOOD = "cooking_food"
    SAFETY_NAVIGATION = "safety_navigation"
    EXTRAS = "extras"

    @property
    def label(self) -> str:
        """Section heading for display."""
        return CATEGORY_LABELS[self]

    @property
    def order(self) -> int:
        """Position of this section in the list."""
        return list(PackingCategory).index(self)


CATEGORY_LABELS: dict[PackingCategory, str] = {
    PackingCategory.SHELTER_SLEEP: "Shelter & Sleep",
    PackingCategory.CLOTHING: "Clothing",
    PackingCategory.COOKING_FOOD: "Cooking & Food",
    PackingCategory.SAFETY_NAVIGATION: "Safety & Navigation",
    PackingCategory.EXTRAS: "Extras",
}


class PackingItem(BaseModel):
    """A single checklist entry.

    `id` is derived from category and name, so the same gear added by two
    rules collapses into one entry. `checked` belongs to the caller and is
    never set by list generation.
    """

    id: str = Field(..., description="'<category>:<slug>' identifier")
    name: str = Field(..., description="Item name as shown to the camper")
    category: PackingCategory
    reason: str | None = Field(
        default=None, description="Why this item was added (None for essentials)"
    )
    checked: bool = False


class CategoryProgress(BaseModel):
    """Packed/total counts for one section of the list."""

    category: PackingCategory
    label: str
    checked: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class PackingProgress(BaseModel):
    """How much of the checklist has been packed."""

    checked: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    percent: int = Field(..., ge=0, le=100)
    categories: list[CategoryProgress] = Field(default_factory=list)


class FireDangerSummary(BaseModel):
    """Peak fire danger across a trip, with a short campfire note."""

    level: FireDangerLevel
    label: str
    message: str


class WeatherSourceSummary(BaseModel):
    """Where a trip's weather came from, phrased for display."""

    data_source: DataSource
    message: str
    years: list[int] = Field(
        default_factory=list, description="Years averaged, for historical data"
    )
