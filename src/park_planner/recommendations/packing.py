"""Packing checklist generation.

This module builds a camping checklist from a park, the selected
campground and the trip weather. It works like a small rule engine: an
ordered list of rules each add (or remove) items on a shared builder.

## How the Builder Works

Items are keyed by category plus a slug of their name, so two rules that
both want "Binoculars" produce a single entry. When the same item arrives
with a new reason, the reasons are joined with " + "; a reason that is
already part of the text is not repeated.

## Rule Order

1. Base essentials (no reason attached)
2. Weather: cold, extreme cold, rain, snow, heat, storms
3. Campground amenities and bear country
4. Park activities
5. Fire danger override (needs step 3 to have added fire-pit items)
6. Campground terrain
7. Trip length

The order is part of the behaviour: step 5 removes what step 3 added.

Example:
    ```python
    items = generate_packing_list(park, weather_days, campground_index=1)
    for item in items:
        print(f"[{item.category.label}] {item.name} ({item.reason or 'essential'})")
    ```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from park_planner.models.park import Activity, Amenity, Campground, Park
from park_planner.models.recommendation import (
    CategoryProgress,
    PackingCategory,
    PackingItem,
    PackingProgress,
)
from park_planner.models.weather import FireDangerLevel, WeatherDay
from park_planner.weather.codes import is_snow, is_storm
from park_planner.weather.fire import peak_danger_level, round_half_up

SHELTER = PackingCategory.SHELTER_SLEEP
CLOTHING = PackingCategory.CLOTHING
COOKING = PackingCategory.COOKING_FOOD
SAFETY = PackingCategory.SAFETY_NAVIGATION
EXTRAS = PackingCategory.EXTRAS

COLD_C = 5
EXTREME_COLD_C = -5
HOT_C = 28
RAIN_PROBABILITY_PERCENT = 50
LONG_TRIP_DAYS = 5

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase a name and collapse everything but letters and digits to '-'."""
    return _SLUG_PATTERN.sub("-", name.lower()).strip("-")


def item_id(name: str, category: PackingCategory) -> str:
    """Stable identifier for an item: '<category>:<slug>'."""
    return f"{category.value}:{slugify(name)}"


class PackingListBuilder:
    """Accumulates packing items for one generation pass.

    Create a new builder per list; instances are not meant to be shared
    between requests.
    """

    def __init__(self) -> None:
        self._items: dict[str, PackingItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: tuple[str, PackingCategory]) -> bool:
        name, category = key
        return item_id(name, category) in self._items

    def add(self, name: str, category: PackingCategory, reason: str | None = None) -> None:
        """Add an item, or merge the reason into an existing one."""
        key = item_id(name, category)
        existing = self._items.get(key)

        if existing is None:
            self._items[key] = PackingItem(id=key, name=name, category=category, reason=reason)
            return

        if not reason:
            return
        if not existing.reason:
            existing.reason = reason
        elif reason not in existing.reason:
            existing.reason = f"{existing.reason} + {reason}"

    def remove(self, name: str, category: PackingCategory) -> None:
        """Drop an item if present."""
        self._items.pop(item_id(name, category), None)

    def to_list(self) -> list[PackingItem]:
        """Items in display order.

        Sorted by category order, then essentials (no reason) before
        reasoned items, then alphabetically by name.
        """
        return sorted(
            (item.model_copy() for item in self._items.values()),
            key=lambda item: (item.category.order, bool(item.reason), item.name.casefold()),
        )


@dataclass(frozen=True)
class WeatherStats:
    """Trip-wide weather figures the packing rules look at."""

    coldest_min: int
    hottest_max: int
    rainy_days: int
    snow_days: int
    storm_days: int
    total_days: int

    @classmethod
    def from_forecast(cls, forecast: list[WeatherDay]) -> WeatherStats:
        """Summarize a trip; no weather means mild, dry defaults."""
        if not forecast:
            return cls(
                coldest_min=15,
                hottest_max=20,
                rainy_days=0,
                snow_days=0,
                storm_days=0,
                total_days=0,
            )
        return cls(
            coldest_min=min(d.temp_min for d in forecast),
            hottest_max=max(d.temp_max for d in forecast),
            rainy_days=sum(1 for d in forecast if d.precip_probability >= RAIN_PROBABILITY_PERCENT),
            snow_days=sum(1 for d in forecast if is_snow(d.weather_code)),
            storm_days=sum(1 for d in forecast if is_storm(d.weather_code)),
            total_days=len(forecast),
        )


@dataclass(frozen=True)
class PackingContext:
    """Everything a packing rule may read."""

    park: Park
    forecast: list[WeatherDay]
    campground: Campground | None
    stats: WeatherStats
    peak_fire_danger: FireDangerLevel

    @classmethod
    def build(
        cls,
        park: Park,
        forecast: list[WeatherDay],
        campground_index: int | None = None,
    ) -> PackingContext:
        return cls(
            park=park,
            forecast=forecast,
            campground=park.campground(campground_index),
            stats=WeatherStats.from_forecast(forecast),
            peak_fire_danger=peak_danger_level(forecast),
        )


def add_base_essentials(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Items every camping trip needs."""
    for name in ("Tent", "Sleeping bag", "Sleeping pad", "Pillow"):
        b.add(name, SHELTER)

    for name in (
        "Camp stove",
        "Fuel canister",
        "Pot",
        "Utensils",
        "Plates & bowls",
        "Cooler",
        "Dish soap",
        "Trash bags",
    ):
        b.add(name, COOKING)

    for name in ("First aid kit", "Headlamp + batteries", "Knife / multi-tool", "Matches / lighter"):
        b.add(name, SAFETY)

    for name in ("Base layers", "Hiking socks (x2)", "Sturdy shoes"):
        b.add(name, CLOTHING)

    for name in ("Toilet paper", "Towel", "Insect repellent"):
        b.add(name, EXTRAS)


def add_weather_items(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Cold, rain, snow, heat and storm gear."""
    stats = ctx.stats

    if stats.coldest_min <= COLD_C:
        reason = f"Lows down to {stats.coldest_min}°C"
        b.add("Warm hat", CLOTHING, reason)
        b.add("Gloves", CLOTHING, reason)
        b.add("Insulated jacket", CLOTHING, reason)
        b.add("Thermal base layers", CLOTHING, reason)

    if stats.coldest_min <= EXTREME_COLD_C:
        reason = f"Extreme cold, lows to {stats.coldest_min}°C"
        b.add("Four-season sleeping bag", SHELTER, reason)
        b.add("Insulated sleeping pad", SHELTER, reason)
        b.add("Balaclava", CLOTHING, reason)
        b.add("Hand warmers", CLOTHING, reason)

    if stats.rainy_days >= 1:
        reason = f"Rain likely on {stats.rainy_days} of {stats.total_days} days"
        b.add("Rain jacket", CLOTHING, reason)
        b.add("Rain pants", CLOTHING, reason)
        b.add("Pack rain cover", CLOTHING, reason)
        b.add("Tarp", SHELTER, reason)

    if stats.snow_days >= 1:
        plural = "s" if stats.snow_days > 1 else ""
        reason = f"Snow expected on {stats.snow_days} day{plural}"
        b.add("Waterproof boots", CLOTHING, reason)
        b.add("Gaiters", CLOTHING, reason)

    if stats.hottest_max >= HOT_C:
        reason = f"Highs up to {stats.hottest_max}°C"
        b.add("Sun hat", CLOTHING, reason)
        b.add("Sunscreen", CLOTHING, reason)
        b.add("Extra water bottles", COOKING, reason)
        b.add("Electrolyte packets", COOKING, reason)

    if stats.storm_days >= 1:
        reason = "Thunderstorms in forecast"
        b.add("Extra tent stakes", SHELTER, reason)
        b.add("Emergency whistle", SAFETY, reason)


def add_amenity_items(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Fill gaps in what the selected campground provides."""
    campground = ctx.campground
    if campground is None:
        return

    if not campground.has(Amenity.POTABLE_WATER):
        reason = "No potable water on site"
        b.add("Water filter", COOKING, reason)
        b.add("Purification tablets", COOKING, reason)
        b.add("Extra water containers", COOKING, reason)

    if not campground.has(Amenity.FIRE_PIT):
        b.add("Extra stove fuel", COOKING, "No fire pits, stove is your only heat source")

    if not campground.has(Amenity.FLUSH_TOILETS) and not campground.has(Amenity.VAULT_TOILETS):
        reason = "No toilets on site"
        b.add("Trowel", EXTRAS, reason)
        b.add("Waste bags", EXTRAS, reason)

    if not campground.has(Amenity.ELECTRICITY):
        b.add("Portable battery pack", EXTRAS, "No electricity on site")

    if campground.has(Amenity.FIRE_PIT):
        b.add("Fire starter", COOKING, "Fire pits available")
        b.add("Firewood gloves", COOKING, "Fire pits available")

    if campground.bear_country:
        b.add("Bear spray", SAFETY, "Bear country")
        if campground.has(Amenity.BEAR_LOCKER):
            b.add("Bear canister or hang kit", SAFETY, "Bear country: lockers available on site")
        else:
            b.add(
                "Bear canister or hang kit",
                SAFETY,
                "Bear country: no lockers, bring your own storage",
            )


def _combined_label(
    activities: set[Activity],
    first: Activity,
    second: Activity,
    labels: tuple[str, str, str],
) -> str:
    """Pick 'both', first-only or second-only wording for paired activities."""
    both, first_only, second_only = labels
    if first in activities and second in activities:
        return both
    return first_only if first in activities else second_only


def add_activity_items(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Gear for activities offered anywhere in the park."""
    acts = set(ctx.park.activities)

    if Activity.HIKING in acts:
        reason = "Hiking trails available"
        b.add("Hiking boots", CLOTHING, reason)
        b.add("Trekking poles", EXTRAS, reason)
        b.add("Trail map", SAFETY, reason)

    if Activity.CANOEING in acts or Activity.KAYAKING in acts:
        label = _combined_label(
            acts,
            Activity.CANOEING,
            Activity.KAYAKING,
            ("Canoeing & kayaking", "Canoeing", "Kayaking"),
        )
        b.add("Life jacket (PFD)", SAFETY, label)
        b.add("Dry bags", EXTRAS, label)
        b.add("Waterproof phone pouch", EXTRAS, label)

    if Activity.FISHING in acts:
        b.add("Fishing rod & tackle", EXTRAS, "Fishing available")
        b.add(
            "Fishing licence reminder",
            EXTRAS,
            "Fishing available, check provincial regulations",
        )

    if Activity.SWIMMING in acts:
        reason = "Swimming available"
        b.add("Swimsuit", CLOTHING, reason)
        b.add("Water shoes", CLOTHING, reason)
        b.add("Quick-dry towel", CLOTHING, reason)

    if Activity.ROCK_CLIMBING in acts:
        reason = "Rock climbing available"
        b.add("Climbing harness", EXTRAS, reason)
        b.add("Climbing helmet", EXTRAS, reason)
        b.add("Chalk bag", EXTRAS, reason)

    if Activity.CROSS_COUNTRY_SKIING in acts or Activity.SNOWSHOEING in acts:
        label = _combined_label(
            acts,
            Activity.CROSS_COUNTRY_SKIING,
            Activity.SNOWSHOEING,
            ("Skiing & snowshoeing", "Cross-country skiing", "Snowshoeing"),
        )
        b.add("Skis or snowshoes", EXTRAS, label)
        b.add("Winter gaiters", EXTRAS, label)

    if Activity.STARGAZING in acts:
        b.add("Red-light headlamp", EXTRAS, "Stargazing")
        b.add("Binoculars", EXTRAS, "Stargazing")

    if Activity.WILDLIFE_VIEWING in acts:
        b.add("Binoculars", EXTRAS, "Wildlife viewing")
        b.add("Camera", EXTRAS, "Wildlife viewing")

    if Activity.SURFING in acts:
        b.add("Wetsuit", CLOTHING, "Surfing available")
        b.add("Surf wax", EXTRAS, "Surfing available")


def apply_fire_danger(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Swap open-flame gear for stove cooking when fire danger is up."""
    peak = ctx.peak_fire_danger

    if peak.is_elevated():
        b.remove("Fire starter", COOKING)
        b.remove("Firewood gloves", COOKING)
        b.add(
            "Camp stove + fuel canister",
            COOKING,
            "Fire restrictions likely, bring a stove for cooking",
        )

    if peak == FireDangerLevel.EXTREME:
        b.add(
            "Battery lantern",
            EXTRAS,
            "Open flame restrictions, skip candles and lanterns with real flames",
        )


def add_terrain_items(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Extras for coastal, alpine and lakeside campgrounds."""
    if ctx.campground is None:
        return

    terrain = ctx.campground.terrain
    if terrain == "coastal":
        b.add("Windproof layer", CLOTHING, "Coastal terrain, expect wind")
        b.add("Sand stakes", SHELTER, "Coastal terrain, regular stakes may not hold")
    elif terrain == "alpine":
        b.add("Extra sun protection", CLOTHING, "Alpine terrain, stronger UV")
        b.add("Warm layers", CLOTHING, "Alpine terrain, temperatures drop fast")
    elif terrain == "lakeside":
        b.add("Extra insect repellent", EXTRAS, "Lakeside terrain, more bugs near water")


def add_trip_duration_items(b: PackingListBuilder, ctx: PackingContext) -> None:
    """Comfort and upkeep items for trips of five days or more."""
    days = ctx.stats.total_days
    if days < LONG_TRIP_DAYS:
        return

    reason = f"{days}-day trip"
    b.add("Biodegradable soap", EXTRAS, reason)
    b.add("Camp towel", EXTRAS, reason)
    b.add("Repair kit", EXTRAS, reason)
    b.add("Extra fuel", COOKING, reason)
    b.add("Book or cards", EXTRAS, reason)


@dataclass(frozen=True)
class PackingRule:
    """A named step of the packing pipeline."""

    name: str
    apply: Callable[[PackingListBuilder, PackingContext], None]


PACKING_RULES: tuple[PackingRule, ...] = (
    PackingRule("base_essentials", add_base_essentials),
    PackingRule("weather", add_weather_items),
    PackingRule("amenities", add_amenity_items),
    PackingRule("activities", add_activity_items),
    PackingRule("fire_danger", apply_fire_danger),
    PackingRule("terrain", add_terrain_items),
    PackingRule("trip_duration", add_trip_duration_items),
)


def generate_packing_list(
    park: Park,
    forecast: list[WeatherDay],
    campground_index: int | None = None,
    rules: tuple[PackingRule, ...] = PACKING_RULES,
) -> list[PackingItem]:
    """Build the checklist for a trip.

    Args:
        park: Park being visited
        forecast: Trip weather (may be empty or contain gaps)
        campground_index: Selected campground; defaults to the first one
        rules: Pipeline to run, in order

    Returns:
        Items in display order, all unchecked
    """
    builder = PackingListBuilder()
    ctx = PackingContext.build(park, forecast, campground_index)
    for rule in rules:
        rule.apply(builder, ctx)
    return builder.to_list()


def merge_checked(
    previous: list[PackingItem],
    regenerated: list[PackingItem],
) -> list[PackingItem]:
    """Carry checked flags from an older list onto a regenerated one, by id."""
    checked_ids = {item.id for item in previous if item.checked}
    return [
        item.model_copy(update={"checked": item.id in checked_ids})
        for item in regenerated
    ]


def packing_progress(items: list[PackingItem]) -> PackingProgress:
    """Count packed items overall and per category."""
    categories: list[CategoryProgress] = []
    for category in PackingCategory:
        in_category = [item for item in items if item.category == category]
        if not in_category:
            continue
        categories.append(
            CategoryProgress(
                category=category,
                label=category.label,
                checked=sum(1 for item in in_category if item.checked),
                total=len(in_category),
            )
        )

    checked = sum(1 for item in items if item.checked)
    total = len(items)
    percent = round_half_up(checked / total * 100) if total else 0
    return PackingProgress(checked=checked, total=total, percent=percent, categories=categories)
