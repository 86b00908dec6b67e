"""Recommendation systems: weather alerts and packing checklists."""

from park_planner.recommendations.alerts import generate_alerts
from park_planner.recommendations.packing import (
    PACKING_RULES,
    PackingContext,
    PackingListBuilder,
    PackingRule,
    generate_packing_list,
    merge_checked,
    packing_progress,
)

__all__ = [
    "generate_alerts",
    "PACKING_RULES",
    "PackingContext",
    "PackingListBuilder",
    "PackingRule",
    "generate_packing_list",
    "merge_checked",
    "packing_progress",
]
