"""
Standard waypoint tags.

Tags describe what a waypoint offers (aid, water, crew access...).
The first standard tag on a waypoint decides its map icon.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

DEFAULT_ICON = "map-pin"
START_ICON = "play"
FINISH_ICON = "flag"


@dataclass(frozen=True)
class WaypointTag:
    """Display data for a standard tag."""
    id: str
    label: str
    icon: str
    description: str
    color: str


# Ordered: earlier tags win when picking the primary icon
STANDARD_WAYPOINT_TAGS = {
    "full-aid": WaypointTag(
        "full-aid", "Full aid", "utensils",
        "Full aid station with food and supplies", "#10b981",
    ),
    "water": WaypointTag(
        "water", "Water", "droplets",
        "Water station or water source", "#3b82f6",
    ),
    "crew": WaypointTag(
        "crew", "Crew", "users",
        "Crew access point", "#8b5cf6",
    ),
    "drop-bag": WaypointTag(
        "drop-bag", "Drop bag", "backpack",
        "Drop bag pickup location", "#f59e0b",
    ),
    "pacer": WaypointTag(
        "pacer", "Pacer", "user-check",
        "Pacer pickup/dropoff point", "#ef4444",
    ),
    "sleep": WaypointTag(
        "sleep", "Sleep", "bed-single",
        "Rest/sleep station", "#6366f1",
    ),
    "timing-mat": WaypointTag(
        "timing-mat", "Timing mat", "timer",
        "Timing checkpoint", "#ec4899",
    ),
    "toilet": WaypointTag(
        "toilet", "Toilet", "toilet",
        "Restroom facilities", "#64748b",
    ),
    "water-crossing": WaypointTag(
        "water-crossing", "Water crossing", "sailboat",
        "Stream, river, or water crossing", "#06b6d4",
    ),
    "spectator-viewing": WaypointTag(
        "spectator-viewing", "Spectator viewing", "eye",
        "Spectator viewing area", "#8b5cf6",
    ),
}


def get_tag(tag_id: str) -> Optional[WaypointTag]:
    return STANDARD_WAYPOINT_TAGS.get(tag_id)


def is_valid_tag(tag_id: str) -> bool:
    return tag_id in STANDARD_WAYPOINT_TAGS


def validate_tags(tag_ids: Iterable[str]) -> bool:
    """True if every tag id is a standard tag."""
    return all(is_valid_tag(t) for t in tag_ids)


def primary_icon(tag_ids: Iterable[str]) -> str:
    """
    Icon of the highest-ranked standard tag.

    Unknown tags are ignored; no standard tag gives the default pin.
    """
    present = set(tag_ids)
    for tag_id, tag in STANDARD_WAYPOINT_TAGS.items():
        if tag_id in present:
            return tag.icon
    return DEFAULT_ICON
