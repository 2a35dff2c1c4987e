"""
Waypoint module.

Usage:
    from courseplanner.features.waypoints import WaypointLocator, reorder
    from courseplanner.features.waypoints import STANDARD_WAYPOINT_TAGS

Components:
- WaypointLocator: Extract, snap, place and move waypoints on a route
- reorder / remove_waypoint / update_waypoint_details: List operations
- STANDARD_WAYPOINT_TAGS / primary_icon: Tag catalog
- build_segments: Distance and gain/loss between consecutive waypoints
"""

from .models import Waypoint, TrackMarker, SnapResult, WaypointSegment
from .locator import (
    WaypointLocator,
    SnapQuality,
    quality,
    find_waypoint,
    reorder,
    update_waypoint_details,
    remove_waypoint,
)
from .tags import (
    WaypointTag,
    STANDARD_WAYPOINT_TAGS,
    DEFAULT_ICON,
    START_ICON,
    FINISH_ICON,
    get_tag,
    is_valid_tag,
    validate_tags,
    primary_icon,
)
from .segments import build_segments

__all__ = [
    # Models
    "Waypoint",
    "TrackMarker",
    "SnapResult",
    "WaypointSegment",
    # Locator
    "WaypointLocator",
    "SnapQuality",
    "quality",
    "find_waypoint",
    "reorder",
    "update_waypoint_details",
    "remove_waypoint",
    # Tags
    "WaypointTag",
    "STANDARD_WAYPOINT_TAGS",
    "DEFAULT_ICON",
    "START_ICON",
    "FINISH_ICON",
    "get_tag",
    "is_valid_tag",
    "validate_tags",
    "primary_icon",
    # Segments
    "build_segments",
]
