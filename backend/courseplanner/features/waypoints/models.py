"""
Waypoint types.

Pure dataclasses. Waypoint lists are treated as values: every operation
in the locator returns a new list.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from courseplanner.features.track.models import SmoothedPoint


@dataclass(frozen=True)
class Waypoint:
    """
    A named point of interest snapped onto the route.

    distance_m, elevation_m, lat and lng always come from the route
    point the waypoint is snapped to.
    """
    id: str
    name: str
    distance_m: float
    lat: float
    lng: float
    elevation_m: Optional[float] = None
    order: int = 0
    tags: FrozenSet[str] = frozenset()
    icon: str = "map-pin"
    description: Optional[str] = None
    course_id: Optional[str] = None


@dataclass(frozen=True)
class TrackMarker:
    """A named marker from the uploaded track file (not yet on the route)."""
    lat: float
    lng: float
    name: str
    tags: FrozenSet[str] = frozenset()
    description: Optional[str] = None


@dataclass(frozen=True)
class SnapResult:
    """Route point a coordinate or distance was snapped to."""
    index: int
    point: SmoothedPoint
    snap_distance_m: float = 0.0


@dataclass(frozen=True)
class WaypointSegment:
    """Stretch of route between two consecutive waypoints."""
    from_waypoint_id: str
    to_waypoint_id: str
    distance_m: float
    elevation_gain_m: Optional[float] = None
    elevation_loss_m: Optional[float] = None
