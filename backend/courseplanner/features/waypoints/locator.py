"""
Waypoint Locator

Places waypoints on the route and keeps their ordering consistent
with distance. Waypoints never sit at a literal input coordinate: every
placement snaps to a route point and copies its distance, position and
elevation.
"""

import logging
import uuid
from bisect import bisect_left
from dataclasses import replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from courseplanner.features.track.models import NormalizedPoint, SmoothedPoint
from courseplanner.shared.errors import (
    CoursePlannerError,
    InsufficientDataError,
    WaypointNotFoundError,
    WaypointOutOfBoundsError,
)
from courseplanner.shared.geo import haversine_m, project_equirectangular

from .models import SnapResult, TrackMarker, Waypoint
from .tags import FINISH_ICON, START_ICON, primary_icon

logger = logging.getLogger(__name__)

RoutePoint = Union[NormalizedPoint, SmoothedPoint]


class SnapQuality(str, Enum):
    """How far a clicked coordinate was from the route."""
    EXCELLENT = "excellent"  # < 10 m
    GOOD = "good"            # < 50 m
    FAIR = "fair"            # < 200 m
    POOR = "poor"


def quality(snap_distance_m: float) -> SnapQuality:
    """Classify a snap distance."""
    if snap_distance_m < 10:
        return SnapQuality.EXCELLENT
    if snap_distance_m < 50:
        return SnapQuality.GOOD
    if snap_distance_m < 200:
        return SnapQuality.FAIR
    return SnapQuality.POOR


def new_waypoint_id() -> str:
    return str(uuid.uuid4())


class WaypointLocator:
    """
    Snaps and orders waypoints along one route.

    The route is fixed for the lifetime of the locator; waypoint lists
    are passed in and a new list is returned from every mutation.

    Example usage:
        locator = WaypointLocator(points)
        waypoints = locator.extract_waypoints(markers)
        waypoints, aid = locator.place_waypoint(waypoints, "Aid 1", lat=46.1, lng=7.2)
    """

    def __init__(self, points: Sequence[RoutePoint]):
        if len(points) < 2:
            raise InsufficientDataError(
                f"Route needs at least 2 points, got {len(points)}"
            )
        self.points = list(points)
        self.distances = [p.distance_m for p in self.points]

        # Local plane around the route's mean latitude
        self._ref_lat = sum(p.lat for p in self.points) / len(self.points)
        self._projected = [
            project_equirectangular(p.lat, p.lng, self._ref_lat)
            for p in self.points
        ]

    @property
    def total_distance_m(self) -> float:
        return self.distances[-1]

    # =========================================================================
    # SNAPPING
    # =========================================================================

    def snap_to_coordinate(
        self,
        lat: float,
        lng: float,
        interior_only: bool = False
    ) -> SnapResult:
        """
        Nearest route point to a clicked coordinate.

        Nearest is measured on the projected plane; the reported snap
        distance is the great-circle distance to the chosen point.
        """
        x, y = project_equirectangular(lat, lng, self._ref_lat)

        start, stop = 0, len(self.points)
        if interior_only:
            start, stop = 1, len(self.points) - 1

        best_index = start
        best_sq = float("inf")
        for i in range(start, stop):
            px, py = self._projected[i]
            sq = (px - x) ** 2 + (py - y) ** 2
            if sq < best_sq:
                best_sq = sq
                best_index = i

        point = self.points[best_index]
        return SnapResult(
            index=best_index,
            point=point,
            snap_distance_m=haversine_m(lat, lng, point.lat, point.lng),
        )

    def snap_to_distance(self, distance_m: float) -> SnapResult:
        """
        Route point closest to a distance along the route.

        Raises:
            WaypointOutOfBoundsError: Distance outside [0, total]
        """
        if not 0 <= distance_m <= self.total_distance_m:
            raise WaypointOutOfBoundsError(distance_m, self.total_distance_m)

        i = bisect_left(self.distances, distance_m)
        if i == len(self.distances):
            i -= 1
        elif i > 0 and distance_m - self.distances[i - 1] <= self.distances[i] - distance_m:
            i -= 1

        point = self.points[i]
        return SnapResult(
            index=i,
            point=point,
            snap_distance_m=abs(point.distance_m - distance_m),
        )

    def _snap(
        self,
        lat: Optional[float],
        lng: Optional[float],
        distance_m: Optional[float]
    ) -> SnapResult:
        has_coordinate = lat is not None and lng is not None
        if has_coordinate == (distance_m is not None):
            raise CoursePlannerError(
                "Provide either lat/lng or distance_m to place a waypoint"
            )
        if has_coordinate:
            return self.snap_to_coordinate(lat, lng)
        return self.snap_to_distance(distance_m)

    # =========================================================================
    # CREATION
    # =========================================================================

    def extract_waypoints(
        self,
        markers: Iterable[TrackMarker] = (),
        course_id: Optional[str] = None
    ) -> List[Waypoint]:
        """
        Automatic waypoints for a new course.

        Start and finish come from the route ends; each marker is snapped
        to the nearest interior route point.
        """
        first, last = self.points[0], self.points[-1]
        waypoints = [
            self._waypoint_at(first, "Start", course_id=course_id, icon=START_ICON),
            self._waypoint_at(last, "Finish", course_id=course_id, icon=FINISH_ICON),
        ]

        for marker in markers:
            if len(self.points) < 3:
                logger.warning(f"No interior point for marker '{marker.name}', skipped")
                continue
            snap = self.snap_to_coordinate(marker.lat, marker.lng, interior_only=True)
            if quality(snap.snap_distance_m) is SnapQuality.POOR:
                logger.info(
                    f"Marker '{marker.name}' is {snap.snap_distance_m:.0f} m from the route"
                )
            waypoints.append(self._waypoint_at(
                snap.point,
                marker.name,
                course_id=course_id,
                tags=marker.tags,
                description=marker.description,
            ))

        logger.debug(f"Extracted {len(waypoints)} waypoints")
        return reorder(waypoints)

    def place_waypoint(
        self,
        waypoints: Sequence[Waypoint],
        name: str,
        *,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        distance_m: Optional[float] = None,
        tags: Iterable[str] = (),
        icon: Optional[str] = None,
        description: Optional[str] = None,
        course_id: Optional[str] = None,
    ) -> Tuple[List[Waypoint], Waypoint]:
        """
        Add a waypoint at a clicked coordinate or chart distance.

        Returns:
            (reordered waypoints, the new waypoint with its final order)

        Raises:
            WaypointOutOfBoundsError: Distance outside the route
        """
        snap = self._snap(lat, lng, distance_m)
        waypoint = self._waypoint_at(
            snap.point,
            name,
            course_id=course_id,
            tags=tags,
            icon=icon,
            description=description,
        )
        updated = reorder(list(waypoints) + [waypoint], moved_id=waypoint.id)
        return updated, find_waypoint(updated, waypoint.id)

    def move_waypoint(
        self,
        waypoints: Sequence[Waypoint],
        waypoint_id: str,
        *,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        distance_m: Optional[float] = None,
    ) -> List[Waypoint]:
        """
        Move a waypoint to a new route position and reorder.

        Raises:
            WaypointNotFoundError: Unknown waypoint id
            WaypointOutOfBoundsError: Distance outside the route
        """
        find_waypoint(waypoints, waypoint_id)
        point = self._snap(lat, lng, distance_m).point

        moved = [
            replace(
                w,
                distance_m=point.distance_m,
                lat=point.lat,
                lng=point.lng,
                elevation_m=point.elevation_m,
            ) if w.id == waypoint_id else w
            for w in waypoints
        ]
        return reorder(moved, moved_id=waypoint_id)

    @staticmethod
    def _waypoint_at(
        point: RoutePoint,
        name: str,
        course_id: Optional[str] = None,
        tags: Iterable[str] = (),
        icon: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Waypoint:
        tag_set = frozenset(tags)
        return Waypoint(
            id=new_waypoint_id(),
            name=name,
            distance_m=point.distance_m,
            lat=point.lat,
            lng=point.lng,
            elevation_m=point.elevation_m,
            tags=tag_set,
            icon=icon or primary_icon(tag_set),
            description=description,
            course_id=course_id,
        )


# =============================================================================
# LIST OPERATIONS (no route needed)
# =============================================================================

def find_waypoint(waypoints: Sequence[Waypoint], waypoint_id: str) -> Waypoint:
    """
    Raises:
        WaypointNotFoundError: Unknown waypoint id
    """
    for w in waypoints:
        if w.id == waypoint_id:
            return w
    raise WaypointNotFoundError(waypoint_id)


def reorder(
    waypoints: Sequence[Waypoint],
    moved_id: Optional[str] = None
) -> List[Waypoint]:
    """
    Sort by distance and assign dense order from 0.

    Ties keep their previous relative order, except that the waypoint
    moved last takes the later slot.
    """
    ranked = sorted(
        enumerate(waypoints),
        key=lambda item: (item[1].distance_m, item[1].id == moved_id, item[1].order, item[0]),
    )
    return [replace(w, order=i) for i, (_, w) in enumerate(ranked)]


def update_waypoint_details(
    waypoints: Sequence[Waypoint],
    waypoint_id: str,
    *,
    name: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    icon: Optional[str] = None,
    description: Optional[str] = None,
) -> List[Waypoint]:
    """Change non-positional fields. Order is unaffected."""
    current = find_waypoint(waypoints, waypoint_id)

    changes = {}
    if name is not None:
        changes["name"] = name
    if tags is not None:
        changes["tags"] = frozenset(tags)
        if icon is None:
            changes["icon"] = primary_icon(changes["tags"])
    if icon is not None:
        changes["icon"] = icon
    if description is not None:
        changes["description"] = description

    updated = replace(current, **changes)
    return [updated if w.id == waypoint_id else w for w in waypoints]


def remove_waypoint(waypoints: Sequence[Waypoint], waypoint_id: str) -> List[Waypoint]:
    """Remove a waypoint and re-densify order."""
    find_waypoint(waypoints, waypoint_id)
    return reorder([w for w in waypoints if w.id != waypoint_id])
