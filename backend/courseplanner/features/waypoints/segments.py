"""
Waypoint-to-waypoint segments with elevation stats.
"""

from typing import List, Sequence

from courseplanner.features.course.metrics import CourseMetricsAggregator
from courseplanner.features.track.models import SmoothedPoint

from .models import Waypoint, WaypointSegment


def build_segments(
    waypoints: Sequence[Waypoint],
    points: Sequence[SmoothedPoint],
    noise_floor_m: float = 1.0
) -> List[WaypointSegment]:
    """
    One segment per consecutive waypoint pair, in order.

    Gain/loss are None when the course has no elevation data.
    """
    aggregator = CourseMetricsAggregator(noise_floor_m)
    ordered = sorted(waypoints, key=lambda w: w.order)

    segments = []
    for start, end in zip(ordered, ordered[1:]):
        gain, loss = aggregator.segment_gain_loss(points, start.distance_m, end.distance_m)
        segments.append(WaypointSegment(
            from_waypoint_id=start.id,
            to_waypoint_id=end.id,
            distance_m=end.distance_m - start.distance_m,
            elevation_gain_m=gain,
            elevation_loss_m=loss,
        ))
    return segments
