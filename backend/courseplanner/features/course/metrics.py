"""
Course summary metrics.

Gain/loss come from the smoothed elevation series, so they follow the
course's smoothing settings.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from courseplanner.features.track.models import SmoothedPoint
from courseplanner.shared.elevation import accumulate_gain_loss
from courseplanner.shared.errors import EmptyProfileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseMetrics:
    """Summary of a course. Elevation fields are None without elevation data."""
    total_distance_m: float
    elevation_gain_m: Optional[float]
    elevation_loss_m: Optional[float]
    min_elevation_m: Optional[float]
    max_elevation_m: Optional[float]

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / 1000

    @property
    def has_elevation(self) -> bool:
        return self.elevation_gain_m is not None


class CourseMetricsAggregator:
    """
    Derives summary metrics from smoothed points.

    Example usage:
        metrics = CourseMetricsAggregator(noise_floor_m=1.0).aggregate(points)
        print(f"{metrics.total_distance_km:.1f} km, +{metrics.elevation_gain_m:.0f} m")
    """

    def __init__(self, noise_floor_m: float = 1.0):
        self.noise_floor_m = noise_floor_m

    def aggregate(self, points: Sequence[SmoothedPoint]) -> CourseMetrics:
        """
        Raises:
            EmptyProfileError: Fewer than 2 points
        """
        if len(points) < 2:
            raise EmptyProfileError(
                f"Metrics need at least 2 points, got {len(points)}"
            )

        total = points[-1].distance_m - points[0].distance_m
        elevations = [p.smoothed_elevation_m for p in points]

        if elevations[0] is None:
            return CourseMetrics(
                total_distance_m=total,
                elevation_gain_m=None,
                elevation_loss_m=None,
                min_elevation_m=None,
                max_elevation_m=None,
            )

        gain, loss = accumulate_gain_loss(elevations, self.noise_floor_m)

        metrics = CourseMetrics(
            total_distance_m=total,
            elevation_gain_m=gain,
            elevation_loss_m=loss,
            min_elevation_m=min(elevations),
            max_elevation_m=max(elevations),
        )
        logger.debug(
            f"Course metrics: {total:.0f} m, +{gain:.0f}/-{loss:.0f} m"
        )
        return metrics

    def segment_gain_loss(
        self,
        points: Sequence[SmoothedPoint],
        start_m: float,
        end_m: float
    ) -> Tuple[Optional[float], Optional[float]]:
        """
        Gain/loss between two distances along the route.

        Returns:
            (gain_m, loss_m), both None without elevation data
        """
        if not points or points[0].smoothed_elevation_m is None:
            return None, None

        elevations = [
            p.smoothed_elevation_m for p in points
            if start_m <= p.distance_m <= end_m
        ]
        return accumulate_gain_loss(elevations, self.noise_floor_m)
