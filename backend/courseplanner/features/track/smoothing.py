"""
Elevation smoothing and grade calculation.

All windows are distances along the route, so the same course sampled
at 1 m or 20 m yields the same profile (up to discretization).
"""

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, fields
from typing import List, Optional, Sequence

from courseplanner.features.track.models import NormalizedPoint, SmoothedPoint
from courseplanner.shared.elevation import window_average
from courseplanner.shared.errors import InvalidSmoothingConfigurationError
from courseplanner.shared.geo import calculate_grade

logger = logging.getLogger(__name__)

# Grades beyond +-100% are treated as GPS artifacts
MAX_ABS_GRADE = 1.0


@dataclass(frozen=True)
class SmoothingConfig:
    """
    Smoothing parameters for one course.

    Attributes:
        grade_window_m: Elevation moving-average window (0 = no smoothing)
        sample_step_m: Span used for grade (ahead/behind distance)
        pace_smoothing_m: Window for the pace chart only
    """
    grade_window_m: float = 100.0
    sample_step_m: float = 50.0
    pace_smoothing_m: float = 300.0

    def __post_init__(self):
        if self.grade_window_m < 0:
            raise InvalidSmoothingConfigurationError(
                f"grade_window_m must be >= 0, got {self.grade_window_m}"
            )
        if self.sample_step_m <= 0:
            raise InvalidSmoothingConfigurationError(
                f"sample_step_m must be > 0, got {self.sample_step_m}"
            )
        if self.pace_smoothing_m < 0:
            raise InvalidSmoothingConfigurationError(
                f"pace_smoothing_m must be >= 0, got {self.pace_smoothing_m}"
            )


@dataclass(frozen=True)
class SmoothingOverride:
    """Per-course smoothing values. None means use the global default."""
    grade_window_m: Optional[float] = None
    sample_step_m: Optional[float] = None
    pace_smoothing_m: Optional[float] = None


def resolve_smoothing(
    defaults: SmoothingConfig,
    override: Optional[SmoothingOverride] = None
) -> SmoothingConfig:
    """
    Merge a per-course override over the global defaults.

    Raises:
        InvalidSmoothingConfigurationError: Merged values out of range
    """
    if override is None:
        return defaults

    values = {}
    for f in fields(SmoothingConfig):
        value = getattr(override, f.name)
        values[f.name] = getattr(defaults, f.name) if value is None else value

    return SmoothingConfig(**values)


class ElevationSmoother:
    """
    Derives smoothed elevation and grade from normalized points.

    Example usage:
        smoother = ElevationSmoother(SmoothingConfig(grade_window_m=100))
        smoothed = smoother.smooth(points)
    """

    def __init__(self, config: Optional[SmoothingConfig] = None):
        self.config = config or SmoothingConfig()

    def smooth(self, points: Sequence[NormalizedPoint]) -> List[SmoothedPoint]:
        """
        Smooth elevation and compute grade per point.

        Args:
            points: Output of TrackNormalizer

        Returns:
            SmoothedPoint per input point (same distances)
        """
        if not points:
            return []

        distances = [p.distance_m for p in points]

        if points[0].elevation_m is None:
            return [self._to_smoothed(p, None, 0.0) for p in points]

        raw = [p.elevation_m for p in points]
        smoothed = window_average(distances, raw, self.config.grade_window_m)
        grades = self._grades(distances, smoothed)

        logger.debug(
            f"Smoothed {len(points)} points "
            f"(window={self.config.grade_window_m}m, step={self.config.sample_step_m}m)"
        )

        return [
            self._to_smoothed(p, elevation, grade)
            for p, elevation, grade in zip(points, smoothed, grades)
        ]

    def _grades(self, distances: List[float], elevations: List[float]) -> List[float]:
        """Grade over a span of sample_step_m behind and ahead of each point."""
        step = self.config.sample_step_m
        total = distances[-1]
        grades = []

        for i, d in enumerate(distances):
            if d - step < distances[0] or d + step > total:
                grades.append(0.0)
                continue

            behind = bisect_right(distances, d - step) - 1
            ahead = bisect_left(distances, d + step)

            grade = calculate_grade(
                distances[ahead] - distances[behind],
                elevations[ahead] - elevations[behind],
            )
            grades.append(max(-MAX_ABS_GRADE, min(grade, MAX_ABS_GRADE)))

        return grades

    @staticmethod
    def _to_smoothed(
        point: NormalizedPoint,
        smoothed_elevation_m: Optional[float],
        grade: float
    ) -> SmoothedPoint:
        return SmoothedPoint(
            distance_m=point.distance_m,
            lat=point.lat,
            lng=point.lng,
            elevation_m=point.elevation_m,
            smoothed_elevation_m=smoothed_elevation_m,
            grade=grade,
            source_index=point.source_index,
        )


def smooth_pace_series(
    distances: Sequence[float],
    paces: Sequence[float],
    pace_smoothing_m: float
) -> List[float]:
    """Moving average for the pace chart. Never feeds back into grades."""
    return window_average(distances, paces, pace_smoothing_m)
