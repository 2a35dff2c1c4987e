"""
Course Service

Orchestrates the course pipeline:
- Track normalization
- Elevation smoothing (global defaults + per-course override)
- Course metrics
- Automatic waypoints
- Pacing schedules

This is the main entry point for callers that hold raw course data.
Every call recomputes from its inputs; nothing is cached.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from courseplanner.config import Settings, settings as default_settings
from courseplanner.features.course.metrics import CourseMetrics, CourseMetricsAggregator
from courseplanner.features.pacing.calculators.gap import get_grade_model
from courseplanner.features.pacing.engine import PacingEngine
from courseplanner.features.pacing.models import PacingSchedule, Plan
from courseplanner.features.track.geojson import profile_to_geojson
from courseplanner.features.track.models import NormalizedPoint, SmoothedPoint, TrackSample
from courseplanner.features.track.normalizer import TrackNormalizer
from courseplanner.features.track.smoothing import (
    ElevationSmoother,
    SmoothingConfig,
    SmoothingOverride,
    resolve_smoothing,
)
from courseplanner.features.waypoints.locator import WaypointLocator
from courseplanner.features.waypoints.models import TrackMarker, Waypoint
from courseplanner.shared.errors import TrackTooLargeError

logger = logging.getLogger(__name__)


@dataclass
class CourseAnalysis:
    """Derived course data: profile, metrics and (on creation) waypoints."""
    points: List[SmoothedPoint]
    metrics: CourseMetrics
    smoothing: SmoothingConfig
    waypoints: List[Waypoint] = field(default_factory=list)

    def to_geojson(self) -> Dict[str, Any]:
        return profile_to_geojson(self.points)


class CourseService:
    """
    Service for course analysis and scheduling.

    Usage:
        service = CourseService()
        analysis = service.analyze(samples, markers)
        schedule = service.schedule(analysis.points, analysis.waypoints, plan)
    """

    def __init__(self, app_settings: Optional[Settings] = None):
        self.settings = app_settings or default_settings
        self.normalizer = TrackNormalizer(self.settings.min_point_spacing_m)
        self.aggregator = CourseMetricsAggregator(self.settings.elevation_noise_floor_m)

    def resolve(self, override: Optional[SmoothingOverride] = None) -> SmoothingConfig:
        """Global defaults merged with a per-course override."""
        return resolve_smoothing(self.settings.default_smoothing(), override)

    def analyze(
        self,
        samples: Sequence[TrackSample],
        markers: Iterable[TrackMarker] = (),
        override: Optional[SmoothingOverride] = None,
        course_id: Optional[str] = None
    ) -> CourseAnalysis:
        """
        Full pipeline for a newly uploaded track.

        Raises:
            InsufficientDataError: Too few usable samples
            TrackTooLargeError: More samples than max_track_points
            InvalidSmoothingConfigurationError: Bad override values
        """
        if len(samples) > self.settings.max_track_points:
            raise TrackTooLargeError(len(samples), self.settings.max_track_points)

        points = self.normalizer.normalize(samples)
        analysis = self.resmooth(points, override)
        analysis.waypoints = WaypointLocator(analysis.points).extract_waypoints(
            markers, course_id=course_id
        )

        logger.info(
            f"Analyzed course: {analysis.metrics.total_distance_km:.2f} km, "
            f"{len(analysis.points)} points, {len(analysis.waypoints)} waypoints"
        )
        return analysis

    def resmooth(
        self,
        points: Sequence[NormalizedPoint],
        override: Optional[SmoothingOverride] = None
    ) -> CourseAnalysis:
        """Recompute profile and metrics after a smoothing change."""
        config = self.resolve(override)
        smoothed = ElevationSmoother(config).smooth(points)
        metrics = self.aggregator.aggregate(smoothed)
        return CourseAnalysis(points=smoothed, metrics=metrics, smoothing=config)

    def schedule(
        self,
        points: Sequence[SmoothedPoint],
        waypoints: Sequence[Waypoint],
        plan: Plan,
        override: Optional[SmoothingOverride] = None
    ) -> PacingSchedule:
        """
        Raises:
            InvalidPlanConfigurationError: Plan cannot be scheduled
        """
        config = self.resolve(override)
        engine = PacingEngine(
            grade_model=get_grade_model(self.settings.grade_model),
            pace_smoothing_m=config.pace_smoothing_m,
        )
        return engine.schedule(points, waypoints, plan)
