"""
Course-related schemas.

Pydantic models for course analysis and waypoint editing. Courses are
not stored here: callers send the stored profile (GeoJSON) and
waypoint list with every request and persist what comes back.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from courseplanner.features.course.metrics import CourseMetrics
from courseplanner.features.track.models import TrackSample
from courseplanner.features.track.smoothing import SmoothingConfig, SmoothingOverride
from courseplanner.features.waypoints.models import TrackMarker, Waypoint, WaypointSegment
from courseplanner.features.waypoints.locator import SnapQuality


class TrackSampleSchema(BaseModel):
    """Raw position from an uploaded track file."""

    lat: float
    lng: float
    elevation_m: Optional[float] = None
    # Defaults to position in the request list
    sequence_index: Optional[int] = None


class TrackMarkerSchema(BaseModel):
    """Named marker from the track file."""

    lat: float
    lng: float
    name: str = Field(..., min_length=1, max_length=200)
    tags: List[str] = []
    description: Optional[str] = None

    def to_marker(self) -> TrackMarker:
        return TrackMarker(
            lat=self.lat,
            lng=self.lng,
            name=self.name,
            tags=frozenset(self.tags),
            description=self.description,
        )


class SmoothingOverrideSchema(BaseModel):
    """Per-course smoothing values; omitted fields use global defaults."""

    grade_window_m: Optional[float] = None
    sample_step_m: Optional[float] = None
    pace_smoothing_m: Optional[float] = None

    def to_override(self) -> SmoothingOverride:
        return SmoothingOverride(
            grade_window_m=self.grade_window_m,
            sample_step_m=self.sample_step_m,
            pace_smoothing_m=self.pace_smoothing_m,
        )


class SmoothingConfigSchema(BaseModel):
    """Resolved smoothing values."""

    grade_window_m: float
    sample_step_m: float
    pace_smoothing_m: float

    @classmethod
    def from_config(cls, config: SmoothingConfig) -> "SmoothingConfigSchema":
        return cls(
            grade_window_m=config.grade_window_m,
            sample_step_m=config.sample_step_m,
            pace_smoothing_m=config.pace_smoothing_m,
        )


class CourseMetricsSchema(BaseModel):
    """Course summary. Elevation fields are null without elevation data."""

    total_distance_m: float
    elevation_gain_m: Optional[float] = None
    elevation_loss_m: Optional[float] = None
    min_elevation_m: Optional[float] = None
    max_elevation_m: Optional[float] = None

    @classmethod
    def from_metrics(cls, metrics: CourseMetrics) -> "CourseMetricsSchema":
        return cls(
            total_distance_m=round(metrics.total_distance_m, 1),
            elevation_gain_m=_round_or_none(metrics.elevation_gain_m),
            elevation_loss_m=_round_or_none(metrics.elevation_loss_m),
            min_elevation_m=_round_or_none(metrics.min_elevation_m),
            max_elevation_m=_round_or_none(metrics.max_elevation_m),
        )


class WaypointSchema(BaseModel):
    """Waypoint as stored by the caller."""

    id: str
    name: str
    distance_m: float
    lat: float
    lng: float
    elevation_m: Optional[float] = None
    order: int = 0
    tags: List[str] = []
    icon: str = "map-pin"
    description: Optional[str] = None
    course_id: Optional[str] = None

    @classmethod
    def from_waypoint(cls, waypoint: Waypoint) -> "WaypointSchema":
        return cls(
            id=waypoint.id,
            name=waypoint.name,
            distance_m=waypoint.distance_m,
            lat=waypoint.lat,
            lng=waypoint.lng,
            elevation_m=waypoint.elevation_m,
            order=waypoint.order,
            tags=sorted(waypoint.tags),
            icon=waypoint.icon,
            description=waypoint.description,
            course_id=waypoint.course_id,
        )

    def to_waypoint(self) -> Waypoint:
        return Waypoint(
            id=self.id,
            name=self.name,
            distance_m=self.distance_m,
            lat=self.lat,
            lng=self.lng,
            elevation_m=self.elevation_m,
            order=self.order,
            tags=frozenset(self.tags),
            icon=self.icon,
            description=self.description,
            course_id=self.course_id,
        )


class WaypointSegmentSchema(BaseModel):
    """Stretch between consecutive waypoints."""

    from_waypoint_id: str
    to_waypoint_id: str
    distance_m: float
    elevation_gain_m: Optional[float] = None
    elevation_loss_m: Optional[float] = None

    @classmethod
    def from_segment(cls, segment: WaypointSegment) -> "WaypointSegmentSchema":
        return cls(
            from_waypoint_id=segment.from_waypoint_id,
            to_waypoint_id=segment.to_waypoint_id,
            distance_m=round(segment.distance_m, 1),
            elevation_gain_m=_round_or_none(segment.elevation_gain_m),
            elevation_loss_m=_round_or_none(segment.elevation_loss_m),
        )


# === Requests ===

class CourseAnalyzeRequest(BaseModel):
    """Request to analyze a newly uploaded track."""

    samples: List[TrackSampleSchema]
    markers: List[TrackMarkerSchema] = []
    smoothing: Optional[SmoothingOverrideSchema] = None
    course_id: Optional[str] = None

    def to_samples(self) -> List[TrackSample]:
        return [
            TrackSample(
                sequence_index=i if s.sequence_index is None else s.sequence_index,
                lat=s.lat,
                lng=s.lng,
                elevation_m=s.elevation_m,
            )
            for i, s in enumerate(self.samples)
        ]


class WaypointPlaceRequest(BaseModel):
    """Place a new waypoint at a clicked coordinate or chart distance."""

    profile: Dict[str, Any] = Field(..., description="Stored profile GeoJSON")
    waypoints: List[WaypointSchema] = []
    name: str = Field(..., min_length=1, max_length=200)
    lat: Optional[float] = None
    lng: Optional[float] = None
    distance_m: Optional[float] = None
    tags: List[str] = []
    icon: Optional[str] = None
    description: Optional[str] = None
    course_id: Optional[str] = None


class WaypointUpdateRequest(BaseModel):
    """Move a waypoint and/or change its details."""

    profile: Dict[str, Any] = Field(..., description="Stored profile GeoJSON")
    waypoints: List[WaypointSchema]
    lat: Optional[float] = None
    lng: Optional[float] = None
    distance_m: Optional[float] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    tags: Optional[List[str]] = None
    icon: Optional[str] = None
    description: Optional[str] = None

    @property
    def moves(self) -> bool:
        return self.distance_m is not None or (self.lat is not None and self.lng is not None)


# === Responses ===

class CourseAnalyzeResponse(BaseModel):
    """Everything the caller stores for a new course."""

    profile: Dict[str, Any]
    metrics: CourseMetricsSchema
    smoothing: SmoothingConfigSchema
    waypoints: List[WaypointSchema]
    segments: List[WaypointSegmentSchema] = []


class WaypointListResponse(BaseModel):
    """Waypoints after an edit, plus the edited waypoint."""

    waypoints: List[WaypointSchema]
    waypoint: WaypointSchema
    snap_distance_m: Optional[float] = None
    snap_quality: Optional[SnapQuality] = None


def _round_or_none(value: Optional[float], digits: int = 1) -> Optional[float]:
    return None if value is None else round(value, digits)
