"""
Pacing schemas.

Pydantic models for API request/response.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from courseplanner.features.course.schemas import SmoothingOverrideSchema, WaypointSchema
from courseplanner.shared.constants import PaceMode, PaceUnit, PacingStrategy

from .models import PacingSchedule, Plan


class PlanSchema(BaseModel):
    """Pacing plan. Range checks happen in the engine."""

    pace_seconds_per_unit: Optional[float] = Field(
        default=None, description="Base pace (seconds per km or mile), pace mode"
    )
    target_time_seconds: Optional[float] = Field(
        default=None, description="Finish time, time and normalized modes"
    )
    pace_unit: PaceUnit = PaceUnit.MIN_PER_KM
    pace_mode: PaceMode = PaceMode.PACE
    pacing_strategy: PacingStrategy = PacingStrategy.FLAT
    pacing_linear_percent: float = 0.0
    use_grade_adjustment: bool = True
    default_stoppage_seconds: float = 0.0
    stoppage_overrides: Dict[str, float] = {}

    def to_plan(self) -> Plan:
        return Plan(
            pace_seconds_per_unit=self.pace_seconds_per_unit,
            target_time_seconds=self.target_time_seconds,
            pace_unit=self.pace_unit,
            pace_mode=self.pace_mode,
            pacing_strategy=self.pacing_strategy,
            pacing_linear_percent=self.pacing_linear_percent,
            use_grade_adjustment=self.use_grade_adjustment,
            default_stoppage_seconds=self.default_stoppage_seconds,
            stoppage_overrides=dict(self.stoppage_overrides),
        )


class ScheduleRequest(BaseModel):
    """Stored course data plus the plan to schedule."""

    profile: Dict[str, Any] = Field(..., description="Stored profile GeoJSON")
    waypoints: List[WaypointSchema]
    plan: PlanSchema
    smoothing: Optional[SmoothingOverrideSchema] = None


class PacingSegmentSchema(BaseModel):
    from_waypoint_id: str
    to_waypoint_id: str
    distance_m: float
    elapsed_seconds: float
    cumulative_elapsed_seconds: float
    average_pace_seconds_per_unit: float
    average_grade_percent: float
    grade_factor: float


class WaypointTimeSchema(BaseModel):
    waypoint_id: str
    arrival_seconds: float
    stoppage_seconds: float
    cumulative_elapsed_seconds: float


class PacePointSchema(BaseModel):
    distance_m: float
    pace_seconds_per_unit: float
    grade_percent: float


class ScheduleResponse(BaseModel):
    """Pacing schedule result."""

    segments: List[PacingSegmentSchema]
    waypoint_times: List[WaypointTimeSchema]
    base_pace_seconds_per_unit: float
    pace_unit: PaceUnit
    running_seconds: float
    stoppage_seconds: float
    finish_seconds: float
    pace_profile: List[PacePointSchema] = []

    @classmethod
    def from_schedule(cls, schedule: PacingSchedule) -> "ScheduleResponse":
        return cls(
            segments=[
                PacingSegmentSchema(
                    from_waypoint_id=s.from_waypoint_id,
                    to_waypoint_id=s.to_waypoint_id,
                    distance_m=round(s.distance_m, 1),
                    elapsed_seconds=round(s.elapsed_seconds, 1),
                    cumulative_elapsed_seconds=round(s.cumulative_elapsed_seconds, 1),
                    average_pace_seconds_per_unit=round(s.average_pace_seconds_per_unit, 1),
                    average_grade_percent=round(s.average_grade_percent, 2),
                    grade_factor=round(s.grade_factor, 3),
                )
                for s in schedule.segments
            ],
            waypoint_times=[
                WaypointTimeSchema(
                    waypoint_id=t.waypoint_id,
                    arrival_seconds=round(t.arrival_seconds, 1),
                    stoppage_seconds=t.stoppage_seconds,
                    cumulative_elapsed_seconds=round(t.cumulative_elapsed_seconds, 1),
                )
                for t in schedule.waypoint_times
            ],
            base_pace_seconds_per_unit=round(schedule.base_pace_seconds_per_unit, 2),
            pace_unit=schedule.pace_unit,
            running_seconds=round(schedule.running_seconds, 1),
            stoppage_seconds=schedule.stoppage_seconds,
            finish_seconds=round(schedule.finish_seconds, 1),
            pace_profile=[
                PacePointSchema(
                    distance_m=round(p.distance_m, 1),
                    pace_seconds_per_unit=round(p.pace_seconds_per_unit, 1),
                    grade_percent=round(p.grade_percent, 2),
                )
                for p in schedule.pace_profile
            ],
        )
