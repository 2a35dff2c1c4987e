"""
Pacing plan and schedule types.

A Plan is configuration; everything else here is derived and rebuilt
on every request.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from courseplanner.shared.constants import PaceMode, PaceUnit, PacingStrategy


@dataclass(frozen=True)
class Plan:
    """
    Pacing plan for one course.

    pace_seconds_per_unit is used in PACE mode, target_time_seconds in
    TIME and NORMALIZED modes.
    """
    pace_seconds_per_unit: Optional[float] = None
    target_time_seconds: Optional[float] = None
    pace_unit: PaceUnit = PaceUnit.MIN_PER_KM
    pace_mode: PaceMode = PaceMode.PACE
    pacing_strategy: PacingStrategy = PacingStrategy.FLAT
    pacing_linear_percent: float = 0.0
    use_grade_adjustment: bool = True
    default_stoppage_seconds: float = 0.0
    stoppage_overrides: Dict[str, float] = field(default_factory=dict)

    def stoppage_for(self, waypoint_id: str) -> float:
        """Override for a waypoint, else the default."""
        return self.stoppage_overrides.get(waypoint_id, self.default_stoppage_seconds)


@dataclass
class PacingSegment:
    """Schedule for the stretch between two consecutive waypoints."""
    from_waypoint_id: str
    to_waypoint_id: str
    distance_m: float
    elapsed_seconds: float
    cumulative_elapsed_seconds: float      # includes stoppage at to_waypoint
    average_pace_seconds_per_unit: float
    average_grade_percent: float = 0.0
    grade_factor: float = 1.0              # distance-weighted, 1.0 = flat


@dataclass
class WaypointTime:
    """Timing at one waypoint."""
    waypoint_id: str
    arrival_seconds: float                 # before stoppage
    stoppage_seconds: float
    cumulative_elapsed_seconds: float      # arrival + stoppage (departure)


@dataclass
class PacePoint:
    """One sample of the pace chart."""
    distance_m: float
    pace_seconds_per_unit: float
    grade_percent: float


@dataclass
class PacingSchedule:
    """Full result of scheduling a plan."""
    segments: List[PacingSegment]
    waypoint_times: List[WaypointTime]
    base_pace_seconds_per_unit: float
    pace_unit: PaceUnit
    running_seconds: float
    stoppage_seconds: float
    finish_seconds: float
    pace_profile: List[PacePoint] = field(default_factory=list)

    @property
    def finish_hours(self) -> float:
        return self.finish_seconds / 3600
