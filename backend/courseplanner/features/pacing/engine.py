"""
Pacing Engine

Turns a plan, a smoothed course profile and its waypoints into a
per-segment and per-waypoint time schedule.

Pace at distance d (seconds per meter):
    pace(d) = base * strategy(d) * grade_factor(d)

Segment time is the integral of pace over the segment. Integration runs
over the sub-intervals between profile points, with the grade factor
interpolated linearly at segment boundaries.
"""

import logging
from bisect import bisect_left, bisect_right
from typing import List, Optional, Sequence, Tuple

from courseplanner.features.track.models import SmoothedPoint
from courseplanner.features.track.smoothing import smooth_pace_series
from courseplanner.features.waypoints.models import Waypoint
from courseplanner.shared.constants import (
    LINEAR_PERCENT_MAX,
    LINEAR_PERCENT_MIN,
    PaceMode,
)
from courseplanner.shared.errors import InvalidPlanConfigurationError

from .calculators.gap import GradeAdjustmentModel, PolynomialGradeModel
from .calculators.strategy import StrategyProfile
from .models import (
    PacePoint,
    PacingSchedule,
    PacingSegment,
    Plan,
    WaypointTime,
)

logger = logging.getLogger(__name__)


class _GradeProfile:
    """Grade and grade factor per profile point, interpolated between points."""

    def __init__(
        self,
        points: Sequence[SmoothedPoint],
        model: GradeAdjustmentModel,
        use_grade_adjustment: bool
    ):
        self.distances = [p.distance_m for p in points]
        self.grades = [p.grade_percent for p in points]
        if use_grade_adjustment:
            self.factors = [model.factor(g) for g in self.grades]
        else:
            self.factors = [1.0] * len(points)

    def breakpoints(self, start_m: float, end_m: float) -> List[float]:
        """Segment ends plus every profile distance strictly inside."""
        lo = bisect_right(self.distances, start_m)
        hi = bisect_left(self.distances, end_m)
        return [start_m] + self.distances[lo:hi] + [end_m]

    def factor_at(self, distance_m: float) -> float:
        return self._interpolate(self.factors, distance_m, 1.0)

    def grade_at(self, distance_m: float) -> float:
        return self._interpolate(self.grades, distance_m, 0.0)

    def _interpolate(self, values: List[float], x: float, default: float) -> float:
        if not values:
            return default
        i = bisect_left(self.distances, x)
        if i == 0:
            return values[0]
        if i >= len(values):
            return values[-1]
        d0, d1 = self.distances[i - 1], self.distances[i]
        if d1 <= d0:
            return values[i]
        t = (x - d0) / (d1 - d0)
        return values[i - 1] + t * (values[i] - values[i - 1])


class PacingEngine:
    """
    Computes pacing schedules.

    Example usage:
        engine = PacingEngine(grade_model=PolynomialGradeModel())
        schedule = engine.schedule(points, waypoints, plan)
        print(f"Finish: {schedule.finish_hours:.2f} h")
    """

    def __init__(
        self,
        grade_model: Optional[GradeAdjustmentModel] = None,
        pace_smoothing_m: float = 300.0
    ):
        self.grade_model = grade_model or PolynomialGradeModel()
        self.pace_smoothing_m = pace_smoothing_m

    def schedule(
        self,
        points: Sequence[SmoothedPoint],
        waypoints: Sequence[Waypoint],
        plan: Plan
    ) -> PacingSchedule:
        """
        Build the schedule for a plan.

        Args:
            points: Smoothed course profile
            waypoints: Course waypoints (ordered by their order field)
            plan: Pacing plan

        Returns:
            PacingSchedule with one segment per consecutive waypoint pair

        Raises:
            InvalidPlanConfigurationError: Plan or waypoints cannot be scheduled
        """
        ordered = sorted(waypoints, key=lambda w: w.order)
        self._validate(plan, ordered)

        start_m = ordered[0].distance_m
        end_m = ordered[-1].distance_m

        strategy = StrategyProfile(
            strategy=plan.pacing_strategy,
            linear_percent=plan.pacing_linear_percent,
            start_m=start_m,
            end_m=end_m,
        )
        grades = _GradeProfile(points, self.grade_model, plan.use_grade_adjustment)

        # Step 4 first: time modes budget around total stoppage
        stoppages = [0.0] + [plan.stoppage_for(w.id) for w in ordered[1:]]
        total_stoppage = sum(stoppages)

        # Effort units per segment: integral of strategy * grade factor
        efforts = []
        for a, b in zip(ordered, ordered[1:]):
            efforts.append(self._integrate(a.distance_m, b.distance_m, strategy, grades))

        pace_per_m = self._base_pace_per_meter(
            plan, total_stoppage, end_m - start_m, sum(e[0] for e in efforts)
        )
        unit_m = plan.pace_unit.meters

        segments: List[PacingSegment] = []
        waypoint_times = [WaypointTime(ordered[0].id, 0.0, 0.0, 0.0)]
        cumulative = 0.0

        for (a, b), (effort, factor_area, grade_area), stoppage in zip(
            zip(ordered, ordered[1:]), efforts, stoppages[1:]
        ):
            distance = b.distance_m - a.distance_m
            elapsed = pace_per_m * effort
            arrival = cumulative + elapsed
            cumulative = arrival + stoppage

            segments.append(PacingSegment(
                from_waypoint_id=a.id,
                to_waypoint_id=b.id,
                distance_m=distance,
                elapsed_seconds=elapsed,
                cumulative_elapsed_seconds=cumulative,
                average_pace_seconds_per_unit=elapsed / distance * unit_m,
                average_grade_percent=grade_area / distance,
                grade_factor=factor_area / distance,
            ))
            waypoint_times.append(WaypointTime(
                waypoint_id=b.id,
                arrival_seconds=arrival,
                stoppage_seconds=stoppage,
                cumulative_elapsed_seconds=cumulative,
            ))

        running = sum(s.elapsed_seconds for s in segments)
        schedule = PacingSchedule(
            segments=segments,
            waypoint_times=waypoint_times,
            base_pace_seconds_per_unit=pace_per_m * unit_m,
            pace_unit=plan.pace_unit,
            running_seconds=running,
            stoppage_seconds=total_stoppage,
            finish_seconds=cumulative,
            pace_profile=self._pace_profile(
                points, pace_per_m * unit_m, strategy, grades, start_m, end_m
            ),
        )

        logger.info(
            f"Scheduled {len(segments)} segments ({plan.pace_mode.value}, "
            f"{plan.pacing_strategy.value}): finish {cumulative:.0f}s"
        )
        return schedule

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _validate(self, plan: Plan, ordered: List[Waypoint]) -> None:
        if plan.pace_mode == PaceMode.PACE:
            if plan.pace_seconds_per_unit is None or plan.pace_seconds_per_unit <= 0:
                raise InvalidPlanConfigurationError(
                    f"Pace mode needs a positive pace, got {plan.pace_seconds_per_unit}"
                )
        elif plan.target_time_seconds is None or plan.target_time_seconds <= 0:
            raise InvalidPlanConfigurationError(
                f"{plan.pace_mode.value} mode needs a positive target time, "
                f"got {plan.target_time_seconds}"
            )

        if not LINEAR_PERCENT_MIN <= plan.pacing_linear_percent <= LINEAR_PERCENT_MAX:
            raise InvalidPlanConfigurationError(
                f"pacing_linear_percent must be in [{LINEAR_PERCENT_MIN}, "
                f"{LINEAR_PERCENT_MAX}], got {plan.pacing_linear_percent}"
            )

        if plan.default_stoppage_seconds < 0:
            raise InvalidPlanConfigurationError("Default stoppage time cannot be negative")
        for waypoint_id, seconds in plan.stoppage_overrides.items():
            if seconds < 0:
                raise InvalidPlanConfigurationError(
                    f"Stoppage time for waypoint {waypoint_id} cannot be negative"
                )

        if len(ordered) < 2:
            raise InvalidPlanConfigurationError(
                f"A schedule needs at least 2 waypoints, got {len(ordered)}"
            )
        for a, b in zip(ordered, ordered[1:]):
            if b.distance_m <= a.distance_m:
                raise InvalidPlanConfigurationError(
                    f"Waypoints must be strictly ordered by distance: "
                    f"'{a.name}' at {a.distance_m:.1f} m, '{b.name}' at {b.distance_m:.1f} m"
                )

    # =========================================================================
    # CALCULATION
    # =========================================================================

    def _base_pace_per_meter(
        self,
        plan: Plan,
        total_stoppage: float,
        distance_m: float,
        total_effort: float
    ) -> float:
        """
        Step 1: base pace in seconds per meter.

        TIME divides running time by distance (flat-equivalent pace);
        NORMALIZED divides by total effort, so grade and strategy
        integrate back to the target exactly.
        """
        if plan.pace_mode == PaceMode.PACE:
            return plan.pace_seconds_per_unit / plan.pace_unit.meters

        running_budget = plan.target_time_seconds - total_stoppage
        if running_budget <= 0:
            raise InvalidPlanConfigurationError(
                f"Target time {plan.target_time_seconds:.0f}s leaves no running time "
                f"after {total_stoppage:.0f}s of stoppage"
            )

        if plan.pace_mode == PaceMode.TIME:
            return running_budget / distance_m
        return running_budget / total_effort

    @staticmethod
    def _integrate(
        start_m: float,
        end_m: float,
        strategy: StrategyProfile,
        grades: _GradeProfile
    ) -> Tuple[float, float, float]:
        """
        Integrate over [start_m, end_m].

        Returns:
            (strategy x grade factor, grade factor, grade percent) areas
        """
        effort = 0.0
        factor_area = 0.0
        grade_area = 0.0

        xs = grades.breakpoints(start_m, end_m)
        for x0, x1 in zip(xs, xs[1:]):
            dx = x1 - x0
            if dx <= 0:
                continue
            factor = (grades.factor_at(x0) + grades.factor_at(x1)) / 2
            effort += strategy.multiplier((x0 + x1) / 2) * factor * dx
            factor_area += factor * dx
            grade_area += (grades.grade_at(x0) + grades.grade_at(x1)) / 2 * dx

        return effort, factor_area, grade_area

    def _pace_profile(
        self,
        points: Sequence[SmoothedPoint],
        base_pace_per_unit: float,
        strategy: StrategyProfile,
        grades: _GradeProfile,
        start_m: float,
        end_m: float
    ) -> List[PacePoint]:
        """Pace chart samples, smoothed over pace_smoothing_m."""
        in_range = [
            (i, p) for i, p in enumerate(points)
            if start_m <= p.distance_m <= end_m
        ]
        distances = [p.distance_m for _, p in in_range]
        paces = [
            base_pace_per_unit * strategy.multiplier(p.distance_m) * grades.factors[i]
            for i, p in in_range
        ]
        smoothed = smooth_pace_series(distances, paces, self.pace_smoothing_m)

        return [
            PacePoint(
                distance_m=p.distance_m,
                pace_seconds_per_unit=pace,
                grade_percent=p.grade_percent,
            )
            for (_, p), pace in zip(in_range, smoothed)
        ]
