"""
Pace planning module.

Usage:
    from courseplanner.features.pacing import PacingEngine, Plan
    from courseplanner.features.pacing.calculators import get_grade_model

Components:
- Plan: Pacing configuration (pace or target time, strategy, stoppage)
- PacingEngine: Plan + profile + waypoints -> PacingSchedule
- PacingSchedule / PacingSegment / WaypointTime / PacePoint: Results
"""

from .models import Plan, PacingSegment, WaypointTime, PacePoint, PacingSchedule
from .engine import PacingEngine

__all__ = [
    # Models
    "Plan",
    "PacingSegment",
    "WaypointTime",
    "PacePoint",
    "PacingSchedule",
    # Engine
    "PacingEngine",
]
