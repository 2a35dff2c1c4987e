"""
Unified constants for pacing plans and units.

This module provides a single source of truth for plan enums
across the entire application.
"""

from enum import Enum


METERS_PER_KM = 1000.0
METERS_PER_MILE = 1609.344

# Linear pacing: total percent change from start to finish
LINEAR_PERCENT_MIN = -50
LINEAR_PERCENT_MAX = 50


class PaceMode(str, Enum):
    """
    How the plan defines its pace.

    - PACE: fixed pace per unit
    - TIME: target finish time, flat-equivalent pace
    - NORMALIZED: target finish time, grade-adjusted effort
    """
    PACE = "pace"
    TIME = "time"
    NORMALIZED = "normalized"


class PacingStrategy(str, Enum):
    """Shape of pace over distance, independent of grade."""
    FLAT = "flat"
    LINEAR = "linear"


class PaceUnit(str, Enum):
    """Distance unit a pace value refers to."""
    MIN_PER_KM = "min_per_km"
    MIN_PER_MI = "min_per_mi"

    @property
    def meters(self) -> float:
        """Length of one unit in meters."""
        if self is PaceUnit.MIN_PER_MI:
            return METERS_PER_MILE
        return METERS_PER_KM


class GradeModelName(str, Enum):
    """Available grade adjustment models."""
    POLYNOMIAL = "polynomial"
    STRAVA = "strava"
    MINETTI = "minetti"
