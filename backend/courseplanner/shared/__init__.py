"""
Shared utilities (NOT business logic).

Usage:
    from courseplanner.shared import haversine_m, window_average
    from courseplanner.shared.errors import InsufficientDataError
"""
from .geo import (
    haversine_m,
    project_equirectangular,
    is_valid_coordinate,
    calculate_grade,
    grade_to_percent,
    EARTH_RADIUS_M,
)
from .elevation import (
    interpolate_missing,
    window_average,
    accumulate_gain_loss,
)
from .constants import (
    PaceMode,
    PacingStrategy,
    PaceUnit,
    GradeModelName,
    METERS_PER_KM,
    METERS_PER_MILE,
    LINEAR_PERCENT_MIN,
    LINEAR_PERCENT_MAX,
)
from .errors import (
    CoursePlannerError,
    InsufficientDataError,
    TrackTooLargeError,
    EmptyProfileError,
    WaypointOutOfBoundsError,
    WaypointNotFoundError,
    InvalidPlanConfigurationError,
    InvalidSmoothingConfigurationError,
)

__all__ = [
    # geo
    "haversine_m",
    "project_equirectangular",
    "is_valid_coordinate",
    "calculate_grade",
    "grade_to_percent",
    "EARTH_RADIUS_M",
    # elevation
    "interpolate_missing",
    "window_average",
    "accumulate_gain_loss",
    # constants
    "PaceMode",
    "PacingStrategy",
    "PaceUnit",
    "GradeModelName",
    "METERS_PER_KM",
    "METERS_PER_MILE",
    "LINEAR_PERCENT_MIN",
    "LINEAR_PERCENT_MAX",
    # errors
    "CoursePlannerError",
    "InsufficientDataError",
    "TrackTooLargeError",
    "EmptyProfileError",
    "WaypointOutOfBoundsError",
    "WaypointNotFoundError",
    "InvalidPlanConfigurationError",
    "InvalidSmoothingConfigurationError",
]
