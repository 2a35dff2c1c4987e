"""
Error taxonomy for the course planner core.

Every failure in the core is a local validation failure. None of them
are retried; callers (the API layer) translate them into responses.
"""


class CoursePlannerError(ValueError):
    """Base course planner error."""
    pass


class InsufficientDataError(CoursePlannerError):
    """Fewer than 2 usable track points."""
    pass


class TrackTooLargeError(CoursePlannerError):
    """Track has more samples than the configured limit."""

    def __init__(self, point_count: int, max_points: int):
        self.point_count = point_count
        self.max_points = max_points
        super().__init__(f"Track has {point_count} points, limit is {max_points}")


class EmptyProfileError(CoursePlannerError):
    """Metrics requested for a profile with fewer than 2 points."""
    pass


class WaypointOutOfBoundsError(CoursePlannerError):
    """Snap/move target outside the course distance range."""

    def __init__(self, distance_m: float, total_distance_m: float):
        self.distance_m = distance_m
        self.total_distance_m = total_distance_m
        super().__init__(
            f"Waypoint distance {distance_m:.1f} m is outside the course "
            f"range [0, {total_distance_m:.1f}] m"
        )


class WaypointNotFoundError(CoursePlannerError):
    """Waypoint id not present in the course."""

    def __init__(self, waypoint_id: str):
        self.waypoint_id = waypoint_id
        super().__init__(f"Waypoint not found: {waypoint_id}")


class InvalidPlanConfigurationError(CoursePlannerError):
    """Plan cannot be scheduled (pace, target, strategy or waypoint order)."""
    pass


class InvalidSmoothingConfigurationError(CoursePlannerError):
    """Smoothing window/step values out of range."""
    pass
