"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Tuple

# WGS84 mean Earth radius in meters
EARTH_RADIUS_M = 6371008.8


def haversine_m(
    lat1: float, lng1: float,
    lat2: float, lng2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lng1: First point coordinates (degrees)
        lat2, lng2: Second point coordinates (degrees)

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def project_equirectangular(
    lat: float,
    lng: float,
    ref_lat: float
) -> Tuple[float, float]:
    """
    Project a coordinate onto a local plane (equirectangular).

    Good enough for nearest-point searches over a single course, where
    distances are small compared to the Earth radius.

    Args:
        lat, lng: Coordinate to project (degrees)
        ref_lat: Reference latitude for the longitude scale (degrees)

    Returns:
        (x, y) in meters
    """
    x = math.radians(lng) * math.cos(math.radians(ref_lat)) * EARTH_RADIUS_M
    y = math.radians(lat) * EARTH_RADIUS_M
    return x, y


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """Check that lat/lng are finite and inside their ranges."""
    if lat is None or lng is None:
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def calculate_grade(run_m: float, rise_m: float) -> float:
    """
    Calculate grade as decimal (rise / run).

    Args:
        run_m: Horizontal distance in meters
        rise_m: Elevation difference in meters

    Returns:
        Grade as decimal (0.10 = 10%), 0 for non-positive run
    """
    if run_m <= 0:
        return 0.0
    return rise_m / run_m


def grade_to_percent(grade: float) -> float:
    """Convert grade decimal to percent."""
    return grade * 100
