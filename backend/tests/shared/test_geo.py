"""
Tests for shared geographic functions.

Tests the haversine distance, projection and grade helpers.
"""

import math

import pytest

from courseplanner.shared.geo import (
    EARTH_RADIUS_M,
    calculate_grade,
    grade_to_percent,
    haversine_m,
    is_valid_coordinate,
    project_equirectangular,
)


# =============================================================================
# Test Haversine Distance
# =============================================================================

class TestHaversine:
    """Tests for haversine_m function."""

    def test_same_point(self):
        """Distance between same point should be 0."""
        assert haversine_m(43.0, 76.0, 43.0, 76.0) == 0.0

    def test_one_degree_latitude(self):
        """One degree along a meridian is R * pi / 180."""
        dist = haversine_m(0.0, 0.0, 1.0, 0.0)
        assert dist == pytest.approx(EARTH_RADIUS_M * math.pi / 180, rel=1e-9)

    def test_small_distance(self):
        """0.001 degree latitude is about 111 meters."""
        dist = haversine_m(43.0, 76.0, 43.001, 76.0)
        assert 110 < dist < 112

    def test_symmetry(self):
        """Distance A->B should equal B->A."""
        dist_ab = haversine_m(43.0, 76.0, 44.0, 77.0)
        dist_ba = haversine_m(44.0, 77.0, 43.0, 76.0)
        assert dist_ab == pytest.approx(dist_ba, rel=1e-12)

    def test_longitude_shrinks_with_latitude(self):
        """One degree of longitude is shorter at 60N than at the equator."""
        equator = haversine_m(0.0, 0.0, 0.0, 1.0)
        north = haversine_m(60.0, 0.0, 60.0, 1.0)
        assert north == pytest.approx(equator / 2, rel=0.01)


# =============================================================================
# Test Projection
# =============================================================================

class TestProjection:
    """Tests for project_equirectangular."""

    def test_matches_haversine_for_short_distances(self):
        """Projected distance ~ great-circle distance for nearby points."""
        x1, y1 = project_equirectangular(46.0, 7.0, 46.0)
        x2, y2 = project_equirectangular(46.003, 7.004, 46.0)
        planar = math.hypot(x2 - x1, y2 - y1)
        assert planar == pytest.approx(haversine_m(46.0, 7.0, 46.003, 7.004), rel=1e-3)


# =============================================================================
# Test Coordinate Validation
# =============================================================================

class TestValidCoordinate:
    """Tests for is_valid_coordinate."""

    @pytest.mark.parametrize("lat,lng", [(0, 0), (90, 180), (-90, -180), (46.5, 7.2)])
    def test_valid(self, lat, lng):
        assert is_valid_coordinate(lat, lng)

    @pytest.mark.parametrize("lat,lng", [
        (91, 0), (0, 181), (float("nan"), 0), (0, float("inf")), (None, 0),
    ])
    def test_invalid(self, lat, lng):
        assert not is_valid_coordinate(lat, lng)


# =============================================================================
# Test Grade
# =============================================================================

class TestGrade:
    """Tests for grade helpers."""

    def test_uphill(self):
        assert calculate_grade(100, 10) == pytest.approx(0.10)

    def test_downhill(self):
        assert calculate_grade(100, -5) == pytest.approx(-0.05)

    def test_zero_run(self):
        """Zero run returns 0 instead of dividing by zero."""
        assert calculate_grade(0, 10) == 0.0

    def test_to_percent(self):
        assert grade_to_percent(0.15) == pytest.approx(15.0)
