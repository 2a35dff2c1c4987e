"""
Tests for ElevationSmoother and smoothing configuration.
"""

import pytest

from courseplanner.features.track import (
    ElevationSmoother,
    SmoothingConfig,
    SmoothingOverride,
    TrackNormalizer,
    resolve_smoothing,
    smooth_pace_series,
)
from courseplanner.shared.errors import InvalidSmoothingConfigurationError


def _at(points, distance_m):
    """Point closest to a distance."""
    return min(points, key=lambda p: abs(p.distance_m - distance_m))


# =============================================================================
# Configuration
# =============================================================================

class TestSmoothingConfig:
    """Validation and override merging."""

    def test_defaults(self):
        config = SmoothingConfig()
        assert config.grade_window_m == 100.0
        assert config.sample_step_m == 50.0
        assert config.pace_smoothing_m == 300.0

    @pytest.mark.parametrize("kwargs", [
        {"grade_window_m": -1},
        {"sample_step_m": 0},
        {"sample_step_m": -10},
        {"pace_smoothing_m": -5},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidSmoothingConfigurationError):
            SmoothingConfig(**kwargs)

    def test_resolve_without_override(self):
        defaults = SmoothingConfig(grade_window_m=80)
        assert resolve_smoothing(defaults) is defaults

    def test_resolve_partial_override(self):
        """Absent override fields fall back to the defaults."""
        defaults = SmoothingConfig(grade_window_m=100, sample_step_m=50, pace_smoothing_m=300)
        resolved = resolve_smoothing(defaults, SmoothingOverride(sample_step_m=20))
        assert resolved == SmoothingConfig(
            grade_window_m=100, sample_step_m=20, pace_smoothing_m=300
        )

    def test_resolve_zero_is_not_absent(self):
        resolved = resolve_smoothing(SmoothingConfig(), SmoothingOverride(grade_window_m=0))
        assert resolved.grade_window_m == 0

    def test_resolve_invalid_override(self):
        with pytest.raises(InvalidSmoothingConfigurationError):
            resolve_smoothing(SmoothingConfig(), SmoothingOverride(sample_step_m=-1))


# =============================================================================
# Smoothing
# =============================================================================

class TestElevationSmoother:
    """Smoothed elevation and grade."""

    def test_same_cardinality_and_distances(self, hill_samples):
        points = TrackNormalizer().normalize(hill_samples)
        smoothed = ElevationSmoother().smooth(points)
        assert len(smoothed) == len(points)
        assert [p.distance_m for p in smoothed] == [p.distance_m for p in points]

    def test_flat_course_has_zero_grade(self, flat_10k_points):
        assert all(p.grade == 0.0 for p in flat_10k_points)
        assert all(p.smoothed_elevation_m == pytest.approx(100.0) for p in flat_10k_points)

    def test_uniform_slope_grade(self, sample_factory, smooth_factory):
        distances = [i * 10.0 for i in range(201)]
        samples = sample_factory(distances, [0.05 * d for d in distances])
        points = smooth_factory(samples)
        assert _at(points, 1000).grade == pytest.approx(0.05, rel=1e-6)
        assert _at(points, 1000).grade_percent == pytest.approx(5.0, rel=1e-6)

    def test_grade_zero_near_ends(self, hill_points):
        """Points closer than sample_step_m to either end report 0."""
        step = 50.0
        total = hill_points[-1].distance_m
        near_ends = [
            p for p in hill_points
            if p.distance_m < step or p.distance_m > total - step
        ]
        assert near_ends
        assert all(p.grade == 0.0 for p in near_ends)

    def test_hill_grades(self, hill_points):
        assert _at(hill_points, 3000).grade == pytest.approx(0.10, rel=1e-6)
        assert _at(hill_points, 5000).grade == pytest.approx(-0.10, rel=1e-6)
        assert _at(hill_points, 1000).grade == pytest.approx(0.0, abs=1e-9)

    def test_smoothing_lowers_peak(self, hill_samples, smooth_factory):
        raw = smooth_factory(hill_samples, SmoothingConfig(grade_window_m=0))
        smoothed = smooth_factory(hill_samples, SmoothingConfig(grade_window_m=100))
        assert _at(raw, 4000).smoothed_elevation_m == pytest.approx(300.0)
        assert _at(smoothed, 4000).smoothed_elevation_m < 299.0

    def test_zero_window_keeps_raw_elevation(self, hill_samples, smooth_factory):
        points = smooth_factory(hill_samples, SmoothingConfig(grade_window_m=0))
        assert all(
            p.smoothed_elevation_m == pytest.approx(p.elevation_m) for p in points
        )

    def test_grade_clamped(self, sample_factory, smooth_factory):
        distances = [i * 1.0 for i in range(101)]
        samples = sample_factory(distances, [3.0 * d for d in distances])
        points = smooth_factory(samples, SmoothingConfig(grade_window_m=0, sample_step_m=5))
        assert max(p.grade for p in points) == 1.0

    def test_no_elevation(self, sample_factory, smooth_factory):
        points = smooth_factory(sample_factory([0, 100, 200, 300]))
        assert all(p.smoothed_elevation_m is None for p in points)
        assert all(p.grade == 0.0 for p in points)

    def test_empty(self):
        assert ElevationSmoother().smooth([]) == []


# =============================================================================
# Sampling density
# =============================================================================

class TestDensityInvariance:
    """Windows are in meters, so resampling barely changes the profile."""

    def test_resampled_profile_matches(self, sample_factory, smooth_factory, hill_elevation_fn):
        coarse_d = [i * 10.0 for i in range(801)]
        fine_d = [i * 5.0 for i in range(1601)]
        coarse = smooth_factory(sample_factory(coarse_d, [hill_elevation_fn(d) for d in coarse_d]))
        fine = smooth_factory(sample_factory(fine_d, [hill_elevation_fn(d) for d in fine_d]))

        assert fine[-1].distance_m == pytest.approx(coarse[-1].distance_m, abs=0.5)
        for d in (1000, 3000, 4000, 5000, 7000):
            assert _at(fine, d).smoothed_elevation_m == pytest.approx(
                _at(coarse, d).smoothed_elevation_m, abs=0.5
            )
            assert _at(fine, d).grade == pytest.approx(_at(coarse, d).grade, abs=0.01)


# =============================================================================
# Pace series
# =============================================================================

class TestPaceSeries:

    def test_zero_window(self):
        assert smooth_pace_series([0, 100], [300.0, 360.0], 0) == [300.0, 360.0]

    def test_averages_in_window(self):
        result = smooth_pace_series([0, 100, 200], [300.0, 360.0, 300.0], 300)
        assert result[1] == pytest.approx(320.0)
