"""
Tests for CourseMetricsAggregator.
"""

import pytest

from courseplanner.features.course import CourseMetricsAggregator
from courseplanner.features.track import SmoothingConfig
from courseplanner.shared.errors import EmptyProfileError


@pytest.fixture
def aggregator():
    return CourseMetricsAggregator(noise_floor_m=1.0)


# =============================================================================
# Totals
# =============================================================================

class TestAggregate:
    """Course totals."""

    def test_flat_course(self, aggregator, flat_10k_points):
        metrics = aggregator.aggregate(flat_10k_points)
        assert metrics.total_distance_m == pytest.approx(10000.0, rel=1e-9)
        assert metrics.total_distance_km == pytest.approx(10.0, rel=1e-9)
        assert metrics.elevation_gain_m == 0.0
        assert metrics.elevation_loss_m == 0.0
        assert metrics.min_elevation_m == pytest.approx(100.0)
        assert metrics.max_elevation_m == pytest.approx(100.0)

    def test_hill_course(self, aggregator, hill_points):
        """Smoothed peak is ~297.3 m, so gain/loss ~197 m."""
        metrics = aggregator.aggregate(hill_points)
        assert metrics.elevation_gain_m == pytest.approx(197.3, abs=1.5)
        assert metrics.elevation_loss_m == pytest.approx(197.3, abs=1.5)
        assert metrics.elevation_gain_m == pytest.approx(metrics.elevation_loss_m, abs=0.5)
        assert metrics.max_elevation_m == pytest.approx(297.3, abs=0.1)
        assert metrics.min_elevation_m == pytest.approx(100.0)

    def test_no_elevation_is_undefined_not_zero(self, aggregator, sample_factory, smooth_factory):
        points = smooth_factory(sample_factory([0, 100, 200]))
        metrics = aggregator.aggregate(points)
        assert metrics.total_distance_m == pytest.approx(200.0)
        assert metrics.elevation_gain_m is None
        assert metrics.elevation_loss_m is None
        assert not metrics.has_elevation

    def test_fewer_than_two_points(self, aggregator, flat_10k_points):
        with pytest.raises(EmptyProfileError):
            aggregator.aggregate(flat_10k_points[:1])
        with pytest.raises(EmptyProfileError):
            aggregator.aggregate([])


# =============================================================================
# Noise
# =============================================================================

class TestNoiseFloor:
    """GPS altimeter noise must not inflate gain/loss."""

    def test_jitter_ignored(self, aggregator, sample_factory, smooth_factory):
        distances = [i * 10.0 for i in range(200)]
        elevations = [100.0 + (0.4 if i % 2 else -0.4) for i in range(200)]
        points = smooth_factory(
            sample_factory(distances, elevations), SmoothingConfig(grade_window_m=0)
        )
        metrics = aggregator.aggregate(points)
        assert metrics.elevation_gain_m == 0.0
        assert metrics.elevation_loss_m == 0.0

    def test_gain_stable_under_resampling(
        self, aggregator, sample_factory, smooth_factory, hill_elevation_fn
    ):
        coarse_d = [i * 10.0 for i in range(801)]
        fine_d = [i * 5.0 for i in range(1601)]
        coarse = aggregator.aggregate(smooth_factory(
            sample_factory(coarse_d, [hill_elevation_fn(d) for d in coarse_d])
        ))
        fine = aggregator.aggregate(smooth_factory(
            sample_factory(fine_d, [hill_elevation_fn(d) for d in fine_d])
        ))
        assert fine.total_distance_m == pytest.approx(coarse.total_distance_m, abs=0.5)
        assert fine.elevation_gain_m == pytest.approx(coarse.elevation_gain_m, abs=1.0)
        assert fine.elevation_loss_m == pytest.approx(coarse.elevation_loss_m, abs=1.0)


# =============================================================================
# Segments
# =============================================================================

class TestSegmentGainLoss:

    def test_climb_only(self, aggregator, hill_points):
        gain, loss = aggregator.segment_gain_loss(hill_points, 2000, 4000)
        assert 194 < gain < 197
        assert loss == 0.0

    def test_no_elevation(self, aggregator, sample_factory, smooth_factory):
        points = smooth_factory(sample_factory([0, 100, 200]))
        assert aggregator.segment_gain_loss(points, 0, 200) == (None, None)
