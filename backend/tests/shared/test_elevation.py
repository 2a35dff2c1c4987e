"""
Tests for shared elevation functions.
"""

import pytest

from courseplanner.shared.elevation import (
    accumulate_gain_loss,
    interpolate_missing,
    window_average,
)


# =============================================================================
# Test Interpolation
# =============================================================================

class TestInterpolateMissing:
    """Tests for interpolate_missing."""

    def test_fills_gap_by_distance(self):
        """Gap is filled proportionally to distance, not index."""
        result = interpolate_missing([0, 100, 400], [10.0, None, 50.0])
        assert result[1] == pytest.approx(20.0)

    def test_leading_and_trailing_gaps_hold_nearest(self):
        result = interpolate_missing([0, 100, 200, 300], [None, 10.0, 30.0, None])
        assert result == [10.0, 10.0, 30.0, 30.0]

    def test_all_missing_stays_missing(self):
        assert interpolate_missing([0, 100], [None, None]) == [None, None]

    def test_nothing_missing_unchanged(self):
        assert interpolate_missing([0, 1, 2], [1.0, 2.0, 3.0]) == [1.0, 2.0, 3.0]


# =============================================================================
# Test Window Average
# =============================================================================

class TestWindowAverage:
    """Tests for window_average."""

    def test_centered_window(self):
        distances = [0, 10, 20, 30, 40]
        values = [0.0, 10.0, 20.0, 30.0, 40.0]
        result = window_average(distances, values, 20)
        assert result[2] == pytest.approx(20.0)

    def test_truncates_at_boundaries(self):
        """Boundary windows only use the points that exist."""
        distances = [0, 10, 20, 30, 40]
        values = [0.0, 10.0, 20.0, 30.0, 40.0]
        result = window_average(distances, values, 20)
        assert result[0] == pytest.approx(5.0)
        assert result[4] == pytest.approx(35.0)

    def test_zero_window_returns_values(self):
        assert window_average([0, 1, 2], [3.0, 1.0, 2.0], 0) == [3.0, 1.0, 2.0]

    def test_window_is_in_meters_not_samples(self):
        """Uneven spacing: only points within half-width are averaged."""
        distances = [0, 1, 2, 3, 100]
        values = [0.0, 0.0, 0.0, 0.0, 100.0]
        result = window_average(distances, values, 10)
        assert result[3] == 0.0
        assert result[4] == 100.0

    def test_empty(self):
        assert window_average([], [], 100) == []


# =============================================================================
# Test Gain / Loss
# =============================================================================

class TestGainLoss:
    """Tests for accumulate_gain_loss."""

    def test_simple_up_down(self):
        gain, loss = accumulate_gain_loss([100, 150, 120], noise_floor_m=0)
        assert gain == pytest.approx(50)
        assert loss == pytest.approx(30)

    def test_jitter_below_floor_is_ignored(self):
        gain, loss = accumulate_gain_loss(
            [100.0, 100.4, 99.8, 100.3, 99.9], noise_floor_m=1.0
        )
        assert gain == 0.0
        assert loss == 0.0

    def test_slow_climb_still_counts(self):
        """Steps below the floor add up once they reach it."""
        elevations = [100 + 0.5 * i for i in range(21)]  # +10 m in 0.5 m steps
        gain, loss = accumulate_gain_loss(elevations, noise_floor_m=1.0)
        assert gain == pytest.approx(10.0)
        assert loss == 0.0

    def test_reversal_confirms_turning_point(self):
        """The peak counts in full once the series drops back past the floor."""
        gain, loss = accumulate_gain_loss([0, 0.5, 1.0, 1.5, 0.2], noise_floor_m=1.0)
        assert gain == pytest.approx(1.5)
        assert loss == pytest.approx(1.3)

    def test_sub_floor_wiggle_inside_climb(self):
        gain, loss = accumulate_gain_loss([0, 5, 4.5, 10], noise_floor_m=1.0)
        assert gain == pytest.approx(10.0)
        assert loss == 0.0

    def test_out_and_back_is_symmetric(self):
        """Open trend at the end of the series is counted to its extreme."""
        gain, loss = accumulate_gain_loss([0, 10, 0.5, 0], noise_floor_m=1.0)
        assert gain == pytest.approx(10.0)
        assert loss == pytest.approx(10.0)

    def test_jitter_at_end_not_counted(self):
        gain, loss = accumulate_gain_loss([0, 10, 9.6, 10.2, 9.7], noise_floor_m=1.0)
        assert gain == pytest.approx(10.2)
        assert loss == 0.0

    def test_empty(self):
        assert accumulate_gain_loss([]) == (0.0, 0.0)
