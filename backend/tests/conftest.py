"""
Shared fixtures for course planner tests.

Tracks are laid out due north along a meridian, where one degree of
latitude is exactly EARTH_RADIUS_M * pi / 180 meters, so sample
distances are known in advance.
"""

import math

import pytest

from courseplanner.features.track import (
    ElevationSmoother,
    SmoothingConfig,
    TrackNormalizer,
    TrackSample,
)
from courseplanner.shared.geo import EARTH_RADIUS_M

METERS_PER_DEGREE_LAT = EARTH_RADIUS_M * math.pi / 180


def build_samples(distances, elevations=None, lng=0.0):
    """TrackSamples at the given distances north of (0, lng)."""
    return [
        TrackSample(
            sequence_index=i,
            lat=d / METERS_PER_DEGREE_LAT,
            lng=lng,
            elevation_m=None if elevations is None else elevations[i],
        )
        for i, d in enumerate(distances)
    ]


def hill_elevation(d):
    """Flat 2 km at 100 m, 10% up for 2 km, 10% down for 2 km, flat 2 km."""
    if d < 2000:
        return 100.0
    if d < 4000:
        return 100.0 + 0.1 * (d - 2000)
    if d < 6000:
        return 300.0 - 0.1 * (d - 4000)
    return 100.0


def smooth(samples, config=None):
    points = TrackNormalizer().normalize(samples)
    return ElevationSmoother(config or SmoothingConfig()).smooth(points)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_factory():
    """Build samples from distances (and optional elevations)."""
    return build_samples


@pytest.fixture
def flat_10k_samples():
    """Flat 10 km course, one sample every 100 m at 100 m elevation."""
    distances = [i * 100.0 for i in range(101)]
    return build_samples(distances, [100.0] * len(distances))


@pytest.fixture
def flat_10k_points(flat_10k_samples):
    """Smoothed points for the flat 10 km course."""
    return smooth(flat_10k_samples)


@pytest.fixture
def hill_samples():
    """8 km hill course sampled every 10 m."""
    distances = [i * 10.0 for i in range(801)]
    return build_samples(distances, [hill_elevation(d) for d in distances])


@pytest.fixture
def hill_points(hill_samples):
    """Smoothed points for the hill course (default smoothing)."""
    return smooth(hill_samples)


@pytest.fixture
def smooth_factory():
    """Normalize and smooth samples (default smoothing unless given)."""
    return smooth


@pytest.fixture
def hill_elevation_fn():
    return hill_elevation
