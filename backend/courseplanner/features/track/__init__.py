"""
Track processing module.

Usage:
    from courseplanner.features.track import TrackNormalizer, ElevationSmoother
    from courseplanner.features.track import profile_to_geojson

Components:
- TrackNormalizer: Raw samples -> distance-indexed points
- ElevationSmoother: Smoothed elevation and grade per point
- SmoothingConfig / SmoothingOverride: Window parameters and per-course merge
- profile_to_geojson / profile_from_geojson: Stored profile format
"""

from .models import TrackSample, NormalizedPoint, SmoothedPoint
from .normalizer import TrackNormalizer
from .smoothing import (
    SmoothingConfig,
    SmoothingOverride,
    ElevationSmoother,
    resolve_smoothing,
    smooth_pace_series,
)
from .geojson import profile_to_geojson, profile_from_geojson

__all__ = [
    # Models
    "TrackSample",
    "NormalizedPoint",
    "SmoothedPoint",
    # Services
    "TrackNormalizer",
    "ElevationSmoother",
    "SmoothingConfig",
    "SmoothingOverride",
    "resolve_smoothing",
    "smooth_pace_series",
    # Serialization
    "profile_to_geojson",
    "profile_from_geojson",
]
