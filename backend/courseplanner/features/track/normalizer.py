"""
Track Normalizer

Turns raw track samples into a distance-indexed route profile.
"""

import logging
from typing import List, Optional, Sequence

from courseplanner.features.track.models import TrackSample, NormalizedPoint
from courseplanner.shared.elevation import interpolate_missing
from courseplanner.shared.errors import InsufficientDataError
from courseplanner.shared.geo import haversine_m, is_valid_coordinate

logger = logging.getLogger(__name__)


class _MergedPoint:
    """Accumulator for samples collapsed into one route point."""

    __slots__ = ("sample", "distance_m", "elevation_sum", "elevation_count")

    def __init__(self, sample: TrackSample, distance_m: float):
        self.sample = sample
        self.distance_m = distance_m
        self.elevation_sum = 0.0
        self.elevation_count = 0
        self.add_elevation(sample.elevation_m)

    def add_elevation(self, elevation_m: Optional[float]) -> None:
        if elevation_m is not None:
            self.elevation_sum += elevation_m
            self.elevation_count += 1

    @property
    def elevation_m(self) -> Optional[float]:
        if self.elevation_count == 0:
            return None
        return self.elevation_sum / self.elevation_count


class TrackNormalizer:
    """
    Computes cumulative distance and cleans up GPS jitter.

    Output guarantees:
    - distance of the first point is 0
    - distances strictly increase (consecutive points are at least
      min_point_spacing_m apart)
    - elevation is either known for every point or None for every point

    Example usage:
        normalizer = TrackNormalizer(min_point_spacing_m=0.5)
        points = normalizer.normalize(samples)
    """

    # Default merge distance for near-duplicate positions
    MIN_POINT_SPACING_M = 0.5

    def __init__(self, min_point_spacing_m: float = MIN_POINT_SPACING_M):
        self.min_point_spacing_m = min_point_spacing_m

    def normalize(self, samples: Sequence[TrackSample]) -> List[NormalizedPoint]:
        """
        Normalize raw samples.

        Args:
            samples: Raw samples in any order (ordered by sequence_index)

        Returns:
            List of NormalizedPoint

        Raises:
            InsufficientDataError: Fewer than 2 usable points
        """
        if len(samples) < 2:
            raise InsufficientDataError(
                f"Track needs at least 2 points, got {len(samples)}"
            )

        ordered = sorted(samples, key=lambda s: s.sequence_index)
        valid = self._drop_invalid(ordered)
        merged = self._merge_close_points(valid)

        if len(merged) < 2:
            raise InsufficientDataError(
                f"Track needs at least 2 distinct points, got {len(merged)} "
                f"after merging points closer than {self.min_point_spacing_m} m"
            )

        distances = [m.distance_m for m in merged]
        elevations = interpolate_missing(distances, [m.elevation_m for m in merged])

        points = [
            NormalizedPoint(
                distance_m=m.distance_m,
                lat=m.sample.lat,
                lng=m.sample.lng,
                elevation_m=elevation,
                source_index=m.sample.sequence_index,
            )
            for m, elevation in zip(merged, elevations)
        ]

        logger.debug(
            f"Normalized {len(samples)} samples into {len(points)} points, "
            f"{points[-1].distance_m:.1f} m"
        )
        return points

    def _drop_invalid(self, samples: List[TrackSample]) -> List[TrackSample]:
        """Remove samples with non-finite or out-of-range coordinates."""
        valid = [s for s in samples if is_valid_coordinate(s.lat, s.lng)]
        dropped = len(samples) - len(valid)
        if dropped:
            logger.warning(f"Dropped {dropped} samples with invalid coordinates")
        return valid

    def _merge_close_points(self, samples: List[TrackSample]) -> List[_MergedPoint]:
        """
        Collapse samples that are closer than the spacing threshold.

        Distance is measured from the kept point, so a run of jittery
        samples never adds distance.
        """
        merged: List[_MergedPoint] = []

        for sample in samples:
            if not merged:
                merged.append(_MergedPoint(sample, 0.0))
                continue

            last = merged[-1]
            step = haversine_m(last.sample.lat, last.sample.lng, sample.lat, sample.lng)

            if step < self.min_point_spacing_m:
                last.add_elevation(sample.elevation_m)
            else:
                merged.append(_MergedPoint(sample, last.distance_m + step))

        return merged
