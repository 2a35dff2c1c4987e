"""
Track point types.

Pure dataclasses, NO external imports, so every feature can depend
on them without circular imports.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrackSample:
    """
    A raw position from an uploaded track file.

    Sequence order is the only defined order; there is no distance yet.
    """
    sequence_index: int
    lat: float
    lng: float
    elevation_m: Optional[float] = None


@dataclass(frozen=True)
class NormalizedPoint:
    """A point on the route with cumulative distance from the start."""
    distance_m: float
    lat: float
    lng: float
    elevation_m: Optional[float]
    source_index: int = -1  # sequence_index of the first merged sample


@dataclass(frozen=True)
class SmoothedPoint:
    """
    NormalizedPoint plus smoothed elevation and grade.

    Derived data: rebuilt from NormalizedPoints whenever the
    smoothing window changes.
    """
    distance_m: float
    lat: float
    lng: float
    elevation_m: Optional[float]
    smoothed_elevation_m: Optional[float]
    grade: float  # rise/run, signed (0.10 = 10% uphill)
    source_index: int = -1

    @property
    def grade_percent(self) -> float:
        """Grade as percentage."""
        return self.grade * 100
