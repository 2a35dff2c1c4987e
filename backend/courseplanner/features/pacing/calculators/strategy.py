"""
Pacing strategy multipliers.

A strategy shapes pace over distance independently of terrain. The
multiplier averages to exactly 1.0 over the planned range, so the
strategy never changes the total time implied by the base pace.
"""

from dataclasses import dataclass

from courseplanner.shared.constants import (
    LINEAR_PERCENT_MAX,
    LINEAR_PERCENT_MIN,
    PacingStrategy,
)
from courseplanner.shared.errors import InvalidPlanConfigurationError


@dataclass(frozen=True)
class StrategyProfile:
    """
    Pace multiplier over [start_m, end_m].

    linear: 1 + p/200 at start_m, falling to 1 - p/200 at end_m.
    Positive p is a negative split (faster second half).

    Example (p = 20, 10 km):
        0 km: 1.10
        5 km: 1.00
       10 km: 0.90
    """
    strategy: PacingStrategy = PacingStrategy.FLAT
    linear_percent: float = 0.0
    start_m: float = 0.0
    end_m: float = 0.0

    def __post_init__(self):
        if self.strategy == PacingStrategy.LINEAR and not (
            LINEAR_PERCENT_MIN <= self.linear_percent <= LINEAR_PERCENT_MAX
        ):
            raise InvalidPlanConfigurationError(
                f"pacing_linear_percent must be in "
                f"[{LINEAR_PERCENT_MIN}, {LINEAR_PERCENT_MAX}], got {self.linear_percent}"
            )

    def multiplier(self, distance_m: float) -> float:
        if self.strategy != PacingStrategy.LINEAR or self.end_m <= self.start_m:
            return 1.0

        p = self.linear_percent / 100
        progress = (distance_m - self.start_m) / (self.end_m - self.start_m)
        return 1 + p / 2 - p * progress
