"""
Grade adjustment models for pace planning.

A grade adjustment model maps grade (percent, positive = uphill) to a
pace multiplier: 1.0 on the flat, above 1.0 when slower, below 1.0
when faster. Every model must be slower on steep descents than on
moderate ones, because braking costs time.

Three models are available:
1. polynomial - Constrained 4th-degree polynomial with linear tails (default)
2. strava - Strava empirical table (interpolated)
3. minetti - Minetti energy cost, pace ~ energy^0.75

References:
- Minetti et al. (2002) - Energy cost of walking/running at extreme slopes
  https://pubmed.ncbi.nlm.nih.gov/12183501/
- Strava Engineering (2017) - An Improved GAP Model
  https://medium.com/strava-engineering/an-improved-gap-model-8b07ae8886c3
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from courseplanner.shared.constants import GradeModelName


class GradeAdjustmentModel(ABC):
    """Pace multiplier as a function of grade."""

    name: str = ""

    @abstractmethod
    def factor(self, grade_percent: float) -> float:
        """
        Args:
            grade_percent: Grade as percentage (10 = 10% uphill)

        Returns:
            Pace multiplier (1.0 = flat)
        """

    def describe(self, gradients: Optional[List[int]] = None) -> Dict[str, float]:
        """Example factors for API responses and debugging."""
        if gradients is None:
            gradients = [-30, -20, -10, -5, 0, 5, 10, 20, 30]
        return {f"{g}%": round(self.factor(g), 3) for g in gradients}


# =============================================================================
# POLYNOMIAL MODEL
# =============================================================================

@dataclass(frozen=True)
class PolynomialGradeModel(GradeAdjustmentModel):
    """
    Constrained 4th-degree polynomial between left_end and right_end,
    continued by tangent lines outside that range.

    Curve shape (default coefficients):
        -8%: ~0.87 (fastest)
         0%: 1.00
        10%: ~1.49
        20%: ~2.20

    Coefficients are fields so alternative curves can be plugged in.
    """
    a4: float = -4.3144778100289634e-7
    a3: float = -2.930257313334705e-6
    a2: float = 0.0018738529522439088
    a1: float = 0.03076354335605815
    a0: float = 1.0

    left_end: float = -32.25
    right_end: float = 32.1
    slope_left: float = -0.041356411457441594
    intercept_left: float = 0.25463237016735074
    slope_right: float = 0.08492425850523927
    intercept_right: float = 0.6372687773774661

    max_abs_grade: float = 50.0
    min_factor: float = 0.5
    max_factor: float = 3.0

    name = GradeModelName.POLYNOMIAL.value

    def factor(self, grade_percent: float) -> float:
        g = max(-self.max_abs_grade, min(grade_percent, self.max_abs_grade))
        raw = self.raw_factor(g)
        return max(self.min_factor, min(raw, self.max_factor))

    def raw_factor(self, g: float) -> float:
        """Unclamped curve value."""
        if g < self.left_end:
            return self.slope_left * g + self.intercept_left
        if g > self.right_end:
            return self.slope_right * g + self.intercept_right
        return (
            self.a4 * g**4
            + self.a3 * g**3
            + self.a2 * g**2
            + self.a1 * g
            + self.a0
        )


# =============================================================================
# STRAVA MODEL
# =============================================================================
# Based on Strava's 2017 improved GAP model
# Key: gradient percent, Value: pace adjustment factor (1.0 = flat)

STRAVA_GAP_TABLE = {
    -30: 1.15,   # Very steep descent: significant braking required
    -25: 1.05,
    -20: 0.95,
    -15: 0.90,
    -10: 0.88,
    -9:  0.88,   # Optimal descent point
    -5:  0.92,
    -3:  0.96,
    0:   1.00,   # Flat (reference)
    3:   1.08,
    5:   1.15,
    8:   1.28,
    10:  1.38,
    12:  1.50,
    15:  1.70,
    18:  1.95,
    20:  2.15,
    25:  2.70,
    30:  3.30,
    35:  4.00,
    40:  4.80,
    45:  5.70,
}


class StravaGradeModel(GradeAdjustmentModel):
    """
    Empirical model from real athlete data, linearly interpolated.

    Grades outside the table use the nearest table value.
    """

    name = GradeModelName.STRAVA.value

    def __init__(self, table: Optional[Dict[int, float]] = None):
        self.table = table or STRAVA_GAP_TABLE
        self._gradients = sorted(self.table.keys())

    def factor(self, grade_percent: float) -> float:
        gradients = self._gradients

        if grade_percent <= gradients[0]:
            return self.table[gradients[0]]
        if grade_percent >= gradients[-1]:
            return self.table[gradients[-1]]

        for g1, g2 in zip(gradients, gradients[1:]):
            if g1 <= grade_percent <= g2:
                v1, v2 = self.table[g1], self.table[g2]
                t = (grade_percent - g1) / (g2 - g1)
                return v1 + t * (v2 - v1)

        return 1.0


# =============================================================================
# MINETTI MODEL
# =============================================================================

class MinettiGradeModel(GradeAdjustmentModel):
    """
    Energy cost model from oxygen consumption measurements.

    More conservative on descents than Strava.

    Formula: C = 155.4i^5 - 30.4i^4 - 43.3i^3 + 46.3i^2 + 19.5i + 3.6
    where i is grade as decimal and C is cost in J/kg/m.
    """

    FLAT_ENERGY_COST = 3.6      # J/kg/m on flat ground
    MIN_FACTOR = 0.5
    MAX_FACTOR = 4.0

    name = GradeModelName.MINETTI.value

    def factor(self, grade_percent: float) -> float:
        energy_ratio = self.energy_cost_ratio(grade_percent / 100)
        # Pace scales roughly with energy^0.75
        pace_adj = max(energy_ratio, 0.0) ** 0.75
        return max(self.MIN_FACTOR, min(pace_adj, self.MAX_FACTOR))

    def energy_cost_ratio(self, i: float) -> float:
        """Energy cost relative to flat for grade i (decimal)."""
        cost = (
            155.4 * i**5
            - 30.4 * i**4
            - 43.3 * i**3
            + 46.3 * i**2
            + 19.5 * i
            + self.FLAT_ENERGY_COST
        )
        return cost / self.FLAT_ENERGY_COST


def get_grade_model(
    name: Union[GradeModelName, str] = GradeModelName.POLYNOMIAL
) -> GradeAdjustmentModel:
    """
    Build a grade model by name.

    Raises:
        ValueError: Unknown model name
    """
    model_name = GradeModelName(name)
    if model_name == GradeModelName.STRAVA:
        return StravaGradeModel()
    if model_name == GradeModelName.MINETTI:
        return MinettiGradeModel()
    return PolynomialGradeModel()
