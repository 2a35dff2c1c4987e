"""
Pacing calculators.

Components:
- GradeAdjustmentModel: Base class for grade -> pace multiplier curves
- PolynomialGradeModel / StravaGradeModel / MinettiGradeModel
- StrategyProfile: Flat or linear pace shape over distance
"""

from .gap import (
    GradeAdjustmentModel,
    PolynomialGradeModel,
    StravaGradeModel,
    MinettiGradeModel,
    STRAVA_GAP_TABLE,
    get_grade_model,
)
from .strategy import StrategyProfile

__all__ = [
    # Grade models
    "GradeAdjustmentModel",
    "PolynomialGradeModel",
    "StravaGradeModel",
    "MinettiGradeModel",
    "STRAVA_GAP_TABLE",
    "get_grade_model",
    # Strategy
    "StrategyProfile",
]
