"""
Course module.

Usage:
    from courseplanner.features.course import CourseService, CourseMetricsAggregator

Components:
- CourseMetricsAggregator: Distance, gain/loss, min/max elevation
- CourseService: Normalize -> smooth -> metrics -> waypoints, and scheduling
- CourseAnalysis: Derived course data
"""

from .metrics import CourseMetrics, CourseMetricsAggregator
from .service import CourseService, CourseAnalysis

__all__ = [
    # Metrics
    "CourseMetrics",
    "CourseMetricsAggregator",
    # Service
    "CourseService",
    "CourseAnalysis",
]
