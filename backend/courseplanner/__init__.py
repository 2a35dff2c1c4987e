"""
Course Planner backend.

Course analysis (track normalization, elevation smoothing, metrics,
waypoints) and pace planning for race courses.
"""

__version__ = "0.1.0"
