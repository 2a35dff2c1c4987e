"""
Feature modules for the course planner.

Each feature is a self-contained module with:
- models.py - Dataclasses for computation
- schemas.py - Pydantic schemas (API boundary)
- service.py / engine.py - Business logic
- calculators/ - Calculation logic (optional)
"""
