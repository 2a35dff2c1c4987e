"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from courseplanner.api.v1.routes import courses, plans

api_router = APIRouter()

api_router.include_router(courses.router, prefix="/courses", tags=["Courses"])
api_router.include_router(plans.router, prefix="/plans", tags=["Plans"])
