"""
Plan Routes

Endpoints for pacing schedules.
"""

from fastapi import APIRouter, Depends, HTTPException

from courseplanner.api.v1.routes.courses import get_course_service
from courseplanner.features.course import CourseService
from courseplanner.features.pacing.schemas import ScheduleRequest, ScheduleResponse
from courseplanner.features.track import profile_from_geojson
from courseplanner.shared.errors import CoursePlannerError

router = APIRouter()


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule_plan(
    request: ScheduleRequest,
    service: CourseService = Depends(get_course_service)
):
    """
    Compute the pacing schedule for a plan on a stored course.

    The profile is re-smoothed with the course's smoothing settings
    before grades are looked up.
    """
    override = request.smoothing.to_override() if request.smoothing else None

    try:
        analysis = service.resmooth(profile_from_geojson(request.profile), override)
        schedule = service.schedule(
            analysis.points,
            [w.to_waypoint() for w in request.waypoints],
            request.plan.to_plan(),
            override,
        )
    except CoursePlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ScheduleResponse.from_schedule(schedule)
