"""
Course Routes

Endpoints for course analysis and waypoint editing.
Stateless: the caller sends stored course data and persists the result.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from courseplanner.features.course import CourseService
from courseplanner.features.course.schemas import (
    CourseAnalyzeRequest,
    CourseAnalyzeResponse,
    CourseMetricsSchema,
    SmoothingConfigSchema,
    WaypointListResponse,
    WaypointPlaceRequest,
    WaypointSchema,
    WaypointSegmentSchema,
    WaypointUpdateRequest,
)
from courseplanner.features.track import profile_from_geojson
from courseplanner.features.waypoints import (
    WaypointLocator,
    build_segments,
    find_waypoint,
    quality,
    update_waypoint_details,
)
from courseplanner.shared.errors import (
    CoursePlannerError,
    TrackTooLargeError,
    WaypointNotFoundError,
    WaypointOutOfBoundsError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_course_service() -> CourseService:
    """Course service built from global settings."""
    return CourseService()


@router.post("/analyze", response_model=CourseAnalyzeResponse)
async def analyze_course(
    request: CourseAnalyzeRequest,
    service: CourseService = Depends(get_course_service)
):
    """
    Analyze a newly uploaded track.

    Returns the profile GeoJSON, course metrics, automatic waypoints
    (start, finish and snapped track markers) and their segments.
    """
    try:
        analysis = service.analyze(
            request.to_samples(),
            markers=[m.to_marker() for m in request.markers],
            override=request.smoothing.to_override() if request.smoothing else None,
            course_id=request.course_id,
        )
    except TrackTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except CoursePlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    segments = build_segments(
        analysis.waypoints,
        analysis.points,
        service.settings.elevation_noise_floor_m,
    )

    return CourseAnalyzeResponse(
        profile=analysis.to_geojson(),
        metrics=CourseMetricsSchema.from_metrics(analysis.metrics),
        smoothing=SmoothingConfigSchema.from_config(analysis.smoothing),
        waypoints=[WaypointSchema.from_waypoint(w) for w in analysis.waypoints],
        segments=[WaypointSegmentSchema.from_segment(s) for s in segments],
    )


@router.post("/waypoints", response_model=WaypointListResponse)
async def place_waypoint(request: WaypointPlaceRequest):
    """
    Place a waypoint at a map click (lat/lng) or chart click (distance_m).

    The waypoint snaps to the nearest route point; all waypoints are
    reordered by distance.
    """
    try:
        locator = WaypointLocator(profile_from_geojson(request.profile))
        waypoints, waypoint = locator.place_waypoint(
            [w.to_waypoint() for w in request.waypoints],
            request.name,
            lat=request.lat,
            lng=request.lng,
            distance_m=request.distance_m,
            tags=request.tags,
            icon=request.icon,
            description=request.description,
            course_id=request.course_id,
        )
    except WaypointOutOfBoundsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except CoursePlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    snap_distance = None
    if request.lat is not None and request.lng is not None:
        snap_distance = locator.snap_to_coordinate(request.lat, request.lng).snap_distance_m
        logger.debug(f"Waypoint '{request.name}' snapped {snap_distance:.1f} m")

    return _waypoint_response(waypoints, waypoint.id, snap_distance)


@router.put("/waypoints/{waypoint_id}", response_model=WaypointListResponse)
async def update_waypoint(waypoint_id: str, request: WaypointUpdateRequest):
    """
    Move a waypoint and/or update its name, tags, icon or description.
    """
    waypoints = [w.to_waypoint() for w in request.waypoints]
    snap_distance = None

    try:
        if request.moves:
            locator = WaypointLocator(profile_from_geojson(request.profile))
            waypoints = locator.move_waypoint(
                waypoints,
                waypoint_id,
                lat=request.lat,
                lng=request.lng,
                distance_m=request.distance_m,
            )
            if request.distance_m is None:
                snap_distance = locator.snap_to_coordinate(
                    request.lat, request.lng
                ).snap_distance_m

        waypoints = update_waypoint_details(
            waypoints,
            waypoint_id,
            name=request.name,
            tags=request.tags,
            icon=request.icon,
            description=request.description,
        )
    except WaypointNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WaypointOutOfBoundsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except CoursePlannerError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _waypoint_response(waypoints, waypoint_id, snap_distance)


def _waypoint_response(waypoints, waypoint_id, snap_distance):
    ordered = sorted(waypoints, key=lambda w: w.order)
    return WaypointListResponse(
        waypoints=[WaypointSchema.from_waypoint(w) for w in ordered],
        waypoint=WaypointSchema.from_waypoint(find_waypoint(ordered, waypoint_id)),
        snap_distance_m=None if snap_distance is None else round(snap_distance, 1),
        snap_quality=None if snap_distance is None else quality(snap_distance),
    )
