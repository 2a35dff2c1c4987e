"""
GeoJSON serialization of route profiles.

The stored profile is a FeatureCollection with one LineString whose
properties carry per-point arrays parallel to the coordinates.
"""

from typing import Any, Dict, List, Sequence, Union

from courseplanner.features.track.models import NormalizedPoint, SmoothedPoint
from courseplanner.shared.errors import InsufficientDataError


def profile_to_geojson(
    points: Sequence[Union[NormalizedPoint, SmoothedPoint]]
) -> Dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection for a profile.

    Coordinates are [lng, lat] or [lng, lat, ele] when elevation is known.
    Smoothed points also get smoothedElevations and grades (percent).
    """
    coordinates = []
    for p in points:
        if p.elevation_m is None:
            coordinates.append([p.lng, p.lat])
        else:
            coordinates.append([p.lng, p.lat, p.elevation_m])

    properties: Dict[str, Any] = {
        "distances": [p.distance_m for p in points],
        "elevations": [p.elevation_m for p in points],
    }

    if points and isinstance(points[0], SmoothedPoint):
        properties["smoothedElevations"] = [p.smoothed_elevation_m for p in points]
        properties["grades"] = [round(p.grade_percent, 2) for p in points]

    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": coordinates},
                "properties": properties,
            }
        ],
    }


def profile_from_geojson(feature_collection: Dict[str, Any]) -> List[NormalizedPoint]:
    """
    Read normalized points back from a stored profile.

    Raises:
        InsufficientDataError: Missing LineString, mismatched arrays,
            short coordinates or decreasing distances
    """
    features = feature_collection.get("features") or []
    line = next(
        (
            f for f in features
            if (f.get("geometry") or {}).get("type") == "LineString"
        ),
        None,
    )
    if line is None:
        raise InsufficientDataError("Profile has no LineString feature")

    coordinates = line["geometry"].get("coordinates") or []
    properties = line.get("properties") or {}
    distances = properties.get("distances")
    elevations = properties.get("elevations")

    if distances is None or len(distances) != len(coordinates):
        raise InsufficientDataError("Profile distances do not match its coordinates")
    for i, coord in enumerate(coordinates):
        if not isinstance(coord, (list, tuple)) or len(coord) < 2:
            raise InsufficientDataError(f"Profile coordinate {i} needs [lng, lat]")
    if elevations is None:
        elevations = [c[2] if len(c) > 2 else None for c in coordinates]
    if len(elevations) != len(coordinates):
        raise InsufficientDataError("Profile elevations do not match its coordinates")

    for i in range(1, len(distances)):
        if distances[i] < distances[i - 1]:
            raise InsufficientDataError(
                f"Profile distances decrease at point {i}: "
                f"{distances[i - 1]} -> {distances[i]}"
            )

    return [
        NormalizedPoint(
            distance_m=float(distance),
            lat=float(coord[1]),
            lng=float(coord[0]),
            elevation_m=None if elevation is None else float(elevation),
            source_index=i,
        )
        for i, (coord, distance, elevation) in enumerate(
            zip(coordinates, distances, elevations)
        )
    ]
