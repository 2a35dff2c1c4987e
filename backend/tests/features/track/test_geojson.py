"""
Tests for profile GeoJSON serialization.
"""

import pytest

from courseplanner.features.track import (
    TrackNormalizer,
    profile_from_geojson,
    profile_to_geojson,
)
from courseplanner.shared.errors import InsufficientDataError


class TestProfileToGeoJSON:
    """Serialization."""

    def test_feature_collection_shape(self, hill_points):
        geojson = profile_to_geojson(hill_points)
        assert geojson["type"] == "FeatureCollection"
        feature = geojson["features"][0]
        assert feature["geometry"]["type"] == "LineString"
        assert len(feature["geometry"]["coordinates"]) == len(hill_points)

    def test_coordinates_are_lng_lat_ele(self, hill_points):
        coords = profile_to_geojson(hill_points)["features"][0]["geometry"]["coordinates"]
        first = hill_points[0]
        assert coords[0] == [first.lng, first.lat, first.elevation_m]

    def test_smoothed_properties(self, hill_points):
        props = profile_to_geojson(hill_points)["features"][0]["properties"]
        assert len(props["distances"]) == len(hill_points)
        assert len(props["smoothedElevations"]) == len(hill_points)
        assert len(props["grades"]) == len(hill_points)

    def test_normalized_points_have_no_grades(self, hill_samples):
        points = TrackNormalizer().normalize(hill_samples)
        props = profile_to_geojson(points)["features"][0]["properties"]
        assert "grades" not in props

    def test_no_elevation_uses_2d_coordinates(self, sample_factory):
        points = TrackNormalizer().normalize(sample_factory([0, 100]))
        coords = profile_to_geojson(points)["features"][0]["geometry"]["coordinates"]
        assert all(len(c) == 2 for c in coords)


class TestProfileFromGeoJSON:
    """Reading a stored profile back."""

    def test_restores_normalized_points(self, hill_points):
        restored = profile_from_geojson(profile_to_geojson(hill_points))
        assert len(restored) == len(hill_points)
        for original, point in zip(hill_points, restored):
            assert point.distance_m == original.distance_m
            assert point.elevation_m == original.elevation_m
            assert point.lat == original.lat

    def test_no_elevation(self, sample_factory):
        points = TrackNormalizer().normalize(sample_factory([0, 100]))
        restored = profile_from_geojson(profile_to_geojson(points))
        assert all(p.elevation_m is None for p in restored)

    def test_missing_line_string(self):
        with pytest.raises(InsufficientDataError):
            profile_from_geojson({"type": "FeatureCollection", "features": []})

    def test_mismatched_distances(self, hill_points):
        geojson = profile_to_geojson(hill_points)
        geojson["features"][0]["properties"]["distances"] = [0.0]
        with pytest.raises(InsufficientDataError):
            profile_from_geojson(geojson)

    def test_short_coordinate(self, hill_points):
        geojson = profile_to_geojson(hill_points)
        geojson["features"][0]["geometry"]["coordinates"][5] = [7.0]
        with pytest.raises(InsufficientDataError):
            profile_from_geojson(geojson)

    def test_decreasing_distances(self, hill_points):
        geojson = profile_to_geojson(hill_points)
        distances = geojson["features"][0]["properties"]["distances"]
        distances[10], distances[11] = distances[11], distances[10]
        with pytest.raises(InsufficientDataError):
            profile_from_geojson(geojson)
