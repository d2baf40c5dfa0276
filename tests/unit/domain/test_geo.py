"""Unit tests for distance, nearby query validation and bounding boxes."""

import math

import pytest

from core.exceptions import FieldValidationError
from domain.geo import (
    DEFAULT_LIMIT,
    DEFAULT_RADIUS_KM,
    bounding_box,
    haversine,
    validate_nearby_query,
)


def _fields(exc: FieldValidationError) -> set[str]:
    return {entry["field"] for entry in exc.details}


class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine(40.0, -74.0, 40.0, -74.0) == 0

    def test_new_york_to_los_angeles(self):
        distance = haversine(40.7128, -74.0060, 34.0522, -118.2437)
        assert 3930 < distance < 3950

    def test_one_degree_of_latitude(self):
        assert haversine(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)

    def test_symmetric(self):
        assert haversine(10, 20, -5, 170) == pytest.approx(haversine(-5, 170, 10, 20))

    def test_crosses_antimeridian_the_short_way(self):
        assert haversine(0, 179.9, 0, -179.9) < 25


class TestValidateNearbyQuery:
    def test_applies_defaults(self):
        query = validate_nearby_query(40.0, -74.0)

        assert query.radius_km == DEFAULT_RADIUS_KM
        assert query.limit == DEFAULT_LIMIT
        assert query.include_private is False

    def test_accepts_boundaries(self):
        query = validate_nearby_query(-90, 180, radius_km=500, limit=100)
        assert query.latitude == -90
        assert query.limit == 100

    def test_latitude_out_of_range(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_nearby_query(95, 0)
        assert _fields(exc_info.value) == {"latitude"}

    def test_missing_coordinates(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_nearby_query(None, None)
        assert _fields(exc_info.value) == {"latitude", "longitude"}

    def test_non_finite_longitude(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_nearby_query(0, math.nan)
        assert _fields(exc_info.value) == {"longitude"}

    @pytest.mark.parametrize("radius", [0, -1, 500.5])
    def test_radius_out_of_range(self, radius: float):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_nearby_query(0, 0, radius_km=radius)
        assert _fields(exc_info.value) == {"radius"}

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_out_of_range(self, limit: int):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_nearby_query(0, 0, limit=limit)
        assert _fields(exc_info.value) == {"limit"}

    def test_reports_every_bad_field(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_nearby_query(100, 200, radius_km=0, limit=0)
        assert _fields(exc_info.value) == {"latitude", "longitude", "radius", "limit"}


class TestBoundingBox:
    def test_contains_points_on_the_circle(self):
        box = bounding_box(45.0, 7.0, 100)
        (west, east), = box.lng_ranges

        # due north, south, east and west of the center at exactly the radius
        assert box.max_lat >= 45.0 + math.degrees(100 / 6371.0) - 1e-9
        assert box.min_lat <= 45.0 - math.degrees(100 / 6371.0) + 1e-9
        assert haversine(45.0, 7.0, 45.0, east) >= 100
        assert haversine(45.0, 7.0, 45.0, west) >= 100

    def test_splits_at_antimeridian(self):
        box = bounding_box(0.0, 179.5, 200)

        assert len(box.lng_ranges) == 2
        (west_band, east_band) = box.lng_ranges
        assert west_band[1] == 180.0
        assert east_band[0] == -180.0
        assert east_band[1] < -178.0

    def test_splits_at_negative_antimeridian(self):
        box = bounding_box(0.0, -179.5, 200)
        assert len(box.lng_ranges) == 2
        assert box.lng_ranges[0][0] > 178.0

    def test_polar_box_spans_all_longitudes(self):
        box = bounding_box(89.5, 0.0, 100)
        assert box.lng_ranges == ((-180.0, 180.0),)
        assert box.max_lat == 90.0
