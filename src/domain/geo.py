"""Great-circle distance, nearby query validation and bounding boxes."""

import math
from dataclasses import dataclass
from typing import Any

from core.exceptions import FieldValidationError

EARTH_RADIUS_KM = 6371.0
MAX_RADIUS_KM = 500.0
MAX_LIMIT = 100
DEFAULT_RADIUS_KM = 50.0
DEFAULT_LIMIT = 20

# Beyond this latitude a bounding box spans every meridian.
_POLAR_LATITUDE = 89.0


def haversine(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the great-circle distance between two points in kilometers."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True, slots=True)
class NearbyQuery:
    """Validated parameters of a nearby-club search."""

    latitude: float
    longitude: float
    radius_km: float = DEFAULT_RADIUS_KM
    limit: int = DEFAULT_LIMIT
    include_private: bool = False


def validate_nearby_query(
    latitude: float | None,
    longitude: float | None,
    radius_km: float | None = None,
    limit: int | None = None,
    include_private: bool = False,
) -> NearbyQuery:
    """Check ranges and return a query, or raise with one entry per bad field."""
    errors: list[dict[str, Any]] = []

    if latitude is None or not math.isfinite(latitude) or not -90 <= latitude <= 90:
        errors.append({"field": "latitude", "message": "Latitude must be between -90 and 90"})
    if longitude is None or not math.isfinite(longitude) or not -180 <= longitude <= 180:
        errors.append({"field": "longitude", "message": "Longitude must be between -180 and 180"})

    radius = DEFAULT_RADIUS_KM if radius_km is None else radius_km
    if not math.isfinite(radius) or not 0 < radius <= MAX_RADIUS_KM:
        errors.append(
            {"field": "radius", "message": f"Radius must be greater than 0 and at most {MAX_RADIUS_KM:g} km"}
        )

    size = DEFAULT_LIMIT if limit is None else limit
    if not 1 <= size <= MAX_LIMIT:
        errors.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_LIMIT}"})

    if errors:
        raise FieldValidationError(errors)

    return NearbyQuery(
        latitude=float(latitude),  # type: ignore[arg-type]
        longitude=float(longitude),  # type: ignore[arg-type]
        radius_km=float(radius),
        limit=int(size),
        include_private=include_private,
    )


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Latitude band plus one or two longitude bands.

    Two bands are produced when the box crosses the antimeridian.
    """

    min_lat: float
    max_lat: float
    lng_ranges: tuple[tuple[float, float], ...]


def bounding_box(latitude: float, longitude: float, radius_km: float) -> BoundingBox:
    """Smallest lat/lng box containing every point within ``radius_km``."""
    lat_delta = math.degrees(radius_km / EARTH_RADIUS_KM)
    min_lat = max(-90.0, latitude - lat_delta)
    max_lat = min(90.0, latitude + lat_delta)

    if max_lat >= _POLAR_LATITUDE or min_lat <= -_POLAR_LATITUDE:
        return BoundingBox(min_lat, max_lat, ((-180.0, 180.0),))

    # widest longitude span occurs at the latitude edge closest to a pole
    edge = math.radians(max(abs(min_lat), abs(max_lat)))
    lng_delta = math.degrees(radius_km / (EARTH_RADIUS_KM * math.cos(edge)))
    if lng_delta >= 180.0:
        return BoundingBox(min_lat, max_lat, ((-180.0, 180.0),))

    west = longitude - lng_delta
    east = longitude + lng_delta
    if west < -180.0:
        ranges = ((west + 360.0, 180.0), (-180.0, east))
    elif east > 180.0:
        ranges = ((west, 180.0), (-180.0, east - 360.0))
    else:
        ranges = ((west, east),)
    return BoundingBox(min_lat, max_lat, ranges)
