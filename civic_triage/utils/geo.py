"""Great-circle distance between issue locations."""

import math
from typing import Any, Optional

EARTH_RADIUS_KM = 6371.0

# Returned when either endpoint has no location. Larger than every proximity
# threshold in the engine (0.1 km, 1 km, 2 km), so "no location" is never nearby.
MISSING_LOCATION_DISTANCE_KM = 1_000_000.0

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0


def parse_coordinates(point: Any) -> Optional[tuple[float, float]]:
    """Extract (lat, lon) from a Location model, a mapping, or None.

    Missing, non-numeric or out-of-range coordinates give None.
    """
    if point is None:
        return None
    if isinstance(point, dict):
        lat, lon = point.get("latitude"), point.get("longitude")
    else:
        lat, lon = getattr(point, "latitude", None), getattr(point, "longitude", None)
    if lat is None or lon is None:
        return None
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return None
    # Out-of-range (or NaN) coordinates count as no location
    if not (-MAX_LATITUDE <= lat <= MAX_LATITUDE and -MAX_LONGITUDE <= lon <= MAX_LONGITUDE):
        return None
    return lat, lon


def distance_km(a: Any, b: Any) -> float:
    """
    Haversine distance in kilometers between two {latitude, longitude} points.

    Either argument may be a Location, a plain dict, or None. A missing or
    malformed endpoint yields MISSING_LOCATION_DISTANCE_KM.
    """
    first, second = parse_coordinates(a), parse_coordinates(b)
    if first is None or second is None:
        return MISSING_LOCATION_DISTANCE_KM

    lat1, lon1 = first
    lat2, lon2 = second
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push h just past 1 for near-antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))
