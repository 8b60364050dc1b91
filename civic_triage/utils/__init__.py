"""Utility modules for civic_triage."""

from .dates import days_apart, ensure_utc, utc_now, whole_days_since
from .geo import (
    EARTH_RADIUS_KM,
    MISSING_LOCATION_DISTANCE_KM,
    distance_km,
    parse_coordinates,
)
from .text import text_similarity, tokenize

__all__ = [
    "EARTH_RADIUS_KM",
    "MISSING_LOCATION_DISTANCE_KM",
    "days_apart",
    "distance_km",
    "ensure_utc",
    "parse_coordinates",
    "text_similarity",
    "tokenize",
    "utc_now",
    "whole_days_since",
]
