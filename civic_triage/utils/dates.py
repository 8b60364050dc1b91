"""Timestamp helpers. All engine timestamps are timezone-aware UTC."""

import math
from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def whole_days_since(created_at: datetime, now: Optional[datetime] = None) -> int:
    """Floor of elapsed days; negative for timestamps in the future."""
    now = ensure_utc(now) if now is not None else utc_now()
    elapsed = (now - ensure_utc(created_at)).total_seconds()
    return math.floor(elapsed / SECONDS_PER_DAY)


def days_apart(first: datetime, second: datetime) -> float:
    """Absolute, fractional distance in days between two timestamps."""
    return abs((ensure_utc(first) - ensure_utc(second)).total_seconds()) / SECONDS_PER_DAY
