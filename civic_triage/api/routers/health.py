"""
Health Check Endpoints

Liveness check for the civic_triage API. The engine has no external
dependencies, so there is nothing further to probe.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from civic_triage import __version__


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    version: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Returns 200 OK if the API is running."""
    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
    )
