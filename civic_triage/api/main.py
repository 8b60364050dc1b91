"""
civic_triage API - Main Application

FastAPI application exposing the issue scoring engine to the reporting
client and the admin dashboard.

Run with:
    uvicorn civic_triage.api.main:app --reload --port 8000

API Documentation available at:
    - Swagger UI: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civic_triage import __version__
from civic_triage.api.deps import get_config
from civic_triage.api.routers import dashboard, health, issues
from civic_triage.logging_utils import configure_logging

_config = get_config()
configure_logging(_config.log_level_value, _config.log_file)

# Suppress noisy libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


app = FastAPI(
    title="civic_triage API",
    description="""
    Heuristic triage for citizen issue reports.

    ## Features

    - **Classification**: keyword category, department, severity and cost
    - **Submission**: duplicate detection, impact and priority scoring
    - **Dashboard**: department plans, service routes, insights

    All endpoints are stateless: callers send the issue collections they
    want scored and persist the results themselves.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS for the dashboard and the Expo dev client
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # dashboard dev server
        "http://127.0.0.1:3000",
        "http://localhost:19006",  # Expo web
        "http://127.0.0.1:19006",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router)
app.include_router(issues.router)
app.include_router(dashboard.router)


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": "civic_triage API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
