"""
FastAPI Dependency Injection

Shared configuration and engine objects for API endpoints. Tests override
these with app.dependency_overrides.
"""

from functools import lru_cache

from civic_triage.config import EngineConfig
from civic_triage.resource_optimizer import ResourceOptimizer
from civic_triage.submission_pipeline import SubmissionPipeline


@lru_cache
def get_config() -> EngineConfig:
    """Process-wide configuration, read from the environment once."""
    return EngineConfig.from_env()


def get_pipeline() -> SubmissionPipeline:
    """
    Submission pipeline bound to the current configuration.

    Usage in endpoints:
        @router.post("/submit")
        def submit(request: SubmitRequest, pipeline = Depends(get_pipeline)):
            return pipeline.submit(request.submission, request.existing)
    """
    return SubmissionPipeline(get_config())


def get_optimizer() -> ResourceOptimizer:
    return ResourceOptimizer()
