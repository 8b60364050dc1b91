"""
Dashboard Endpoints

Resource optimization and insights over a caller-supplied issue collection.
"""

from fastapi import APIRouter, Depends

from civic_triage.analytics.insights import build_insights
from civic_triage.api.deps import get_config, get_optimizer
from civic_triage.api.schemas.dashboard import IssueCollectionRequest
from civic_triage.config import EngineConfig
from civic_triage.resource_optimizer import ResourceOptimizer


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.post("/optimize")
def optimize(
    request: IssueCollectionRequest,
    optimizer: ResourceOptimizer = Depends(get_optimizer),
):
    """
    Department plans, service routes and suggestions for open issues.

    Resolved issues are ignored. An empty collection returns zero totals
    and empty lists.
    """
    return optimizer.optimize(request.issues).to_dict()


@router.post("/insights")
def insights(
    request: IssueCollectionRequest,
    config: EngineConfig = Depends(get_config),
):
    """
    Category/status counts, department workload, hotspots, headline stats
    and the 7-day trend.
    """
    return build_insights(request.issues, hotspot_limit=config.hotspot_limit).to_dict()
