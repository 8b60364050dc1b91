"""
Community impact score (0-100) for a single issue.

    score = 10
          + severity multiplier x 10
          + category weight
          + 5 per nearby issue
          + max(1, 30 - days since creation)

Rounded and clamped to [0, 100]. Computed once at submission; stored
records are not re-scored as they age.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from civic_triage.models import IssueRecord
from civic_triage.taxonomy import (
    IMPACT_CATEGORY_WEIGHT,
    IMPACT_CATEGORY_WEIGHT_DEFAULT,
    IMPACT_SEVERITY_MULTIPLIER,
    IMPACT_SEVERITY_MULTIPLIER_DEFAULT,
)
from civic_triage.utils.dates import whole_days_since

IMPACT_BASE_SCORE = 10
IMPACT_SEVERITY_SCALE = 10
IMPACT_PER_NEARBY_ISSUE = 5
IMPACT_FRESHNESS_WINDOW_DAYS = 30
IMPACT_FRESHNESS_FLOOR = 1
IMPACT_MAX = 100
IMPACT_MIN = 0


def impact_breakdown(
    issue: IssueRecord,
    nearby_count: int = 0,
    now: Optional[datetime] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Compute the impact score along with each contributing term.

    Returns:
        (score, breakdown) where breakdown maps term name -> contribution
    """
    breakdown: Dict[str, Any] = {"base": IMPACT_BASE_SCORE}

    multiplier = IMPACT_SEVERITY_MULTIPLIER.get(issue.severity, IMPACT_SEVERITY_MULTIPLIER_DEFAULT)
    breakdown["severity"] = multiplier * IMPACT_SEVERITY_SCALE

    breakdown["category"] = IMPACT_CATEGORY_WEIGHT.get(issue.category, IMPACT_CATEGORY_WEIGHT_DEFAULT)

    breakdown["nearby_count"] = nearby_count
    breakdown["proximity"] = nearby_count * IMPACT_PER_NEARBY_ISSUE

    age_days = whole_days_since(issue.created_at, now)
    breakdown["age_days"] = age_days
    breakdown["freshness"] = max(IMPACT_FRESHNESS_FLOOR, IMPACT_FRESHNESS_WINDOW_DAYS - age_days)

    raw_total = (
        breakdown["base"]
        + breakdown["severity"]
        + breakdown["category"]
        + breakdown["proximity"]
        + breakdown["freshness"]
    )
    breakdown["raw_total"] = raw_total

    score = int(min(max(round(raw_total), IMPACT_MIN), IMPACT_MAX))
    breakdown["capped"] = score != raw_total
    breakdown["total"] = score
    return score, breakdown


def calculate_impact_score(
    issue: IssueRecord,
    nearby_count: int = 0,
    now: Optional[datetime] = None,
) -> int:
    """
    Community impact score for an issue.

    Args:
        issue: The issue (severity, category and created_at are read)
        nearby_count: Number of other issues reported close by
        now: Reference time for ageing (defaults to current UTC time)

    Returns:
        Integer in [0, 100]
    """
    score, _ = impact_breakdown(issue, nearby_count, now)
    return score
