"""
Remediation priority (0-100) for an issue.

Computed at submission together with the impact score, after duplicate
detection, so issues that many people report rise to the top.

Usage:
    from civic_triage.priority_scorer import calculate_priority

    priority = calculate_priority(issue, duplicates)
"""

from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Tuple

from civic_triage.models import IssueRecord
from civic_triage.taxonomy import (
    DEFAULT_IMPACT_SCORE,
    PRIORITY_CATEGORY_WEIGHT,
    PRIORITY_CATEGORY_WEIGHT_DEFAULT,
    PRIORITY_SEVERITY_WEIGHT,
    PRIORITY_SEVERITY_WEIGHT_DEFAULT,
)
from civic_triage.utils.dates import whole_days_since

# ============================================================================
# SCORING WEIGHTS - tune via code changes
# ============================================================================

PRIORITY_PER_DUPLICATE = 5
PRIORITY_IMPACT_FACTOR = 0.3
PRIORITY_URGENCY_WINDOW_DAYS = 30
PRIORITY_MAX = 100
PRIORITY_MIN = 0


def priority_breakdown(
    issue: IssueRecord,
    duplicates: Sequence[Any] = (),
    now: Optional[datetime] = None,
) -> Tuple[int, Dict[str, Any]]:
    """
    Compute priority along with each contributing term.

    Args:
        issue: Issue to score (severity, category, impact_score, created_at)
        duplicates: Detected duplicate matches; only the count is used
        now: Reference time for ageing (defaults to current UTC time)

    Returns:
        (priority, breakdown)
    """
    breakdown: Dict[str, Any] = {}

    breakdown["severity"] = PRIORITY_SEVERITY_WEIGHT.get(issue.severity, PRIORITY_SEVERITY_WEIGHT_DEFAULT)
    breakdown["category"] = PRIORITY_CATEGORY_WEIGHT.get(issue.category, PRIORITY_CATEGORY_WEIGHT_DEFAULT)

    duplicate_count = len(duplicates)
    breakdown["duplicate_count"] = duplicate_count
    breakdown["duplicates"] = duplicate_count * PRIORITY_PER_DUPLICATE

    impact = issue.impact_score if issue.impact_score is not None else DEFAULT_IMPACT_SCORE
    breakdown["impact_score_used"] = impact
    breakdown["impact"] = impact * PRIORITY_IMPACT_FACTOR

    age_days = whole_days_since(issue.created_at, now)
    breakdown["age_days"] = age_days
    breakdown["time_urgency"] = max(0, PRIORITY_URGENCY_WINDOW_DAYS - age_days)

    raw_total = (
        breakdown["severity"]
        + breakdown["category"]
        + breakdown["duplicates"]
        + breakdown["impact"]
        + breakdown["time_urgency"]
    )
    breakdown["raw_total"] = round(raw_total, 2)

    priority = int(min(max(round(raw_total), PRIORITY_MIN), PRIORITY_MAX))
    breakdown["capped"] = raw_total > PRIORITY_MAX
    breakdown["total"] = priority
    return priority, breakdown


def calculate_priority(
    issue: IssueRecord,
    duplicates: Sequence[Any] = (),
    now: Optional[datetime] = None,
) -> int:
    """Remediation priority for an issue, an integer in [0, 100]."""
    priority, _ = priority_breakdown(issue, duplicates, now)
    return priority
