"""
Insights Service

Dashboard rollups over the live issue collection: category/status counts,
department workload, high-impact issues, proximity hotspots, headline stats
and a 7-day trend. Presentation-only; nothing here feeds back into scoring.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from civic_triage.models import IssueRecord, Location
from civic_triage.taxonomy import GENERAL_CATEGORY, GENERAL_DEPARTMENT
from civic_triage.utils.dates import ensure_utc, utc_now
from civic_triage.utils.geo import distance_km

logger = logging.getLogger(__name__)

HOTSPOT_RADIUS_KM = 1.0
HOTSPOT_MIN_NEIGHBOURS = 2
DEFAULT_HOTSPOT_LIMIT = 5
HIGH_IMPACT_THRESHOLD = 75
TOP_CATEGORY_LIMIT = 3
TREND_DAYS = 7


@dataclass
class Hotspot:
    """A cluster of issues reported within 1 km of a seed issue."""

    center: Optional[Location]
    count: int
    avg_impact: float
    issue_ids: List[Optional[str]] = field(default_factory=list)


@dataclass
class DailyTrend:
    """Issues created on one UTC day."""

    date: str  # YYYY-MM-DD
    issues: int
    resolved: int


@dataclass
class IssueStats:
    """Headline numbers for the dashboard cards."""

    total: int
    reported_today: int
    resolved: int
    pending: int
    in_progress: int
    avg_resolution_hours: Optional[int]


@dataclass
class AIProcessingStats:
    """How many records carry classifier metadata, and how confident it was."""

    total_processed: int
    avg_confidence: float


@dataclass
class DashboardInsights:
    """All dashboard rollups for one issue snapshot."""

    category_counts: Dict[str, int]
    status_counts: Dict[str, int]
    top_categories: List[Tuple[str, int]]
    department_workload: Dict[str, int]
    high_impact_issues: List[IssueRecord]
    ai_processing: AIProcessingStats
    hotspots: List[Hotspot]
    stats: IssueStats
    daily_trends: List[DailyTrend]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categoryCounts": self.category_counts,
            "statusCounts": self.status_counts,
            "topCategories": [{"category": c, "count": n} for c, n in self.top_categories],
            "departmentWorkload": [
                {"name": name, "count": count} for name, count in self.department_workload.items()
            ],
            "highImpactIssues": [i.to_record(json_compatible=True) for i in self.high_impact_issues],
            "aiProcessing": {
                "totalProcessed": self.ai_processing.total_processed,
                "avgConfidence": self.ai_processing.avg_confidence,
            },
            "hotspots": [
                {
                    "center": h.center.model_dump() if h.center else None,
                    "count": h.count,
                    "avgImpact": h.avg_impact,
                    "issueIds": h.issue_ids,
                }
                for h in self.hotspots
            ],
            "stats": {
                "total": self.stats.total,
                "reportedToday": self.stats.reported_today,
                "resolved": self.stats.resolved,
                "pending": self.stats.pending,
                "inProgress": self.stats.in_progress,
                "avgResolutionHours": self.stats.avg_resolution_hours,
            },
            "dailyTrends": [
                {"date": t.date, "issues": t.issues, "resolved": t.resolved}
                for t in self.daily_trends
            ],
        }


class InsightsService:
    """Computes dashboard rollups from an in-memory issue snapshot."""

    def __init__(
        self,
        issues: Sequence[IssueRecord],
        now: Optional[datetime] = None,
        hotspot_limit: int = DEFAULT_HOTSPOT_LIMIT,
    ):
        self.issues = list(issues)
        self.now = ensure_utc(now) if now is not None else utc_now()
        self.hotspot_limit = hotspot_limit

    def category_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for issue in self.issues:
            category = issue.category or GENERAL_CATEGORY
            counts[category] = counts.get(category, 0) + 1
        return counts

    def status_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for issue in self.issues:
            counts[issue.status] = counts.get(issue.status, 0) + 1
        return counts

    def top_categories(self, limit: int = TOP_CATEGORY_LIMIT) -> List[Tuple[str, int]]:
        """Most frequent categories; ties keep first-seen order."""
        ranked = sorted(self.category_counts().items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]

    def department_workload(self) -> Dict[str, int]:
        """Open (non-resolved) issue count per department."""
        workload: Dict[str, int] = {}
        for issue in self.issues:
            if issue.status == "resolved":
                continue
            department = issue.department or GENERAL_DEPARTMENT
            workload[department] = workload.get(department, 0) + 1
        return workload

    def high_impact_issues(self) -> List[IssueRecord]:
        scored = [
            issue for issue in self.issues
            if issue.impact_score is not None and issue.impact_score > HIGH_IMPACT_THRESHOLD
        ]
        return sorted(scored, key=lambda issue: issue.impact_score, reverse=True)

    def ai_processing(self) -> AIProcessingStats:
        analysed = [issue for issue in self.issues if issue.ai_analysis is not None]
        if not analysed:
            return AIProcessingStats(total_processed=0, avg_confidence=0.0)
        avg = sum(issue.ai_analysis.confidence for issue in analysed) / len(analysed)
        return AIProcessingStats(total_processed=len(analysed), avg_confidence=avg)

    def hotspots(self) -> List[Hotspot]:
        """
        Greedy 1 km clusters with at least 3 members (seed + 2 neighbours).

        A seed that gathers too few neighbours leaves them available to later
        seeds. Ordered by average impact, truncated to hotspot_limit.
        """
        found: List[Hotspot] = []
        processed = set()

        for index, seed in enumerate(self.issues):
            if index in processed:
                continue

            neighbours = [
                other_index
                for other_index, other in enumerate(self.issues)
                if other_index != index
                and other_index not in processed
                and distance_km(seed.location, other.location) < HOTSPOT_RADIUS_KM
            ]
            if len(neighbours) < HOTSPOT_MIN_NEIGHBOURS:
                continue

            members = [seed] + [self.issues[i] for i in neighbours]
            total_impact = sum(m.impact_score if m.impact_score is not None else 0 for m in members)
            found.append(Hotspot(
                center=seed.location,
                count=len(members),
                avg_impact=total_impact / len(members),
                issue_ids=[m.id for m in members],
            ))
            processed.add(index)
            processed.update(neighbours)

        found.sort(key=lambda h: h.avg_impact, reverse=True)
        return found[: self.hotspot_limit]

    def stats(self) -> IssueStats:
        today_start = self.now.replace(hour=0, minute=0, second=0, microsecond=0)
        resolved = [issue for issue in self.issues if issue.status == "resolved"]

        timed = [issue for issue in resolved if issue.updated_at is not None]
        avg_hours = None
        if timed:
            total_seconds = sum((i.updated_at - i.created_at).total_seconds() for i in timed)
            avg_hours = round(total_seconds / len(timed) / 3600)

        return IssueStats(
            total=len(self.issues),
            reported_today=sum(1 for issue in self.issues if issue.created_at >= today_start),
            resolved=len(resolved),
            pending=len(self.issues) - len(resolved),
            in_progress=sum(1 for issue in self.issues if issue.status == "in-progress"),
            avg_resolution_hours=avg_hours,
        )

    def daily_trends(self, days: int = TREND_DAYS) -> List[DailyTrend]:
        """Per-day created/resolved counts for the last `days` UTC days, oldest first."""
        today = self.now.date()
        trends = []
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            day_issues = [issue for issue in self.issues if issue.created_at.date() == day]
            trends.append(DailyTrend(
                date=day.isoformat(),
                issues=len(day_issues),
                resolved=sum(1 for issue in day_issues if issue.status == "resolved"),
            ))
        return trends

    def build(self) -> DashboardInsights:
        insights = DashboardInsights(
            category_counts=self.category_counts(),
            status_counts=self.status_counts(),
            top_categories=self.top_categories(),
            department_workload=self.department_workload(),
            high_impact_issues=self.high_impact_issues(),
            ai_processing=self.ai_processing(),
            hotspots=self.hotspots(),
            stats=self.stats(),
            daily_trends=self.daily_trends(),
        )
        logger.debug(
            f"Built insights for {len(self.issues)} issue(s): {len(insights.hotspots)} hotspot(s)"
        )
        return insights


def build_insights(
    issues: Sequence[IssueRecord],
    now: Optional[datetime] = None,
    hotspot_limit: int = DEFAULT_HOTSPOT_LIMIT,
) -> DashboardInsights:
    """Compute every dashboard rollup for an issue snapshot."""
    return InsightsService(issues, now=now, hotspot_limit=hotspot_limit).build()
