"""
ResourceOptimizer: department workload plans and service routes for open issues.

Algorithm:

Stage 1 - Department grouping:
    Drop resolved issues, group the rest by responsible department and order
    each group by priority (highest first).

Stage 2 - Route clustering:
    Walk a department's issues in priority order. Each issue not yet on a
    route seeds a new route and pulls in every other unrouted issue within
    2 km of the seed. This is greedy and single-pass: membership depends on
    iteration order and routes are never rebalanced.

Output:
    One DepartmentPlan per department (cost, days, efficiency, routes) plus
    overload/batching suggestions and system-wide totals.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from civic_triage.models import IssueRecord
from civic_triage.taxonomy import DEFAULT_ESTIMATED_COST, DEFAULT_PRIORITY, GENERAL_DEPARTMENT
from civic_triage.utils.geo import distance_km

logger = logging.getLogger(__name__)

ROUTE_RADIUS_KM = 2.0
HOURS_PER_ISSUE = 2
ISSUES_PER_DAY = 3
HIGH_PRIORITY_THRESHOLD = 70
EFFICIENCY_BASELINE = 20
EFFICIENCY_MAX = 100
OVERLOADED_DEPARTMENT_THRESHOLD = 10
BATCHING_HIGH_PRIORITY_THRESHOLD = 5

RESOLVED_STATUS = "resolved"


def _priority_of(issue: IssueRecord) -> int:
    return issue.priority if issue.priority is not None else DEFAULT_PRIORITY


def _cost_of(issue: IssueRecord) -> float:
    return issue.estimated_cost if issue.estimated_cost is not None else DEFAULT_ESTIMATED_COST


@dataclass
class Route:
    """Spatially close issues serviced together."""

    id: int
    issues: List[IssueRecord] = field(default_factory=list)
    estimated_time: float = 0  # hours
    priority: float = 0  # mean member priority

    @property
    def size(self) -> int:
        return len(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "issues": [issue.to_record(json_compatible=True) for issue in self.issues],
            "estimatedTime": self.estimated_time,
            "priority": self.priority,
        }


@dataclass
class DepartmentPlan:
    """Workload summary for one department."""

    department: str
    total_issues: int
    high_priority_issues: int
    total_cost: float
    estimated_days: int
    efficiency: float
    routes: List[Route] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "totalIssues": self.total_issues,
            "highPriorityIssues": self.high_priority_issues,
            "totalCost": self.total_cost,
            "estimatedDays": self.estimated_days,
            "efficiency": self.efficiency,
            "routes": [route.to_dict() for route in self.routes],
        }


@dataclass
class Suggestion:
    """Advisory message for the dashboard."""

    type: str  # "warning" | "optimization"
    message: str
    priority: str  # "high" | "medium"
    department: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type, "message": self.message, "priority": self.priority}
        if self.department:
            data["department"] = self.department
        return data


@dataclass
class OptimizationResult:
    """Result of one optimizer pass. Recomputed on every call, never stored."""

    departments: List[DepartmentPlan] = field(default_factory=list)
    suggestions: List[Suggestion] = field(default_factory=list)
    total_pending_issues: int = 0
    total_estimated_cost: float = 0
    average_efficiency: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "departments": [plan.to_dict() for plan in self.departments],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "totalPendingIssues": self.total_pending_issues,
            "totalEstimatedCost": self.total_estimated_cost,
            "averageEfficiency": self.average_efficiency,
        }


class ResourceOptimizer:
    """
    Plans remediation work for the open issue backlog.

    Stateless: every call to optimize() works only on the issues passed in.
    """

    def __init__(self, route_radius_km: float = ROUTE_RADIUS_KM):
        """
        Args:
            route_radius_km: Max distance from a route's seed issue for another
                             issue to join that route.
        """
        self.route_radius_km = route_radius_km

    def optimize(self, issues: Sequence[IssueRecord]) -> OptimizationResult:
        """
        Build department plans, routes and suggestions.

        Args:
            issues: All known issues; resolved ones are ignored

        Returns:
            OptimizationResult (zero-filled when nothing is pending)
        """
        pending = [issue for issue in issues if issue.status != RESOLVED_STATUS]

        groups: Dict[str, List[IssueRecord]] = {}
        for issue in pending:
            groups.setdefault(issue.department or GENERAL_DEPARTMENT, []).append(issue)

        departments = [self._plan_department(dept, dept_issues) for dept, dept_issues in groups.items()]
        suggestions = self._generate_suggestions(departments, pending)

        average_efficiency = (
            sum(plan.efficiency for plan in departments) / len(departments) if departments else 0.0
        )

        result = OptimizationResult(
            departments=departments,
            suggestions=suggestions,
            total_pending_issues=len(pending),
            total_estimated_cost=sum(plan.total_cost for plan in departments),
            average_efficiency=average_efficiency,
        )
        logger.info(
            f"Optimized {result.total_pending_issues} pending issue(s) across "
            f"{len(departments)} department(s), {len(suggestions)} suggestion(s)"
        )
        return result

    def _plan_department(self, department: str, issues: List[IssueRecord]) -> DepartmentPlan:
        ordered = sorted(issues, key=_priority_of, reverse=True)
        high_priority = sum(1 for issue in ordered if _priority_of(issue) > HIGH_PRIORITY_THRESHOLD)
        routes = self.create_routes(ordered)
        logger.debug(f"{department}: {len(ordered)} issue(s) in {len(routes)} route(s)")

        return DepartmentPlan(
            department=department,
            total_issues=len(ordered),
            high_priority_issues=high_priority,
            total_cost=sum(_cost_of(issue) for issue in ordered),
            estimated_days=math.ceil(len(ordered) / ISSUES_PER_DAY),
            efficiency=self.calculate_efficiency(ordered),
            routes=routes,
        )

    def create_routes(self, issues: Sequence[IssueRecord]) -> List[Route]:
        """
        Greedy proximity clustering.

        Issues are taken in the given order; the first unrouted one seeds a
        route that absorbs every other unrouted issue within route_radius_km
        of the seed. Routes are returned by mean priority, highest first.
        """
        routes: List[Route] = []
        routed = set()

        for index, seed in enumerate(issues):
            if index in routed:
                continue

            members = [seed]
            routed.add(index)
            for other_index, other in enumerate(issues):
                if other_index in routed:
                    continue
                if distance_km(seed.location, other.location) < self.route_radius_km:
                    members.append(other)
                    routed.add(other_index)

            routes.append(Route(
                id=len(routes) + 1,
                issues=members,
                estimated_time=len(members) * HOURS_PER_ISSUE,
                priority=sum(_priority_of(m) for m in members) / len(members),
            ))

        return sorted(routes, key=lambda r: r.priority, reverse=True)

    @staticmethod
    def calculate_efficiency(issues: Sequence[IssueRecord]) -> float:
        """Share of high-priority issues as a percentage, plus a 20 point baseline, capped at 100."""
        if not issues:
            return 0.0
        high_priority = sum(1 for issue in issues if _priority_of(issue) > HIGH_PRIORITY_THRESHOLD)
        return min(EFFICIENCY_MAX, (high_priority / len(issues)) * 100 + EFFICIENCY_BASELINE)

    @staticmethod
    def _generate_suggestions(
        departments: List[DepartmentPlan],
        pending: List[IssueRecord],
    ) -> List[Suggestion]:
        suggestions = []

        for plan in departments:
            if plan.total_issues > OVERLOADED_DEPARTMENT_THRESHOLD:
                suggestions.append(Suggestion(
                    type="warning",
                    message=(
                        f"{plan.department} has {plan.total_issues} pending issues. "
                        f"Consider allocating more resources."
                    ),
                    priority="high",
                    department=plan.department,
                ))

        total_high_priority = sum(1 for issue in pending if _priority_of(issue) > HIGH_PRIORITY_THRESHOLD)
        if total_high_priority > BATCHING_HIGH_PRIORITY_THRESHOLD:
            suggestions.append(Suggestion(
                type="optimization",
                message=(
                    f"{total_high_priority} high-priority issues detected. "
                    f"Batch processing could save 20% time."
                ),
                priority="medium",
            ))

        return suggestions


def optimize_resources(issues: Sequence[IssueRecord]) -> OptimizationResult:
    """Run the optimizer with default settings."""
    return ResourceOptimizer().optimize(issues)
