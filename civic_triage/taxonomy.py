"""
Issue taxonomy shared by the classifier and the scorers.

One canonical table of categories (keywords, responsible department, urgency
tier, base remediation cost) plus the severity keyword tiers and the weight
tables the impact and priority scorers use.

Usage:
    from civic_triage.taxonomy import CATEGORY_PROFILES, normalize_category

    normalize_category("Pothole")   # -> 'pothole'
    normalize_category("volcano")   # -> 'general'
    get_profile("water").department # -> 'water_dept'
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class CategoryProfile:
    """Static description of one keyword-classified category."""

    name: str
    keywords: Tuple[str, ...]
    department: str
    urgency: str
    estimated_cost: int


# Evaluation order matters: classifier ties resolve to the earlier entry.
CATEGORY_PROFILES: Tuple[CategoryProfile, ...] = (
    CategoryProfile(
        name="pothole",
        keywords=(
            "hole", "road", "street", "damage", "crack", "bump", "rough",
            "broken road", "pavement", "infrastructure",
        ),
        department="public_works",
        urgency="high",
        estimated_cost=5000,
    ),
    CategoryProfile(
        name="streetlight",
        keywords=("light", "lamp", "dark", "broken", "not working", "electricity", "bulb", "pole"),
        department="electrical",
        urgency="medium",
        estimated_cost=2000,
    ),
    CategoryProfile(
        name="garbage",
        keywords=("waste", "trash", "dump", "dirty", "smell", "bin", "litter", "overflow", "collection"),
        department="sanitation",
        urgency="high",
        estimated_cost=1000,
    ),
    CategoryProfile(
        name="water",
        keywords=("leak", "pipe", "drain", "overflow", "sewage", "water", "burst", "flooding", "tap"),
        department="water_dept",
        urgency="critical",
        estimated_cost=8000,
    ),
    CategoryProfile(
        name="traffic",
        keywords=("signal", "sign", "traffic", "zebra", "crossing", "junction", "congestion"),
        department="traffic_police",
        urgency="medium",
        estimated_cost=3000,
    ),
    CategoryProfile(
        name="safety",
        keywords=("unsafe", "danger", "security", "crime", "violence", "theft", "harassment"),
        department="police",
        urgency="critical",
        estimated_cost=2000,
    ),
    CategoryProfile(
        name="parks",
        keywords=("park", "garden", "playground", "trees", "maintenance", "recreation"),
        department="parks_dept",
        urgency="low",
        estimated_cost=3000,
    ),
    CategoryProfile(
        name="construction",
        keywords=("building", "construction", "illegal", "permit", "violation", "structure"),
        department="building_dept",
        urgency="medium",
        estimated_cost=10000,
    ),
    CategoryProfile(
        name="electricity",
        keywords=("power", "electricity", "outage", "wire", "transformer", "voltage"),
        department="electricity_board",
        urgency="high",
        estimated_cost=4000,
    ),
)

_PROFILES_BY_NAME: Mapping[str, CategoryProfile] = MappingProxyType(
    {profile.name: profile for profile in CATEGORY_PROFILES}
)

# ============================================================================
# DEFAULTS
# ============================================================================

GENERAL_CATEGORY = "general"
GENERAL_DEPARTMENT = "general"
GENERAL_URGENCY = "low"
GENERAL_ESTIMATED_COST = 0

DEFAULT_SEVERITY = "medium"
DEFAULT_STATUS = "reported"

# Every category an issue record may carry
VALID_CATEGORIES = tuple(profile.name for profile in CATEGORY_PROFILES) + (GENERAL_CATEGORY,)

VALID_SEVERITIES = ("low", "medium", "high", "critical")

VALID_STATUSES = ("reported", "assigned", "in-progress", "resolved", "closed")

# Checked in this order; the first tier with any hit wins
SEVERITY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("critical", ("urgent", "emergency", "dangerous", "accident", "major", "severe")),
    ("high", ("bad", "terrible", "awful", "huge", "big", "serious")),
    ("medium", ("moderate", "medium", "average", "normal")),
    ("low", ("small", "minor", "little", "tiny")),
)

# ============================================================================
# SCORING WEIGHTS
# ============================================================================

IMPACT_SEVERITY_MULTIPLIER = MappingProxyType({"critical": 4, "high": 3, "medium": 2, "low": 1})
IMPACT_SEVERITY_MULTIPLIER_DEFAULT = 2

IMPACT_CATEGORY_WEIGHT = MappingProxyType({
    "pothole": 15,
    "water": 20,
    "garbage": 10,
    "streetlight": 8,
    "traffic": 12,
    "general": 5,
})
IMPACT_CATEGORY_WEIGHT_DEFAULT = 5

PRIORITY_SEVERITY_WEIGHT = MappingProxyType({"critical": 40, "high": 30, "medium": 20, "low": 10})
PRIORITY_SEVERITY_WEIGHT_DEFAULT = 20

PRIORITY_CATEGORY_WEIGHT = MappingProxyType({
    "water": 35,
    "pothole": 25,
    "traffic": 20,
    "streetlight": 15,
    "garbage": 15,
    "general": 10,
})
PRIORITY_CATEGORY_WEIGHT_DEFAULT = 10

# Substituted when a stored record lacks the field
DEFAULT_PRIORITY = 50
DEFAULT_IMPACT_SCORE = 50
DEFAULT_ESTIMATED_COST = 5000


def get_profile(category: Optional[str]) -> Optional[CategoryProfile]:
    """Return the profile for a keyword category, or None (including 'general')."""
    if not category:
        return None
    return _PROFILES_BY_NAME.get(category.strip().lower())


def normalize_category(category: Optional[str]) -> str:
    """
    Map any category string onto the fixed enumeration.

    Examples:
        >>> normalize_category(' Water ')
        'water'
        >>> normalize_category('general')
        'general'
        >>> normalize_category('volcano')
        'general'
    """
    profile = get_profile(category)
    return profile.name if profile else GENERAL_CATEGORY


def normalize_severity(severity: Optional[str]) -> str:
    """Map any severity string onto {low, medium, high, critical}; unknown -> medium."""
    if severity:
        value = severity.strip().lower()
        if value in VALID_SEVERITIES:
            return value
    return DEFAULT_SEVERITY


def department_for(category: Optional[str]) -> str:
    """Responsible department for a category ('general' when not keyword-classified)."""
    profile = get_profile(category)
    return profile.department if profile else GENERAL_DEPARTMENT
