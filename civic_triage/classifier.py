"""
Keyword classifier for civic issue descriptions.

Maps a free-text description (and an optional user-asserted category) to a
category, confidence, responsible department, urgency tier, base cost and a
severity tier derived from the wording.

Usage:
    from civic_triage.classifier import classify_issue

    result = classify_issue("Water pipe burst, street flooding")
    result.category    # 'water'
    result.department  # 'water_dept'
    result.severity    # 'medium'
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from civic_triage.models import AIAnalysis
from civic_triage.taxonomy import (
    CATEGORY_PROFILES,
    DEFAULT_SEVERITY,
    GENERAL_CATEGORY,
    GENERAL_DEPARTMENT,
    GENERAL_ESTIMATED_COST,
    GENERAL_URGENCY,
    SEVERITY_KEYWORDS,
    get_profile,
)
from civic_triage.utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)

# Confidence assigned when the reporter picked a known category themselves
ASSERTED_CATEGORY_CONFIDENCE = 0.9

# Raw keyword-match ratio is doubled, then capped at 1.0
KEYWORD_CONFIDENCE_BOOST = 2


@dataclass
class ClassificationResult:
    """Output from classify_issue."""

    category: str
    confidence: float
    department: str
    urgency: str
    estimated_cost: int
    severity: str
    ai_generated: bool = True
    processed_at: datetime = field(default_factory=utc_now)

    def to_ai_analysis(self) -> AIAnalysis:
        """The nested aiAnalysis block stored on the issue record."""
        return AIAnalysis(
            confidence=self.confidence,
            ai_generated=self.ai_generated,
            processed_at=self.processed_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["processed_at"] = self.processed_at.isoformat()
        return data


def detect_severity(description: Optional[str]) -> str:
    """
    First severity tier (critical, high, medium, low) with a keyword
    contained in the description; 'medium' when nothing matches.
    """
    text = (description or "").lower()
    for level, words in SEVERITY_KEYWORDS:
        if any(word in text for word in words):
            return level
    return DEFAULT_SEVERITY


def classify_issue(
    description: Optional[str],
    category: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ClassificationResult:
    """
    Classify an issue description.

    A non-empty asserted category that names a known keyword category wins
    outright with confidence 0.9. Otherwise every category is scored by the
    share of its keywords found as substrings of the lower-cased description.
    Categories are visited in table order and one replaces the running best
    only when its raw share exceeds the best's (boosted) confidence, so
    earlier categories win ties. No hits at all yields 'general' with
    confidence 0.

    Args:
        description: Free text from the reporter (may be empty)
        category: Optional category the reporter selected
        now: Timestamp recorded as processed_at (defaults to current UTC time)

    Returns:
        ClassificationResult
    """
    text = (description or "").lower()
    processed_at = ensure_utc(now) if now is not None else utc_now()

    best_category = GENERAL_CATEGORY
    best_confidence = 0.0
    best_department = GENERAL_DEPARTMENT
    best_urgency = GENERAL_URGENCY
    best_cost = GENERAL_ESTIMATED_COST

    asserted = get_profile(category)
    if asserted is not None:
        best_category = asserted.name
        best_confidence = ASSERTED_CATEGORY_CONFIDENCE
        best_department = asserted.department
        best_urgency = asserted.urgency
        best_cost = asserted.estimated_cost
        logger.debug(f"Using asserted category '{asserted.name}'")
    else:
        for profile in CATEGORY_PROFILES:
            matches = sum(1 for keyword in profile.keywords if keyword in text)
            ratio = matches / len(profile.keywords)
            if ratio > best_confidence:
                best_category = profile.name
                best_confidence = min(ratio * KEYWORD_CONFIDENCE_BOOST, 1.0)
                best_department = profile.department
                best_urgency = profile.urgency
                best_cost = profile.estimated_cost
        logger.debug(
            f"Keyword classification: {best_category} (confidence {best_confidence:.2f})"
        )

    return ClassificationResult(
        category=best_category,
        confidence=best_confidence,
        department=best_department,
        urgency=best_urgency,
        estimated_cost=best_cost,
        severity=detect_severity(description),
        processed_at=processed_at,
    )
