"""
Duplicate detection for newly submitted issues.

Compares a candidate against a point-in-time snapshot of existing issues and
returns those likely describing the same real-world problem. The composite
similarity is

    0.4  if within 100 m (0.1 km)
  + 0.3  x word-overlap similarity of the descriptions
  + 0.2  if the categories match
  + 0.1  if reported less than 7 days apart

and an existing issue is a match only when the composite exceeds 0.6.

Two submissions racing each other may not see one another; the detector only
knows the snapshot it is handed.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from civic_triage.models import IssueRecord
from civic_triage.utils.dates import days_apart
from civic_triage.utils.geo import distance_km
from civic_triage.utils.text import text_similarity

logger = logging.getLogger(__name__)

PROXIMITY_THRESHOLD_KM = 0.1
SIMILARITY_THRESHOLD = 0.6
TEXT_SIMILAR_FLAG_THRESHOLD = 0.5
RECENT_WINDOW_DAYS = 7
SIMILARITY_PRECISION = 6

PROXIMITY_WEIGHT = 0.4
TEXT_WEIGHT = 0.3
CATEGORY_WEIGHT = 0.2
RECENCY_WEIGHT = 0.1


@dataclass(frozen=True)
class MatchReasons:
    """Which signals fired for a match."""

    proximity: bool
    text_similar: bool
    same_category: bool
    recently_reported: bool

    def to_dict(self) -> dict:
        return {
            "proximity": self.proximity,
            "textSimilar": self.text_similar,
            "sameCategory": self.same_category,
            "recentlyReported": self.recently_reported,
        }


@dataclass(frozen=True)
class DuplicateMatch:
    """An existing issue judged likely to duplicate the candidate. Never persisted."""

    issue: IssueRecord
    similarity: float
    reasons: MatchReasons


def score_pair(candidate: IssueRecord, existing: IssueRecord) -> DuplicateMatch:
    """Composite similarity of two issues, whether or not it crosses the threshold."""
    distance = distance_km(candidate.location, existing.location)
    text_sim = text_similarity(candidate.description, existing.description)
    same_category = candidate.category == existing.category
    apart = days_apart(candidate.created_at, existing.created_at)

    proximate = distance < PROXIMITY_THRESHOLD_KM
    recent = apart < RECENT_WINDOW_DAYS

    # Rounded so 0.4 + 0.2 lands on 0.6 exactly and stays below the threshold
    similarity = round(
        (PROXIMITY_WEIGHT if proximate else 0.0)
        + TEXT_WEIGHT * text_sim
        + (CATEGORY_WEIGHT if same_category else 0.0)
        + (RECENCY_WEIGHT if recent else 0.0),
        SIMILARITY_PRECISION,
    )

    return DuplicateMatch(
        issue=existing,
        similarity=similarity,
        reasons=MatchReasons(
            proximity=proximate,
            text_similar=text_sim > TEXT_SIMILAR_FLAG_THRESHOLD,
            same_category=same_category,
            recently_reported=recent,
        ),
    )


def find_duplicates(
    candidate: IssueRecord,
    existing: Iterable[IssueRecord],
) -> List[DuplicateMatch]:
    """
    Existing issues likely to describe the same problem as the candidate.

    The candidate itself (same non-empty id) is skipped.

    Args:
        candidate: The newly submitted issue
        existing: Snapshot of stored issues to compare against

    Returns:
        Matches with similarity > 0.6, highest first; equal scores keep
        snapshot order
    """
    matches = []
    for other in existing:
        if other is candidate or (candidate.id is not None and other.id == candidate.id):
            continue
        match = score_pair(candidate, other)
        if match.similarity > SIMILARITY_THRESHOLD:
            matches.append(match)

    # sorted() is stable, so ties keep encounter order
    matches = sorted(matches, key=lambda m: m.similarity, reverse=True)
    logger.debug(f"Found {len(matches)} potential duplicate(s)")
    return matches
