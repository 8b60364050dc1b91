"""
Submission pipeline: turn raw intake into an enriched issue record.

    classify -> find duplicates -> impact score -> priority -> record

Each stage's output feeds the next; the impact score is computed before
priority so priority can weigh it. Persisting the record (and fetching the
snapshot of existing issues) is the caller's job.

Usage:
    pipeline = SubmissionPipeline()
    result = pipeline.submit(submission, existing_issues)
    store.add(result.record.to_record())
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from civic_triage.classifier import ClassificationResult, classify_issue
from civic_triage.config import EngineConfig
from civic_triage.duplicate_detector import DuplicateMatch, find_duplicates
from civic_triage.impact_scorer import calculate_impact_score
from civic_triage.models import IssueRecord, Submission
from civic_triage.priority_scorer import calculate_priority
from civic_triage.utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)

ANONYMOUS_REPORTER = "anonymous"


@dataclass
class SubmissionResult:
    """Enriched record plus the evidence used to build it."""

    record: IssueRecord
    classification: ClassificationResult
    duplicates: List[DuplicateMatch] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return len(self.duplicates) > 0


class SubmissionPipeline:
    """Enriches citizen submissions. Stateless apart from configuration."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def recent_snapshot(self, existing: Sequence[IssueRecord]) -> List[IssueRecord]:
        """The most recent records (by createdAt) that duplicate detection compares against."""
        ordered = sorted(existing, key=lambda issue: issue.created_at, reverse=True)
        return ordered[: self.config.duplicate_snapshot_limit]

    def submit(
        self,
        submission: Submission,
        existing: Sequence[IssueRecord] = (),
        now: Optional[datetime] = None,
    ) -> SubmissionResult:
        """
        Run the full enrichment pipeline for one submission.

        Args:
            submission: Raw intake (description, asserted category, location ...)
            existing: Stored issues to check for duplicates
            now: Reference time for classification stamp and scoring

        Returns:
            SubmissionResult whose record is ready to persist
        """
        now = ensure_utc(now) if now is not None else utc_now()
        created_at = submission.created_at or now

        classification = classify_issue(submission.description, submission.category, now=now)

        provisional = IssueRecord(
            description=submission.description,
            category=classification.category,
            severity=classification.severity,
            department=classification.department,
            location=submission.location,
            created_at=created_at,
        )

        duplicates = find_duplicates(provisional, self.recent_snapshot(existing))
        impact = calculate_impact_score(provisional, nearby_count=0, now=now)
        priority = calculate_priority(
            provisional.model_copy(update={"impact_score": impact}),
            duplicates,
            now=now,
        )

        record = IssueRecord(
            description=submission.description.strip(),
            category=classification.category,
            severity=classification.severity,
            department=classification.department,
            estimated_cost=classification.estimated_cost,
            impact_score=impact,
            priority=priority,
            duplicates_found=len(duplicates),
            ai_analysis=classification.to_ai_analysis(),
            image_url=submission.image_url,
            location=submission.location,
            reported_by=submission.reported_by or ANONYMOUS_REPORTER,
            status="reported",
            created_at=created_at,
        )

        logger.info(
            f"Enriched submission: category={record.category} severity={record.severity} "
            f"impact={impact} priority={priority} duplicates={len(duplicates)}"
        )
        return SubmissionResult(record=record, classification=classification, duplicates=duplicates)
