"""
civic_triage - heuristic scoring engine for citizen issue reports.

Keyword classification, impact and priority scoring, duplicate detection
and department/route planning over in-memory issue collections.
"""

from civic_triage.classifier import ClassificationResult, classify_issue
from civic_triage.duplicate_detector import DuplicateMatch, MatchReasons, find_duplicates
from civic_triage.impact_scorer import calculate_impact_score
from civic_triage.models import IssueRecord, Location, Submission, apply_status_change
from civic_triage.priority_scorer import calculate_priority
from civic_triage.resource_optimizer import OptimizationResult, ResourceOptimizer, optimize_resources
from civic_triage.submission_pipeline import SubmissionPipeline, SubmissionResult

__version__ = "0.1.0"

__all__ = [
    "ClassificationResult",
    "DuplicateMatch",
    "IssueRecord",
    "Location",
    "MatchReasons",
    "OptimizationResult",
    "ResourceOptimizer",
    "Submission",
    "SubmissionPipeline",
    "SubmissionResult",
    "apply_status_change",
    "calculate_impact_score",
    "calculate_priority",
    "classify_issue",
    "find_duplicates",
    "optimize_resources",
]
