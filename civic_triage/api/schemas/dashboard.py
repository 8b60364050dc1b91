"""
API Schemas

Pydantic request/response models for the issue and dashboard endpoints.
Response bodies use the camelCase field names the dashboard consumes.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from civic_triage.models import IssueRecord, Submission


class ClassifyRequest(BaseModel):
    """Description to classify, with an optional reporter-chosen category."""
    description: str = ""
    category: Optional[str] = None


class ClassifyResponse(BaseModel):
    """Classifier output."""
    category: str
    confidence: float
    department: str
    urgency: str
    estimatedCost: float
    severity: str
    aiGenerated: bool = True
    processedAt: datetime


class SubmitRequest(BaseModel):
    """
    A new submission plus the caller's snapshot of stored issues.

    The snapshot is trimmed to the most recent records before duplicate
    detection runs.
    """
    submission: Submission
    existing: List[IssueRecord] = Field(default_factory=list)


class DuplicateSummary(BaseModel):
    """One potential duplicate of the submitted issue."""
    issueId: Optional[str] = None
    category: str
    similarity: float
    reasons: Dict[str, bool]


class SubmitResponse(BaseModel):
    """Enriched record ready to persist, plus duplicate evidence."""
    record: Dict[str, Any]
    duplicates: List[DuplicateSummary] = Field(default_factory=list)


class StatusChangeRequest(BaseModel):
    """Current record and the status to move it to."""
    issue: IssueRecord
    status: str


class IssueCollectionRequest(BaseModel):
    """Live issue collection supplied by the dashboard."""
    issues: List[IssueRecord] = Field(default_factory=list)
