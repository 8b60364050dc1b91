"""
Issue Endpoints

Classification, submission enrichment and status changes for single issues.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from civic_triage.api.deps import get_pipeline
from civic_triage.api.schemas.dashboard import (
    ClassifyRequest,
    ClassifyResponse,
    DuplicateSummary,
    StatusChangeRequest,
    SubmitRequest,
    SubmitResponse,
)
from civic_triage.classifier import classify_issue
from civic_triage.models import apply_status_change
from civic_triage.submission_pipeline import SubmissionPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/issues", tags=["issues"])


@router.post("/classify", response_model=ClassifyResponse)
def classify(request: ClassifyRequest):
    """
    Classify a description.

    An asserted category that names a known category wins with confidence 0.9;
    otherwise keyword matching picks the category. Empty descriptions
    classify as 'general' with confidence 0.
    """
    result = classify_issue(request.description, request.category)
    return ClassifyResponse(
        category=result.category,
        confidence=result.confidence,
        department=result.department,
        urgency=result.urgency,
        estimatedCost=result.estimated_cost,
        severity=result.severity,
        aiGenerated=result.ai_generated,
        processedAt=result.processed_at,
    )


@router.post("/submit", response_model=SubmitResponse)
def submit(
    request: SubmitRequest,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
):
    """
    Enrich a new submission against the supplied snapshot of stored issues.

    Returns the record in stored-document shape. The caller persists it.
    """
    result = pipeline.submit(request.submission, request.existing)
    return SubmitResponse(
        record=result.record.to_record(json_compatible=True),
        duplicates=[
            DuplicateSummary(
                issueId=match.issue.id,
                category=match.issue.category,
                similarity=round(match.similarity, 4),
                reasons=match.reasons.to_dict(),
            )
            for match in result.duplicates
        ],
    )


@router.post("/{issue_id}/status")
def change_status(issue_id: str, request: StatusChangeRequest):
    """
    Move an issue to a new status and refresh updatedAt.

    Any status may follow any other; unknown statuses are rejected with 400.
    """
    if request.issue.id is not None and request.issue.id != issue_id:
        raise HTTPException(status_code=400, detail="Issue id in path and body differ")

    try:
        updated = apply_status_change(request.issue.model_copy(update={"id": issue_id}), request.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Issue {issue_id} moved to {updated.status}")
    return updated.to_record(json_compatible=True)
