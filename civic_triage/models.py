"""Pydantic models for issue records.

Attribute names are snake_case; serialized names are the camelCase field
names of the shared issue document (``estimatedCost``, ``impactScore``,
``createdAt`` ...). Either spelling is accepted on input.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from civic_triage.taxonomy import (
    DEFAULT_STATUS,
    GENERAL_DEPARTMENT,
    VALID_STATUSES,
    normalize_category,
    normalize_severity,
)
from civic_triage.utils.dates import ensure_utc, utc_now
from civic_triage.utils.geo import parse_coordinates

Category = Literal[
    "pothole", "streetlight", "garbage", "water", "traffic",
    "safety", "parks", "construction", "electricity", "general",
]

Severity = Literal["low", "medium", "high", "critical"]

IssueStatus = Literal["reported", "assigned", "in-progress", "resolved", "closed"]


class Location(BaseModel):
    """A point in degrees."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class AIAnalysis(BaseModel):
    """Classifier metadata attached to a record at submission."""

    model_config = ConfigDict(populate_by_name=True)

    confidence: float = Field(ge=0, le=1)
    ai_generated: bool = Field(default=True, alias="aiGenerated")
    processed_at: datetime = Field(default_factory=utc_now, alias="processedAt")

    @field_validator("processed_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


def _coerce_location(value: Any) -> Any:
    # Missing or malformed coordinates mean "no location", not an error
    if value is None or isinstance(value, Location):
        return value
    coords = parse_coordinates(value)
    if coords is None:
        return None
    return {"latitude": coords[0], "longitude": coords[1]}


class IssueRecord(BaseModel):
    """A single citizen-submitted civic complaint."""

    model_config = ConfigDict(populate_by_name=True)

    # Assigned by the document store; absent on records not yet persisted
    id: Optional[str] = None

    description: str = ""
    category: Category = "general"
    severity: Severity = "medium"
    department: str = GENERAL_DEPARTMENT

    # Optional numerics: None means "absent", 0 is a real value
    estimated_cost: Optional[float] = Field(default=None, ge=0, alias="estimatedCost")
    impact_score: Optional[int] = Field(default=None, alias="impactScore")
    priority: Optional[int] = None
    duplicates_found: Optional[int] = Field(default=None, ge=0, alias="duplicatesFound")

    location: Optional[Location] = None
    status: IssueStatus = DEFAULT_STATUS
    reported_by: Optional[str] = Field(default=None, alias="reportedBy")

    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    ai_analysis: Optional[AIAnalysis] = Field(default=None, alias="aiAnalysis")

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value: Any) -> str:
        return normalize_category(value if isinstance(value, str) else None)

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value: Any) -> str:
        return normalize_severity(value if isinstance(value, str) else None)

    @field_validator("department", mode="before")
    @classmethod
    def _default_department(cls, value: Any) -> Any:
        return value or GENERAL_DEPARTMENT

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if value is None or value == "":
            return DEFAULT_STATUS
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("impact_score", "priority", mode="before")
    @classmethod
    def _round_scores(cls, value: Any) -> Any:
        if isinstance(value, float):
            return round(value)
        return value

    @field_validator("location", mode="before")
    @classmethod
    def _lenient_location(cls, value: Any) -> Any:
        return _coerce_location(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _default_created_at(cls, value: Any) -> Any:
        return utc_now() if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    def to_record(self, json_compatible: bool = False) -> Dict[str, Any]:
        """Document shape for the shared store: camelCase keys, unset fields omitted."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            mode="json" if json_compatible else "python",
        )


class Submission(BaseModel):
    """Raw intake from the reporting client, before classification."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    category: Optional[str] = None  # user-asserted, may be empty
    location: Optional[Location] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    reported_by: Optional[str] = Field(default=None, alias="reportedBy")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("location", mode="before")
    @classmethod
    def _lenient_location(cls, value: Any) -> Any:
        return _coerce_location(value)

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


def load_issues(raw_records: Iterable[Dict[str, Any]]) -> List[IssueRecord]:
    """Validate a collection of stored documents into IssueRecords."""
    return [IssueRecord.model_validate(raw) for raw in raw_records]


def apply_status_change(
    issue: IssueRecord,
    new_status: str,
    now: Optional[datetime] = None,
) -> IssueRecord:
    """
    Move an issue to a new status and refresh updatedAt.

    Any status is reachable from any other. Identity fields are untouched.

    Raises:
        ValueError: if new_status is not one of the five known states
    """
    status = (new_status or "").strip().lower()
    if status not in VALID_STATUSES:
        raise ValueError(
            f"Unknown status '{new_status}'. Expected one of: {', '.join(VALID_STATUSES)}"
        )
    updated_at = ensure_utc(now) if now is not None else utc_now()
    return issue.model_copy(update={"status": status, "updated_at": updated_at})
