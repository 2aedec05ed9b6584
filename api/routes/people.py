"""
People API endpoints for Homebase.

The storage layer posts a snapshot of person records; these endpoints
return drift buckets and outreach drafts. Nothing is persisted here.
"""
from datetime import datetime
from typing import Optional, Union
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from api.services.dates import get_local_timezone
from api.services.drift_buckets import bucket_people, people_summary
from api.services.outreach import suggest_outreach_for
from api.services.relationship_drift import (
    INTERACTION_TYPES,
    PRIORITIES,
    PRIORITY_NORMAL,
    PersonRecord,
    evaluate_person,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/people", tags=["people"])


class PersonIn(BaseModel):
    """A person record as loaded from storage."""
    id: str
    full_name: str
    preferred_cadence_days: int = Field(gt=0)
    created_at: datetime
    priority: str = Field(default=PRIORITY_NORMAL, pattern=f"^({'|'.join(PRIORITIES)})$")
    tags: Union[list[str], str] = Field(default_factory=list)
    last_interaction_at: Optional[datetime] = None
    last_interaction_type: Optional[str] = Field(
        default=None,
        pattern=f"^({'|'.join(INTERACTION_TYPES)})$",
    )

    def to_record(self) -> PersonRecord:
        return PersonRecord(
            id=self.id,
            full_name=self.full_name,
            preferred_cadence_days=self.preferred_cadence_days,
            created_at=self.created_at,
            priority=self.priority,
            tags=self.tags,
            last_interaction_at=self.last_interaction_at,
            last_interaction_type=self.last_interaction_type,
        )


class DriftRequest(BaseModel):
    people: list[PersonIn]
    now: Optional[datetime] = None
    priority: Optional[str] = None


class PersonDriftResponse(BaseModel):
    id: str
    full_name: str
    priority: str
    preferred_cadence_days: int
    tags: list[str]
    last_interaction_at: Optional[str] = None
    last_interaction_type: Optional[str] = None
    created_at: str
    days_since_last_interaction: int
    drift_status: str
    is_important_and_neglected: bool
    never_contacted: bool
    drift_label: str
    drift_color: str


class NextPersonResponse(BaseModel):
    id: str
    full_name: str
    days_overdue: int


class PeopleSummaryResponse(BaseModel):
    overdue_count: int
    next_person: Optional[NextPersonResponse] = None


class DriftResponse(BaseModel):
    important_neglected: list[PersonDriftResponse]
    overdue: list[PersonDriftResponse]
    due_soon: list[PersonDriftResponse]
    ok: list[PersonDriftResponse]
    total: int
    summary: PeopleSummaryResponse


class OutreachRequest(BaseModel):
    person: PersonIn
    now: Optional[datetime] = None


class OutreachResponse(BaseModel):
    casual: str
    friendly: str
    direct: str
    drift_status: str
    days_since_last_interaction: int
    never_contacted: bool


def _resolve_now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(get_local_timezone())


@router.post("/drift", response_model=DriftResponse)
async def classify_people(request: DriftRequest):
    """
    Classify drift for every posted person and group them into sections.

    Sections are sorted most-drifted first. The optional priority filter
    narrows the sections; the summary always covers everyone posted.
    """
    if request.priority is not None and request.priority not in PRIORITIES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown priority '{request.priority}'. Use one of: {', '.join(PRIORITIES)}",
        )

    now = _resolve_now(request.now)
    evaluated = [evaluate_person(p.to_record(), now) for p in request.people]
    buckets = bucket_people(evaluated, priority=request.priority)

    logger.info(
        f"Drift classified for {len(evaluated)} people: "
        f"{len(buckets.important_neglected)} important & neglected, "
        f"{len(buckets.overdue)} overdue, {len(buckets.due_soon)} due soon"
    )

    return {**buckets.to_dict(), "summary": people_summary(evaluated)}


@router.post("/outreach", response_model=OutreachResponse)
async def outreach_suggestions(request: OutreachRequest):
    """Draft casual, friendly and direct messages for one person."""
    now = _resolve_now(request.now)
    person = evaluate_person(request.person.to_record(), now)
    suggestions = suggest_outreach_for(person)

    return {
        **suggestions.to_dict(),
        "drift_status": person.drift_status,
        "days_since_last_interaction": person.days_since_last_interaction,
        "never_contacted": person.never_contacted,
    }
