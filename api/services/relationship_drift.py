"""
Relationship Drift - Classify how far contact with a person has slipped.

For each tracked person, drift compares the days since the last logged
interaction with the cadence the user chose for them:

    ok       : days_since <= cadence * DUE_SOON_RATIO
    dueSoon  : cadence * DUE_SOON_RATIO < days_since <= cadence
    overdue  : days_since > cadence

People who were never contacted are measured from when their record was
created, not from the epoch. A high-priority person who is overdue is
flagged "important and neglected".

Everything here is a pure function of (record, now). See
config/engine_thresholds.py for the ratio and colors.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Union

from api.services.dates import days_between
from config.engine_thresholds import DUE_SOON_RATIO, DRIFT_COLORS

logger = logging.getLogger(__name__)

# Drift statuses
STATUS_OK = "ok"
STATUS_DUE_SOON = "dueSoon"
STATUS_OVERDUE = "overdue"

# Priorities
PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITIES = (PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH)

# Interaction types
INTERACTION_CALL = "call"
INTERACTION_TEXT = "text"
INTERACTION_IN_PERSON = "in_person"
INTERACTION_EMAIL = "email"
INTERACTION_OTHER = "other"
INTERACTION_TYPES = (
    INTERACTION_CALL,
    INTERACTION_TEXT,
    INTERACTION_IN_PERSON,
    INTERACTION_EMAIL,
    INTERACTION_OTHER,
)


def parse_tags(tags: Union[str, Iterable[str], None]) -> list[str]:
    """
    Normalize tags to a list of lower-case labels.

    Storage keeps tags as a comma-separated string; callers may also pass
    a list. Blank entries are dropped and order is preserved.
    """
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    normalized = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag and tag not in normalized:
            normalized.append(tag)
    return normalized


@dataclass
class PersonRecord:
    """Snapshot of a tracked person, as loaded by the storage layer."""

    id: str
    full_name: str
    preferred_cadence_days: int
    created_at: datetime
    priority: str = PRIORITY_NORMAL
    tags: list[str] = field(default_factory=list)
    last_interaction_at: Optional[datetime] = None
    last_interaction_type: Optional[str] = None

    def __post_init__(self):
        self.tags = parse_tags(self.tags)


@dataclass
class DriftInfo:
    """Result of classifying one person's drift."""
    days_since: int
    status: str
    never_contacted: bool = False


@dataclass
class PersonDrift:
    """Derived drift view of a person. Recomputed on demand, never stored."""

    id: str
    full_name: str
    priority: str
    preferred_cadence_days: int
    tags: list[str]
    last_interaction_at: Optional[datetime]
    last_interaction_type: Optional[str]
    created_at: datetime
    days_since_last_interaction: int
    drift_status: str
    is_important_and_neglected: bool
    never_contacted: bool
    drift_label: str
    drift_color: str

    @property
    def days_overdue(self) -> int:
        """Days past the cadence (0 or negative when not overdue)."""
        return self.days_since_last_interaction - self.preferred_cadence_days

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "priority": self.priority,
            "preferred_cadence_days": self.preferred_cadence_days,
            "tags": list(self.tags),
            "last_interaction_at": self.last_interaction_at.isoformat() if self.last_interaction_at else None,
            "last_interaction_type": self.last_interaction_type,
            "created_at": self.created_at.isoformat(),
            "days_since_last_interaction": self.days_since_last_interaction,
            "drift_status": self.drift_status,
            "is_important_and_neglected": self.is_important_and_neglected,
            "never_contacted": self.never_contacted,
            "drift_label": self.drift_label,
            "drift_color": self.drift_color,
        }


def classify_drift(
    last_interaction_at: Optional[datetime],
    preferred_cadence_days: int,
    created_at: datetime,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> DriftInfo:
    """
    Classify contact drift for one person.

    Args:
        last_interaction_at: Most recent interaction, or None if never contacted
        preferred_cadence_days: Target days between contacts (must be > 0)
        created_at: When the person was added; baseline when never contacted
        now: Current instant
        tz: Timezone for day boundaries (defaults to HOMEBASE_TIMEZONE)

    Returns:
        DriftInfo with the whole calendar days since the reference date.
        days_since is reported even for never-contacted people; use
        never_contacted to decide how to display it.
    """
    reference = last_interaction_at if last_interaction_at is not None else created_at
    days_since = days_between(now, reference, tz)

    ok_threshold = preferred_cadence_days * DUE_SOON_RATIO
    overdue_threshold = preferred_cadence_days

    if days_since <= ok_threshold:
        status = STATUS_OK
    elif days_since <= overdue_threshold:
        status = STATUS_DUE_SOON
    else:
        status = STATUS_OVERDUE

    return DriftInfo(
        days_since=days_since,
        status=status,
        never_contacted=last_interaction_at is None,
    )


def is_important_and_neglected(priority: str, drift_status: str) -> bool:
    """True only for high-priority people who are overdue."""
    return priority == PRIORITY_HIGH and drift_status == STATUS_OVERDUE


def get_drift_color(drift_status: str) -> str:
    """Hex color for a drift status badge."""
    return DRIFT_COLORS[drift_status]


def _plural_days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


def get_drift_label(
    drift_status: str,
    days_since: int,
    preferred_cadence_days: int,
    never_contacted: bool = False,
) -> str:
    """Short human label for a person's drift, e.g. 'Due in 3 days'."""
    if never_contacted:
        return "Never contacted"

    if drift_status == STATUS_OK:
        if days_since <= 0:
            return "Contacted today"
        return f"Contacted {_plural_days(days_since)} ago"

    if drift_status == STATUS_DUE_SOON:
        days_until_due = preferred_cadence_days - days_since
        if days_until_due <= 0:
            return "Due today"
        return f"Due in {_plural_days(days_until_due)}"

    return f"{_plural_days(days_since - preferred_cadence_days)} overdue"


def evaluate_person(
    person: PersonRecord,
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> PersonDrift:
    """Build the full drift view for a person."""
    drift = classify_drift(
        person.last_interaction_at,
        person.preferred_cadence_days,
        person.created_at,
        now,
        tz,
    )
    neglected = is_important_and_neglected(person.priority, drift.status)

    logger.debug(
        f"Drift for {person.id}: {drift.days_since}d since contact, "
        f"cadence {person.preferred_cadence_days}d -> {drift.status}"
    )

    return PersonDrift(
        id=person.id,
        full_name=person.full_name,
        priority=person.priority,
        preferred_cadence_days=person.preferred_cadence_days,
        tags=list(person.tags),
        last_interaction_at=person.last_interaction_at,
        last_interaction_type=person.last_interaction_type,
        created_at=person.created_at,
        days_since_last_interaction=drift.days_since,
        drift_status=drift.status,
        is_important_and_neglected=neglected,
        never_contacted=drift.never_contacted,
        drift_label=get_drift_label(
            drift.status,
            drift.days_since,
            person.preferred_cadence_days,
            drift.never_contacted,
        ),
        drift_color=get_drift_color(drift.status),
    )
