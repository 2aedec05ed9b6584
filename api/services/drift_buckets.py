"""
Group evaluated people into the sections of the people list.

Sections, in display order:
- Important & Neglected (high priority and overdue)
- Overdue (everyone else who is overdue)
- Due Soon
- All Good

Within a section, people who have gone longest without contact come
first. Python's sort is stable, so ties keep their input order.
"""
from dataclasses import dataclass, field
from typing import Iterable, Optional

from api.services.relationship_drift import (
    PersonDrift,
    STATUS_OK,
    STATUS_DUE_SOON,
    STATUS_OVERDUE,
)


@dataclass
class DriftBuckets:
    important_neglected: list[PersonDrift] = field(default_factory=list)
    overdue: list[PersonDrift] = field(default_factory=list)
    due_soon: list[PersonDrift] = field(default_factory=list)
    ok: list[PersonDrift] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.important_neglected) + len(self.overdue) + len(self.due_soon) + len(self.ok)

    def to_dict(self) -> dict:
        return {
            "important_neglected": [p.to_dict() for p in self.important_neglected],
            "overdue": [p.to_dict() for p in self.overdue],
            "due_soon": [p.to_dict() for p in self.due_soon],
            "ok": [p.to_dict() for p in self.ok],
            "total": self.total,
        }


def _most_drifted_first(people: list[PersonDrift]) -> list[PersonDrift]:
    return sorted(people, key=lambda p: p.days_since_last_interaction, reverse=True)


def bucket_people(
    people: Iterable[PersonDrift],
    priority: Optional[str] = None,
) -> DriftBuckets:
    """
    Split people into drift sections.

    Args:
        people: Evaluated people (see relationship_drift.evaluate_person)
        priority: Only include people with this priority (None = all)
    """
    selected = [p for p in people if priority is None or p.priority == priority]

    return DriftBuckets(
        important_neglected=_most_drifted_first(
            [p for p in selected if p.is_important_and_neglected]
        ),
        overdue=_most_drifted_first(
            [p for p in selected if p.drift_status == STATUS_OVERDUE and not p.is_important_and_neglected]
        ),
        due_soon=_most_drifted_first(
            [p for p in selected if p.drift_status == STATUS_DUE_SOON]
        ),
        ok=_most_drifted_first(
            [p for p in selected if p.drift_status == STATUS_OK]
        ),
    )


def next_person_to_contact(people: Iterable[PersonDrift]) -> Optional[PersonDrift]:
    """The overdue person furthest past their cadence, or None."""
    overdue = [p for p in people if p.drift_status == STATUS_OVERDUE]
    if not overdue:
        return None
    return max(overdue, key=lambda p: p.days_overdue)


def people_summary(people: Iterable[PersonDrift]) -> dict:
    """Dashboard card: how many people are overdue and who to reach out to next."""
    people = list(people)
    overdue_count = sum(1 for p in people if p.drift_status == STATUS_OVERDUE)
    next_person = next_person_to_contact(people)

    return {
        "overdue_count": overdue_count,
        "next_person": {
            "id": next_person.id,
            "full_name": next_person.full_name,
            "days_overdue": next_person.days_overdue,
        } if next_person else None,
    }
