"""
Outreach suggestions - Draft messages for reconnecting with someone.

Produces three fixed-template drafts per person:
- casual: same wording for everyone
- friendly: tone picked from the person's tags (family > friend > colleague > generic)
- direct: offers a call if the last interaction was a call, otherwise a chat

Templates are selected, not generated, so the output is deterministic.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Callable, Iterable, Optional, Union

from api.services.relationship_drift import (
    INTERACTION_CALL,
    PersonDrift,
    parse_tags,
)
from config.engine_thresholds import (
    A_WHILE_AFTER_DAYS,
    WAY_TOO_LONG_AFTER_DAYS,
    A_WHILE_CONTEXT,
    WAY_TOO_LONG_CONTEXT,
)

logger = logging.getLogger(__name__)


@dataclass
class OutreachSuggestions:
    casual: str
    friendly: str
    direct: str

    def to_dict(self) -> dict:
        return asdict(self)


def _has_tag(tag: str) -> Callable[[list[str]], bool]:
    return lambda tags: tag in tags


# Friendly tone rules, checked in order. First match wins.
FRIENDLY_TONES: list[tuple[Callable[[list[str]], bool], str]] = [
    (
        _has_tag("family"),
        "Hi {first_name}, {context}I've been thinking about you. "
        "Hope everything is going well! Let's plan a time to connect.",
    ),
    (
        _has_tag("friend"),
        "Hey {first_name}! {context}I'd love to hear what you've been up to lately. "
        "Coffee/call soon?",
    ),
    (
        _has_tag("colleague"),
        "Hi {first_name}, {context}Hope you're doing well! "
        "Would be great to catch up and see how things are going.",
    ),
]

FRIENDLY_FALLBACK = (
    "Hi {first_name}, {context}Hope you're doing great! "
    "Would love to catch up sometime soon."
)

CASUAL_TEMPLATE = "Hey {first_name}! {context}How have you been? Would love to catch up soon."
DIRECT_TEMPLATE = "Hi {first_name}, just checking in! Available for a quick {medium}?"


def get_time_context(days_since: Optional[int]) -> str:
    """Opening phrase acknowledging a long gap. None means never contacted."""
    if days_since is None or days_since > WAY_TOO_LONG_AFTER_DAYS:
        return WAY_TOO_LONG_CONTEXT
    if days_since > A_WHILE_AFTER_DAYS:
        return A_WHILE_CONTEXT
    return ""


def _salutation(full_name: str) -> str:
    parts = full_name.split()
    return parts[0] if parts else "there"


def suggest_outreach(
    full_name: str,
    tags: Union[str, Iterable[str]],
    last_interaction_type: Optional[str],
    days_since: Optional[int],
) -> OutreachSuggestions:
    """
    Draft casual, friendly and direct outreach messages.

    Args:
        full_name: Person's display name; the first token is used as salutation
        tags: Person's tags, as a list or comma-separated string
        last_interaction_type: call, text, in_person, email, other, or None
        days_since: Days since last contact, or None if never contacted

    Returns:
        OutreachSuggestions with three non-empty messages
    """
    first_name = _salutation(full_name)
    context = get_time_context(days_since)
    tag_list = parse_tags(tags)

    friendly_template = FRIENDLY_FALLBACK
    for matches, template in FRIENDLY_TONES:
        if matches(tag_list):
            friendly_template = template
            break

    medium = "call" if last_interaction_type == INTERACTION_CALL else "chat"

    return OutreachSuggestions(
        casual=CASUAL_TEMPLATE.format(first_name=first_name, context=context),
        friendly=friendly_template.format(first_name=first_name, context=context),
        direct=DIRECT_TEMPLATE.format(first_name=first_name, medium=medium),
    )


def suggest_outreach_for(person: PersonDrift) -> OutreachSuggestions:
    """Outreach drafts for an evaluated person."""
    days_since = None if person.never_contacted else person.days_since_last_interaction
    return suggest_outreach(
        person.full_name,
        person.tags,
        person.last_interaction_type,
        days_since,
    )
