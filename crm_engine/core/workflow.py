"""
Next-action workflow engine.

Derives recommended follow-up actions for a prospect from its
pipeline status, contact history and move-date pressure.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .dates import days_between, resolve_now
from .matching import find_matches
from .prospect import ExpansionTimeline, Prospect, ProspectStatus
from .warehouse import Property


class Priority(Enum):
    """Urgency of a recommended action."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class NextAction:
    """Recommended follow-up for a prospect."""

    title: str
    icon_hint: str
    priority: Priority

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "title": self.title,
            "icon_hint": self.icon_hint,
            "priority": self.priority.value,
        }


# Days without contact before a follow-up call is due
FOLLOW_UP_AFTER_DAYS = 3

# Move dates this close (in days) call for expediting
EXPEDITE_WITHIN_DAYS = 30


def _days_since_last_contact(prospect: Prospect, now: datetime) -> Optional[int]:
    if prospect.last_contact_date is None:
        return None
    return days_between(prospect.last_contact_date, now)


def _status_actions(
    prospect: Prospect,
    properties: list[Property],
    now: datetime,
) -> list[NextAction]:
    """Actions implied by the prospect's pipeline status."""
    status = prospect.status
    actions: list[NextAction] = []

    if status == ProspectStatus.NEW:
        urgent = prospect.expansion_timeline == ExpansionTimeline.IMMEDIATE
        actions.append(NextAction(
            title="Make initial contact",
            icon_hint="phone",
            priority=Priority.HIGH if urgent else Priority.MEDIUM,
        ))

    elif status == ProspectStatus.CONTACTED:
        days_since = _days_since_last_contact(prospect, now)
        if days_since is None or days_since > FOLLOW_UP_AFTER_DAYS:
            actions.append(NextAction(
                title="Follow-up call",
                icon_hint="phone-plus",
                priority=Priority.HIGH,
            ))
        actions.append(NextAction(
            title="Send property options",
            icon_hint="building-plus",
            priority=Priority.MEDIUM,
        ))

    elif status == ProspectStatus.QUALIFIED:
        if find_matches(prospect, properties, now):
            actions.append(NextAction(
                title="Schedule site tour",
                icon_hint="location",
                priority=Priority.HIGH,
            ))
        actions.append(NextAction(
            title="Prepare LOI",
            icon_hint="document",
            priority=Priority.MEDIUM,
        ))

    elif status == ProspectStatus.NEGOTIATING:
        actions.append(NextAction(
            title="Review terms",
            icon_hint="document-text",
            priority=Priority.HIGH,
        ))

    elif status == ProspectStatus.CLOSED:
        actions.append(NextAction(
            title="Schedule move-in",
            icon_hint="calendar-plus",
            priority=Priority.MEDIUM,
        ))

    # DEAD: no actions

    return actions


def _timeline_actions(prospect: Prospect, now: datetime) -> list[NextAction]:
    """Actions driven by an approaching target move date."""
    if prospect.target_move_date is None:
        return []

    days_until_move = days_between(now, prospect.target_move_date)
    if 0 < days_until_move <= EXPEDITE_WITHIN_DAYS:
        return [NextAction(
            title="Expedite process",
            icon_hint="clock-alert",
            priority=Priority.HIGH,
        )]

    return []


def get_next_actions(
    prospect: Prospect,
    properties: list[Property],
    now: Optional[datetime] = None,
) -> list[NextAction]:
    """
    Recommend next actions for a prospect.

    Dead prospects get no actions at all. For everyone else the
    status actions come first, followed by an "Expedite process"
    action when the target move date is 1-30 days out.

    Ordering is a stable partition: HIGH actions first, then all
    other actions in their original relative order. MEDIUM and LOW
    are not reordered against each other.

    Args:
        prospect: The prospect to advise on
        properties: Property inventory, used to check for site-tour matches
        now: Reference time (defaults to the wall clock)

    Returns:
        List of NextAction
    """
    if prospect.status == ProspectStatus.DEAD:
        return []

    now = resolve_now(now)
    actions = _status_actions(prospect, properties, now)
    actions.extend(_timeline_actions(prospect, now))

    return sorted(actions, key=lambda a: a.priority != Priority.HIGH)
