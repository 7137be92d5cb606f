"""
Pipeline analytics for the broker dashboard.

Aggregates prospects, properties and deals into headline metrics,
attention lists and a short list of today's priorities.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .dates import resolve_now
from .deal import Deal, DealStage
from .prospect import ExpansionTimeline, Prospect, ProspectStatus
from .warehouse import Property, PropertyStatus
from .workflow import Priority


# Inventory counts only space available within this many days
INVENTORY_WINDOW_DAYS = 90

# Prospects not contacted for this long are overdue
OVERDUE_CONTACT_DAYS = 7

# Move dates within this many days make a prospect urgent
URGENT_MOVE_DAYS = 30

# Listings on market longer than this need attention / a pricing review
AGING_LISTING_DAYS = 90
STALE_LISTING_DAYS = 120

PIPELINE_EXCLUDED_STAGES = (DealStage.INITIAL_INQUIRY, DealStage.OCCUPIED, DealStage.LOST)


@dataclass(frozen=True)
class PriorityItem:
    """A task on today's priority list."""

    title: str
    subtitle: str
    priority: Priority
    prospect_id: Optional[str] = None
    property_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "priority": self.priority.value,
            "prospect_id": self.prospect_id,
            "property_id": self.property_id,
        }


# --- Headline metrics ---

def active_requirements(prospects: list[Prospect]) -> int:
    """Total square footage sought by contacted and qualified prospects."""
    active = (ProspectStatus.CONTACTED, ProspectStatus.QUALIFIED)
    return sum(p.required_square_footage for p in prospects if p.status in active)


def available_inventory(properties: list[Property], now: Optional[datetime] = None) -> int:
    """Square footage of available space coming online within the window."""
    cutoff = resolve_now(now) + timedelta(days=INVENTORY_WINDOW_DAYS)
    return sum(
        p.square_footage for p in properties
        if p.status == PropertyStatus.AVAILABLE and p.available_date <= cutoff
    )


def pipeline_value(deals: list[Deal]) -> float:
    """Annual value of deals past inquiry and not yet closed."""
    return sum(d.total_annual_value for d in deals if d.stage not in PIPELINE_EXCLUDED_STAGES)


def average_days_on_market(properties: list[Property], now: Optional[datetime] = None) -> int:
    """Integer average days on market across available properties."""
    now = resolve_now(now)
    available = [p for p in properties if p.status == PropertyStatus.AVAILABLE]
    if not available:
        return 0
    total_days = sum(p.days_on_market(now) for p in available)
    return total_days // len(available)


def total_prospect_value(prospects: list[Prospect]) -> float:
    """Sum of estimated values where recorded."""
    return sum(p.estimated_value for p in prospects if p.estimated_value is not None)


def total_deal_value(deals: list[Deal]) -> float:
    return sum(d.value for d in deals)


def closed_deals_value(deals: list[Deal]) -> float:
    return sum(d.value for d in deals if d.stage == DealStage.OCCUPIED)


def active_deals_count(deals: list[Deal]) -> int:
    return sum(1 for d in deals if d.is_active)


# --- Attention lists ---

def _contact_overdue(prospect: Prospect, now: datetime) -> bool:
    if prospect.last_contact_date is None:
        return True
    return prospect.last_contact_date < now - timedelta(days=OVERDUE_CONTACT_DAYS)


def urgent_prospects(
    prospects: list[Prospect],
    now: Optional[datetime] = None,
    limit: int = 3
) -> list[Prospect]:
    """
    Prospects needing attention, in input order.

    Urgent means overdue for contact, on an immediate timeline, or
    with a target move date within URGENT_MOVE_DAYS.
    """
    now = resolve_now(now)
    move_cutoff = now + timedelta(days=URGENT_MOVE_DAYS)

    urgent = [
        p for p in prospects
        if _contact_overdue(p, now)
        or p.expansion_timeline == ExpansionTimeline.IMMEDIATE
        or (p.target_move_date is not None and p.target_move_date <= move_cutoff)
    ]
    return urgent[:limit]


def aging_properties(
    properties: list[Property],
    now: Optional[datetime] = None,
    limit: int = 2
) -> list[Property]:
    """Available listings that have sat on the market too long."""
    now = resolve_now(now)
    aging = [
        p for p in properties
        if p.status == PropertyStatus.AVAILABLE and p.days_on_market(now) > AGING_LISTING_DAYS
    ]
    return aging[:limit]


def todays_priorities(
    prospects: list[Prospect],
    properties: list[Property],
    now: Optional[datetime] = None
) -> list[PriorityItem]:
    """
    Build today's task list.

    Up to three follow-ups for prospects on an immediate timeline or
    overdue for contact, then up to two pricing reviews for stale
    listings. HIGH items come first.
    """
    now = resolve_now(now)
    items: list[PriorityItem] = []

    follow_ups = [
        p for p in prospects
        if p.expansion_timeline == ExpansionTimeline.IMMEDIATE or _contact_overdue(p, now)
    ]
    for prospect in follow_ups[:3]:
        immediate = prospect.expansion_timeline == ExpansionTimeline.IMMEDIATE
        items.append(PriorityItem(
            title=f"Follow up with {prospect.full_name}",
            subtitle="Immediate timeline" if immediate else "Overdue contact",
            priority=Priority.HIGH,
            prospect_id=prospect.prospect_id,
        ))

    stale = [p for p in properties if p.days_on_market(now) > STALE_LISTING_DAYS]
    for prop in stale[:2]:
        items.append(PriorityItem(
            title=f"Review pricing for {prop.address}",
            subtitle=f"{prop.days_on_market(now)} days on market",
            priority=Priority.MEDIUM,
            property_id=prop.property_id,
        ))

    rank = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
    return sorted(items, key=lambda i: rank[i.priority])


# --- Formatting ---

def format_square_footage_short(sf: int) -> str:
    """Compact size label: '1.2M SF', '55K SF' or '800 SF'."""
    thousands = sf / 1000
    if thousands >= 1000:
        return f"{thousands / 1000:.1f}M SF"
    if thousands >= 1:
        return f"{thousands:.0f}K SF"
    return f"{sf} SF"


def format_currency_short(value: float) -> str:
    """Compact currency label: '$1.5M', '$750K' or '$950'."""
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"${value / 1_000:.0f}K"
    return f"${value:,.0f}"


# --- Report ---

@dataclass
class DashboardReport:
    """
    Snapshot of pipeline metrics at a point in time.
    """

    generated_at: datetime
    prospect_count: int
    property_count: int
    active_requirements_sf: int
    available_inventory_sf: int
    pipeline_value: float
    average_days_on_market: int
    total_prospect_value: float
    total_deal_value: float
    closed_deals_value: float
    active_deals_count: int
    urgent_prospects: list[Prospect] = field(default_factory=list)
    aging_properties: list[Property] = field(default_factory=list)
    priorities: list[PriorityItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "generated_at": self.generated_at.isoformat(),
            "prospect_count": self.prospect_count,
            "property_count": self.property_count,
            "metrics": {
                "active_requirements": format_square_footage_short(self.active_requirements_sf),
                "available_inventory": format_square_footage_short(self.available_inventory_sf),
                "pipeline_value": format_currency_short(self.pipeline_value),
                "average_days_on_market": self.average_days_on_market,
            },
            "totals": {
                "prospect_value": round(self.total_prospect_value, 2),
                "deal_value": round(self.total_deal_value, 2),
                "closed_deals_value": round(self.closed_deals_value, 2),
                "active_deals": self.active_deals_count,
            },
            "urgent_prospects": [p.prospect_id for p in self.urgent_prospects],
            "aging_properties": [p.property_id for p in self.aging_properties],
            "priorities": [i.to_dict() for i in self.priorities],
        }


def build_dashboard(
    prospects: list[Prospect],
    properties: list[Property],
    deals: list[Deal],
    now: Optional[datetime] = None
) -> DashboardReport:
    """
    Compute every dashboard metric from one consistent snapshot.

    Args:
        prospects: All prospects
        properties: All properties
        deals: All deals
        now: Reference time (defaults to the wall clock)

    Returns:
        DashboardReport
    """
    now = resolve_now(now)

    return DashboardReport(
        generated_at=now,
        prospect_count=len(prospects),
        property_count=len(properties),
        active_requirements_sf=active_requirements(prospects),
        available_inventory_sf=available_inventory(properties, now),
        pipeline_value=pipeline_value(deals),
        average_days_on_market=average_days_on_market(properties, now),
        total_prospect_value=total_prospect_value(prospects),
        total_deal_value=total_deal_value(deals),
        closed_deals_value=closed_deals_value(deals),
        active_deals_count=active_deals_count(deals),
        urgent_prospects=urgent_prospects(prospects, now),
        aging_properties=aging_properties(properties, now),
        priorities=todays_priorities(prospects, properties, now),
    )
