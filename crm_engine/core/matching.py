"""
Matching module for scoring properties against prospect requirements.

Provides an additive, rule-based score that ranks how well each
available warehouse fits a prospect, with a reason for each
rule that fired.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .dates import days_between, resolve_now
from .prospect import (
    BusinessType,
    ExpansionTimeline,
    Prospect,
    TemperatureRequirements,
)
from .warehouse import Property, PropertyStatus, SprinklerSystem, ZoningType


# Matches scoring below this are dropped from results
MIN_MATCH_SCORE = 20.0

# Size ratio bands (property SF / required SF)
SIZE_MATCH_BAND = (0.8, 1.5)
SIZE_ACCEPTABLE_BAND = (0.6, 2.0)

# Days until available that still count as "soon"
AVAILABLE_SOON_DAYS = 30

URGENT_TIMELINES = (ExpansionTimeline.IMMEDIATE, ExpansionTimeline.THIRTY_DAYS)
LOGISTICS_TYPES = (BusinessType.THIRD_PARTY_LOGISTICS, BusinessType.DISTRIBUTION)


@dataclass
class PropertyMatch:
    """Scored pairing of a prospect with one property."""

    property: Property
    score: float
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "property_id": self.property.property_id,
            "address": self.property.full_address,
            "score": self.score,
            "reasons": list(self.reasons),
        }


RuleResult = tuple[float, list[str]]


def _score_size(prospect: Prospect, prop: Property) -> RuleResult:
    """Score size fit; only one size band can apply."""
    required = prospect.required_square_footage
    if required <= 0:
        return 0.0, []

    ratio = prop.square_footage / required

    low, high = SIZE_MATCH_BAND
    if low <= ratio <= high:
        return 40.0, [f"size match ({prop.formatted_square_footage})"]

    low, high = SIZE_ACCEPTABLE_BAND
    if low <= ratio <= high:
        return 20.0, ["size acceptable"]

    return 0.0, []


def _score_temperature(prospect: Prospect, prop: Property) -> RuleResult:
    """Score temperature compatibility."""
    temperature = prospect.temperature_requirements

    if temperature == TemperatureRequirements.AMBIENT and prop.sprinkler_system != SprinklerSystem.NONE:
        return 15.0, ["standard warehouse"]
    if temperature in (TemperatureRequirements.COOLER, TemperatureRequirements.FREEZER):
        # Listings carry no temperature zone, so this is a weak signal with no reason
        return 10.0, []

    return 0.0, []


def _score_business_type(prospect: Prospect, prop: Property) -> RuleResult:
    """Score building features against the prospect's line of business."""
    score = 0.0
    reasons: list[str] = []
    business_type = prospect.business_type

    if business_type in LOGISTICS_TYPES:
        if prop.loading_docks >= 4:
            score += 15
            reasons.append(f"good dock count ({prop.loading_docks} docks)")
        if prop.clear_height >= 28:
            score += 10
            reasons.append("high clear height")
    elif business_type == BusinessType.MANUFACTURING:
        if prop.clear_height >= 24:
            score += 10
            reasons.append("manufacturing height")
        if "480V" in prop.power_capacity or "high" in prop.power_capacity:
            score += 15
            reasons.append("industrial power")
    elif business_type == BusinessType.ECOMMERCE:
        if prop.loading_docks >= 2:
            score += 10
            reasons.append("e-commerce ready")

    return score, reasons


def _score_operations(prospect: Prospect, prop: Property) -> RuleResult:
    """Score 24/7 operations compatibility."""
    if prospect.shift_24_hour and prop.zoning == ZoningType.HEAVY_INDUSTRIAL:
        return 10.0, ["24/7 operations allowed"]
    return 0.0, []


def _score_availability(prospect: Prospect, prop: Property, now: datetime) -> RuleResult:
    """Score availability against an urgent timeline."""
    if prospect.expansion_timeline not in URGENT_TIMELINES:
        return 0.0, []

    days_until_available = days_between(now, prop.available_date)
    if days_until_available <= AVAILABLE_SOON_DAYS:
        return 15.0, ["available soon"]

    return 0.0, []


def score_property(
    prospect: Prospect,
    prop: Property,
    now: Optional[datetime] = None,
) -> RuleResult:
    """
    Score one property against a prospect.

    Rules are additive and independent; the property's status is not
    considered here (find_matches filters on it).

    Args:
        prospect: The prospect whose requirements are matched
        prop: The candidate property
        now: Reference time for availability (defaults to the wall clock)

    Returns:
        Tuple of (score, reasons) with reasons in rule order
    """
    now = resolve_now(now)
    results = [
        _score_size(prospect, prop),
        _score_temperature(prospect, prop),
        _score_business_type(prospect, prop),
        _score_operations(prospect, prop),
        _score_availability(prospect, prop, now),
    ]

    score = sum(points for points, _ in results)
    reasons = [reason for _, rule_reasons in results for reason in rule_reasons]
    return score, reasons


def find_matches(
    prospect: Prospect,
    properties: list[Property],
    now: Optional[datetime] = None,
    min_score: float = MIN_MATCH_SCORE,
) -> list[PropertyMatch]:
    """
    Find available properties that fit a prospect.

    Args:
        prospect: The prospect to match
        properties: Candidate properties in any status
        now: Reference time (defaults to the wall clock)
        min_score: Results scoring below this are excluded

    Returns:
        List of PropertyMatch sorted by score descending; ties keep
        their input order
    """
    now = resolve_now(now)
    available = [p for p in properties if p.status == PropertyStatus.AVAILABLE]

    matches = []
    for prop in available:
        score, reasons = score_property(prospect, prop, now)
        if score >= min_score:
            matches.append(PropertyMatch(property=prop, score=score, reasons=reasons))

    # Stable sort, so equal scores keep input order
    matches.sort(key=lambda m: m.score, reverse=True)

    return matches


def get_match_summary(
    prospect: Prospect,
    properties: list[Property],
    now: Optional[datetime] = None,
) -> str:
    """Describe how many properties match a prospect."""
    count = len(find_matches(prospect, properties, now))

    if count == 0:
        return "No matches found"
    if count == 1:
        return "1 potential match"
    return f"{count} potential matches"
