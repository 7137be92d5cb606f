"""
Lease deal and communication records.

Deals track a prospect's lease negotiation for a property through
its stages; communications log calls, emails and meetings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .dates import format_datetime, parse_datetime


class DealStage(Enum):
    """Lease deal pipeline stage."""

    INITIAL_INQUIRY = "initial_inquiry"
    SITE_TOUR = "site_tour"
    LOI_SUBMITTED = "loi_submitted"
    LOI_NEGOTIATION = "loi_negotiation"
    LEASE_DRAFT = "lease_draft"
    DUE_DILIGENCE = "due_diligence"
    LEASE_EXECUTION = "lease_execution"
    PENDING_OCCUPANCY = "pending_occupancy"
    OCCUPIED = "occupied"  # Closed/won
    LOST = "lost"


CLOSED_STAGES = (DealStage.OCCUPIED, DealStage.LOST)


class LeaseType(Enum):
    """Lease structure."""

    TRIPLE_NET = "nnn"
    MODIFIED_GROSS = "modified_gross"
    FULL_SERVICE = "full_service"
    PERCENTAGE = "percentage"


class CommunicationType(Enum):
    """Channel of a logged communication."""

    EMAIL = "email"
    PHONE = "phone"
    TEXT = "text"
    MEETING = "meeting"
    NOTE = "note"


@dataclass
class Deal:
    """
    Lease deal between a prospect and (optionally) a property.
    """

    # Identification
    deal_id: str
    title: str
    prospect_id: str
    property_id: Optional[str] = None

    # Pipeline
    stage: DealStage = DealStage.INITIAL_INQUIRY
    value: float = 0.0
    probability: int = 25  # 0-100
    expected_close_date: Optional[datetime] = None
    actual_close_date: Optional[datetime] = None

    # Lease terms
    lease_type: LeaseType = LeaseType.TRIPLE_NET
    term_length: int = 60  # Months
    base_rent: float = 0.0
    annual_escalation: float = 3.0  # Percent
    ti_allowance: Optional[float] = None
    free_rent_months: int = 0
    option_to_extend: Optional[str] = None
    commission_structure: str = "TBD"
    total_annual_value: float = 0.0

    # Metadata
    notes: str = ""
    date_created: datetime = field(default_factory=datetime.now)
    last_updated: datetime = field(default_factory=datetime.now)

    @property
    def monthly_rent(self) -> float:
        return self.total_annual_value / 12

    @property
    def is_active(self) -> bool:
        """Still in the pipeline (neither occupied nor lost)."""
        return self.stage not in CLOSED_STAGES

    @property
    def formatted_term_length(self) -> str:
        """Term as '5 years', '1 year, 6 months' or '8 months'."""
        years, months = divmod(self.term_length, 12)
        if years == 0:
            return f"{months} months"
        year_label = f"{years} year{'' if years == 1 else 's'}"
        if months == 0:
            return year_label
        return f"{year_label}, {months} months"

    def to_dict(self) -> dict:
        """Convert deal to dictionary representation."""
        return {
            "deal_id": self.deal_id,
            "title": self.title,
            "prospect_id": self.prospect_id,
            "property_id": self.property_id,
            "stage": self.stage.value,
            "value": self.value,
            "probability": self.probability,
            "expected_close_date": format_datetime(self.expected_close_date),
            "actual_close_date": format_datetime(self.actual_close_date),
            "lease_type": self.lease_type.value,
            "term_length": self.term_length,
            "base_rent": self.base_rent,
            "annual_escalation": self.annual_escalation,
            "ti_allowance": self.ti_allowance,
            "free_rent_months": self.free_rent_months,
            "option_to_extend": self.option_to_extend,
            "commission_structure": self.commission_structure,
            "total_annual_value": self.total_annual_value,
            "notes": self.notes,
            "date_created": self.date_created.isoformat(),
            "last_updated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Deal":
        """Create deal from dictionary representation."""
        return cls(
            deal_id=data["deal_id"],
            title=data.get("title", ""),
            prospect_id=data["prospect_id"],
            property_id=data.get("property_id"),
            stage=DealStage(data.get("stage", "initial_inquiry")),
            value=data.get("value", 0.0),
            probability=data.get("probability", 25),
            expected_close_date=parse_datetime(data.get("expected_close_date")),
            actual_close_date=parse_datetime(data.get("actual_close_date")),
            lease_type=LeaseType(data.get("lease_type", "nnn")),
            term_length=data.get("term_length", 60),
            base_rent=data.get("base_rent", 0.0),
            annual_escalation=data.get("annual_escalation", 3.0),
            ti_allowance=data.get("ti_allowance"),
            free_rent_months=data.get("free_rent_months", 0),
            option_to_extend=data.get("option_to_extend"),
            commission_structure=data.get("commission_structure", "TBD"),
            total_annual_value=data.get("total_annual_value", 0.0),
            notes=data.get("notes", ""),
            date_created=parse_datetime(data.get("date_created")) or datetime.now(),
            last_updated=parse_datetime(data.get("last_updated")) or datetime.now(),
        )


@dataclass
class Communication:
    """Logged interaction with a prospect."""

    communication_id: str
    prospect_id: str
    type: CommunicationType
    subject: str = ""
    content: str = ""
    date: datetime = field(default_factory=datetime.now)
    is_outgoing: bool = True

    def to_dict(self) -> dict:
        return {
            "communication_id": self.communication_id,
            "prospect_id": self.prospect_id,
            "type": self.type.value,
            "subject": self.subject,
            "content": self.content,
            "date": self.date.isoformat(),
            "is_outgoing": self.is_outgoing,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Communication":
        return cls(
            communication_id=data["communication_id"],
            prospect_id=data["prospect_id"],
            type=CommunicationType(data.get("type", "note")),
            subject=data.get("subject", ""),
            content=data.get("content", ""),
            date=parse_datetime(data.get("date")) or datetime.now(),
            is_outgoing=data.get("is_outgoing", True),
        )
