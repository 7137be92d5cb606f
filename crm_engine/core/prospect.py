"""
Prospect data model.

Defines a prospect (lead) seeking industrial space, including:
- Lifecycle status and acquisition source
- Business classification
- Space requirements (size, timeline, temperature, operations)
- Budget information
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .dates import format_datetime, parse_datetime


class ProspectStatus(Enum):
    """Lifecycle stage of a prospect."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    NEGOTIATING = "negotiating"
    CLOSED = "closed"
    DEAD = "dead"  # Reachable from any non-terminal state


class ProspectSource(Enum):
    """Acquisition channel (informational only)."""

    WEBSITE = "website"
    REFERRAL = "referral"
    COLD_CALL = "cold_call"
    DIRECT_MAIL = "direct_mail"
    SOCIAL_MEDIA = "social_media"
    BROKER_NETWORK = "broker_network"
    OTHER = "other"


class BusinessType(Enum):
    """Prospect business classification."""

    THIRD_PARTY_LOGISTICS = "third_party_logistics"  # 3PL
    MANUFACTURING = "manufacturing"
    DISTRIBUTION = "distribution"
    ECOMMERCE = "ecommerce"
    COLD_STORAGE = "cold_storage"
    FOOD_BEVERAGE = "food_beverage"
    AUTOMOTIVE = "automotive"
    RETAIL = "retail"
    OTHER = "other"


class ExpansionTimeline(Enum):
    """How soon the prospect needs to move."""

    IMMEDIATE = "immediate"
    THIRTY_DAYS = "30_days"
    SIXTY_DAYS = "60_days"
    NINETY_DAYS = "90_days"
    SIX_MONTHS = "6_months"
    ONE_YEAR = "1_year"


class TemperatureRequirements(Enum):
    """Storage temperature requirement."""

    AMBIENT = "ambient"
    COOLER = "cooler"  # 35-45°F
    FREEZER = "freezer"  # 0-10°F
    MIXED = "mixed"
    CLIMATE_CONTROLLED = "climate_controlled"


class BudgetRange(Enum):
    """Annual budget bracket."""

    UNDER_500K = "under_500k"
    RANGE_500K_1M = "500k_1m"
    RANGE_1M_2M = "1m_2m"
    RANGE_2M_5M = "2m_5m"
    OVER_5M = "over_5m"
    TBD = "tbd"

    @property
    def midpoint(self) -> float:
        """Representative annual value for the bracket."""
        return _BUDGET_MIDPOINTS[self]


_BUDGET_MIDPOINTS = {
    BudgetRange.UNDER_500K: 250_000.0,
    BudgetRange.RANGE_500K_1M: 750_000.0,
    BudgetRange.RANGE_1M_2M: 1_500_000.0,
    BudgetRange.RANGE_2M_5M: 3_500_000.0,
    BudgetRange.OVER_5M: 7_500_000.0,
    BudgetRange.TBD: 0.0,
}


@dataclass
class Prospect:
    """
    Prospect seeking industrial space.

    Engines treat prospects as read-only snapshots; status writes
    and validation belong to the store and its callers.
    """

    # Identification
    prospect_id: str
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""

    # Pipeline
    status: ProspectStatus = ProspectStatus.NEW
    source: ProspectSource = ProspectSource.OTHER

    # Industrial requirements
    business_type: BusinessType = BusinessType.OTHER
    required_square_footage: int = 0
    expansion_timeline: ExpansionTimeline = ExpansionTimeline.NINETY_DAYS
    temperature_requirements: TemperatureRequirements = TemperatureRequirements.AMBIENT
    shift_24_hour: bool = False
    target_move_date: Optional[datetime] = None
    current_facility_size: Optional[int] = None
    annual_throughput: Optional[str] = None
    fleet_size: Optional[int] = None

    # Contact tracking
    last_contact_date: Optional[datetime] = None

    # Budget
    estimated_value: Optional[float] = None
    budget_range: BudgetRange = BudgetRange.TBD
    max_budget_per_sf: Optional[float] = None
    total_annual_budget: Optional[float] = None

    # Notes
    notes: str = ""
    property_address: Optional[str] = None
    date_created: datetime = field(default_factory=datetime.now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def formatted_required_sf(self) -> str:
        """Required size formatted like '50,000 SF'."""
        return f"{self.required_square_footage:,} SF"

    @property
    def estimated_annual_value(self) -> float:
        """Best available estimate of annual spend."""
        if self.total_annual_budget is not None:
            return float(self.total_annual_budget)
        if self.max_budget_per_sf is not None:
            return float(self.max_budget_per_sf) * self.required_square_footage
        return self.budget_range.midpoint

    def to_dict(self) -> dict:
        """Convert prospect to dictionary representation."""
        return {
            "prospect_id": self.prospect_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "status": self.status.value,
            "source": self.source.value,
            "business_type": self.business_type.value,
            "required_square_footage": self.required_square_footage,
            "expansion_timeline": self.expansion_timeline.value,
            "temperature_requirements": self.temperature_requirements.value,
            "shift_24_hour": self.shift_24_hour,
            "target_move_date": format_datetime(self.target_move_date),
            "current_facility_size": self.current_facility_size,
            "annual_throughput": self.annual_throughput,
            "fleet_size": self.fleet_size,
            "last_contact_date": format_datetime(self.last_contact_date),
            "estimated_value": self.estimated_value,
            "budget_range": self.budget_range.value,
            "max_budget_per_sf": self.max_budget_per_sf,
            "total_annual_budget": self.total_annual_budget,
            "notes": self.notes,
            "property_address": self.property_address,
            "date_created": self.date_created.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Prospect":
        """Create prospect from dictionary representation."""
        date_created = parse_datetime(data.get("date_created")) or datetime.now()

        return cls(
            prospect_id=data["prospect_id"],
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            status=ProspectStatus(data.get("status", "new")),
            source=ProspectSource(data.get("source", "other")),
            business_type=BusinessType(data.get("business_type", "other")),
            required_square_footage=data.get("required_square_footage", 0),
            expansion_timeline=ExpansionTimeline(data.get("expansion_timeline", "90_days")),
            temperature_requirements=TemperatureRequirements(
                data.get("temperature_requirements", "ambient")
            ),
            shift_24_hour=data.get("shift_24_hour", False),
            target_move_date=parse_datetime(data.get("target_move_date")),
            current_facility_size=data.get("current_facility_size"),
            annual_throughput=data.get("annual_throughput"),
            fleet_size=data.get("fleet_size"),
            last_contact_date=parse_datetime(data.get("last_contact_date")),
            estimated_value=data.get("estimated_value"),
            budget_range=BudgetRange(data.get("budget_range", "tbd")),
            max_budget_per_sf=data.get("max_budget_per_sf"),
            total_annual_budget=data.get("total_annual_budget"),
            notes=data.get("notes", ""),
            property_address=data.get("property_address"),
            date_created=date_created,
        )
