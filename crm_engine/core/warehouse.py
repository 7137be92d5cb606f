"""
Warehouse property data model.

Defines the structure for industrial listings that are
matched against prospect requirements.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .dates import days_between, parse_datetime, resolve_now


class PropertyStatus(Enum):
    """Current leasing status of the property."""

    AVAILABLE = "available"
    LEASED = "leased"
    UNDER_LOI = "under_loi"
    OFF_MARKET = "off_market"


class ZoningType(Enum):
    """Zoning classification."""

    HEAVY_INDUSTRIAL = "heavy_industrial"
    LIGHT_INDUSTRIAL = "light_industrial"
    FLEX = "flex"
    DISTRIBUTION = "distribution"
    MANUFACTURING = "manufacturing"


class SprinklerSystem(Enum):
    """Fire suppression system."""

    ESFR = "esfr"  # Early Suppression Fast Response
    WET = "wet"
    DRY = "dry"
    NONE = "none"


@dataclass
class Property:
    """
    Industrial warehouse listing.

    Represents space available for lease that can be matched
    against prospect requirements.
    """

    # Identification
    property_id: str

    # Address
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""

    # Status
    status: PropertyStatus = PropertyStatus.AVAILABLE

    # Building specs
    square_footage: int = 0
    clear_height: float = 0.0  # Feet
    loading_docks: int = 0
    power_capacity: str = "TBD"  # Free text, e.g. "3000A 480V"
    zoning: ZoningType = ZoningType.LIGHT_INDUSTRIAL
    sprinkler_system: SprinklerSystem = SprinklerSystem.WET
    rail_access: bool = False
    column_spacing: str = "TBD"
    truck_court_depth: int = 130  # Feet
    crane_capacity: Optional[str] = None
    office_square_footage: int = 0
    yard_size: int = 0
    ceiling_type: str = "Concrete Tilt-Up"
    year_built: Optional[int] = None

    # Commercial terms
    asking_rate: float = 0.0  # $/SF/year
    available_date: datetime = field(default_factory=datetime.now)

    # Metadata
    description: str = ""
    date_added: datetime = field(default_factory=datetime.now)

    @property
    def full_address(self) -> str:
        return f"{self.address}, {self.city}, {self.state} {self.zip_code}"

    @property
    def formatted_square_footage(self) -> str:
        """Size formatted like '55,000 SF'."""
        return f"{self.square_footage:,} SF"

    @property
    def formatted_clear_height(self) -> str:
        return f"{int(self.clear_height)}' clear"

    @property
    def total_annual_rent(self) -> float:
        return self.square_footage * self.asking_rate

    @property
    def office_percentage(self) -> float:
        if self.square_footage <= 0:
            return 0.0
        return self.office_square_footage / self.square_footage * 100

    def days_on_market(self, now: Optional[datetime] = None) -> int:
        """Whole days since the listing was added."""
        return days_between(self.date_added, resolve_now(now))

    def to_dict(self) -> dict:
        """Convert property to dictionary representation."""
        return {
            "property_id": self.property_id,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "status": self.status.value,
            "square_footage": self.square_footage,
            "clear_height": self.clear_height,
            "loading_docks": self.loading_docks,
            "power_capacity": self.power_capacity,
            "zoning": self.zoning.value,
            "sprinkler_system": self.sprinkler_system.value,
            "rail_access": self.rail_access,
            "column_spacing": self.column_spacing,
            "truck_court_depth": self.truck_court_depth,
            "crane_capacity": self.crane_capacity,
            "office_square_footage": self.office_square_footage,
            "yard_size": self.yard_size,
            "ceiling_type": self.ceiling_type,
            "year_built": self.year_built,
            "asking_rate": self.asking_rate,
            "available_date": self.available_date.isoformat(),
            "description": self.description,
            "date_added": self.date_added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Property":
        """Create property from dictionary representation."""
        return cls(
            property_id=data["property_id"],
            address=data.get("address", ""),
            city=data.get("city", ""),
            state=data.get("state", ""),
            zip_code=data.get("zip_code", ""),
            status=PropertyStatus(data.get("status", "available")),
            square_footage=data.get("square_footage", 0),
            clear_height=data.get("clear_height", 0.0),
            loading_docks=data.get("loading_docks", 0),
            power_capacity=data.get("power_capacity", "TBD"),
            zoning=ZoningType(data.get("zoning", "light_industrial")),
            sprinkler_system=SprinklerSystem(data.get("sprinkler_system", "wet")),
            rail_access=data.get("rail_access", False),
            column_spacing=data.get("column_spacing", "TBD"),
            truck_court_depth=data.get("truck_court_depth", 130),
            crane_capacity=data.get("crane_capacity"),
            office_square_footage=data.get("office_square_footage", 0),
            yard_size=data.get("yard_size", 0),
            ceiling_type=data.get("ceiling_type", "Concrete Tilt-Up"),
            year_built=data.get("year_built"),
            asking_rate=data.get("asking_rate", 0.0),
            available_date=parse_datetime(data.get("available_date")) or datetime.now(),
            description=data.get("description", ""),
            date_added=parse_datetime(data.get("date_added")) or datetime.now(),
        )
