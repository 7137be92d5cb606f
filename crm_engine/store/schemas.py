"""
Pydantic schemas for the persisted CRM snapshot.

Each payload mirrors the to_dict() shape of its core record. The
snapshot file is validated against these before records are rebuilt.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from crm_engine.core import (
    BudgetRange,
    BusinessType,
    CommunicationType,
    DealStage,
    ExpansionTimeline,
    LeaseType,
    PropertyStatus,
    ProspectSource,
    ProspectStatus,
    SprinklerSystem,
    TemperatureRequirements,
    ZoningType,
)


class ProspectPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prospect_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    status: ProspectStatus = ProspectStatus.NEW
    source: ProspectSource = ProspectSource.OTHER
    business_type: BusinessType = BusinessType.OTHER
    required_square_footage: int = 0
    expansion_timeline: ExpansionTimeline = ExpansionTimeline.NINETY_DAYS
    temperature_requirements: TemperatureRequirements = TemperatureRequirements.AMBIENT
    shift_24_hour: bool = False
    target_move_date: Optional[datetime] = None
    current_facility_size: Optional[int] = None
    annual_throughput: Optional[str] = None
    fleet_size: Optional[int] = None
    last_contact_date: Optional[datetime] = None
    estimated_value: Optional[float] = None
    budget_range: BudgetRange = BudgetRange.TBD
    max_budget_per_sf: Optional[float] = None
    total_annual_budget: Optional[float] = None
    notes: str = ""
    property_address: Optional[str] = None
    date_created: Optional[datetime] = None


class PropertyPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    property_id: str
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    status: PropertyStatus = PropertyStatus.AVAILABLE
    square_footage: int = 0
    clear_height: float = 0.0
    loading_docks: int = 0
    power_capacity: str = "TBD"
    zoning: ZoningType = ZoningType.LIGHT_INDUSTRIAL
    sprinkler_system: SprinklerSystem = SprinklerSystem.WET
    rail_access: bool = False
    column_spacing: str = "TBD"
    truck_court_depth: int = 130
    crane_capacity: Optional[str] = None
    office_square_footage: int = 0
    yard_size: int = 0
    ceiling_type: str = "Concrete Tilt-Up"
    year_built: Optional[int] = None
    asking_rate: float = 0.0
    available_date: Optional[datetime] = None
    description: str = ""
    date_added: Optional[datetime] = None


class DealPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    deal_id: str
    title: str = ""
    prospect_id: str
    property_id: Optional[str] = None
    stage: DealStage = DealStage.INITIAL_INQUIRY
    value: float = 0.0
    probability: int = 25
    expected_close_date: Optional[datetime] = None
    actual_close_date: Optional[datetime] = None
    lease_type: LeaseType = LeaseType.TRIPLE_NET
    term_length: int = 60
    base_rent: float = 0.0
    annual_escalation: float = 3.0
    ti_allowance: Optional[float] = None
    free_rent_months: int = 0
    option_to_extend: Optional[str] = None
    commission_structure: str = "TBD"
    total_annual_value: float = 0.0
    notes: str = ""
    date_created: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class CommunicationPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    communication_id: str
    prospect_id: str
    type: CommunicationType = CommunicationType.NOTE
    subject: str = ""
    content: str = ""
    date: Optional[datetime] = None
    is_outgoing: bool = True


class StoreSnapshot(BaseModel):
    """Top-level shape of the JSON snapshot file."""

    version: str = "1.0"
    updated_at: Optional[datetime] = None
    prospects: list[ProspectPayload] = []
    properties: list[PropertyPayload] = []
    deals: list[DealPayload] = []
    communications: list[CommunicationPayload] = []
