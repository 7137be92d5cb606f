"""
CRM storage with in-memory records and JSON file persistence.

Holds prospects, properties, deals and communications. The engines
read plain snapshots from here; all writes go through this class.
"""

import json
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import structlog

from crm_engine.core import (
    BudgetRange,
    BusinessType,
    Communication,
    CommunicationType,
    Deal,
    DealStage,
    ExpansionTimeline,
    Property,
    PropertyStatus,
    Prospect,
    ProspectSource,
    ProspectStatus,
    SprinklerSystem,
    TemperatureRequirements,
    ZoningType,
    validate_deal,
    validate_property,
    validate_prospect,
)
from crm_engine.core.dates import resolve_now
from crm_engine.store.schemas import StoreSnapshot

logger = structlog.get_logger()

SNAPSHOT_VERSION = "1.0"


class CRMStore:
    """
    In-memory CRM storage with optional JSON file persistence.
    """

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize storage.

        Args:
            storage_path: Optional path to JSON file for persistence.
                         If None, storage is in-memory only.
        """
        self._prospects: dict[str, Prospect] = {}
        self._properties: dict[str, Property] = {}
        self._deals: dict[str, Deal] = {}
        self._communications: dict[str, Communication] = {}
        self._storage_path = storage_path
        # Set when an existing snapshot could not be read
        self.load_error: Optional[str] = None
        self._load()

    @property
    def storage_path(self) -> Optional[str]:
        return self._storage_path

    def _load(self) -> None:
        """Load records from the JSON file if path is set."""
        if not self._storage_path:
            return

        path = Path(self._storage_path)
        if not path.exists():
            return

        try:
            with open(path, "r") as f:
                data = json.load(f)

            snapshot = StoreSnapshot.model_validate(data)

            prospects = [Prospect.from_dict(p.model_dump(mode="json")) for p in snapshot.prospects]
            properties = [Property.from_dict(p.model_dump(mode="json")) for p in snapshot.properties]
            deals = [Deal.from_dict(d.model_dump(mode="json")) for d in snapshot.deals]
            communications = [
                Communication.from_dict(c.model_dump(mode="json"))
                for c in snapshot.communications
            ]

        except (json.JSONDecodeError, KeyError, ValueError) as e:
            # Pydantic's ValidationError is a ValueError
            self.load_error = str(e)
            logger.warning("Could not load CRM snapshot", path=str(path), error=str(e))
            return

        self._prospects = {p.prospect_id: p for p in prospects}
        self._properties = {p.property_id: p for p in properties}
        self._deals = {d.deal_id: d for d in deals}
        self._communications = {c.communication_id: c for c in communications}

        logger.info("Loaded CRM snapshot", path=str(path), **self.counts())

    def _save(self) -> None:
        """Save records to the JSON file if path is set."""
        if not self._storage_path:
            return

        path = Path(self._storage_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": SNAPSHOT_VERSION,
            "updated_at": datetime.now().isoformat(),
            "prospects": [p.to_dict() for p in self._prospects.values()],
            "properties": [p.to_dict() for p in self._properties.values()],
            "deals": [d.to_dict() for d in self._deals.values()],
            "communications": [c.to_dict() for c in self._communications.values()],
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

        logger.debug("Saved CRM snapshot", path=str(path))

    # --- Prospects ---

    def create_prospect(self, prospect: Prospect, now: Optional[datetime] = None) -> Prospect:
        """
        Create a new prospect.

        Args:
            prospect: The prospect to create
            now: Reference time for move-date checks

        Returns:
            The created prospect

        Raises:
            ValidationError: If the prospect fails validation
            ValueError: If prospect_id already exists
        """
        result = validate_prospect(prospect, now)
        result.raise_first()

        if prospect.prospect_id in self._prospects:
            raise ValueError(f"Prospect '{prospect.prospect_id}' already exists")

        self._prospects[prospect.prospect_id] = prospect
        self._save()
        logger.info("Prospect created", prospect_id=prospect.prospect_id, warnings=result.warnings)
        return prospect

    def get_prospect(self, prospect_id: str) -> Optional[Prospect]:
        """Get a prospect by ID."""
        return self._prospects.get(prospect_id)

    def get_all_prospects(self) -> list[Prospect]:
        return list(self._prospects.values())

    def update_prospect(self, prospect: Prospect) -> Prospect:
        """
        Update an existing prospect.

        Raises:
            ValueError: If prospect doesn't exist
        """
        if prospect.prospect_id not in self._prospects:
            raise ValueError(f"Prospect '{prospect.prospect_id}' not found")

        self._prospects[prospect.prospect_id] = prospect
        self._save()
        return prospect

    def delete_prospect(self, prospect_id: str) -> bool:
        """
        Delete a prospect along with its deals and communications.

        Returns:
            True if deleted, False if not found
        """
        if prospect_id not in self._prospects:
            return False

        del self._prospects[prospect_id]
        self._deals = {k: d for k, d in self._deals.items() if d.prospect_id != prospect_id}
        self._communications = {
            k: c for k, c in self._communications.items() if c.prospect_id != prospect_id
        }
        self._save()
        logger.info("Prospect deleted", prospect_id=prospect_id)
        return True

    def set_prospect_status(self, prospect_id: str, status: ProspectStatus) -> Prospect:
        """
        Move a prospect to a new pipeline status.

        Raises:
            ValueError: If prospect doesn't exist
        """
        prospect = self._prospects.get(prospect_id)
        if prospect is None:
            raise ValueError(f"Prospect '{prospect_id}' not found")

        previous = prospect.status
        prospect.status = status
        self._save()
        logger.info(
            "Prospect status changed",
            prospect_id=prospect_id,
            old=previous.value,
            new=status.value,
        )
        return prospect

    # --- Properties ---

    def create_property(self, prop: Property) -> Property:
        """
        Create a new property listing.

        Raises:
            ValidationError: If the property fails validation
            ValueError: If property_id already exists
        """
        result = validate_property(prop)
        result.raise_first()

        if prop.property_id in self._properties:
            raise ValueError(f"Property '{prop.property_id}' already exists")

        self._properties[prop.property_id] = prop
        self._save()
        logger.info("Property created", property_id=prop.property_id, warnings=result.warnings)
        return prop

    def get_property(self, property_id: str) -> Optional[Property]:
        return self._properties.get(property_id)

    def get_all_properties(self) -> list[Property]:
        return list(self._properties.values())

    def update_property(self, prop: Property) -> Property:
        if prop.property_id not in self._properties:
            raise ValueError(f"Property '{prop.property_id}' not found")

        self._properties[prop.property_id] = prop
        self._save()
        return prop

    def delete_property(self, property_id: str) -> bool:
        if property_id not in self._properties:
            return False

        del self._properties[property_id]
        self._save()
        logger.info("Property deleted", property_id=property_id)
        return True

    # --- Deals ---

    def create_deal(self, deal: Deal) -> Deal:
        """
        Create a new deal for an existing prospect.

        Raises:
            ValidationError: If the deal fails validation
            ValueError: If deal_id already exists or the prospect is unknown
        """
        result = validate_deal(deal)
        result.raise_first()

        if deal.deal_id in self._deals:
            raise ValueError(f"Deal '{deal.deal_id}' already exists")
        if deal.prospect_id not in self._prospects:
            raise ValueError(f"Prospect '{deal.prospect_id}' not found")

        self._deals[deal.deal_id] = deal
        self._save()
        logger.info("Deal created", deal_id=deal.deal_id, stage=deal.stage.value)
        return deal

    def get_deal(self, deal_id: str) -> Optional[Deal]:
        return self._deals.get(deal_id)

    def get_all_deals(self) -> list[Deal]:
        return list(self._deals.values())

    def update_deal(self, deal: Deal, now: Optional[datetime] = None) -> Deal:
        """
        Update an existing deal and stamp its last_updated time.

        Raises:
            ValueError: If deal doesn't exist
        """
        if deal.deal_id not in self._deals:
            raise ValueError(f"Deal '{deal.deal_id}' not found")

        deal.last_updated = resolve_now(now)
        self._deals[deal.deal_id] = deal
        self._save()
        return deal

    def delete_deal(self, deal_id: str) -> bool:
        if deal_id not in self._deals:
            return False

        del self._deals[deal_id]
        self._save()
        return True

    def deals_for_prospect(self, prospect_id: str) -> list[Deal]:
        return [d for d in self._deals.values() if d.prospect_id == prospect_id]

    # --- Communications ---

    def add_communication(self, communication: Communication) -> Communication:
        """
        Log a communication and record it as the prospect's last contact.

        Raises:
            ValueError: If the ID already exists or the prospect is unknown
        """
        if communication.communication_id in self._communications:
            raise ValueError(f"Communication '{communication.communication_id}' already exists")

        prospect = self._prospects.get(communication.prospect_id)
        if prospect is None:
            raise ValueError(f"Prospect '{communication.prospect_id}' not found")

        self._communications[communication.communication_id] = communication
        prospect.last_contact_date = communication.date
        self._save()
        logger.info(
            "Communication logged",
            prospect_id=prospect.prospect_id,
            type=communication.type.value,
        )
        return communication

    def get_all_communications(self) -> list[Communication]:
        return list(self._communications.values())

    def delete_communication(self, communication_id: str) -> bool:
        if communication_id not in self._communications:
            return False

        del self._communications[communication_id]
        self._save()
        return True

    def communications_for_prospect(self, prospect_id: str) -> list[Communication]:
        """Communications with a prospect, newest first."""
        results = [c for c in self._communications.values() if c.prospect_id == prospect_id]
        results.sort(key=lambda c: c.date, reverse=True)
        return results

    # --- Snapshots ---

    def snapshot(self) -> tuple[list[Prospect], list[Property]]:
        """Current prospects and properties, as passed to the engines."""
        return self.get_all_prospects(), self.get_all_properties()

    def counts(self) -> dict[str, int]:
        """Record counts by type."""
        return {
            "prospects": len(self._prospects),
            "properties": len(self._properties),
            "deals": len(self._deals),
            "communications": len(self._communications),
        }

    def is_empty(self) -> bool:
        return not any(self.counts().values())

    def generate_id(self, prefix: str) -> str:
        """Generate a unique record ID like 'PRO-20240301-1A2B3C'."""
        return f"{prefix.upper()}-{datetime.now().strftime('%Y%m%d')}-{uuid.uuid4().hex[:6].upper()}"


def create_sample_data(store: CRMStore, now: Optional[datetime] = None) -> None:
    """Create sample prospects, properties, deals and communications for demos."""
    now = resolve_now(now)

    # Sample 1: 3PL on an immediate timeline, never contacted
    prospect1 = Prospect(
        prospect_id=store.generate_id("PRO"),
        first_name="Dana",
        last_name="Whitfield",
        email="dana.whitfield@keystone3pl.com",
        phone="(312) 555-0141",
        status=ProspectStatus.NEW,
        source=ProspectSource.BROKER_NETWORK,
        business_type=BusinessType.THIRD_PARTY_LOGISTICS,
        required_square_footage=120_000,
        expansion_timeline=ExpansionTimeline.IMMEDIATE,
        shift_24_hour=True,
        target_move_date=now + timedelta(days=21),
        fleet_size=40,
        estimated_value=780_000.0,
        budget_range=BudgetRange.RANGE_500K_1M,
        notes="Outgrowing current Elk Grove building",
        date_created=now - timedelta(days=2),
    )

    # Sample 2: manufacturer needing power and height
    prospect2 = Prospect(
        prospect_id=store.generate_id("PRO"),
        first_name="Luis",
        last_name="Ortega",
        email="lortega@precisionforge.com",
        phone="(630) 555-0178",
        status=ProspectStatus.QUALIFIED,
        source=ProspectSource.REFERRAL,
        business_type=BusinessType.MANUFACTURING,
        required_square_footage=60_000,
        expansion_timeline=ExpansionTimeline.SIX_MONTHS,
        current_facility_size=35_000,
        last_contact_date=now - timedelta(days=2),
        estimated_value=420_000.0,
        budget_range=BudgetRange.UNDER_500K,
        max_budget_per_sf=7.5,
        date_created=now - timedelta(days=30),
    )

    # Sample 3: e-commerce tenant gone quiet
    prospect3 = Prospect(
        prospect_id=store.generate_id("PRO"),
        first_name="Priya",
        last_name="Raman",
        email="priya@shipfastgoods.com",
        phone="(847) 555-0109",
        status=ProspectStatus.CONTACTED,
        source=ProspectSource.WEBSITE,
        business_type=BusinessType.ECOMMERCE,
        required_square_footage=45_000,
        expansion_timeline=ExpansionTimeline.THIRTY_DAYS,
        last_contact_date=now - timedelta(days=10),
        estimated_value=310_000.0,
        budget_range=BudgetRange.UNDER_500K,
        date_created=now - timedelta(days=14),
    )

    # Sample 4: cold storage operator in negotiations
    prospect4 = Prospect(
        prospect_id=store.generate_id("PRO"),
        first_name="Marcus",
        last_name="Bell",
        email="mbell@arcticchain.com",
        phone="(815) 555-0192",
        status=ProspectStatus.NEGOTIATING,
        source=ProspectSource.COLD_CALL,
        business_type=BusinessType.COLD_STORAGE,
        required_square_footage=80_000,
        expansion_timeline=ExpansionTimeline.NINETY_DAYS,
        temperature_requirements=TemperatureRequirements.FREEZER,
        last_contact_date=now - timedelta(days=1),
        estimated_value=1_100_000.0,
        budget_range=BudgetRange.RANGE_1M_2M,
        date_created=now - timedelta(days=60),
    )

    property1 = Property(
        property_id=store.generate_id("PROP"),
        address="1400 Busse Rd",
        city="Elk Grove Village",
        state="IL",
        zip_code="60007",
        square_footage=125_000,
        clear_height=32.0,
        loading_docks=12,
        power_capacity="2000A 480V",
        zoning=ZoningType.HEAVY_INDUSTRIAL,
        sprinkler_system=SprinklerSystem.ESFR,
        office_square_footage=4_000,
        year_built=2019,
        asking_rate=7.25,
        available_date=now + timedelta(days=14),
        description="Cross-dock distribution building near O'Hare",
        date_added=now - timedelta(days=35),
    )

    property2 = Property(
        property_id=store.generate_id("PROP"),
        address="820 Enterprise Dr",
        city="Aurora",
        state="IL",
        zip_code="60504",
        square_footage=62_000,
        clear_height=26.0,
        loading_docks=4,
        power_capacity="1200A 480V",
        zoning=ZoningType.MANUFACTURING,
        crane_capacity="10 ton",
        office_square_footage=6_500,
        year_built=2004,
        asking_rate=6.5,
        available_date=now + timedelta(days=60),
        date_added=now - timedelta(days=95),
    )

    property3 = Property(
        property_id=store.generate_id("PROP"),
        address="55 Commerce Pkwy",
        city="Wheeling",
        state="IL",
        zip_code="60090",
        square_footage=48_000,
        clear_height=24.0,
        loading_docks=3,
        power_capacity="800A 208V",
        zoning=ZoningType.LIGHT_INDUSTRIAL,
        office_square_footage=3_000,
        year_built=1998,
        asking_rate=8.75,
        available_date=now,
        date_added=now - timedelta(days=150),
    )

    property4 = Property(
        property_id=store.generate_id("PROP"),
        address="3100 Rail Yard Ln",
        city="Joliet",
        state="IL",
        zip_code="60436",
        status=PropertyStatus.UNDER_LOI,
        square_footage=410_000,
        clear_height=40.0,
        loading_docks=60,
        power_capacity="4000A 480V",
        zoning=ZoningType.DISTRIBUTION,
        sprinkler_system=SprinklerSystem.ESFR,
        rail_access=True,
        truck_court_depth=185,
        year_built=2021,
        asking_rate=5.95,
        date_added=now - timedelta(days=20),
    )

    for prospect in [prospect1, prospect2, prospect3, prospect4]:
        store.create_prospect(prospect, now)

    for prop in [property1, property2, property3, property4]:
        store.create_property(prop)

    store.create_deal(Deal(
        deal_id=store.generate_id("DEAL"),
        title=f"{prospect4.last_name} - Joliet freezer build-out",
        prospect_id=prospect4.prospect_id,
        property_id=property4.property_id,
        stage=DealStage.LOI_NEGOTIATION,
        value=2_440_000.0,
        probability=60,
        expected_close_date=now + timedelta(days=45),
        term_length=84,
        base_rent=5.95,
        free_rent_months=3,
        total_annual_value=2_439_500.0,
        date_created=now - timedelta(days=25),
        last_updated=now - timedelta(days=1),
    ))

    store.create_deal(Deal(
        deal_id=store.generate_id("DEAL"),
        title=f"{prospect2.last_name} - Aurora manufacturing",
        prospect_id=prospect2.prospect_id,
        property_id=property2.property_id,
        stage=DealStage.SITE_TOUR,
        value=403_000.0,
        probability=35,
        term_length=60,
        base_rent=6.5,
        total_annual_value=403_000.0,
        date_created=now - timedelta(days=10),
        last_updated=now - timedelta(days=2),
    ))

    store.add_communication(Communication(
        communication_id=store.generate_id("COMM"),
        prospect_id=prospect4.prospect_id,
        type=CommunicationType.PHONE,
        subject="LOI redlines",
        content="Landlord open to 3 months free on an 84 month term",
        date=now - timedelta(days=1),
    ))
