"""
Tests for dashboard metrics and today's priorities.
"""

import pytest
from datetime import datetime, timedelta

from crm_engine.core import (
    Deal,
    DealStage,
    ExpansionTimeline,
    Priority,
    Property,
    PropertyStatus,
    Prospect,
    ProspectStatus,
    aging_properties,
    build_dashboard,
    todays_priorities,
    urgent_prospects,
)
from crm_engine.core.dashboard import (
    active_deals_count,
    active_requirements,
    available_inventory,
    average_days_on_market,
    closed_deals_value,
    format_currency_short,
    format_square_footage_short,
    pipeline_value,
)


NOW = datetime(2024, 6, 1, 9, 0)


def make_prospect(prospect_id: str, **overrides) -> Prospect:
    values = dict(
        prospect_id=prospect_id,
        first_name="Test",
        last_name=prospect_id,
        last_contact_date=NOW - timedelta(days=1),
        expansion_timeline=ExpansionTimeline.NINETY_DAYS,
    )
    values.update(overrides)
    return Prospect(**values)


def make_property(property_id: str, days_listed: int, **overrides) -> Property:
    values = dict(
        property_id=property_id,
        address=f"{property_id} Commerce Dr",
        square_footage=100_000,
        available_date=NOW,
        date_added=NOW - timedelta(days=days_listed),
    )
    values.update(overrides)
    return Property(**values)


@pytest.fixture
def deals():
    return [
        Deal(deal_id="D1", title="a", prospect_id="P1", stage=DealStage.INITIAL_INQUIRY,
             value=100_000, total_annual_value=100_000),
        Deal(deal_id="D2", title="b", prospect_id="P1", stage=DealStage.SITE_TOUR,
             value=400_000, total_annual_value=400_000),
        Deal(deal_id="D3", title="c", prospect_id="P2", stage=DealStage.LEASE_DRAFT,
             value=1_100_000, total_annual_value=1_100_000),
        Deal(deal_id="D4", title="d", prospect_id="P2", stage=DealStage.OCCUPIED,
             value=900_000, total_annual_value=900_000),
        Deal(deal_id="D5", title="e", prospect_id="P3", stage=DealStage.LOST,
             value=50_000, total_annual_value=50_000),
    ]


class TestHeadlineMetrics:
    """Tests for the dashboard headline numbers."""

    def test_active_requirements(self):
        prospects = [
            make_prospect("P1", status=ProspectStatus.CONTACTED, required_square_footage=20_000),
            make_prospect("P2", status=ProspectStatus.QUALIFIED, required_square_footage=30_000),
            make_prospect("P3", status=ProspectStatus.NEW, required_square_footage=99_000),
            make_prospect("P4", status=ProspectStatus.NEGOTIATING, required_square_footage=99_000),
        ]

        assert active_requirements(prospects) == 50_000

    def test_available_inventory_window(self):
        properties = [
            make_property("A", 10, available_date=NOW + timedelta(days=90)),
            make_property("B", 10, available_date=NOW + timedelta(days=91)),
            make_property("C", 10, status=PropertyStatus.LEASED),
        ]

        assert available_inventory(properties, NOW) == 100_000

    def test_pipeline_value(self, deals):
        assert pipeline_value(deals) == 1_500_000

    def test_deal_totals(self, deals):
        assert closed_deals_value(deals) == 900_000
        assert active_deals_count(deals) == 3

    def test_average_days_on_market(self):
        properties = [
            make_property("A", 10),
            make_property("B", 15),
            make_property("C", 500, status=PropertyStatus.OFF_MARKET),
        ]

        assert average_days_on_market(properties, NOW) == 12

    def test_average_days_on_market_empty(self):
        assert average_days_on_market([], NOW) == 0


class TestAttentionLists:
    """Tests for urgent prospects, aging listings and priorities."""

    def test_urgent_prospects(self):
        prospects = [
            make_prospect("OK"),
            make_prospect("NEVER", last_contact_date=None),
            make_prospect("STALE", last_contact_date=NOW - timedelta(days=8)),
            make_prospect("NOW", expansion_timeline=ExpansionTimeline.IMMEDIATE),
            make_prospect("MOVING", target_move_date=NOW + timedelta(days=20)),
        ]

        urgent = urgent_prospects(prospects, NOW)

        assert [p.prospect_id for p in urgent] == ["NEVER", "STALE", "NOW"]

    def test_aging_properties(self):
        properties = [
            make_property("A", 91),
            make_property("B", 90),
            make_property("C", 200, status=PropertyStatus.LEASED),
            make_property("D", 150),
            make_property("E", 120),
        ]

        assert [p.property_id for p in aging_properties(properties, NOW)] == ["A", "D"]

    def test_todays_priorities(self):
        prospects = [
            make_prospect("P1", expansion_timeline=ExpansionTimeline.IMMEDIATE),
            make_prospect("P2", last_contact_date=None),
            make_prospect("P3"),
        ]
        properties = [make_property("A", 130), make_property("B", 100)]

        items = todays_priorities(prospects, properties, NOW)

        assert [i.title for i in items] == [
            "Follow up with Test P1",
            "Follow up with Test P2",
            "Review pricing for A Commerce Dr",
        ]
        assert items[0].subtitle == "Immediate timeline"
        assert items[1].subtitle == "Overdue contact"
        assert items[2].subtitle == "130 days on market"
        assert [i.priority for i in items] == [Priority.HIGH, Priority.HIGH, Priority.MEDIUM]

    def test_priorities_capped(self):
        prospects = [make_prospect(f"P{i}", last_contact_date=None) for i in range(5)]
        properties = [make_property(f"X{i}", 200) for i in range(4)]

        items = todays_priorities(prospects, properties, NOW)

        assert len(items) == 5
        assert sum(1 for i in items if i.priority == Priority.HIGH) == 3


class TestFormatting:
    """Tests for compact number formatting."""

    @pytest.mark.parametrize("sf,expected", [
        (1_200_000, "1.2M SF"),
        (55_000, "55K SF"),
        (800, "800 SF"),
    ])
    def test_square_footage(self, sf, expected):
        assert format_square_footage_short(sf) == expected

    @pytest.mark.parametrize("value,expected", [
        (1_500_000, "$1.5M"),
        (750_000, "$750K"),
        (950, "$950"),
    ])
    def test_currency(self, value, expected):
        assert format_currency_short(value) == expected


class TestBuildDashboard:
    """Tests for the combined dashboard report."""

    def test_build_dashboard(self, deals):
        prospects = [
            make_prospect("P1", status=ProspectStatus.QUALIFIED, required_square_footage=60_000,
                          estimated_value=250_000.0),
            make_prospect("P2", last_contact_date=None),
        ]
        properties = [make_property("A", 130), make_property("B", 20)]

        report = build_dashboard(prospects, properties, deals, now=NOW)

        assert report.generated_at == NOW
        assert report.active_requirements_sf == 60_000
        assert report.available_inventory_sf == 200_000
        assert report.average_days_on_market == 75
        assert report.total_prospect_value == 250_000
        assert [p.prospect_id for p in report.urgent_prospects] == ["P2"]
        assert [p.property_id for p in report.aging_properties] == ["A"]

        data = report.to_dict()
        assert data["metrics"]["pipeline_value"] == "$1.5M"
        assert data["metrics"]["active_requirements"] == "60K SF"
        assert data["totals"]["active_deals"] == 3
        assert data["priorities"][0]["priority"] == "high"
