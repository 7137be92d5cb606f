"""
Tests for property and prospect list filters.
"""

import pytest
from datetime import datetime, timedelta

from crm_engine.core import (
    BusinessType,
    ClearHeightRange,
    Property,
    PropertyFilters,
    PropertySort,
    Prospect,
    ProspectStatus,
    SizeRange,
    filter_properties,
    filter_prospects,
    status_counts,
)


NOW = datetime(2024, 6, 1, 9, 0)


@pytest.fixture
def properties():
    return [
        Property(
            property_id="A",
            address="10 Lake St",
            city="Naperville",
            state="IL",
            square_footage=40_000,
            clear_height=22.0,
            asking_rate=9.0,
            date_added=NOW - timedelta(days=3),
        ),
        Property(
            property_id="B",
            address="20 River Rd",
            city="Gary",
            state="IN",
            square_footage=150_000,
            clear_height=32.0,
            asking_rate=5.5,
            rail_access=True,
            date_added=NOW - timedelta(days=1),
        ),
        Property(
            property_id="C",
            address="30 Prairie Ave",
            city="Aurora",
            state="IL",
            square_footage=650_000,
            clear_height=40.0,
            asking_rate=4.75,
            date_added=NOW - timedelta(days=10),
        ),
    ]


def ids(items) -> list[str]:
    return [p.property_id for p in items]


class TestPropertyFilters:
    """Tests for filter_properties."""

    def test_defaults_newest_first(self, properties):
        assert ids(filter_properties(properties)) == ["B", "A", "C"]

    @pytest.mark.parametrize("size,expected", [
        (SizeRange.SMALL, ["A"]),
        (SizeRange.MEDIUM, ["B"]),
        (SizeRange.LARGE, []),
        (SizeRange.XLARGE, ["C"]),
    ])
    def test_size_bands(self, properties, size, expected):
        assert ids(filter_properties(properties, PropertyFilters(size=size))) == expected

    @pytest.mark.parametrize("height,expected", [
        (ClearHeightRange.LOW, ["A"]),
        (ClearHeightRange.MEDIUM, ["B"]),  # 32' is inclusive
        (ClearHeightRange.HIGH, ["C"]),
    ])
    def test_clear_height_bands(self, properties, height, expected):
        assert ids(filter_properties(properties, PropertyFilters(clear_height=height))) == expected

    def test_rail_access_only(self, properties):
        assert ids(filter_properties(properties, PropertyFilters(rail_access_only=True))) == ["B"]

    @pytest.mark.parametrize("text,expected", [
        ("river", ["B"]),
        ("IL", ["A", "C"]),
        ("  aurora ", ["C"]),
        ("nowhere", []),
    ])
    def test_search(self, properties, text, expected):
        filters = PropertyFilters(search_text=text, sort_by=PropertySort.LOCATION)

        assert sorted(ids(filter_properties(properties, filters))) == sorted(expected)

    @pytest.mark.parametrize("sort_by,expected", [
        (PropertySort.SIZE, ["C", "B", "A"]),
        (PropertySort.PRICE, ["C", "B", "A"]),
        (PropertySort.LOCATION, ["C", "B", "A"]),
        (PropertySort.DATE_ADDED, ["B", "A", "C"]),
    ])
    def test_sort_orders(self, properties, sort_by, expected):
        assert ids(filter_properties(properties, PropertyFilters(sort_by=sort_by))) == expected

    def test_reset(self):
        filters = PropertyFilters(
            search_text="x",
            size=SizeRange.LARGE,
            clear_height=ClearHeightRange.HIGH,
            rail_access_only=True,
            sort_by=PropertySort.PRICE,
        )

        filters.reset()

        assert filters == PropertyFilters()

    def test_does_not_mutate_input(self, properties):
        original = list(properties)

        filter_properties(properties, PropertyFilters(sort_by=PropertySort.SIZE))

        assert properties == original


class TestProspectFilters:
    """Tests for filter_prospects and status_counts."""

    @pytest.fixture
    def prospects(self):
        return [
            Prospect(
                prospect_id="P1",
                first_name="Ann",
                last_name="Cho",
                email="ann@cho.com",
                status=ProspectStatus.NEW,
                business_type=BusinessType.COLD_STORAGE,
                date_created=NOW - timedelta(days=5),
            ),
            Prospect(
                prospect_id="P2",
                first_name="Ben",
                last_name="Ortiz",
                email="ben@ortizmfg.com",
                phone="555-0111",
                status=ProspectStatus.QUALIFIED,
                business_type=BusinessType.MANUFACTURING,
                date_created=NOW - timedelta(days=1),
            ),
            Prospect(
                prospect_id="P3",
                first_name="Cara",
                last_name="Diaz",
                status=ProspectStatus.NEW,
                date_created=NOW - timedelta(days=2),
            ),
        ]

    def test_newest_first(self, prospects):
        assert [p.prospect_id for p in filter_prospects(prospects)] == ["P2", "P3", "P1"]

    def test_status_filter(self, prospects):
        results = filter_prospects(prospects, status=ProspectStatus.NEW)

        assert [p.prospect_id for p in results] == ["P3", "P1"]

    @pytest.mark.parametrize("text,expected", [
        ("ortiz", ["P2"]),
        ("cold storage", ["P1"]),
        ("555-01", ["P2"]),
        ("c", ["P2", "P3", "P1"]),  # Too short, ignored
    ])
    def test_search(self, prospects, text, expected):
        assert [p.prospect_id for p in filter_prospects(prospects, search_text=text)] == expected

    def test_status_counts(self, prospects):
        counts = status_counts(prospects)

        assert counts == {ProspectStatus.NEW: 2, ProspectStatus.QUALIFIED: 1}
