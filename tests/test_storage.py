"""
Tests for the CRM store and its JSON persistence.
"""

import json
from pathlib import Path
import re

import pytest
from datetime import datetime, timedelta

from crm_engine.core import (
    Communication,
    CommunicationType,
    Deal,
    DealStage,
    Property,
    Prospect,
    ProspectStatus,
    ValidationError,
    find_matches,
)
from crm_engine.store import CRMStore, StoreSnapshot, create_sample_data
from crm_engine.config import load_settings
from crm_engine.core.dates import days_between

import run


NOW = datetime(2024, 6, 1, 9, 0)


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "data" / "crm.json")


@pytest.fixture
def store(store_path):
    return CRMStore(store_path)


@pytest.fixture
def prospect():
    return Prospect(
        prospect_id="PRO-1",
        first_name="Ann",
        last_name="Cho",
        email="ann@cho-logistics.com",
        phone="555-0101",
        required_square_footage=50_000,
        date_created=NOW,
    )


@pytest.fixture
def prop():
    return Property(
        property_id="PROP-1",
        address="1 Industrial Dr",
        city="Aurora",
        state="IL",
        zip_code="60504",
        square_footage=52_000,
        clear_height=30.0,
        loading_docks=6,
        asking_rate=6.5,
        available_date=NOW,
        date_added=NOW,
    )


class TestProspectCrud:
    """Tests for prospect create/read/update/delete."""

    def test_create_and_get(self, store, prospect):
        store.create_prospect(prospect, now=NOW)

        assert store.get_prospect("PRO-1") is prospect
        assert store.get_all_prospects() == [prospect]
        assert store.counts()["prospects"] == 1

    def test_create_invalid_raises(self, store, prospect):
        prospect.email = "bad"

        with pytest.raises(ValidationError) as exc_info:
            store.create_prospect(prospect, now=NOW)

        assert exc_info.value.field == "email"
        assert store.get_prospect("PRO-1") is None

    def test_create_duplicate_raises(self, store, prospect):
        store.create_prospect(prospect, now=NOW)

        with pytest.raises(ValueError, match="already exists"):
            store.create_prospect(prospect, now=NOW)

    def test_update_unknown_raises(self, store, prospect):
        with pytest.raises(ValueError, match="not found"):
            store.update_prospect(prospect)

    def test_set_status(self, store, prospect):
        store.create_prospect(prospect, now=NOW)

        store.set_prospect_status("PRO-1", ProspectStatus.QUALIFIED)

        assert store.get_prospect("PRO-1").status == ProspectStatus.QUALIFIED

    def test_delete_cascades(self, store, prospect):
        store.create_prospect(prospect, now=NOW)
        store.create_deal(Deal(deal_id="D-1", title="Lease", prospect_id="PRO-1"))
        store.add_communication(Communication(
            communication_id="C-1",
            prospect_id="PRO-1",
            type=CommunicationType.EMAIL,
            date=NOW,
        ))

        assert store.delete_prospect("PRO-1") is True
        assert store.delete_prospect("PRO-1") is False
        assert store.deals_for_prospect("PRO-1") == []
        assert store.communications_for_prospect("PRO-1") == []


class TestPropertiesAndDeals:
    """Tests for property and deal records."""

    def test_create_property_invalid(self, store, prop):
        prop.clear_height = 0.0

        with pytest.raises(ValidationError):
            store.create_property(prop)

    def test_property_delete(self, store, prop):
        store.create_property(prop)

        assert store.delete_property("PROP-1") is True
        assert store.get_property("PROP-1") is None
        assert store.delete_property("PROP-1") is False

    def test_deal_requires_known_prospect(self, store):
        with pytest.raises(ValueError, match="not found"):
            store.create_deal(Deal(deal_id="D-1", title="Lease", prospect_id="PRO-404"))

    def test_update_deal_stamps_last_updated(self, store, prospect):
        store.create_prospect(prospect, now=NOW)
        deal = store.create_deal(Deal(
            deal_id="D-1",
            title="Lease",
            prospect_id="PRO-1",
            last_updated=NOW - timedelta(days=5),
        ))

        deal.stage = DealStage.LOI_SUBMITTED
        store.update_deal(deal, now=NOW)

        assert store.get_deal("D-1").last_updated == NOW
        assert store.get_deal("D-1").stage == DealStage.LOI_SUBMITTED

    def test_deals_for_prospect(self, store, prospect):
        store.create_prospect(prospect, now=NOW)
        store.create_deal(Deal(deal_id="D-1", title="One", prospect_id="PRO-1"))
        store.create_deal(Deal(deal_id="D-2", title="Two", prospect_id="PRO-1"))

        assert [d.deal_id for d in store.deals_for_prospect("PRO-1")] == ["D-1", "D-2"]


class TestCommunications:
    """Tests for communication logging."""

    def test_add_communication_sets_last_contact(self, store, prospect):
        store.create_prospect(prospect, now=NOW)

        store.add_communication(Communication(
            communication_id="C-1",
            prospect_id="PRO-1",
            type=CommunicationType.PHONE,
            date=NOW - timedelta(days=2),
        ))

        assert store.get_prospect("PRO-1").last_contact_date == NOW - timedelta(days=2)

    def test_communications_newest_first(self, store, prospect):
        store.create_prospect(prospect, now=NOW)
        for i, days_ago in enumerate([5, 1, 3]):
            store.add_communication(Communication(
                communication_id=f"C-{i}",
                prospect_id="PRO-1",
                type=CommunicationType.NOTE,
                date=NOW - timedelta(days=days_ago),
            ))

        comms = store.communications_for_prospect("PRO-1")

        assert [c.communication_id for c in comms] == ["C-1", "C-2", "C-0"]

    def test_unknown_prospect_rejected(self, store):
        with pytest.raises(ValueError):
            store.add_communication(Communication(
                communication_id="C-1",
                prospect_id="PRO-404",
                type=CommunicationType.EMAIL,
            ))


class TestPersistence:
    """Tests for JSON file persistence."""

    def test_reload_from_disk(self, store_path, prospect, prop):
        store = CRMStore(store_path)
        store.create_prospect(prospect, now=NOW)
        store.create_property(prop)
        store.create_deal(Deal(deal_id="D-1", title="Lease", prospect_id="PRO-1", date_created=NOW))

        reloaded = CRMStore(store_path)

        assert reloaded.get_prospect("PRO-1") == prospect
        assert reloaded.get_property("PROP-1") == prop
        assert reloaded.get_deal("D-1").title == "Lease"

    def test_file_envelope(self, store_path, prospect):
        CRMStore(store_path).create_prospect(prospect, now=NOW)

        with open(store_path) as f:
            data = json.load(f)

        assert data["version"] == "1.0"
        assert "updated_at" in data
        assert [p["prospect_id"] for p in data["prospects"]] == ["PRO-1"]
        assert StoreSnapshot.model_validate(data).prospects[0].required_square_footage == 50_000

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "crm.json"
        path.write_text("{not json")

        store = CRMStore(str(path))

        assert store.is_empty()

    def test_invalid_enum_starts_empty(self, tmp_path):
        path = tmp_path / "crm.json"
        path.write_text(json.dumps({
            "version": "1.0",
            "prospects": [{"prospect_id": "PRO-1", "status": "archived"}],
        }))

        assert CRMStore(str(path)).is_empty()

    def test_load_error_recorded(self, tmp_path, store_path):
        path = tmp_path / "crm.json"
        path.write_text("{not json")

        assert CRMStore(str(path)).load_error
        assert CRMStore(store_path).load_error is None

    def test_report_keeps_unreadable_snapshot(self, tmp_path, monkeypatch, prospect):
        monkeypatch.delenv("CRM_SEED_SAMPLE_DATA", raising=False)
        path = tmp_path / "crm.json"
        bad = dict(prospect.to_dict(), prospect_id="KEEP-2", status="archived")
        path.write_text(json.dumps({
            "version": "1.0",
            "prospects": [dict(prospect.to_dict(), prospect_id="KEEP-1"), bad],
        }))
        before = path.read_text()

        run.main(["--store", str(path)])

        assert path.read_text() == before

    def test_offset_timestamps_load_naive(self, tmp_path, prop):
        path = tmp_path / "crm.json"
        data = prop.to_dict()
        data["available_date"] = "2024-06-01T09:00:00+02:00"
        path.write_text(json.dumps({"version": "1.0", "properties": [data]}))

        loaded = CRMStore(str(path)).get_property("PROP-1")

        assert loaded.available_date.tzinfo is None
        assert days_between(NOW, loaded.available_date) == 0

    def test_in_memory_store_writes_nothing(self, tmp_path, prospect):
        store = CRMStore()
        store.create_prospect(prospect, now=NOW)

        assert store.storage_path is None
        assert list(tmp_path.iterdir()) == []


class TestSampleData:
    """Tests for seeded demo data and ID generation."""

    def test_generate_id_format(self, store):
        record_id = store.generate_id("prop")

        assert re.fullmatch(r"PROP-\d{8}-[0-9A-F]{6}", record_id)

    def test_sample_data(self, store):
        create_sample_data(store, now=NOW)

        counts = store.counts()
        assert counts["prospects"] == 4
        assert counts["properties"] == 4
        assert counts["deals"] == 2
        assert counts["communications"] == 1

    def test_sample_data_feeds_engines(self, store):
        create_sample_data(store, now=NOW)
        prospects, properties = store.snapshot()

        assert any(find_matches(p, properties, now=NOW) for p in prospects)


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("CRM_STORAGE_PATH", "CRM_LOG_LEVEL", "CRM_SEED_SAMPLE_DATA"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.storage_path.endswith("crm.json")
        assert settings.log_level == "INFO"
        assert settings.seed_sample_data is True

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CRM_STORAGE_PATH", str(tmp_path / "x.json"))
        monkeypatch.setenv("CRM_LOG_LEVEL", "debug")
        monkeypatch.setenv("CRM_SEED_SAMPLE_DATA", "false")

        settings = load_settings()

        assert settings.storage_path == str(tmp_path / "x.json")
        assert settings.log_level == "DEBUG"
        assert settings.seed_sample_data is False

    def test_default_path_relative_to_working_directory(self, monkeypatch, tmp_path):
        monkeypatch.delenv("CRM_STORAGE_PATH", raising=False)
        monkeypatch.chdir(tmp_path)

        settings = load_settings()

        assert not Path(settings.storage_path).is_absolute()
        assert Path(settings.storage_path).resolve() == tmp_path.resolve() / "data" / "crm.json"
