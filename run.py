#!/usr/bin/env python3
"""
CRM Engine - Pipeline Report

Opens the CRM store and prints:
- Dashboard metrics and today's priorities
- For each prospect: matching properties with reasons
- For each prospect: recommended next actions

Run with: python run.py [--store PATH] [--prospect ID] [--no-seed] [--log-level L]
"""

import argparse
import sys
from datetime import datetime
from typing import Optional

import structlog

from crm_engine.config import load_settings
from crm_engine.core import (
    Priority,
    Prospect,
    Property,
    build_dashboard,
    find_matches,
    get_match_summary,
    get_next_actions,
)
from crm_engine.core.dashboard import format_currency_short, format_square_footage_short
from crm_engine.log import configure_logging
from crm_engine.store import CRMStore, create_sample_data

logger = structlog.get_logger()

# Matches shown per prospect
TOP_MATCHES = 3


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the CRM pipeline report")
    parser.add_argument("--store", help="Path to the JSON store (overrides CRM_STORAGE_PATH)")
    parser.add_argument("--prospect", help="Only report on this prospect ID")
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not seed sample data into an empty store",
    )
    parser.add_argument("--log-level", help="Logging level (overrides CRM_LOG_LEVEL)")
    return parser.parse_args(argv)


def print_dashboard(store: CRMStore, now: datetime) -> None:
    """Print headline metrics and today's priorities."""
    prospects, properties = store.snapshot()
    report = build_dashboard(prospects, properties, store.get_all_deals(), now)

    print("\n" + "=" * 60)
    print("DASHBOARD")
    print("=" * 60)
    print(f"\n  Active requirements: {format_square_footage_short(report.active_requirements_sf)}")
    print(f"  Available inventory: {format_square_footage_short(report.available_inventory_sf)}")
    print(f"  Pipeline value:      {format_currency_short(report.pipeline_value)}")
    print(f"  Avg days on market:  {report.average_days_on_market}")
    print(f"  Active deals:        {report.active_deals_count}")

    print("\n--- Today's Priorities ---\n")
    if not report.priorities:
        print("  Nothing urgent today")
    for item in report.priorities:
        print(f"  [{item.priority.value.upper():6}] {item.title}")
        print(f"           {item.subtitle}")


def print_prospect(prospect: Prospect, properties: list[Property], now: datetime) -> None:
    """Print matches and next actions for one prospect."""
    print("\n" + "-" * 60)
    print(f"{prospect.full_name} ({prospect.prospect_id})")
    print(f"  Status: {prospect.status.value}")
    print(f"  Needs: {prospect.formatted_required_sf}, {prospect.business_type.value}, "
          f"timeline {prospect.expansion_timeline.value}")
    print(f"  Matches: {get_match_summary(prospect, properties, now)}")

    for match in find_matches(prospect, properties, now)[:TOP_MATCHES]:
        print(f"    {match.score:5.1f}  {match.property.full_address}")
        for reason in match.reasons:
            print(f"           - {reason}")

    actions = get_next_actions(prospect, properties, now)
    print("  Next actions:")
    if not actions:
        print("    (none)")
    for action in actions:
        marker = "!" if action.priority == Priority.HIGH else " "
        print(f"    {marker} {action.title} [{action.priority.value}]")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the pipeline report."""
    args = parse_args(argv)
    settings = load_settings()

    configure_logging(args.log_level or settings.log_level)

    store = CRMStore(args.store or settings.storage_path)
    if store.load_error:
        # Seeding would write over the unreadable snapshot
        logger.warning("Not seeding sample data", path=store.storage_path, error=store.load_error)
    elif store.is_empty() and settings.seed_sample_data and not args.no_seed:
        logger.info("Seeding sample data", path=store.storage_path)
        create_sample_data(store)

    now = datetime.now()
    prospects, properties = store.snapshot()

    if args.prospect:
        prospect = store.get_prospect(args.prospect)
        if prospect is None:
            print(f"Prospect '{args.prospect}' not found", file=sys.stderr)
            return 1
        print_prospect(prospect, properties, now)
        return 0

    print_dashboard(store, now)

    print("\n" + "=" * 60)
    print(f"PROSPECTS ({len(prospects)})")
    print("=" * 60)
    for prospect in prospects:
        print_prospect(prospect, properties, now)
    print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
