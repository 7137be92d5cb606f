"""
CRM Engine

Core modules for an industrial real-estate brokerage CRM: prospects,
warehouse listings, lease deals and the decision-support services on top.

Modules:
  core   Data models, matching engine, workflow engine, filters, dashboard
  store  In-memory / JSON-backed store for prospects, properties, deals

Usage:
    from crm_engine.core import Prospect, Property, find_matches, get_next_actions
    from crm_engine.store import CRMStore
"""

__version__ = "0.3.0"
