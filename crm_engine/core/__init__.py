"""
Core modules for CRM Engine.

Data model:
- prospect: Prospect (lead) data model and requirement enums
- warehouse: Property (warehouse listing) data model
- deal: Lease deals and logged communications

Decision support:
- matching: Score available properties against a prospect
- workflow: Recommend next actions for a prospect

Supporting:
- validation: Input validation rules
- filtering: Property and prospect list filters
- dashboard: Pipeline metrics and today's priorities
"""

# Data model
from .prospect import (
    Prospect,
    ProspectStatus,
    ProspectSource,
    BusinessType,
    ExpansionTimeline,
    TemperatureRequirements,
    BudgetRange,
)
from .warehouse import Property, PropertyStatus, ZoningType, SprinklerSystem
from .deal import Deal, DealStage, LeaseType, Communication, CommunicationType

# Engines
from .matching import (
    MIN_MATCH_SCORE,
    PropertyMatch,
    score_property,
    find_matches,
    get_match_summary,
)
from .workflow import Priority, NextAction, get_next_actions

# Validation
from .validation import (
    ValidationError,
    ValidationResult,
    validate_prospect,
    validate_property,
    validate_deal,
)

# Filtering
from .filtering import (
    SizeRange,
    ClearHeightRange,
    PropertySort,
    PropertyFilters,
    filter_properties,
    filter_prospects,
    status_counts,
)

# Dashboard
from .dashboard import (
    PriorityItem,
    DashboardReport,
    build_dashboard,
    todays_priorities,
    urgent_prospects,
    aging_properties,
)

__all__ = [
    # Data model
    "Prospect",
    "ProspectStatus",
    "ProspectSource",
    "BusinessType",
    "ExpansionTimeline",
    "TemperatureRequirements",
    "BudgetRange",
    "Property",
    "PropertyStatus",
    "ZoningType",
    "SprinklerSystem",
    "Deal",
    "DealStage",
    "LeaseType",
    "Communication",
    "CommunicationType",
    # Matching
    "MIN_MATCH_SCORE",
    "PropertyMatch",
    "score_property",
    "find_matches",
    "get_match_summary",
    # Workflow
    "Priority",
    "NextAction",
    "get_next_actions",
    # Validation
    "ValidationError",
    "ValidationResult",
    "validate_prospect",
    "validate_property",
    "validate_deal",
    # Filtering
    "SizeRange",
    "ClearHeightRange",
    "PropertySort",
    "PropertyFilters",
    "filter_properties",
    "filter_prospects",
    "status_counts",
    # Dashboard
    "PriorityItem",
    "DashboardReport",
    "build_dashboard",
    "todays_priorities",
    "urgent_prospects",
    "aging_properties",
]
