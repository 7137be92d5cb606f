"""
Storage layer for CRM Engine.

- storage: CRMStore with JSON file persistence
- schemas: Pydantic schemas for the persisted snapshot
"""

from .storage import CRMStore, create_sample_data
from .schemas import (
    StoreSnapshot,
    ProspectPayload,
    PropertyPayload,
    DealPayload,
    CommunicationPayload,
)

__all__ = [
    "CRMStore",
    "create_sample_data",
    "StoreSnapshot",
    "ProspectPayload",
    "PropertyPayload",
    "DealPayload",
    "CommunicationPayload",
]
