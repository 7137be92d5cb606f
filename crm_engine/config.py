"""
Runtime configuration loaded from environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Relative to the working directory the tools are run from
DEFAULT_STORAGE_PATH = Path("data") / "crm.json"

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class Settings:
    """Configuration for the CRM store and command-line tools."""

    storage_path: str = str(DEFAULT_STORAGE_PATH)
    log_level: str = "INFO"
    seed_sample_data: bool = True


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in _FALSE_VALUES


def load_settings() -> Settings:
    """
    Build settings from the environment.

    CRM_STORAGE_PATH      JSON snapshot path (default ./data/crm.json)
    CRM_LOG_LEVEL         Logging level name (default INFO)
    CRM_SEED_SAMPLE_DATA  Seed demo records into an empty store (default true)
    """
    return Settings(
        storage_path=os.environ.get("CRM_STORAGE_PATH", str(DEFAULT_STORAGE_PATH)),
        log_level=os.environ.get("CRM_LOG_LEVEL", "INFO").upper(),
        seed_sample_data=_env_flag("CRM_SEED_SAMPLE_DATA", True),
    )
