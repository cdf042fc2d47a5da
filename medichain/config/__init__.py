"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from medichain.config import settings

    print(settings.environment)
    print(settings.ledger.fallback_url)
    print(settings.ipfs.timeout_seconds)
"""

from medichain.config.settings import (
    ContentStoreSettings,
    Environment,
    LedgerMode,
    LedgerSettings,
    LogLevel,
    Settings,
    SimulationSettings,
    StoreMode,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
    "LedgerMode",
    "StoreMode",
    "LedgerSettings",
    "ContentStoreSettings",
    "SimulationSettings",
]
