"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Placeholder address written into the bundled artifact when no real
# deployment has been migrated for a network.
SENTINEL_ADDRESS = "0x9876543210987654321098765432109876543210"

_PACKAGE_ROOT = Path(__file__).parent.parent


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LedgerMode(str, Enum):
    """Which ledger backend a handle talks to."""

    REAL = "real"
    SIMULATED = "simulated"


class StoreMode(str, Enum):
    """Which content-store backend a handle talks to."""

    REAL = "real"
    SIMULATED = "simulated"


class LedgerSettings(BaseSettings):
    """Ledger provider and deployment configuration."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    # Injected provider (wallet/node URL); empty means "not injected"
    provider_url: str = ""
    fallback_url: str = "http://localhost:7545"
    deployment_file: Path = Field(
        default_factory=lambda: _PACKAGE_ROOT / "contracts" / "MediChain.json"
    )
    sentinel_address: str = SENTINEL_ADDRESS

    @property
    def active_url(self) -> str:
        """Injected provider URL, else the local fallback endpoint."""
        return self.provider_url or self.fallback_url


class ContentStoreSettings(BaseSettings):
    """IPFS content-store configuration."""

    model_config = SettingsConfigDict(env_prefix="IPFS_")

    url: str = "http://127.0.0.1:5001/api/v0"
    timeout_ms: int = 3000

    @property
    def timeout_seconds(self) -> float:
        """Probe timeout in seconds."""
        return self.timeout_ms / 1000


class SimulationSettings(BaseSettings):
    """Artificial latency for the simulated ledger."""

    model_config = SettingsConfigDict(env_prefix="SIMULATION_")

    hash_delay_ms: int = 100
    confirmation_delay_ms: int = 200


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False
    service_name: str = "medichain"

    # Backends
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    ipfs: ContentStoreSettings = Field(default_factory=ContentStoreSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
