"""
Common Models
=============

Resolution outcomes and health summaries.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ResolutionOutcome(BaseModel):
    """How one backend was resolved at start-up."""

    backend: str = Field(..., description="ledger or content_store")
    mode: str = Field(..., description="real or simulated")
    endpoint: str = ""
    address: str | None = None
    network_id: str | None = None

    # Set only when the resolver fell back
    failed_stage: str | None = None
    reason: str | None = None

    resolved_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def degraded(self) -> bool:
        """True when the backend fell back to its simulation."""
        return self.failed_stage is not None


class HealthResponse(BaseModel):
    """Connectivity health summary."""

    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Component health
    components: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        """Check if all components are healthy."""
        if self.status != "healthy":
            return False
        return all(
            c.get("status") == "healthy" for c in self.components.values()
        )
