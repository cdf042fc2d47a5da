"""
Contract Deployments
====================

Per-network deployment records loaded from the Truffle build artifact
bundled with the application (``contracts/MediChain.json``).

Version: 0.1.0
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from medichain.config import settings


class DeploymentRecord(BaseModel):
    """Where the contract lives on one network."""

    model_config = ConfigDict(frozen=True)

    network_id: str
    address: str
    abi: tuple[dict[str, Any], ...]


class DeploymentTable:
    """
    Network id -> DeploymentRecord mapping.

    Records whose address equals the sentinel are kept so they can be
    reported, but ``is_deployed`` treats them as absent.
    """

    def __init__(
        self,
        records: dict[str, DeploymentRecord],
        sentinel_address: str | None = None,
    ) -> None:
        self._records = dict(records)
        self.sentinel_address = sentinel_address or settings.ledger.sentinel_address

    @classmethod
    def from_artifact(
        cls,
        artifact: dict[str, Any],
        sentinel_address: str | None = None,
    ) -> "DeploymentTable":
        """
        Build the table from a parsed Truffle artifact.

        Args:
            artifact: ``{"abi": [...], "networks": {"<id>": {"address": ...}}}``
            sentinel_address: Placeholder address meaning "not deployed"

        Raises:
            ValueError: If the artifact does not have the shape above
        """
        if not isinstance(artifact, dict):
            raise ValueError("artifact must be a JSON object")
        abi = artifact.get("abi", [])
        networks = artifact.get("networks", {})
        if not isinstance(abi, list):
            raise ValueError("artifact abi must be a list")
        if not isinstance(networks, dict):
            raise ValueError("artifact networks must be an object")

        records = {}
        for network_id, entry in networks.items():
            if not isinstance(entry, dict):
                raise ValueError(f"network {network_id} entry must be an object")
            if not entry.get("address"):
                continue
            records[str(network_id)] = DeploymentRecord(
                network_id=str(network_id),
                address=entry["address"],
                abi=tuple(abi),
            )
        return cls(records, sentinel_address)

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        sentinel_address: str | None = None,
    ) -> "DeploymentTable":
        """Load the table from an artifact file (default from settings)."""
        path = path or settings.ledger.deployment_file
        with Path(path).open(encoding="utf-8") as f:
            return cls.from_artifact(json.load(f), sentinel_address)

    def get(self, network_id: str) -> DeploymentRecord | None:
        return self._records.get(str(network_id))

    def is_deployed(self, record: DeploymentRecord) -> bool:
        """False for records still pointing at the sentinel address."""
        return record.address.lower() != self.sentinel_address.lower()

    def __contains__(self, network_id: object) -> bool:
        return str(network_id) in self._records

    def __len__(self) -> int:
        return len(self._records)
