"""
Test Configuration
==================

Pytest fixtures for MediChain connectivity tests.
"""

import os
from typing import Any

import pytest

# Set test environment before settings are loaded
os.environ["ENVIRONMENT"] = "testing"
os.environ["SIMULATION_HASH_DELAY_MS"] = "10"
os.environ["SIMULATION_CONFIRMATION_DELAY_MS"] = "20"

from medichain.config.settings import SENTINEL_ADDRESS  # noqa: E402
from medichain.ledger import DeploymentTable, SimulatedLedgerContract  # noqa: E402


SAMPLE_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "name",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
]


@pytest.fixture
def deployments() -> DeploymentTable:
    """Table with one live deployment (5777) and one placeholder (1337)."""
    return DeploymentTable.from_artifact(
        {
            "contractName": "MediChain",
            "abi": SAMPLE_ABI,
            "networks": {
                "5777": {"address": "0xREAL"},
                "1337": {"address": SENTINEL_ADDRESS},
            },
        }
    )


@pytest.fixture
def simulated_ledger() -> SimulatedLedgerContract:
    """Simulation with short artificial delays."""
    return SimulatedLedgerContract(hash_delay=0.01, confirmation_delay=0.02)


@pytest.fixture
def sample_account() -> str:
    """A checksummed wallet address."""
    return "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
