"""
Ledger Module
=============

Access to the MediChain contract.

Supports:
- Web3 (a deployed contract reached over JSON-RPC)
- Simulated (in-memory stand-in when no deployment is live)

Usage:
    from medichain.ledger import LedgerResolver

    contract = await LedgerResolver().resolve()

    # Reads are coroutines
    role = await contract.login(account)

    # Writes return a pending transaction
    pending = contract.permit_access(doctor, sender=account)
    pending.on("transactionHash", show_spinner)
    confirmation = await pending
"""

from medichain.ledger.client import (
    Designation,
    DoctorInfo,
    InsurerInfo,
    LedgerContract,
    PatientInfo,
)
from medichain.ledger.contract import Web3LedgerContract
from medichain.ledger.deployments import DeploymentRecord, DeploymentTable
from medichain.ledger.mock import SimulatedLedgerContract
from medichain.ledger.provider import LedgerProvider, Web3Provider
from medichain.ledger.resolver import LedgerResolver
from medichain.ledger.transactions import (
    Confirmation,
    PendingTransaction,
    TransactionEvent,
)

__all__ = [
    # Interface
    "LedgerContract",
    "LedgerResolver",
    "LedgerProvider",
    # Models
    "Confirmation",
    "Designation",
    "DeploymentRecord",
    "DeploymentTable",
    "DoctorInfo",
    "InsurerInfo",
    "PatientInfo",
    "PendingTransaction",
    "TransactionEvent",
    # Implementations
    "SimulatedLedgerContract",
    "Web3LedgerContract",
    "Web3Provider",
]
