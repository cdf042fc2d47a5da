"""
Simulated Ledger Contract
=========================

In-memory stand-in for the MediChain contract, used whenever no live
deployment can be reached.

Version: 0.1.0
"""

import asyncio
from typing import Any

from medichain.config import LedgerMode, settings
from medichain.ledger.client import (
    Designation,
    DoctorInfo,
    InsurerInfo,
    LedgerContract,
    PatientInfo,
)
from medichain.ledger.transactions import Confirmation, PendingTransaction
from medichain.logging import get_logger

logger = get_logger(__name__)


MOCK_CONTRACT_ADDRESS = "0xMockContractAddress"

# Fixed transaction hash per write operation
MOCK_TX_HASHES: dict[str, str] = {
    "register": "0xmock123",
    "permit_access": "0xmock456",
    "buy_policy": "0xmock789",
    "revoke_access": "0xmockABC",
    "insurance_claim_request": "0xmockDEF",
    "create_policy": "0xmockGHI",
    "approve_claims_by_insurer": "0xmockJKL",
    "reject_claims_by_insurer": "0xmockMNO",
}


class SimulatedLedgerContract(LedgerContract):
    """
    Simulated MediChain contract.

    Reads return sample data shaped like the real results. Writes always
    succeed: the ``transactionHash`` notification arrives after
    ``hash_delay`` seconds and the confirmation after ``confirmation_delay``
    seconds, both measured from submission.
    """

    def __init__(
        self,
        hash_delay: float | None = None,
        confirmation_delay: float | None = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            hash_delay: Seconds until the hash notification (default from settings)
            confirmation_delay: Seconds until confirmation (default from settings)
        """
        if hash_delay is None:
            hash_delay = settings.simulation.hash_delay_ms / 1000
        if confirmation_delay is None:
            confirmation_delay = settings.simulation.confirmation_delay_ms / 1000

        self._hash_delay = hash_delay
        self._confirmation_delay = max(confirmation_delay, hash_delay)
        self._submitted = 0

        logger.debug("mock_ledger_initialized")

    @property
    def mode(self) -> LedgerMode:
        return LedgerMode.SIMULATED

    @property
    def address(self) -> str:
        return MOCK_CONTRACT_ADDRESS

    async def health_check(self) -> dict[str, Any]:
        """Check mock ledger health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "address": self.address,
            "transactions_submitted": self._submitted,
        }

    def _simulate(self, operation: str) -> PendingTransaction:
        tx_hash = MOCK_TX_HASHES[operation]
        self._submitted += 1

        async def submit() -> str:
            await asyncio.sleep(self._hash_delay)
            return tx_hash

        async def confirm(submitted_hash: str) -> Confirmation:
            await asyncio.sleep(self._confirmation_delay - self._hash_delay)
            return Confirmation(transaction_hash=submitted_hash, simulated=True)

        logger.debug("mock_ledger_transaction", operation=operation, tx_hash=tx_hash)
        return PendingTransaction(operation, submit, confirm)

    # =========================================================================
    # Identity
    # =========================================================================

    async def name(self) -> str:
        return "MediChain"

    async def login(self, account: str) -> Designation:
        return Designation.PATIENT

    async def patient_info(self, account: str) -> PatientInfo:
        return PatientInfo(
            name="Test Patient",
            email="patient@test.com",
            age=30,
            record="QmMockHash123",
            exists=True,
            policy_active=False,
        )

    async def doctor_info(self, account: str) -> DoctorInfo:
        return DoctorInfo(name="Test Doctor", email="doctor@test.com", exists=True)

    async def insurer_info(self, account: str) -> InsurerInfo:
        return InsurerInfo(name="Test Insurer", email="insurer@test.com", exists=True)

    def register(
        self,
        name: str,
        age: int,
        designation: Designation,
        email: str,
        record_hash: str,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._simulate("register")

    # =========================================================================
    # Enumeration
    # =========================================================================

    async def get_patient_doctor_list(self, account: str) -> list[str]:
        return []

    async def get_doctor_patient_list(self, account: str) -> list[str]:
        return []

    async def get_patient_transactions(self, account: str) -> list[Any]:
        return []

    async def get_doctor_transactions(self, account: str) -> list[Any]:
        return []

    async def get_insurer_policy_list(self, account: str) -> list[Any]:
        return []

    async def get_insurer_claims(self, account: str) -> list[Any]:
        return []

    async def get_all_policies(self) -> list[Any]:
        return []

    async def get_all_doctors_address(self) -> list[str]:
        return []

    async def get_all_insurers_address(self) -> list[str]:
        return []

    # =========================================================================
    # Access Control
    # =========================================================================

    def permit_access(
        self,
        account: str,
        *,
        sender: str,
        value: int = 0,
    ) -> PendingTransaction:
        return self._simulate("permit_access")

    def revoke_access(self, account: str, *, sender: str) -> PendingTransaction:
        return self._simulate("revoke_access")

    # =========================================================================
    # Insurance
    # =========================================================================

    def create_policy(
        self,
        name: str,
        cover_value: int,
        duration: int,
        premium: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._simulate("create_policy")

    def buy_policy(
        self,
        policy_id: int,
        *,
        sender: str,
        value: int = 0,
    ) -> PendingTransaction:
        return self._simulate("buy_policy")

    def insurance_claim_request(
        self,
        patient: str,
        record_hash: str,
        charge: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._simulate("insurance_claim_request")

    def approve_claims_by_insurer(
        self,
        claim_id: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._simulate("approve_claims_by_insurer")

    def reject_claims_by_insurer(
        self,
        claim_id: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._simulate("reject_claims_by_insurer")

    # =========================================================================
    # Test Utilities
    # =========================================================================

    def get_stats(self) -> dict[str, int]:
        """Get simulation statistics."""
        return {"transactions_submitted": self._submitted}
