"""
Ledger Contract Interface
=========================

Abstract base class and models for MediChain contract operations.

Both the web3 binding and the in-memory simulation implement
``LedgerContract``; callers never need to know which one they hold.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from medichain.config import LedgerMode
from medichain.ledger.transactions import Confirmation, PendingTransaction


class Designation(IntEnum):
    """Role a registered account holds in the contract."""

    UNREGISTERED = 0
    PATIENT = 1
    DOCTOR = 2
    INSURER = 3


class _ContractRecord(BaseModel):
    """Struct returned by the contract's info getters."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    email: str = ""
    exists: bool = False


class PatientInfo(_ContractRecord):
    """Patient profile as stored on-chain."""

    age: int = 0
    record: str = Field(default="", description="IPFS hash of the medical record")
    policy_active: bool = Field(default=False, alias="policyActive")


class DoctorInfo(_ContractRecord):
    """Doctor profile as stored on-chain."""


class InsurerInfo(_ContractRecord):
    """Insurer profile as stored on-chain."""


class LedgerContract(ABC):
    """
    Abstract base class for MediChain contract handles.

    Read operations are coroutines. Write operations return a
    ``PendingTransaction`` immediately; subscribe to its
    ``transactionHash`` notification or await it for the ``Confirmation``.
    Writes must be issued from a running event loop.
    """

    @property
    @abstractmethod
    def mode(self) -> LedgerMode:
        """Which backend this handle talks to."""
        ...

    @property
    @abstractmethod
    def address(self) -> str:
        """Contract address the handle is bound to."""
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check contract health."""
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None

    # =========================================================================
    # Identity
    # =========================================================================

    @abstractmethod
    async def name(self) -> str:
        """Contract name; used as the liveness probe."""
        ...

    @abstractmethod
    async def login(self, account: str) -> Designation:
        """
        Look up the role of a registered account.

        Args:
            account: Wallet address

        Returns:
            Designation of the account
        """
        ...

    @abstractmethod
    async def patient_info(self, account: str) -> PatientInfo:
        """Get the patient record for an account."""
        ...

    @abstractmethod
    async def doctor_info(self, account: str) -> DoctorInfo:
        """Get the doctor record for an account."""
        ...

    @abstractmethod
    async def insurer_info(self, account: str) -> InsurerInfo:
        """Get the insurer record for an account."""
        ...

    @abstractmethod
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
        """
        Register the sender under a designation.

        Args:
            name: Display name
            age: Age in years (patients only)
            designation: Role to register as
            email: Contact email
            record_hash: IPFS hash of the initial record
            sender: Account submitting the transaction

        Returns:
            PendingTransaction resolving to a Confirmation
        """
        ...

    # =========================================================================
    # Enumeration
    # =========================================================================

    @abstractmethod
    async def get_patient_doctor_list(self, account: str) -> list[str]:
        """Doctors a patient has granted access to."""
        ...

    @abstractmethod
    async def get_doctor_patient_list(self, account: str) -> list[str]:
        """Patients who granted a doctor access."""
        ...

    @abstractmethod
    async def get_patient_transactions(self, account: str) -> list[Any]:
        """Access and payment history of a patient."""
        ...

    @abstractmethod
    async def get_doctor_transactions(self, account: str) -> list[Any]:
        """Access and payment history of a doctor."""
        ...

    @abstractmethod
    async def get_insurer_policy_list(self, account: str) -> list[Any]:
        """Policies offered by an insurer."""
        ...

    @abstractmethod
    async def get_insurer_claims(self, account: str) -> list[Any]:
        """Claims filed against an insurer."""
        ...

    @abstractmethod
    async def get_all_policies(self) -> list[Any]:
        """Every policy on offer."""
        ...

    @abstractmethod
    async def get_all_doctors_address(self) -> list[str]:
        """Addresses of every registered doctor."""
        ...

    @abstractmethod
    async def get_all_insurers_address(self) -> list[str]:
        """Addresses of every registered insurer."""
        ...

    # =========================================================================
    # Access Control
    # =========================================================================

    @abstractmethod
    def permit_access(
        self,
        account: str,
        *,
        sender: str,
        value: int = 0,
    ) -> PendingTransaction:
        """
        Grant a doctor access to the sender's records.

        Args:
            account: Doctor address
            sender: Patient address
            value: Access fee in wei
        """
        ...

    @abstractmethod
    def revoke_access(self, account: str, *, sender: str) -> PendingTransaction:
        """Revoke a doctor's access to the sender's records."""
        ...

    # =========================================================================
    # Insurance
    # =========================================================================

    @abstractmethod
    def create_policy(
        self,
        name: str,
        cover_value: int,
        duration: int,
        premium: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        """Create a policy offered by the sending insurer."""
        ...

    @abstractmethod
    def buy_policy(
        self,
        policy_id: int,
        *,
        sender: str,
        value: int = 0,
    ) -> PendingTransaction:
        """Buy a policy; ``value`` carries the premium in wei."""
        ...

    @abstractmethod
    def insurance_claim_request(
        self,
        patient: str,
        record_hash: str,
        charge: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        """File a claim on behalf of a patient."""
        ...

    @abstractmethod
    def approve_claims_by_insurer(
        self,
        claim_id: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        """Approve a pending claim."""
        ...

    @abstractmethod
    def reject_claims_by_insurer(
        self,
        claim_id: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        """Reject a pending claim."""
        ...
