"""
Web3 Ledger Contract
====================

``LedgerContract`` bound to a deployed MediChain contract through
web3.py's async API.

Version: 0.1.0
"""

from typing import Any

from web3 import AsyncWeb3

from medichain.config import LedgerMode
from medichain.errors import TransactionReverted
from medichain.ledger.client import (
    Designation,
    DoctorInfo,
    InsurerInfo,
    LedgerContract,
    PatientInfo,
)
from medichain.ledger.deployments import DeploymentRecord
from medichain.ledger.transactions import Confirmation, PendingTransaction
from medichain.logging import get_logger

logger = get_logger(__name__)


# Python operation name -> Solidity function name
CONTRACT_FUNCTIONS: dict[str, str] = {
    "name": "name",
    "login": "login",
    "patient_info": "patientInfo",
    "doctor_info": "doctorInfo",
    "insurer_info": "insurerInfo",
    "register": "register",
    "get_patient_doctor_list": "getPatientDoctorList",
    "get_doctor_patient_list": "getDoctorPatientList",
    "get_patient_transactions": "getPatientTransactions",
    "get_doctor_transactions": "getDoctorTransactions",
    "get_insurer_policy_list": "getInsurerPolicyList",
    "get_insurer_claims": "getInsurerClaims",
    "get_all_policies": "getAllPolicies",
    "get_all_doctors_address": "getAllDoctorsAddress",
    "get_all_insurers_address": "getAllInsurersAddress",
    "permit_access": "permitAccess",
    "revoke_access": "revokeAccess",
    "create_policy": "createPolicy",
    "buy_policy": "buyPolicy",
    "insurance_claim_request": "insuranceClaimRequest",
    "approve_claims_by_insurer": "approveClaimsByInsurer",
    "reject_claims_by_insurer": "rejectClaimsByInsurer",
}


def _checksum(account: str) -> str:
    return AsyncWeb3.to_checksum_address(account)


class Web3LedgerContract(LedgerContract):
    """
    MediChain contract reached over JSON-RPC.

    Struct results are mapped onto the domain models by the output names
    declared in the ABI.
    """

    def __init__(self, w3: AsyncWeb3, record: DeploymentRecord) -> None:
        """
        Bind to a deployment.

        Args:
            w3: Connected async web3 instance
            record: Deployment to bind to

        Raises:
            ValueError: If the recorded address is not a valid address
        """
        self._w3 = w3
        self._record = record
        self._contract = w3.eth.contract(
            address=_checksum(record.address),
            abi=list(record.abi),
        )
        self._abi_functions = {
            entry["name"]: entry
            for entry in record.abi
            if entry.get("type") == "function"
        }

    @property
    def mode(self) -> LedgerMode:
        return LedgerMode.REAL

    @property
    def address(self) -> str:
        return self._record.address

    @property
    def abi(self) -> tuple[dict[str, Any], ...]:
        return self._record.abi

    @property
    def network_id(self) -> str:
        return self._record.network_id

    async def health_check(self) -> dict[str, Any]:
        """
        Check contract health.

        Returns:
            dict with status, address and latest block
        """
        try:
            block_number = await self._w3.eth.block_number
            contract_name = await self.name()
            return {
                "status": "healthy",
                "mode": self.mode.value,
                "address": self.address,
                "network_id": self.network_id,
                "name": contract_name,
                "block_number": block_number,
            }
        except Exception as e:
            logger.error("ledger_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "mode": self.mode.value,
                "address": self.address,
                "error": str(e),
            }

    async def close(self) -> None:
        await self._w3.provider.disconnect()
        logger.info("ledger_provider_closed", address=self.address)

    # =========================================================================
    # Plumbing
    # =========================================================================

    def _function(self, operation: str, *args: Any) -> Any:
        return getattr(self._contract.functions, CONTRACT_FUNCTIONS[operation])(*args)

    async def _call(self, operation: str, *args: Any) -> Any:
        return await self._function(operation, *args).call()

    def _named(self, operation: str, result: Any) -> dict[str, Any]:
        """Zip a tuple result with the ABI output names."""
        if isinstance(result, dict):
            return result
        entry = self._abi_functions.get(CONTRACT_FUNCTIONS[operation], {})
        outputs = entry.get("outputs", [])
        if len(outputs) == 1 and outputs[0].get("components"):
            outputs = outputs[0]["components"]
        return {output["name"]: value for output, value in zip(outputs, result)}

    def _transact(
        self,
        operation: str,
        *args: Any,
        sender: str,
        value: int = 0,
    ) -> PendingTransaction:
        tx_params: dict[str, Any] = {"from": _checksum(sender)}
        if value:
            tx_params["value"] = value

        async def submit() -> str:
            tx_hash = await self._function(operation, *args).transact(tx_params)
            return AsyncWeb3.to_hex(tx_hash)

        async def confirm(tx_hash: str) -> Confirmation:
            receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash)
            if not receipt["status"]:
                raise TransactionReverted(operation, tx_hash)
            logger.info(
                "ledger_transaction_confirmed",
                operation=operation,
                tx_hash=tx_hash,
                block_number=receipt["blockNumber"],
            )
            return Confirmation(
                transaction_hash=tx_hash,
                block_number=receipt["blockNumber"],
            )

        return PendingTransaction(operation, submit, confirm)

    # =========================================================================
    # Identity
    # =========================================================================

    async def name(self) -> str:
        return await self._call("name")

    async def login(self, account: str) -> Designation:
        return Designation(int(await self._call("login", _checksum(account))))

    async def patient_info(self, account: str) -> PatientInfo:
        result = await self._call("patient_info", _checksum(account))
        return PatientInfo.model_validate(self._named("patient_info", result))

    async def doctor_info(self, account: str) -> DoctorInfo:
        result = await self._call("doctor_info", _checksum(account))
        return DoctorInfo.model_validate(self._named("doctor_info", result))

    async def insurer_info(self, account: str) -> InsurerInfo:
        result = await self._call("insurer_info", _checksum(account))
        return InsurerInfo.model_validate(self._named("insurer_info", result))

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
        return self._transact(
            "register",
            name,
            age,
            int(designation),
            email,
            record_hash,
            sender=sender,
        )

    # =========================================================================
    # Enumeration
    # =========================================================================

    async def get_patient_doctor_list(self, account: str) -> list[str]:
        return list(await self._call("get_patient_doctor_list", _checksum(account)))

    async def get_doctor_patient_list(self, account: str) -> list[str]:
        return list(await self._call("get_doctor_patient_list", _checksum(account)))

    async def get_patient_transactions(self, account: str) -> list[Any]:
        return list(await self._call("get_patient_transactions", _checksum(account)))

    async def get_doctor_transactions(self, account: str) -> list[Any]:
        return list(await self._call("get_doctor_transactions", _checksum(account)))

    async def get_insurer_policy_list(self, account: str) -> list[Any]:
        return list(await self._call("get_insurer_policy_list", _checksum(account)))

    async def get_insurer_claims(self, account: str) -> list[Any]:
        return list(await self._call("get_insurer_claims", _checksum(account)))

    async def get_all_policies(self) -> list[Any]:
        return list(await self._call("get_all_policies"))

    async def get_all_doctors_address(self) -> list[str]:
        return list(await self._call("get_all_doctors_address"))

    async def get_all_insurers_address(self) -> list[str]:
        return list(await self._call("get_all_insurers_address"))

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
        return self._transact(
            "permit_access", _checksum(account), sender=sender, value=value
        )

    def revoke_access(self, account: str, *, sender: str) -> PendingTransaction:
        return self._transact("revoke_access", _checksum(account), sender=sender)

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
        return self._transact(
            "create_policy", name, cover_value, duration, premium, sender=sender
        )

    def buy_policy(
        self,
        policy_id: int,
        *,
        sender: str,
        value: int = 0,
    ) -> PendingTransaction:
        return self._transact("buy_policy", policy_id, sender=sender, value=value)

    def insurance_claim_request(
        self,
        patient: str,
        record_hash: str,
        charge: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._transact(
            "insurance_claim_request",
            _checksum(patient),
            record_hash,
            charge,
            sender=sender,
        )

    def approve_claims_by_insurer(
        self,
        claim_id: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._transact("approve_claims_by_insurer", claim_id, sender=sender)

    def reject_claims_by_insurer(
        self,
        claim_id: int,
        *,
        sender: str,
    ) -> PendingTransaction:
        return self._transact("reject_claims_by_insurer", claim_id, sender=sender)
