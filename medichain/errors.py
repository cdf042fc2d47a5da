"""
Connectivity Errors
===================

Failures raised inside the resolvers. None of these ever escape
``resolve()``: each one is logged and turned into the simulated fallback.

Version: 0.1.0
"""


class ConnectivityError(Exception):
    """Base class for backend negotiation failures."""

    stage = "unknown"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ProviderUnavailable(ConnectivityError):
    """No ledger provider could be constructed."""

    stage = "provider"


class NetworkQueryFailed(ConnectivityError):
    """The provider did not answer the network id query."""

    stage = "network"


class NoDeploymentForNetwork(ConnectivityError):
    """The deployment table has no usable record for the network."""

    stage = "deployment"


class ContractNotLive(ConnectivityError):
    """The recorded contract did not answer the liveness probe."""

    stage = "probe"


class StoreUnreachable(ConnectivityError):
    """The content store refused or failed the version query."""

    stage = "store"


class StoreProbeTimeout(ConnectivityError):
    """The content store did not answer within the probe budget."""

    stage = "store"


class TransactionReverted(Exception):
    """A mined contract write reported a failed status."""

    def __init__(self, operation: str, tx_hash: str) -> None:
        super().__init__(f"{operation} reverted in transaction {tx_hash}")
        self.operation = operation
        self.tx_hash = tx_hash
