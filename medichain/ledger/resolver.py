"""
Ledger Resolver
===============

Finds a live MediChain deployment or falls back to the simulation.

Resolution walks provider -> network id -> deployment record -> liveness
probe. A failure at any stage returns a ``SimulatedLedgerContract``;
``resolve()`` itself never raises and never retries.

Version: 0.1.0
"""

from collections.abc import Callable

from medichain.config import LedgerMode, settings
from medichain.errors import (
    ConnectivityError,
    ContractNotLive,
    NetworkQueryFailed,
    NoDeploymentForNetwork,
    ProviderUnavailable,
)
from medichain.ledger.client import LedgerContract
from medichain.ledger.deployments import DeploymentRecord, DeploymentTable
from medichain.ledger.mock import SimulatedLedgerContract
from medichain.ledger.provider import LedgerProvider, Web3Provider
from medichain.logging import get_logger
from medichain.models import ResolutionOutcome

logger = get_logger(__name__)


class LedgerResolver:
    """
    One-shot ledger negotiation.

    Example:
        >>> resolver = LedgerResolver()
        >>> contract = await resolver.resolve()
        >>> role = await contract.login(account)
    """

    def __init__(
        self,
        deployments: DeploymentTable | None = None,
        provider_url: str | None = None,
        provider_factory: Callable[[str], LedgerProvider] = Web3Provider,
        simulation_factory: Callable[[], LedgerContract] = SimulatedLedgerContract,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            deployments: Deployment table (default: bundled artifact)
            provider_url: Node URL (default: injected provider, else fallback)
            provider_factory: Builds a provider for a URL
            simulation_factory: Builds the fallback contract
        """
        self._deployments = deployments
        self._provider_url = provider_url or settings.ledger.active_url
        self._provider_factory = provider_factory
        self._simulation_factory = simulation_factory
        self.outcome: ResolutionOutcome | None = None

    async def resolve(self) -> LedgerContract:
        """
        Resolve the ledger handle.

        Returns:
            Live contract handle, or the simulation on any failure
        """
        try:
            contract = await self._resolve_live()
        except ConnectivityError as e:
            return self._fallback(e)
        except Exception as e:
            return self._fallback(ConnectivityError(str(e) or type(e).__name__))

        logger.info(
            "ledger_contract_loaded",
            address=contract.address,
            provider_url=self._provider_url,
        )
        return contract

    def _fallback(self, error: ConnectivityError) -> LedgerContract:
        logger.warning(
            "ledger_fallback_to_simulation",
            stage=error.stage,
            reason=error.reason,
            provider_url=self._provider_url,
        )
        simulation = self._simulation_factory()
        self.outcome = ResolutionOutcome(
            backend="ledger",
            mode=LedgerMode.SIMULATED.value,
            endpoint=self._provider_url,
            address=simulation.address,
            failed_stage=error.stage,
            reason=error.reason,
        )
        return simulation

    async def _resolve_live(self) -> LedgerContract:
        try:
            provider = self._provider_factory(self._provider_url)
        except Exception as e:
            raise ProviderUnavailable(str(e)) from e

        try:
            network_id = await provider.network_id()
        except Exception as e:
            raise NetworkQueryFailed(str(e)) from e

        logger.info("ledger_network_detected", network_id=network_id)

        record = self._lookup(network_id)

        try:
            contract = provider.bind(record)
            await contract.name()
        except Exception as e:
            raise ContractNotLive(
                f"contract at {record.address} did not answer name(): {e}"
            ) from e

        self.outcome = ResolutionOutcome(
            backend="ledger",
            mode=LedgerMode.REAL.value,
            endpoint=self._provider_url,
            address=record.address,
            network_id=network_id,
        )
        return contract

    def _lookup(self, network_id: str) -> DeploymentRecord:
        if self._deployments is None:
            try:
                self._deployments = DeploymentTable.load()
            except (OSError, ValueError, KeyError, TypeError) as e:
                raise NoDeploymentForNetwork(
                    f"deployment artifact unreadable: {e}"
                ) from e

        record = self._deployments.get(network_id)
        if record is None:
            raise NoDeploymentForNetwork(f"no deployment for network {network_id}")
        if not self._deployments.is_deployed(record):
            raise NoDeploymentForNetwork(
                f"network {network_id} still has the placeholder address"
            )
        return record
