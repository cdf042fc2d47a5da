"""
Ledger Providers
================

Connection to a JSON-RPC node, used by the resolver to learn which
network it is on and to bind contract handles.

Version: 0.1.0
"""

from abc import ABC, abstractmethod

from web3 import AsyncWeb3

from medichain.ledger.client import LedgerContract
from medichain.ledger.contract import Web3LedgerContract
from medichain.ledger.deployments import DeploymentRecord
from medichain.logging import get_logger

logger = get_logger(__name__)


class LedgerProvider(ABC):
    """A node endpoint the resolver can query."""

    url: str

    @abstractmethod
    async def network_id(self) -> str:
        """Identifier of the connected network (``net_version``)."""
        ...

    @abstractmethod
    def bind(self, record: DeploymentRecord) -> LedgerContract:
        """Bind a contract handle to a deployment on this network."""
        ...


class Web3Provider(LedgerProvider):
    """HTTP JSON-RPC provider backed by ``AsyncWeb3``."""

    def __init__(self, url: str) -> None:
        self.url = url
        self._w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))
        logger.debug("ledger_provider_created", url=url)

    async def network_id(self) -> str:
        return str(await self._w3.net.version)

    def bind(self, record: DeploymentRecord) -> LedgerContract:
        return Web3LedgerContract(self._w3, record)
