"""
Simulated Content Store
=======================

Stand-in for IPFS when no node is reachable. Nothing is kept: ``store``
invents a fresh CID and ``retrieve`` invents content for any CID.

Version: 0.1.0
"""

import secrets
import string
from typing import Any

from medichain.config import StoreMode
from medichain.logging import get_logger
from medichain.storage.client import ContentStore

logger = get_logger(__name__)


CID_PREFIX = "Qm"
_CID_ALPHABET = string.digits + string.ascii_lowercase
_CID_SUFFIX_LENGTH = 44


class SimulatedContentStore(ContentStore):
    """In-memory mock of the content store."""

    def __init__(self) -> None:
        self._stored = 0
        logger.debug("mock_ipfs_initialized")

    @property
    def mode(self) -> StoreMode:
        return StoreMode.SIMULATED

    async def store(self, content: bytes) -> str:
        """Return a new CID-shaped identifier; never deduplicates."""
        cid = CID_PREFIX + "".join(
            secrets.choice(_CID_ALPHABET) for _ in range(_CID_SUFFIX_LENGTH)
        )
        self._stored += 1
        logger.info("mock_ipfs_store", cid=cid, size=len(content))
        return cid

    async def retrieve(self, cid: str) -> bytes:
        """Placeholder content derived only from the CID."""
        logger.info("mock_ipfs_retrieve", cid=cid)
        return f"Mock file content for hash: {cid}".encode()

    async def health_check(self) -> dict[str, Any]:
        """Check mock store health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "stored": self._stored,
        }
