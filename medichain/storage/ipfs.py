"""
IPFS Content Store
==================

Content store backed by a local IPFS node's HTTP RPC API.

Version: 0.1.0
"""

import time
from typing import Any

import httpx

from medichain.config import StoreMode, settings
from medichain.logging import get_logger
from medichain.storage.client import ContentStore

logger = get_logger(__name__)


class IPFSContentStore(ContentStore):
    """
    IPFS node reached at ``<url>/add``, ``<url>/cat`` and ``<url>/version``.

    The RPC API only accepts POST requests.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the IPFS client.

        Args:
            url: RPC API base URL (default from settings)
            timeout: Request timeout in seconds (default from settings)
            transport: Custom httpx transport
        """
        self.url = url or settings.ipfs.url
        self._timeout = settings.ipfs.timeout_seconds if timeout is None else timeout

        self._client = httpx.AsyncClient(
            base_url=self.url,
            timeout=httpx.Timeout(self._timeout),
            transport=transport,
        )

        logger.debug("ipfs_client_initialized", url=self.url)

    @property
    def mode(self) -> StoreMode:
        return StoreMode.REAL

    async def version(self) -> dict[str, Any]:
        """
        Query the node version.

        Only used to confirm the node is answering.
        """
        response = await self._client.post("/version")
        response.raise_for_status()
        return response.json()

    async def store(self, content: bytes) -> str:
        response = await self._client.post("/add", files={"file": content})
        response.raise_for_status()
        cid = response.json()["Hash"]

        logger.debug("ipfs_content_stored", cid=cid, size=len(content))
        return cid

    async def retrieve(self, cid: str) -> bytes:
        response = await self._client.post("/cat", params={"arg": cid})
        response.raise_for_status()
        return response.content

    async def health_check(self) -> dict[str, Any]:
        """
        Check IPFS node health.

        Returns:
            dict with status and node version
        """
        try:
            start = time.perf_counter()
            data = await self.version()
            latency_ms = (time.perf_counter() - start) * 1000

            return {
                "status": "healthy",
                "mode": self.mode.value,
                "url": self.url,
                "version": data.get("Version"),
                "latency_ms": round(latency_ms, 2),
            }
        except httpx.ConnectError:
            logger.warning("ipfs_not_running", url=self.url)
            return {
                "status": "unhealthy",
                "mode": self.mode.value,
                "url": self.url,
                "error": "IPFS node not running",
            }
        except Exception as e:
            logger.error("ipfs_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "mode": self.mode.value,
                "url": self.url,
                "error": str(e),
            }

    async def close(self) -> None:
        await self._client.aclose()
