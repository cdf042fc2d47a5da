"""
Content Store Resolver
======================

Probes the configured IPFS node once, within a bounded timeout, and
falls back to the simulation on any failure.

Version: 0.1.0
"""

import asyncio
from collections.abc import Callable

import httpx

from medichain.config import StoreMode, settings
from medichain.errors import ConnectivityError, StoreProbeTimeout, StoreUnreachable
from medichain.logging import get_logger
from medichain.models import ResolutionOutcome
from medichain.storage.client import ContentStore
from medichain.storage.ipfs import IPFSContentStore
from medichain.storage.mock import SimulatedContentStore

logger = get_logger(__name__)


class ContentStoreResolver:
    """One-shot content-store negotiation."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        store_factory: Callable[[str, float], IPFSContentStore] = IPFSContentStore,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            url: IPFS RPC API URL; "" means unconfigured (default from settings)
            timeout: Probe budget in seconds (default from settings)
            store_factory: Builds the real store for a URL and timeout
        """
        self._url = settings.ipfs.url if url is None else url
        self._timeout = settings.ipfs.timeout_seconds if timeout is None else timeout
        self._store_factory = store_factory
        self.outcome: ResolutionOutcome | None = None

    async def resolve(self) -> ContentStore:
        """
        Resolve the content-store handle.

        Returns:
            Real IPFS store, or the simulation on any failure
        """
        try:
            store = await self._probe()
        except ConnectivityError as e:
            return self._fallback(e)
        except Exception as e:
            return self._fallback(StoreUnreachable(str(e) or type(e).__name__))

        self.outcome = ResolutionOutcome(
            backend="content_store",
            mode=StoreMode.REAL.value,
            endpoint=self._url,
        )
        return store

    def _fallback(self, error: ConnectivityError) -> SimulatedContentStore:
        logger.warning(
            "content_store_fallback_to_simulation",
            stage=error.stage,
            reason=error.reason,
            url=self._url,
        )
        self.outcome = ResolutionOutcome(
            backend="content_store",
            mode=StoreMode.SIMULATED.value,
            endpoint=self._url,
            failed_stage=error.stage,
            reason=error.reason,
        )
        return SimulatedContentStore()

    async def _probe(self) -> IPFSContentStore:
        if not self._url:
            raise StoreUnreachable("no content-store endpoint configured")

        try:
            store = self._store_factory(self._url, self._timeout)
        except Exception as e:
            raise StoreUnreachable(str(e)) from e

        try:
            version = await asyncio.wait_for(store.version(), timeout=self._timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            await store.close()
            raise StoreProbeTimeout(
                f"no answer from {self._url} within {self._timeout}s"
            ) from e
        except Exception as e:
            await store.close()
            raise StoreUnreachable(str(e) or type(e).__name__) from e

        if not isinstance(version, dict):
            await store.close()
            raise StoreUnreachable(
                f"unexpected /version reply from {self._url}: {version!r}"
            )

        logger.info(
            "content_store_connected",
            url=self._url,
            version=version.get("Version"),
        )
        return store
