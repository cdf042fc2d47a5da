"""
Connectivity Orchestrator
=========================

Resolves the ledger and the content store once at start-up and hands
the resulting handles, together with the session context, to the rest
of the application.

Usage:
    orchestrator = ConnectivityOrchestrator()
    connectivity = await orchestrator.start()

    role = await connectivity.ledger.login(connectivity.session.account)
    cid = await connectivity.store.store(record_bytes)

Resolution is not repeated for the life of the process; switching
networks means restarting the application.

Version: 0.1.0
"""

import asyncio
from dataclasses import dataclass

from medichain import __version__
from medichain.config import settings
from medichain.ledger import LedgerContract, LedgerResolver
from medichain.logging import get_logger
from medichain.models import HealthResponse, ResolutionOutcome
from medichain.session import SessionContext
from medichain.storage import ContentStore, ContentStoreResolver

logger = get_logger(__name__)


@dataclass(frozen=True)
class Connectivity:
    """Resolved backends plus the session they are used under."""

    ledger: LedgerContract
    store: ContentStore
    session: SessionContext


class ConnectivityOrchestrator:
    """Runs both resolvers concurrently, exactly once."""

    def __init__(
        self,
        ledger_resolver: LedgerResolver | None = None,
        store_resolver: ContentStoreResolver | None = None,
        session: SessionContext | None = None,
    ) -> None:
        self._ledger_resolver = ledger_resolver or LedgerResolver()
        self._store_resolver = store_resolver or ContentStoreResolver()
        self.session = session or SessionContext()

        self._startup: asyncio.Task[Connectivity] | None = None
        self._connectivity: Connectivity | None = None

    @property
    def ready(self) -> bool:
        return self._connectivity is not None

    @property
    def connectivity(self) -> Connectivity:
        """
        Published handles.

        Raises:
            RuntimeError: If ``start()`` has not completed
        """
        if self._connectivity is None:
            raise RuntimeError("Connectivity not resolved; await start() first")
        return self._connectivity

    @property
    def ledger(self) -> LedgerContract:
        return self.connectivity.ledger

    @property
    def store(self) -> ContentStore:
        return self.connectivity.store

    @property
    def outcomes(self) -> list[ResolutionOutcome]:
        return [
            outcome
            for outcome in (self._ledger_resolver.outcome, self._store_resolver.outcome)
            if outcome is not None
        ]

    async def start(self) -> Connectivity:
        """
        Resolve both backends.

        Concurrent and repeated calls share the first resolution.
        """
        if self._startup is None:
            self._startup = asyncio.get_running_loop().create_task(self._resolve())
        return await self._startup

    async def _resolve(self) -> Connectivity:
        ledger, store = await asyncio.gather(
            self._ledger_resolver.resolve(),
            self._store_resolver.resolve(),
        )
        self._connectivity = Connectivity(ledger=ledger, store=store, session=self.session)

        logger.info(
            "connectivity_ready",
            ledger_mode=ledger.mode.value,
            ledger_address=ledger.address,
            store_mode=store.mode.value,
        )
        return self._connectivity

    async def status(self) -> HealthResponse:
        """
        Health summary of both handles.

        Simulated backends count as healthy; use the outcomes to see
        whether the application is running degraded.
        """
        connectivity = self.connectivity
        ledger_health, store_health = await asyncio.gather(
            connectivity.ledger.health_check(),
            connectivity.store.health_check(),
        )
        for outcome in self.outcomes:
            component = ledger_health if outcome.backend == "ledger" else store_health
            component["degraded"] = outcome.degraded
            if outcome.degraded:
                component["fallback_reason"] = outcome.reason

        components = {"ledger": ledger_health, "content_store": store_health}
        healthy = all(c.get("status") == "healthy" for c in components.values())
        return HealthResponse(
            status="healthy" if healthy else "unhealthy",
            service=settings.service_name,
            version=__version__,
            components=components,
        )

    async def close(self) -> None:
        """Release the handles' transport resources."""
        if self._connectivity is None:
            return
        try:
            await self._connectivity.ledger.close()
        finally:
            await self._connectivity.store.close()
        logger.info("connectivity_closed")
