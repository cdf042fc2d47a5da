"""
Unit tests for the connectivity orchestrator and session context.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from medichain.config import LedgerMode, StoreMode
from medichain.ledger import DeploymentTable, LedgerContract, LedgerResolver
from medichain.ledger.mock import SimulatedLedgerContract
from medichain.orchestrator import ConnectivityOrchestrator
from medichain.session import SessionContext
from medichain.storage import (
    ContentStore,
    ContentStoreResolver,
    IPFSContentStore,
    SimulatedContentStore,
)
from tests.fakes import FakeProvider


class RendezvousLedgerResolver:
    """Resolves only once the store resolver has started too."""

    def __init__(self, started: asyncio.Event, other: asyncio.Event) -> None:
        self._started = started
        self._other = other
        self.calls = 0
        self.outcome = None

    async def resolve(self) -> LedgerContract:
        self.calls += 1
        self._started.set()
        await self._other.wait()
        return SimulatedLedgerContract(hash_delay=0, confirmation_delay=0)


class RendezvousStoreResolver:
    """Resolves only once the ledger resolver has started too."""

    def __init__(self, started: asyncio.Event, other: asyncio.Event) -> None:
        self._started = started
        self._other = other
        self.calls = 0
        self.outcome = None

    async def resolve(self) -> ContentStore:
        self.calls += 1
        self._started.set()
        await self._other.wait()
        return SimulatedContentStore()


class FixedResolver:
    """Resolves to a prepared handle."""

    def __init__(self, handle: object) -> None:
        self._handle = handle
        self.outcome = None

    async def resolve(self) -> object:
        return self._handle


def _offline_orchestrator(deployments: DeploymentTable) -> ConnectivityOrchestrator:
    provider = FakeProvider(network_id="99")
    return ConnectivityOrchestrator(
        ledger_resolver=LedgerResolver(
            deployments=deployments,
            provider_url=provider.url,
            provider_factory=lambda url: provider,
        ),
        store_resolver=ContentStoreResolver(url=""),
    )


class TestConnectivityOrchestrator:
    """Tests for ConnectivityOrchestrator."""

    @pytest.mark.asyncio
    async def test_resolvers_run_concurrently(self) -> None:
        """Each resolver waits for the other to start; sequential runs would hang."""
        ledger_started = asyncio.Event()
        store_started = asyncio.Event()
        ledger_resolver = RendezvousLedgerResolver(ledger_started, store_started)
        store_resolver = RendezvousStoreResolver(store_started, ledger_started)
        orchestrator = ConnectivityOrchestrator(
            ledger_resolver=ledger_resolver,  # type: ignore[arg-type]
            store_resolver=store_resolver,  # type: ignore[arg-type]
        )

        connectivity = await asyncio.wait_for(orchestrator.start(), timeout=2.0)

        assert connectivity.ledger.mode == LedgerMode.SIMULATED
        assert connectivity.store.mode == StoreMode.SIMULATED

    @pytest.mark.asyncio
    async def test_start_resolves_once(self) -> None:
        ledger_started = asyncio.Event()
        store_started = asyncio.Event()
        ledger_resolver = RendezvousLedgerResolver(ledger_started, store_started)
        store_resolver = RendezvousStoreResolver(store_started, ledger_started)
        orchestrator = ConnectivityOrchestrator(
            ledger_resolver=ledger_resolver,  # type: ignore[arg-type]
            store_resolver=store_resolver,  # type: ignore[arg-type]
        )

        first, second = await asyncio.gather(orchestrator.start(), orchestrator.start())
        third = await orchestrator.start()

        assert first is second is third
        assert ledger_resolver.calls == 1
        assert store_resolver.calls == 1

    @pytest.mark.asyncio
    async def test_offline_start_is_usable(self, deployments: DeploymentTable) -> None:
        orchestrator = _offline_orchestrator(deployments)

        connectivity = await orchestrator.start()

        assert orchestrator.ready
        assert orchestrator.ledger is connectivity.ledger
        assert orchestrator.store is connectivity.store
        assert await connectivity.ledger.login("0xabc") > 0
        cid = await connectivity.store.store(b"record")
        assert cid.startswith("Qm")
        assert all(outcome.degraded for outcome in orchestrator.outcomes)

    @pytest.mark.asyncio
    async def test_mixed_backends(self, deployments: DeploymentTable) -> None:
        """A live ledger and an unreachable store resolve independently."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = httpx.MockTransport(refuse)
        provider = FakeProvider(network_id="5777")
        orchestrator = ConnectivityOrchestrator(
            ledger_resolver=LedgerResolver(
                deployments=deployments,
                provider_url=provider.url,
                provider_factory=lambda url: provider,
            ),
            store_resolver=ContentStoreResolver(
                url="http://127.0.0.1:5001/api/v0",
                timeout=1.0,
                store_factory=lambda url, timeout: IPFSContentStore(
                    url, timeout, transport=transport
                ),
            ),
        )

        connectivity = await orchestrator.start()

        assert connectivity.ledger.mode == LedgerMode.REAL
        assert connectivity.ledger.address == "0xREAL"
        assert isinstance(connectivity.store, SimulatedContentStore)

    @pytest.mark.asyncio
    async def test_status_reports_degraded_components(
        self, deployments: DeploymentTable
    ) -> None:
        orchestrator = _offline_orchestrator(deployments)
        await orchestrator.start()

        health = await orchestrator.status()

        assert health.is_healthy
        assert health.components["ledger"]["degraded"] is True
        assert health.components["content_store"]["degraded"] is True
        assert "network 99" in health.components["ledger"]["fallback_reason"]

    def test_handles_unavailable_before_start(self) -> None:
        orchestrator = ConnectivityOrchestrator(
            ledger_resolver=LedgerResolver(provider_url="http://unused:7545"),
            store_resolver=ContentStoreResolver(url=""),
        )

        assert not orchestrator.ready
        with pytest.raises(RuntimeError):
            _ = orchestrator.ledger

    @pytest.mark.asyncio
    async def test_session_shared_with_connectivity(
        self, deployments: DeploymentTable
    ) -> None:
        session = SessionContext()
        orchestrator = _offline_orchestrator(deployments)
        orchestrator.session = session

        connectivity = await orchestrator.start()
        session.connect_wallet("0x5B38Da6a701c568545dCfcB03FcB875f56beddC4")

        assert connectivity.session is session
        assert connectivity.session.account.startswith("0x5B38")

    @pytest.mark.asyncio
    async def test_close_before_start_is_noop(self) -> None:
        orchestrator = ConnectivityOrchestrator(
            ledger_resolver=LedgerResolver(provider_url="http://unused:7545"),
            store_resolver=ContentStoreResolver(url=""),
        )

        await orchestrator.close()

    @pytest.mark.asyncio
    async def test_store_closed_when_ledger_close_fails(self) -> None:
        ledger = MagicMock(spec=LedgerContract)
        ledger.close = AsyncMock(side_effect=OSError("provider gone"))
        store = MagicMock(spec=ContentStore)
        store.close = AsyncMock()
        orchestrator = ConnectivityOrchestrator(
            ledger_resolver=FixedResolver(ledger),  # type: ignore[arg-type]
            store_resolver=FixedResolver(store),  # type: ignore[arg-type]
        )
        await orchestrator.start()

        with pytest.raises(OSError):
            await orchestrator.close()

        store.close.assert_awaited_once()


class TestSessionContext:
    """Tests for SessionContext."""

    def test_starts_empty(self) -> None:
        session = SessionContext()

        assert session.account == ""
        assert session.token == ""
        assert not session.is_connected
        assert not session.is_authenticated

    def test_connect_then_login(self) -> None:
        session = SessionContext()

        session.connect_wallet("0xabc")
        session.login("jwt-token")

        assert session.account == "0xabc"
        assert session.token == "jwt-token"
        assert session.is_authenticated
        assert "jwt-token" not in repr(session)

    def test_logout_keeps_account(self) -> None:
        session = SessionContext()
        session.connect_wallet("0xabc")
        session.login("jwt-token")

        session.logout()

        assert session.account == "0xabc"
        assert session.token == ""

    def test_empty_values_rejected(self) -> None:
        session = SessionContext()

        with pytest.raises(ValueError):
            session.connect_wallet("")
        with pytest.raises(ValueError):
            session.login("")

    def test_values_are_read_only(self) -> None:
        session = SessionContext()

        with pytest.raises(AttributeError):
            session.account = "0xdef"  # type: ignore[misc]
