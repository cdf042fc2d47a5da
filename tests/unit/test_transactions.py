"""
Unit tests for pending transactions.
"""

import asyncio

import pytest

from medichain.ledger import Confirmation, PendingTransaction, TransactionEvent


class TestPendingTransaction:
    """Tests for PendingTransaction event ordering and failure handling."""

    @pytest.mark.asyncio
    async def test_resolves_to_confirmation(self) -> None:
        async def submit() -> str:
            return "0xabc"

        async def confirm(tx_hash: str) -> Confirmation:
            return Confirmation(transaction_hash=tx_hash, block_number=12)

        confirmation = await PendingTransaction("register", submit, confirm)

        assert confirmation.transaction_hash == "0xabc"
        assert confirmation.block_number == 12

    @pytest.mark.asyncio
    async def test_submit_failure_emits_error_and_raises(self) -> None:
        async def submit() -> str:
            raise RuntimeError("user rejected transaction")

        async def confirm(tx_hash: str) -> Confirmation:
            raise AssertionError("confirm must not run")

        errors: list[Exception] = []
        hashes: list[str] = []
        pending = PendingTransaction("permit_access", submit, confirm)
        pending.on("error", errors.append).on("transactionHash", hashes.append)

        with pytest.raises(RuntimeError, match="user rejected"):
            await pending

        assert len(errors) == 1
        assert hashes == []
        assert pending.transaction_hash is None

    @pytest.mark.asyncio
    async def test_confirm_failure_follows_hash(self) -> None:
        async def submit() -> str:
            return "0xdead"

        async def confirm(tx_hash: str) -> Confirmation:
            raise ValueError("reverted")

        events: list[str] = []
        pending = PendingTransaction("buy_policy", submit, confirm)
        pending.on("transactionHash", lambda _: events.append("hash"))
        pending.on("error", lambda _: events.append("error"))
        pending.on("receipt", lambda _: events.append("receipt"))

        with pytest.raises(ValueError):
            await pending

        assert events == ["hash", "error"]

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_transaction(self) -> None:
        async def submit() -> str:
            return "0x01"

        async def confirm(tx_hash: str) -> Confirmation:
            return Confirmation(transaction_hash=tx_hash)

        def explode(_: str) -> None:
            raise RuntimeError("listener bug")

        pending = PendingTransaction("register", submit, confirm)
        pending.on(TransactionEvent.TRANSACTION_HASH, explode)

        confirmation = await pending
        assert confirmation.transaction_hash == "0x01"

    @pytest.mark.asyncio
    async def test_unknown_event_rejected(self) -> None:
        async def submit() -> str:
            return "0x01"

        async def confirm(tx_hash: str) -> Confirmation:
            return Confirmation(transaction_hash=tx_hash)

        pending = PendingTransaction("register", submit, confirm)
        with pytest.raises(ValueError):
            pending.on("confirmation_count", print)
        await pending

    def test_requires_running_loop(self) -> None:
        async def submit() -> str:
            return "0x01"

        async def confirm(tx_hash: str) -> Confirmation:
            return Confirmation(transaction_hash=tx_hash)

        with pytest.raises(RuntimeError):
            PendingTransaction("register", submit, confirm)

    def test_confirmation_requires_hash(self) -> None:
        with pytest.raises(ValueError):
            Confirmation(transaction_hash="")

    @pytest.mark.asyncio
    async def test_awaitable_from_multiple_tasks(self) -> None:
        async def submit() -> str:
            await asyncio.sleep(0.01)
            return "0x02"

        async def confirm(tx_hash: str) -> Confirmation:
            return Confirmation(transaction_hash=tx_hash)

        pending = PendingTransaction("revoke_access", submit, confirm)

        async def wait() -> Confirmation:
            return await pending

        first, second = await asyncio.gather(wait(), wait())
        assert first == second
