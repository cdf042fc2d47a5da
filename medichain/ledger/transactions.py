"""
Pending Transactions
====================

Awaitable handle for a submitted contract write with an event channel
for the intermediate notifications.

Events fire in a fixed order: ``transactionHash`` first, then either
``receipt`` or ``error``. Awaiting the handle yields the final
``Confirmation`` (or raises the submission error).

Usage:
    pending = contract.permit_access(doctor, sender=account)
    pending.on("transactionHash", lambda tx: print("submitted", tx))
    confirmation = await pending

Version: 0.1.0
"""

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable, Generator
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from medichain.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]


class TransactionEvent(str, Enum):
    """Notifications a pending transaction can emit."""

    TRANSACTION_HASH = "transactionHash"
    RECEIPT = "receipt"
    ERROR = "error"


class Confirmation(BaseModel):
    """Final result of a state-changing contract call."""

    transaction_hash: str = Field(..., min_length=1)
    block_number: int | None = None
    status: bool = True
    simulated: bool = False


class PendingTransaction:
    """
    A contract write in flight.

    ``submit`` produces the transaction hash; ``confirm`` turns the hash
    into a ``Confirmation``. Both run in a task started on construction,
    so a running event loop is required.
    """

    def __init__(
        self,
        operation: str,
        submit: Callable[[], Awaitable[str]],
        confirm: Callable[[str], Awaitable[Confirmation]],
    ) -> None:
        self.operation = operation
        self._listeners: dict[TransactionEvent, list[Listener]] = defaultdict(list)
        self._emitted: dict[TransactionEvent, Any] = {}

        loop = asyncio.get_running_loop()
        self._task: asyncio.Task[Confirmation] = loop.create_task(
            self._run(submit, confirm)
        )
        self._task.add_done_callback(self._observe)

    def on(self, event: TransactionEvent | str, listener: Listener) -> "PendingTransaction":
        """
        Subscribe to a notification.

        Listeners added after the event already fired are called on the
        next loop iteration with the recorded payload.

        Returns:
            self, so subscriptions can be chained
        """
        event = TransactionEvent(event)
        if event in self._emitted:
            self._task.get_loop().call_soon(listener, self._emitted[event])
        else:
            self._listeners[event].append(listener)
        return self

    @property
    def transaction_hash(self) -> str | None:
        """Hash once submitted, else None."""
        return self._emitted.get(TransactionEvent.TRANSACTION_HASH)

    def done(self) -> bool:
        return self._task.done()

    def __await__(self) -> Generator[Any, None, Confirmation]:
        return self._task.__await__()

    async def _run(
        self,
        submit: Callable[[], Awaitable[str]],
        confirm: Callable[[str], Awaitable[Confirmation]],
    ) -> Confirmation:
        try:
            tx_hash = await submit()
            self._emit(TransactionEvent.TRANSACTION_HASH, tx_hash)
            confirmation = await confirm(tx_hash)
        except Exception as e:
            self._emit(TransactionEvent.ERROR, e)
            raise
        self._emit(TransactionEvent.RECEIPT, confirmation)
        return confirmation

    def _emit(self, event: TransactionEvent, payload: Any) -> None:
        self._emitted[event] = payload
        for listener in self._listeners.pop(event, []):
            try:
                listener(payload)
            except Exception:
                logger.exception(
                    "transaction_listener_failed",
                    operation=self.operation,
                    transaction_event=event.value,
                )

    def _observe(self, task: "asyncio.Task[Confirmation]") -> None:
        # Marks the exception as retrieved; callers that await still get it.
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(
                "transaction_failed",
                operation=self.operation,
                error=str(error),
            )
