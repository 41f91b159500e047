"""
Cancellation and deadline scope for one invalidation.

A RequestContext is handed in by the caller and threaded through every stage
that waits on the network. Cancelling it, or letting its deadline pass, aborts
whatever is in flight and surfaces as TransportError. Partial results of the
aborted stage are discarded.

Cancelling the caller's own asyncio task is unaffected and still raises
asyncio.CancelledError.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from yubikiller.errors import TransportError

T = TypeVar("T")


class RequestContext:
    def __init__(self, timeout: Optional[float] = None) -> None:
        self._cancelled = asyncio.Event()
        self.deadline: Optional[float] = (
            None if timeout is None else time.monotonic() + timeout
        )

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise TransportError if the context is already cancelled or expired."""
        if self.cancelled:
            raise TransportError("request cancelled")
        if self.expired:
            raise TransportError(
                "deadline exceeded", details={"deadline": self.deadline}
            )

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable* unless the context is cancelled or expires first."""
        try:
            self.check()
        except TransportError:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task in done:
            return task.result()

        # Let the aborted task unwind (closing sockets) before reporting
        await asyncio.gather(task, return_exceptions=True)
        self.check()
        raise TransportError("deadline exceeded", details={"deadline": self.deadline})
