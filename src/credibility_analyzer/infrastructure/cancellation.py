"""
Timed Cancellation
==================

A cancellation signal that fires once, either when its timeout elapses
or when cancel() is called first. Used to bound every outbound call so
the caller is never blocked on an unresponsive upstream.

Usage:
    async with TimedCancellation.create(15.0) as token:
        response = await token.run(service.submit(content))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from types import TracebackType
from typing import TypeVar

from credibility_analyzer.domain.errors import OperationCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")

REASON_TIMEOUT = "timeout"
REASON_CANCELLED = "cancelled"


class TimedCancellation:
    """
    One-shot cancellation token bound to an event loop timer.

    Must be created inside a running event loop.
    """

    def __init__(self, timeout_seconds: float) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._timeout_seconds = timeout_seconds
        self._signal = asyncio.Event()
        self._reason: str | None = None
        loop = asyncio.get_running_loop()
        self._timer: asyncio.TimerHandle | None = loop.call_later(
            timeout_seconds, self._fire, REASON_TIMEOUT
        )

    @classmethod
    def create(cls, timeout_seconds: float) -> TimedCancellation:
        return cls(timeout_seconds)

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @property
    def signal(self) -> asyncio.Event:
        """Event set when the token fires."""
        return self._signal

    @property
    def fired(self) -> bool:
        return self._signal.is_set()

    @property
    def reason(self) -> str | None:
        """Why the token fired ("timeout" or "cancelled"), None while pending."""
        return self._reason

    @property
    def timed_out(self) -> bool:
        return self._reason == REASON_TIMEOUT

    def _fire(self, reason: str) -> None:
        if self._signal.is_set():
            return
        self._reason = reason
        self._signal.set()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if reason == REASON_TIMEOUT:
            logger.debug("Cancellation token fired after %.1fs", self._timeout_seconds)

    def cancel(self) -> None:
        """Fire the token now. No-op once fired."""
        self._fire(REASON_CANCELLED)

    async def run(self, awaitable: Awaitable[T]) -> T:
        """
        Await an operation unless the token fires first.

        Returns:
            The operation's result.

        Raises:
            OperationCancelledError: If the token fired before completion;
                the operation is cancelled and awaited before raising.
        """
        if self.fired:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise OperationCancelledError(self._reason or REASON_CANCELLED)

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._signal.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except BaseException:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        raise OperationCancelledError(self._reason or REASON_CANCELLED)

    async def __aenter__(self) -> TimedCancellation:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cancel()
