"""
Tests for Timed Cancellation
============================
"""

import asyncio
import time

import pytest

from credibility_analyzer.domain.errors import OperationCancelledError
from credibility_analyzer.infrastructure.cancellation import TimedCancellation


class TestTimedCancellation:
    """Tests for the one-shot cancellation token."""

    @pytest.mark.asyncio
    async def test_fires_after_timeout(self) -> None:
        token = TimedCancellation.create(0.05)

        await asyncio.wait_for(token.signal.wait(), timeout=1.0)

        assert token.fired is True
        assert token.timed_out is True
        assert token.reason == "timeout"

    @pytest.mark.asyncio
    async def test_cancel_fires_immediately(self) -> None:
        token = TimedCancellation.create(10.0)

        token.cancel()

        assert token.fired is True
        assert token.reason == "cancelled"
        assert token.timed_out is False

    @pytest.mark.asyncio
    async def test_cancel_after_timeout_is_noop(self) -> None:
        token = TimedCancellation.create(0.01)
        await token.signal.wait()

        token.cancel()
        token.cancel()

        assert token.reason == "timeout"

    @pytest.mark.asyncio
    async def test_run_returns_result(self) -> None:
        async def work() -> str:
            await asyncio.sleep(0)
            return "done"

        async with TimedCancellation.create(1.0) as token:
            assert await token.run(work()) == "done"

    @pytest.mark.asyncio
    async def test_run_aborts_slow_operation(self) -> None:
        cancelled = asyncio.Event()

        async def slow() -> None:
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        start = time.perf_counter()
        async with TimedCancellation.create(0.05) as token:
            with pytest.raises(OperationCancelledError) as exc_info:
                await token.run(slow())

        assert time.perf_counter() - start < 1.0
        assert exc_info.value.reason == "timeout"
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_run_after_fired_raises(self) -> None:
        token = TimedCancellation.create(1.0)
        token.cancel()

        async def work() -> int:
            return 1

        with pytest.raises(OperationCancelledError):
            await token.run(work())

    @pytest.mark.asyncio
    async def test_run_propagates_operation_errors(self) -> None:
        async def broken() -> None:
            raise RuntimeError("boom")

        async with TimedCancellation.create(1.0) as token:
            with pytest.raises(RuntimeError, match="boom"):
                await token.run(broken())

    @pytest.mark.asyncio
    async def test_context_exit_releases_timer(self) -> None:
        async with TimedCancellation.create(5.0) as token:
            pass

        assert token.fired is True
        assert token._timer is None

    @pytest.mark.asyncio
    async def test_non_positive_timeout_is_invalid(self) -> None:
        with pytest.raises(ValueError):
            TimedCancellation.create(0)
