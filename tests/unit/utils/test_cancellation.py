"""Tests for cancellation helpers."""

import asyncio

import pytest

from podgrab.utils.cancellation import raise_if_cancelled, wait_or_cancel
from podgrab.utils.errors import OperationCancelledError


class TestRaiseIfCancelled:
    def test_none_event_never_raises(self) -> None:
        raise_if_cancelled(None)

    @pytest.mark.asyncio
    async def test_unset_event_does_not_raise(self) -> None:
        raise_if_cancelled(asyncio.Event())

    @pytest.mark.asyncio
    async def test_set_event_raises(self) -> None:
        event = asyncio.Event()
        event.set()
        with pytest.raises(OperationCancelledError):
            raise_if_cancelled(event)


class TestWaitOrCancel:
    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        async def work() -> int:
            return 42

        assert await wait_or_cancel(work(), asyncio.Event()) == 42

    @pytest.mark.asyncio
    async def test_without_event(self) -> None:
        async def work() -> str:
            return "done"

        assert await wait_or_cancel(work(), None) == "done"

    @pytest.mark.asyncio
    async def test_propagates_errors(self) -> None:
        async def work() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await wait_or_cancel(work(), asyncio.Event())

    @pytest.mark.asyncio
    async def test_already_cancelled(self) -> None:
        event = asyncio.Event()
        event.set()

        async def work() -> int:
            return 1

        coro = work()
        with pytest.raises(OperationCancelledError):
            await wait_or_cancel(coro, event)
        coro.close()

    @pytest.mark.asyncio
    async def test_cancel_while_waiting(self) -> None:
        event = asyncio.Event()
        started = asyncio.Event()
        cancelled = False

        async def work() -> None:
            nonlocal cancelled
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled = True
                raise

        async def trigger() -> None:
            await started.wait()
            event.set()

        asyncio.create_task(trigger())
        with pytest.raises(OperationCancelledError):
            await wait_or_cancel(work(), event)
        assert cancelled
