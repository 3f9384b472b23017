"""Cooperative cancellation built on ``asyncio.Event``."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from podgrab.utils.errors import OperationCancelledError

T = TypeVar("T")


def raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    """Raise OperationCancelledError if the event has been set."""
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError("Operation cancelled")


async def wait_or_cancel(awaitable: Awaitable[T], cancel_event: asyncio.Event | None) -> T:
    """Await ``awaitable`` unless ``cancel_event`` fires first.

    Args:
        awaitable: Work to wait for
        cancel_event: Run-level cancellation signal (None means never cancelled)

    Returns:
        The awaitable's result

    Raises:
        OperationCancelledError: If the event was set before the work finished
    """
    if cancel_event is None:
        return await awaitable

    raise_if_cancelled(cancel_event)

    work = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()

    if work.done():
        return work.result()

    work.cancel()
    await asyncio.gather(work, return_exceptions=True)
    raise OperationCancelledError("Operation cancelled")
