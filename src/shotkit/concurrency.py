"""
Module: concurrency

Purpose:
    Adapters from blocking and callback-style engine calls to asyncio.
    Blocking work runs on the loop's default thread pool so the calling
    task suspends instead of blocking the event loop.

Key Functions:
    - run_blocking(): Await a blocking call on a worker thread
    - from_callback(): Await a ``start(callback)`` style operation

Dependencies:
    - asyncio, concurrent.futures (std)

Used By:
    - image.handle: Image.save()
    - compare.comparator: compare(), build_diff()

Note:
    No timeouts or cancellation are provided here. Callers wanting a
    deadline wrap the awaitable in ``asyncio.wait_for``.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# callback(error, result): exactly one of the two is meaningful
Callback = Callable[[Optional[BaseException], Any], None]


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run ``func(*args, **kwargs)`` on a worker thread and await the result.

    Exceptions raised by ``func`` propagate to the awaiting task.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


async def from_callback(start: Callable[[Callback], None]) -> Any:
    """
    Await an operation that reports completion through a callback.

    ``start`` is called on a worker thread with a ``callback(error, result)``
    function. The first invocation settles the awaitable: a non-None
    ``error`` is raised, otherwise ``result`` is returned. Later
    invocations are ignored. If ``start`` itself raises before calling
    back, that exception is delivered the same way.

    Args:
        start: Function that begins the operation and eventually calls
            the supplied callback exactly once

    Returns:
        The result passed to the callback

    Example:
        >>> result = await from_callback(engine.run)
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def _settle(error: Optional[BaseException], result: Any) -> None:
        if future.done():
            logger.debug("Ignoring repeated completion callback")
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def callback(error: Optional[BaseException], result: Any = None) -> None:
        loop.call_soon_threadsafe(_settle, error, result)

    def _start() -> None:
        try:
            start(callback)
        except Exception as exc:
            callback(exc, None)

    runner = loop.run_in_executor(None, _start)
    try:
        return await future
    finally:
        await runner
