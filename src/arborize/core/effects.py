from __future__ import annotations

"""
Effect Adapters.

Helpers that turn plain callables into the awaitable-returning functions
expected by the effectful builder, plus a driver for the identity effect
under which the effectful builder behaves exactly like the pure one.
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


class EffectSuspendedError(RuntimeError):
    """Raised when an awaitable driven by run_immediate tries to suspend."""


# -----------------------------------------------------------------------------
# IDENTITY EFFECT
# -----------------------------------------------------------------------------

def lift(fn: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """
    Wrap a pure function as an effectful one that completes immediately.

    The returned coroutine never suspends; failures raised by ``fn`` are
    raised from the coroutine unchanged.
    """
    @functools.wraps(fn)
    async def _lifted(*args: Any) -> T:
        return fn(*args)

    return _lifted


def run_immediate(awaitable: Awaitable[T]) -> T:
    """
    Drive an awaitable that never suspends to completion without a loop.

    Args:
        awaitable: Typically ``build_async`` over lifted functions.

    Returns:
        The awaitable's result.

    Raises:
        EffectSuspendedError: If the awaitable yields control.
    """
    step = awaitable.__await__()
    try:
        step.send(None)
    except StopIteration as done:
        return done.value

    step.close()
    raise EffectSuspendedError("Awaitable suspended; the identity effect must complete immediately.")


# -----------------------------------------------------------------------------
# I/O EFFECTS
# -----------------------------------------------------------------------------

def in_thread(fn: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """
    Wrap a blocking function so every call runs in a worker thread.

    Keeps the event loop responsive while filesystem listings are performed.
    """
    @functools.wraps(fn)
    async def _threaded(*args: Any) -> T:
        return await asyncio.to_thread(fn, *args)

    return _threaded


def with_timeout(
        fn: Callable[..., Awaitable[T]],
        seconds: Optional[float],
) -> Callable[..., Awaitable[T]]:
    """
    Attach a per-call timeout to an effectful function.

    Args:
        fn: Effectful function to guard.
        seconds: Limit per call. ``None`` or a non-positive value returns
            ``fn`` unchanged.

    Returns:
        A function whose calls raise ``asyncio.TimeoutError`` when the
        limit is exceeded. The timed-out call is abandoned, not stopped: a
        worker thread started by in_thread runs until its call returns.
    """
    if seconds is None or seconds <= 0:
        return fn

    @functools.wraps(fn)
    async def _guarded(*args: Any) -> T:
        return await asyncio.wait_for(fn(*args), timeout=seconds)

    return _guarded
