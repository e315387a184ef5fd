"""
The outermost boundary: turning a carrier value into a plain value.

This is the only place lambdaworld ever waits. ``join`` blocks on a deferred
handle for at most ``timeout`` seconds; ``join_async`` awaits a task handle
under the same bound. ``run``/``run_async`` instantiate a program against a
backend and join the result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

from lambdaworld.backend import Backend
from lambdaworld.errors import JoinTimeoutError
from lambdaworld.io import IO
from lambdaworld.monad import FutureMonad, IdMonad, Monad, TaskMonad
from lambdaworld.utils import join_timeout

logger = logging.getLogger(__name__)

ProgramLike = Callable[[IO, Monad], Any]

_DEFAULT = object()


def _resolve_timeout(timeout: Any) -> float | None:
    if timeout is _DEFAULT:
        return join_timeout()
    return timeout


def join(handle: Future, timeout: Any = _DEFAULT) -> Any:
    """Block until ``handle`` resolves and return its value.

    ``timeout`` defaults to ``LAMBDAWORLD_JOIN_TIMEOUT`` (1 second); ``None``
    waits forever. Failures of the handle are re-raised unchanged.
    """

    if not isinstance(handle, Future):
        raise TypeError(f"join expects a Future, got {type(handle).__name__}")
    bound = _resolve_timeout(timeout)
    logger.debug("joining %r with timeout %s", handle, bound)
    try:
        return handle.result(timeout=bound)
    except FutureTimeoutError:
        if handle.done():
            raise
        raise JoinTimeoutError(bound) from None


async def join_async(handle: asyncio.Future, timeout: Any = _DEFAULT) -> Any:
    """Await ``handle`` for at most ``timeout`` seconds."""

    if not asyncio.isfuture(handle):
        raise TypeError(f"join_async expects an asyncio Future, got {type(handle).__name__}")
    bound = _resolve_timeout(timeout)
    logger.debug("awaiting %r with timeout %s", handle, bound)
    try:
        return await asyncio.wait_for(handle, bound)
    except asyncio.TimeoutError:
        if handle.done() and not handle.cancelled():
            raise
        raise JoinTimeoutError(bound) from None


def run(program: ProgramLike, backend: Backend, *, timeout: Any = _DEFAULT) -> Any:
    """Instantiate ``program`` on ``backend`` and return its joined value."""

    result = program(backend.io, backend.monad)
    if isinstance(backend.monad, IdMonad):
        return result
    if isinstance(backend.monad, FutureMonad):
        return join(result, timeout)
    if isinstance(backend.monad, TaskMonad):
        raise TypeError("task backends must be run with run_async from a running loop")
    raise TypeError(f"no join strategy for {type(backend.monad).__name__}")


async def run_async(program: ProgramLike, backend: Backend, *, timeout: Any = _DEFAULT) -> Any:
    """Async counterpart of :func:`run`; deferred handles are awaited, not blocked on."""

    result = program(backend.io, backend.monad)
    if isinstance(backend.monad, IdMonad):
        return result
    if isinstance(backend.monad, FutureMonad):
        result = asyncio.wrap_future(result)
    elif not isinstance(backend.monad, TaskMonad):
        raise TypeError(f"no join strategy for {type(backend.monad).__name__}")
    return await join_async(result, timeout)


__all__ = ["join", "join_async", "run", "run_async"]
