"""
Composition interface for lambdaworld.

``Monad`` isolates the two imperative combinators every effectful program
needs, ``bind`` and ``unit``, from any particular capability. Each concrete
subclass fixes one carrier:

- ``IdMonad``: the carrier is the value itself; ``bind`` is application.
- ``FutureMonad``: the carrier is a ``concurrent.futures.Future``; ``bind``
  registers the continuation on the upstream handle and returns at once.
- ``TaskMonad``: the carrier is an ``asyncio.Future`` bound to an event loop.

Instances must satisfy the monad laws::

    bind(unit(a), f)       == f(a)
    bind(m, unit)          == m
    bind(bind(m, f), g)    == bind(m, lambda x: bind(f(x), g))

where ``==`` means "joins to the same value with the same ordered side
effects".
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from lambdaworld.types import A, B

logger = logging.getLogger(__name__)


def _ensure_continuation(f: object, *, name: str = "binder") -> None:
    if not callable(f):
        raise TypeError(f"{name} must be callable, got {type(f).__name__}")


class Monad(ABC):
    """Sequencing combinators over a single carrier."""

    #: Short carrier name used in reprs and logs.
    carrier: str = "?"

    @abstractmethod
    def bind(self, fa: Any, f: Callable[[A], Any]) -> Any:
        """Run ``f`` on the value of ``fa`` once it is available."""

    @abstractmethod
    def unit(self, a: A) -> Any:
        """Lift ``a`` into the carrier without side effects."""

    def map(self, fa: Any, g: Callable[[A], B]) -> Any:
        """Apply a plain function to the value of ``fa``."""

        _ensure_continuation(g, name="mapper")
        return self.bind(fa, lambda a: self.unit(g(a)))

    def then(self, fa: Any, next_: Callable[[], Any]) -> Any:
        """Sequence ``fa`` before ``next_()``, discarding the first value."""

        _ensure_continuation(next_, name="next_")
        return self.bind(fa, lambda _: next_())

    def join(self, ffa: Any) -> Any:
        """Flatten a carrier nested in itself."""

        return self.bind(ffa, lambda fa: fa)

    def when_done(self, fa: Any, action: Callable[[], None]) -> None:
        """Run ``action`` once ``fa`` has settled, whatever the outcome.

        Carriers that are already values by the time they are returned run
        ``action`` at once; handle-based carriers attach it as a callback.
        """

        action()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(carrier={self.carrier!r})"


class IdMonad(Monad):
    carrier = "identity"

    def bind(self, fa: A, f: Callable[[A], B]) -> B:
        _ensure_continuation(f)
        return f(fa)

    def unit(self, a: A) -> A:
        return a


def _copy_outcome(source: Future, target: Future) -> None:
    """Complete ``target`` with whatever ``source`` completed with."""

    if target.done():
        return
    if source.cancelled():
        target.cancel()
        return
    exc = source.exception()
    if exc is not None:
        target.set_exception(exc)
    else:
        target.set_result(source.result())


class FutureMonad(Monad):
    """Monad over ``concurrent.futures.Future`` handles.

    ``bind`` never waits: the continuation is attached as a done callback and
    runs on whichever thread resolves the upstream handle (or immediately on
    the caller's thread when the upstream is already resolved).
    """

    carrier = "deferred"

    def bind(self, fa: Future, f: Callable[[A], Future]) -> Future:
        _ensure_continuation(f)
        if not isinstance(fa, Future):
            raise TypeError(f"bind expects a Future, got {type(fa).__name__}")

        result: Future = Future()

        def on_upstream(done: Future) -> None:
            if result.done():
                return
            if done.cancelled():
                result.cancel()
                return
            error = done.exception()
            if error is not None:
                result.set_exception(error)
                return
            try:
                next_handle = f(done.result())
                if not isinstance(next_handle, Future):
                    raise TypeError(
                        "binder must return a Future; got "
                        f"{type(next_handle).__name__}"
                    )
            except BaseException as exc:
                result.set_exception(exc)
                return
            next_handle.add_done_callback(lambda nxt: _copy_outcome(nxt, result))

        logger.debug("chaining continuation %r onto %r", f, fa)
        fa.add_done_callback(on_upstream)
        return result

    def unit(self, a: A) -> Future:
        handle: Future = Future()
        handle.set_result(a)
        return handle

    def when_done(self, fa: Future, action: Callable[[], None]) -> None:
        fa.add_done_callback(lambda _: action())


def _copy_task_outcome(source: asyncio.Future, target: asyncio.Future) -> None:
    if target.done():
        return
    if source.cancelled():
        target.cancel()
        return
    exc = source.exception()
    if exc is not None:
        target.set_exception(exc)
    else:
        target.set_result(source.result())


class TaskMonad(Monad):
    """Monad over ``asyncio.Future`` handles.

    Handles are created on ``loop`` when given, otherwise on the loop running
    at the time ``unit`` is called. Continuations run as loop callbacks.
    """

    carrier = "task"

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def bind(self, fa: asyncio.Future, f: Callable[[A], asyncio.Future]) -> asyncio.Future:
        _ensure_continuation(f)
        if not asyncio.isfuture(fa):
            raise TypeError(f"bind expects an asyncio Future, got {type(fa).__name__}")

        result: asyncio.Future = fa.get_loop().create_future()

        def on_upstream(done: asyncio.Future) -> None:
            if result.done():
                return
            if done.cancelled():
                result.cancel()
                return
            error = done.exception()
            if error is not None:
                result.set_exception(error)
                return
            try:
                next_handle = f(done.result())
                if not asyncio.isfuture(next_handle):
                    raise TypeError(
                        "binder must return an asyncio Future; got "
                        f"{type(next_handle).__name__}"
                    )
            except StopIteration as exc:
                # asyncio futures refuse StopIteration; wrap it as tasks do.
                wrapped = RuntimeError(f"binder raised StopIteration: {exc!r}")
                wrapped.__cause__ = exc
                result.set_exception(wrapped)
                return
            except Exception as exc:
                result.set_exception(exc)
                return
            next_handle.add_done_callback(
                lambda nxt: _copy_task_outcome(nxt, result)
            )

        fa.add_done_callback(on_upstream)
        return result

    def unit(self, a: A) -> asyncio.Future:
        handle = self._get_loop().create_future()
        handle.set_result(a)
        return handle

    def when_done(self, fa: asyncio.Future, action: Callable[[], None]) -> None:
        fa.add_done_callback(lambda _: action())


__all__ = ["Monad", "IdMonad", "FutureMonad", "TaskMonad"]
