"""
Backends: consistent (capability, composition) pairs for one carrier.

A program needs an ``IO`` and a ``Monad`` that agree on the carrier; a
deferred ``IO`` paired with ``IdMonad`` would hand futures to continuations
expecting plain strings. ``Backend`` checks the pairing once at construction
and owns any resources the capability allocated.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, TextIO

from frozendict import frozendict

from lambdaworld.errors import UnknownBackendError
from lambdaworld.io import IO, ConsoleIO, DeferredConsoleIO, TaskConsoleIO
from lambdaworld.monad import FutureMonad, IdMonad, Monad, TaskMonad
from lambdaworld.utils import max_workers as configured_max_workers


@dataclass(frozen=True)
class Backend:
    io: IO
    monad: Monad

    def __post_init__(self) -> None:
        if not isinstance(self.io, IO):
            raise TypeError(f"io must be IO, got {type(self.io).__name__}")
        if not isinstance(self.monad, Monad):
            raise TypeError(f"monad must be Monad, got {type(self.monad).__name__}")
        if self.io.carrier != self.monad.carrier:
            raise ValueError(
                f"{type(self.io).__name__} runs on the {self.io.carrier!r} carrier "
                f"but {type(self.monad).__name__} composes {self.monad.carrier!r}"
            )

    @property
    def carrier(self) -> str:
        return self.monad.carrier

    def close(self) -> None:
        close = getattr(self.io, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Backend:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def identity_backend(
    *, stdin: TextIO | None = None, stdout: TextIO | None = None
) -> Backend:
    return Backend(ConsoleIO(stdin=stdin, stdout=stdout), IdMonad())


def deferred_backend(
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    executor: Executor | None = None,
    max_workers: int | None = None,
) -> Backend:
    if executor is None and max_workers is None:
        max_workers = configured_max_workers()
    io = DeferredConsoleIO(
        stdin=stdin, stdout=stdout, executor=executor, max_workers=max_workers
    )
    return Backend(io, FutureMonad())


def task_backend(
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    executor: Executor | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Backend:
    io = TaskConsoleIO(stdin=stdin, stdout=stdout, executor=executor, loop=loop)
    return Backend(io, TaskMonad(loop=loop))


BACKENDS: frozendict[str, Callable[..., Backend]] = frozendict(
    {
        "identity": identity_backend,
        "deferred": deferred_backend,
        "task": task_backend,
    }
)


def get_backend(name: str, **kwargs: Any) -> Backend:
    """Build the registered backend called ``name``."""

    try:
        factory = BACKENDS[name]
    except KeyError:
        raise UnknownBackendError(name, tuple(BACKENDS)) from None
    return factory(**kwargs)


__all__ = [
    "BACKENDS",
    "Backend",
    "deferred_backend",
    "get_backend",
    "identity_backend",
    "task_backend",
]
