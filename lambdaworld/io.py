"""
Capability interface for lambdaworld.

``IO`` declares the two primitive instructions a program may use, reading a
line and writing a line, with results wrapped in the carrier of the concrete
implementation. Programs written against ``IO`` never learn whether the
instructions run immediately, on a worker thread, or on an event loop.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, TextIO

from lambdaworld.errors import CapabilityClosedError, EndOfInputError

logger = logging.getLogger(__name__)


def read_line(stream: TextIO) -> str:
    """Consume one line from ``stream`` without its line terminator."""

    line = stream.readline()
    if not line:
        raise EndOfInputError(stream)
    return line.removesuffix("\n").removesuffix("\r")


def write_line(stream: TextIO, msg: str) -> None:
    stream.write(f"{msg}\n")
    stream.flush()


class IO(ABC):
    """Read and write lines of text under some carrier."""

    #: Name of the carrier this capability wraps its results in; must match
    #: the ``carrier`` of the monad it is paired with.
    carrier: str = "?"

    @abstractmethod
    def read(self) -> Any:
        """Return the carrier-wrapped next input line."""

    @abstractmethod
    def write(self, msg: str) -> Any:
        """Emit ``msg`` as one output line; return the carrier-wrapped unit."""


class _StreamsMixin:
    # Streams are resolved lazily so that a replaced sys.stdin/sys.stdout
    # is honoured when none was injected.
    def _init_streams(self, stdin: TextIO | None, stdout: TextIO | None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout


class ConsoleIO(_StreamsMixin, IO):
    """Console capability for the identity carrier: everything happens now."""

    carrier = "identity"

    def __init__(self, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._init_streams(stdin, stdout)

    def read(self) -> str:
        return read_line(self.stdin)

    def write(self, msg: str) -> None:
        write_line(self.stdout, msg)


class DeferredConsoleIO(_StreamsMixin, IO):
    """Console capability for the deferred carrier.

    Each instruction is submitted to an executor and a ``Future`` is returned
    without waiting. When no executor is supplied a private thread pool is
    created on first use and released by :meth:`close`.

    Close only after joining the programs that use this capability: once
    closed, every further instruction, including one issued by a continuation
    of a program still in flight, raises ``CapabilityClosedError``.
    """

    carrier = "deferred"

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        executor: Executor | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._init_streams(stdin, stdout)
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max_workers
        self._executor_lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        # The closed check and the submission happen under one lock so that
        # close() cannot shut the pool down in between.
        with self._executor_lock:
            if self._closed:
                raise CapabilityClosedError(self)
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="lambdaworld-io",
                )
            return self._executor.submit(fn, *args)

    def read(self) -> Future:
        logger.debug("submitting read")
        return self._submit(read_line, self.stdin)

    def write(self, msg: str) -> Future:
        logger.debug("submitting write of %d characters", len(msg))
        return self._submit(write_line, self.stdout, msg)

    def close(self) -> None:
        """Refuse further instructions and shut down the private executor."""

        with self._executor_lock:
            self._closed = True
            executor = self._executor
            if self._owns_executor:
                self._executor = None
        # Shut down outside the lock: pending instructions may finish and
        # their continuations must be able to reach _submit and fail cleanly.
        if self._owns_executor and executor is not None:
            logger.debug("shutting down owned executor")
            executor.shutdown(wait=True)

    def __enter__(self) -> DeferredConsoleIO:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class TaskConsoleIO(_StreamsMixin, IO):
    """Console capability for the task carrier.

    Blocking stream access runs in ``executor`` (the loop's default executor
    when ``None``); the returned ``asyncio.Future`` resolves on the loop.
    """

    carrier = "task"

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        executor: Executor | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._init_streams(stdin, stdout)
        self._executor = executor
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def read(self) -> asyncio.Future:
        return self._get_loop().run_in_executor(self._executor, read_line, self.stdin)

    def write(self, msg: str) -> asyncio.Future:
        return self._get_loop().run_in_executor(self._executor, write_line, self.stdout, msg)


__all__ = [
    "IO",
    "ConsoleIO",
    "DeferredConsoleIO",
    "TaskConsoleIO",
    "read_line",
    "write_line",
]
