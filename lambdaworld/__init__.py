"""
lambdaworld - effect-agnostic programs over explicit IO and Monad interfaces.

Programs are written once against a capability (``IO``: read and write a
line) and a composition interface (``Monad``: ``bind`` and ``unit``), then
run under any carrier: identity, deferred (thread-pool futures) or task
(asyncio futures).

Example:
    >>> import io
    >>> from lambdaworld import echo, identity_backend, run
    >>>
    >>> backend = identity_backend(stdin=io.StringIO("hello\\n"), stdout=io.StringIO())
    >>> run(echo, backend)
    'hello'
"""

from lambdaworld.backend import (
    BACKENDS,
    Backend,
    deferred_backend,
    get_backend,
    identity_backend,
    task_backend,
)
from lambdaworld.do import DoFunction, DoGenerator, DoProgram, do
from lambdaworld.errors import (
    CapabilityClosedError,
    EndOfInputError,
    JoinTimeoutError,
    UnknownBackendError,
)
from lambdaworld.io import IO, ConsoleIO, DeferredConsoleIO, TaskConsoleIO
from lambdaworld.monad import FutureMonad, IdMonad, Monad, TaskMonad
from lambdaworld.program import PROGRAMS, echo, echo_do, echo_steps, echo_syntax
from lambdaworld.runtime import join, join_async, run, run_async
from lambdaworld.syntax import MonadOps, Syntax
from lambdaworld.types import Deferred, Id, Task, Unit

__version__ = "0.1.0"

__all__ = [
    # Carriers
    "Id",
    "Deferred",
    "Task",
    "Unit",
    # Capability
    "IO",
    "ConsoleIO",
    "DeferredConsoleIO",
    "TaskConsoleIO",
    # Composition
    "Monad",
    "IdMonad",
    "FutureMonad",
    "TaskMonad",
    # Backends
    "Backend",
    "BACKENDS",
    "get_backend",
    "identity_backend",
    "deferred_backend",
    "task_backend",
    # Syntax
    "Syntax",
    "MonadOps",
    "do",
    "DoFunction",
    "DoProgram",
    "DoGenerator",
    # Programs
    "PROGRAMS",
    "echo",
    "echo_syntax",
    "echo_do",
    "echo_steps",
    # Runtime
    "join",
    "join_async",
    "run",
    "run_async",
    # Errors
    "CapabilityClosedError",
    "EndOfInputError",
    "JoinTimeoutError",
    "UnknownBackendError",
]
