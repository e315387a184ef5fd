"""
The do decorator for lambdaworld.

``@do`` turns a generator function into a ``DoFunction``. Calling it builds
a lazy ``DoProgram``; nothing runs until ``DoProgram.run(monad)`` picks the
composition interface. Desugaring is mechanical:

- ``x = yield fa``   becomes  ``monad.bind(fa, lambda x: <rest>)``
- ``return v``       becomes  ``monad.unit(v)``

so a do-block behaves exactly like the hand-written bind chain, including
ordering and failure propagation. A fresh generator is created per run,
which keeps programs reusable.

Usage::

    @do
    def echo_steps(io: IO) -> DoGenerator[str]:
        msg = yield io.read()
        yield io.write(msg)
        return msg

    echo_steps(io).run(monad)

Do not wrap ``yield`` in ``try``/``except`` expecting to catch carrier
failures: a failed handle never resumes the generator, the failure goes
straight to the handle returned by ``run``. The generator is closed once that
handle settles, so ``finally`` clauses still run.
"""

import inspect
from collections.abc import Callable, Generator
from functools import update_wrapper
from typing import Any, Generic, ParamSpec, TypeVar

from lambdaworld.monad import Monad
from lambdaworld.syntax import unwrap_ops

P = ParamSpec("P")
T = TypeVar("T")

DoGenerator = Generator[Any, Any, T]


class DoProgram(Generic[T]):
    """A do-block applied to its arguments, waiting for a monad."""

    def __init__(self, factory: Callable[[], DoGenerator[T] | T], name: str) -> None:
        self._factory = factory
        self.name = name

    def run(self, monad: Monad) -> Any:
        """Desugar into ``monad.bind``/``monad.unit`` and return the carrier value."""

        if not isinstance(monad, Monad):
            raise TypeError(f"run expects a Monad, got {type(monad).__name__}")

        gen_or_value = self._factory()
        if not inspect.isgenerator(gen_or_value):
            return monad.unit(gen_or_value)
        gen = gen_or_value

        def resume(sent: Any) -> Any:
            try:
                yielded = gen.send(sent)
            except StopIteration as stop_exc:
                return monad.unit(stop_exc.value)
            return monad.bind(unwrap_ops(yielded), resume)

        try:
            result = resume(None)
        except BaseException:
            gen.close()
            raise
        # A failed handle never resumes the block; close it so its finally
        # clauses run when the program settles rather than at collection.
        monad.when_done(result, gen.close)
        return result

    def __repr__(self) -> str:
        return f"DoProgram({self.name})"


class DoFunction(Generic[P, T]):
    """Callable produced by ``@do``."""

    def __init__(self, func: Callable[P, DoGenerator[T]]) -> None:
        self.original_func = func
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> DoProgram[T]:
        func = self.original_func
        return DoProgram(
            lambda: func(*args, **kwargs),
            name=getattr(func, "__qualname__", "<do>"),
        )


def do(func: Callable[P, DoGenerator[T]]) -> DoFunction[P, T]:
    """Decorator that converts a generator function into a ``DoFunction``."""

    return DoFunction(func)


__all__ = ["DoFunction", "DoGenerator", "DoProgram", "do"]
