"""
The echo program, written once for every carrier.

All three renderings read a line, write it back and return it. They differ
only in notation and must behave identically under any backend:

- ``echo``: explicit ``bind``/``unit`` chain.
- ``echo_syntax``: method chaining through ``Syntax``.
- ``echo_do``: do-notation through ``@do``.
"""

from __future__ import annotations

from typing import Any

from lambdaworld.do import DoGenerator, do
from lambdaworld.io import IO
from lambdaworld.monad import Monad
from lambdaworld.syntax import Syntax


def echo(io: IO, monad: Monad) -> Any:
    return monad.bind(
        io.read(),
        lambda msg: monad.bind(
            io.write(msg),
            lambda _: monad.unit(msg),
        ),
    )


def echo_syntax(io: IO, monad: Monad) -> Any:
    s = Syntax(io, monad)
    return s.read().flat_map(
        lambda msg: s.write(msg).flat_map(lambda _: s.unit(msg))
    ).value


@do
def echo_steps(io: IO) -> DoGenerator[str]:
    msg = yield io.read()
    yield io.write(msg)
    return msg


def echo_do(io: IO, monad: Monad) -> Any:
    return echo_steps(io).run(monad)


PROGRAMS = {
    "bind": echo,
    "syntax": echo_syntax,
    "do": echo_do,
}

__all__ = ["PROGRAMS", "echo", "echo_do", "echo_steps", "echo_syntax"]
