"""
Method-chaining syntax over an explicit ``IO``/``Monad`` pair.

``Syntax`` plays the part of implicit operator lookup without any hidden
state: it is constructed with the capability and the composition interface,
and every instruction it issues comes back wrapped in ``MonadOps`` so that
``flat_map`` and ``map`` read left to right::

    s = Syntax(io, monad)
    s.read().flat_map(lambda msg: s.write(msg).map(lambda _: msg)).value

Each method desugars to exactly one ``bind``/``unit`` call on ``monad``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic

from lambdaworld.io import IO
from lambdaworld.monad import Monad
from lambdaworld.types import A, B


def unwrap_ops(value: Any) -> Any:
    """Return the carrier value inside ``MonadOps``, or ``value`` unchanged."""

    if isinstance(value, MonadOps):
        return value.value
    return value


@dataclass(frozen=True)
class MonadOps(Generic[A]):
    """A carrier value paired with the monad that composes it."""

    value: Any
    monad: Monad

    def flat_map(self, f: Callable[[A], MonadOps[B] | Any]) -> MonadOps[B]:
        if not callable(f):
            raise TypeError("binder must be callable returning a carrier value")
        return MonadOps(
            self.monad.bind(self.value, lambda a: unwrap_ops(f(a))), self.monad
        )

    def map(self, g: Callable[[A], B]) -> MonadOps[B]:
        return MonadOps(self.monad.map(self.value, g), self.monad)

    def then(self, next_: Callable[[], MonadOps[B] | Any]) -> MonadOps[B]:
        return self.flat_map(lambda _: next_())

    def __rshift__(self, f: Callable[[A], MonadOps[B] | Any]) -> MonadOps[B]:
        return self.flat_map(f)


class Syntax:
    def __init__(self, io: IO, monad: Monad) -> None:
        self.io = io
        self.monad = monad

    def lift(self, value: Any) -> MonadOps[Any]:
        """Wrap an existing carrier value."""

        return MonadOps(unwrap_ops(value), self.monad)

    def read(self) -> MonadOps[str]:
        return MonadOps(self.io.read(), self.monad)

    def write(self, msg: str) -> MonadOps[None]:
        return MonadOps(self.io.write(msg), self.monad)

    def unit(self, a: A) -> MonadOps[A]:
        return MonadOps(self.monad.unit(a), self.monad)

    returns = unit

    def __repr__(self) -> str:
        return f"Syntax(io={self.io!r}, monad={self.monad!r})"


__all__ = ["MonadOps", "Syntax", "unwrap_ops"]
