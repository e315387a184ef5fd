"""
Monad laws as executable equations.

Each function returns the two sides of one law as carrier values built with
the given monad. Callers join both sides with the carrier's own rules and
compare the results::

    lhs, rhs = left_identity(FutureMonad(), 3, f)
    assert join(lhs) == join(rhs)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lambdaworld.monad import Monad
from lambdaworld.types import A, B


def left_identity(monad: Monad, a: A, f: Callable[[A], Any]) -> tuple[Any, Any]:
    """``bind(unit(a), f) == f(a)``"""

    return monad.bind(monad.unit(a), f), f(a)


def right_identity(monad: Monad, m: Any) -> tuple[Any, Any]:
    """``bind(m, unit) == m``"""

    return monad.bind(m, monad.unit), m


def associativity(
    monad: Monad,
    m: Any,
    f: Callable[[A], Any],
    g: Callable[[B], Any],
) -> tuple[Any, Any]:
    """``bind(bind(m, f), g) == bind(m, lambda x: bind(f(x), g))``"""

    return (
        monad.bind(monad.bind(m, f), g),
        monad.bind(m, lambda x: monad.bind(f(x), g)),
    )


def kleisli(monad: Monad, f: Callable[[A], Any], g: Callable[[B], Any]) -> Callable[[A], Any]:
    """Compose two carrier-returning functions left to right."""

    def composed(a: A) -> Any:
        return monad.bind(f(a), g)

    return composed


__all__ = ["associativity", "kleisli", "left_identity", "right_identity"]
