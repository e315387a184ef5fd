"""
Effect carrier types for lambdaworld.

A carrier is the type constructor a program's results are wrapped in. Python
has no higher-kinded generics, so each carrier is named here as an alias and
the capability/composition interfaces are written against ``Any`` at the
carrier position, with one concrete adapter per carrier.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from typing import Annotated, TypeAlias, TypeVar

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
T = TypeVar("T")

# Id[T] is T itself: synchronous, immediate execution.
Id: TypeAlias = Annotated[T, "Id"]

# A handle resolved by a worker thread.
Deferred: TypeAlias = Future

# A handle resolved on an asyncio event loop.
Task: TypeAlias = asyncio.Future

Unit: TypeAlias = None

__all__ = ["A", "B", "C", "T", "Id", "Deferred", "Task", "Unit"]
