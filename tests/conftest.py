"""
Pytest configuration for lambdaworld tests.

Provides in-memory streams that record when the underlying I/O actually
happens (not when it was requested), so ordering can be checked across
carriers that run instructions on worker threads or event loops.
"""

from __future__ import annotations

import io
import threading
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

import pytest


class Journal:
    """Thread-safe, append-only record of (operation, monotonic ns, thread)."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, int, str]] = []
        self._lock = threading.Lock()

    def record(self, operation: str) -> None:
        with self._lock:
            self._entries.append(
                (operation, time.monotonic_ns(), threading.current_thread().name)
            )

    @property
    def operations(self) -> list[str]:
        with self._lock:
            return [entry[0] for entry in self._entries]

    def timestamp(self, operation: str) -> int:
        with self._lock:
            for name, stamp, _ in self._entries:
                if name == operation:
                    return stamp
        raise KeyError(operation)


class RecordingInput(io.StringIO):
    def __init__(self, text: str, journal: Journal) -> None:
        super().__init__(text)
        self.journal = journal

    def readline(self, size: int = -1) -> str:  # type: ignore[override]
        self.journal.record("read")
        return super().readline(size)


class RecordingOutput(io.StringIO):
    def __init__(self, journal: Journal) -> None:
        super().__init__()
        self.journal = journal

    def write(self, s: str) -> int:  # type: ignore[override]
        self.journal.record("write")
        return super().write(s)


class GatedInput(io.StringIO):
    """Input whose ``readline`` waits until the gate is opened."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.gate = threading.Event()

    def readline(self, size: int = -1) -> str:  # type: ignore[override]
        if not self.gate.wait(timeout=5):
            raise RuntimeError("gate was never opened")
        return super().readline(size)


@pytest.fixture
def journal() -> Journal:
    return Journal()


@pytest.fixture
def executor() -> Iterator[ThreadPoolExecutor]:
    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="test-pool")
    try:
        yield pool
    finally:
        pool.shutdown(wait=True)
