from __future__ import annotations

from typing import Any


class EndOfInputError(EOFError):
    """Raised when a read finds the input stream exhausted."""

    def __init__(self, source: Any) -> None:
        self.source = source
        super().__init__(f"No line available on input stream {source!r}")


class JoinTimeoutError(TimeoutError):
    """Raised when the outermost join does not resolve within its bound."""

    def __init__(self, timeout: float | None) -> None:
        self.timeout = timeout
        super().__init__(
            f"Effect did not resolve within {timeout} seconds\n"
            "Hint: pass a larger `timeout=` or set LAMBDAWORLD_JOIN_TIMEOUT"
        )


class CapabilityClosedError(RuntimeError):
    """Raised when an instruction is issued on a capability that was closed."""

    def __init__(self, capability: Any) -> None:
        self.capability = capability
        super().__init__(
            f"{type(capability).__name__} is closed\n"
            "Hint: join the program before closing its backend"
        )


class UnknownBackendError(KeyError):
    """Raised when a backend name is not present in the registry."""

    def __init__(self, name: str, known: tuple[str, ...]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown backend {name!r}; expected one of {', '.join(known)}")


__all__ = ["CapabilityClosedError", "EndOfInputError", "JoinTimeoutError", "UnknownBackendError"]
