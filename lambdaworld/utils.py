"""
Environment-driven settings for lambdaworld.
"""

import os
from typing import Optional

_TRUTHY = ("1", "true", "yes")

DEFAULT_JOIN_TIMEOUT = 1.0


def debug_enabled() -> bool:
    """``LAMBDAWORLD_DEBUG`` switches on debug logging in the CLI."""

    return os.environ.get("LAMBDAWORLD_DEBUG", "").lower() in _TRUTHY


def parse_timeout(raw: str, source: str = "timeout") -> float:
    """Parse a join bound; it must be a positive number of seconds."""

    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{source} must be a number, got {raw!r}") from exc
    if not value > 0:
        raise ValueError(f"{source} must be positive, got {value}")
    return value


def parse_max_workers(raw: str, source: str = "max_workers") -> int:
    """Parse a thread pool size; it must be an integer of at least 1."""

    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{source} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{source} must be at least 1, got {value}")
    return value


def join_timeout() -> float:
    """Default bound, in seconds, for the outermost synchronous join."""

    raw = os.environ.get("LAMBDAWORLD_JOIN_TIMEOUT")
    if raw is None or raw.strip() == "":
        return DEFAULT_JOIN_TIMEOUT
    return parse_timeout(raw, "LAMBDAWORLD_JOIN_TIMEOUT")


def max_workers() -> Optional[int]:
    """Worker count for owned thread pools; ``None`` keeps the executor default."""

    raw = os.environ.get("LAMBDAWORLD_MAX_WORKERS")
    if raw is None or raw.strip() == "":
        return None
    return parse_max_workers(raw, "LAMBDAWORLD_MAX_WORKERS")


__all__ = [
    "DEFAULT_JOIN_TIMEOUT",
    "debug_enabled",
    "join_timeout",
    "max_workers",
    "parse_max_workers",
    "parse_timeout",
]
