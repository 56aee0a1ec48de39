"""
Movie id generation strategies.

The catalog never checks generated ids for collisions; the default generator
combines a millisecond timestamp with nine random base36 characters, which
makes a collision negligible for a single-user catalog.
"""

from __future__ import annotations

import itertools
import secrets
import string
import time
from typing import Callable, Protocol, runtime_checkable

_BASE36 = string.digits + string.ascii_lowercase


@runtime_checkable
class IdGenerator(Protocol):
    """Produces a new, opaque movie id on every call."""

    def __call__(self) -> str:
        ...


class TimestampIdGenerator:
    """`movie_<epoch-ms>_<random base36>` ids."""

    def __init__(
        self,
        prefix: str = "movie",
        random_length: int = 9,
        time_ms: Callable[[], int] | None = None,
    ) -> None:
        self.prefix = prefix
        self.random_length = random_length
        self._time_ms = time_ms or (lambda: time.time_ns() // 1_000_000)

    def __call__(self) -> str:
        suffix = "".join(secrets.choice(_BASE36) for _ in range(self.random_length))
        return f"{self.prefix}_{self._time_ms()}_{suffix}"


class SequentialIdGenerator:
    """Deterministic ids (`movie_1`, `movie_2`, ...), mainly for tests and fixtures."""

    def __init__(self, prefix: str = "movie", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


__all__ = ["IdGenerator", "SequentialIdGenerator", "TimestampIdGenerator"]
