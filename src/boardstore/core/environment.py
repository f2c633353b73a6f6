"""
Host services the entity services consume: a clock and an id generator.

Both are injected so tests can pin time and identifiers.
"""

from __future__ import annotations

import time
import uuid
from typing import Callable, Protocol

IdGenerator = Callable[[], str]


class Clock(Protocol):
    def now(self) -> int:
        """Nanoseconds since the epoch, never smaller than a previous call."""
        ...


class SystemClock:
    """Wall clock in nanoseconds, strictly increasing across calls."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last + 1, time.time_ns())
        return self._last


def uuid4_generator() -> str:
    return str(uuid.uuid4())
