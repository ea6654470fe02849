"""
clock.py: Time sources that feed the game loop.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        ...


class MonotonicClock:
    """Wall clock in seconds, immune to system time changes."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """A clock that only moves when told to. Used for headless runs and tests."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, dt: float) -> float:
        self._now += dt
        return self._now

    def reset(self, start: float = 0.0):
        self._now = start
