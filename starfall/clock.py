"""
Millisecond clocks used by the simulation.

`SystemClock` reads wall time for interactive play; `ManualClock` only moves
when told to, which is what the headless environment and the tests use.
"""

import time


class SystemClock:
    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError(f"cannot move clock backwards by {ms} ms")
        self._now += ms
        return self._now
