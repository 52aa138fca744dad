"""
Fixed-interval spawn timers polled once per frame by the host.

Each entry fires its callback at most once per update. After a long stall the
missed intervals are dropped and the timer keeps its original phase. Nothing
fires while the simulation is over; `reset()` re-anchors every timer at the
current time, which is what a restart does.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .configs import SPAWN_INTERVALS
from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class SpawnTimer:
    name: str
    interval: float  # ms
    callback: Callable[[], object]
    last_fired: float = 0.0


class SpawnScheduler:
    def __init__(self, sim, intervals: Optional[Dict[str, float]] = None):
        self.sim = sim
        intervals = dict(SPAWN_INTERVALS if intervals is None else intervals)

        callbacks = {
            "enemy": sim.spawn_enemy,
            "power_up": sim.spawn_power_up,
            "companion_power_up": sim.spawn_companion_power_up,
            "health_power_up": sim.spawn_health_power_up,
        }
        now = sim.clock.now()
        self.timers: List[SpawnTimer] = []
        for name, interval in intervals.items():
            if name not in callbacks:
                raise ValueError(f"Unknown spawn timer: {name}")
            if interval <= 0:
                raise ValueError(f"Spawn interval for {name} must be positive, got {interval}")
            self.timers.append(SpawnTimer(name, float(interval), callbacks[name], now))

    def update(self) -> int:
        """Fire all due timers; returns the number of callbacks invoked"""
        if self.sim.game_over:
            return 0

        now = self.sim.clock.now()
        fired = 0
        for t in self.timers:
            elapsed = now - t.last_fired
            if elapsed < t.interval:
                continue
            t.last_fired += (elapsed // t.interval) * t.interval
            t.callback()
            fired += 1
            logger.debug(f"{t.name} timer fired at {now:.0f} ms")
        return fired

    def reset(self):
        now = self.sim.clock.now()
        for t in self.timers:
            t.last_fired = now
