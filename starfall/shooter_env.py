"""
StarfallEnv - headless Gymnasium driver for the Starfall simulation
-------------------------------------------------------------------
- Wraps Simulation + SpawnScheduler on a ManualClock, so runs are deterministic
- Each step advances the clock by one frame (1000 / fps ms), fires due spawn
  timers, applies the action and ticks the simulation once
- MultiDiscrete action space: [horizontal(3), vertical(3), fire(2), convert(2)]
- Vector observation: player state + top-K nearest enemies + top-M nearest power-ups
- Optional Arcade window for human rendering

Quick test:
    python -m starfall.shooter_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .clock import ManualClock
from .configs import GAME_CONFIG, SPAWN_INTERVALS
from .entities import BulletMode, PowerUpKind
from .highscore import MemoryHighScoreStore
from .logger import get_logger
from .scheduler import SpawnScheduler
from .simulation import Simulation
from .utils import clamp

logger = get_logger(__name__)

MODES = list(BulletMode)
KINDS = list(PowerUpKind)


class StarfallEnv(gym.Env):
    """Starfall arcade shooter as a Gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        fps: int = 60,
        max_steps: int = 3600,
        k_enemies: int = 5,
        m_power_ups: int = 3,
        damage_penalty: float = 10.0,
        game_config: Optional[Dict[str, Any]] = None,
        spawn_intervals: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.render_mode = render_mode

        self.frame_ms = 1000.0 / fps
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_power_ups = m_power_ups
        self.damage_penalty = damage_penalty
        self.game_config = dict(GAME_CONFIG if game_config is None else game_config)
        self.spawn_intervals = dict(SPAWN_INTERVALS if spawn_intervals is None else spawn_intervals)

        # Action space:
        # horizontal: 0 stay, 1 left, 2 right
        # vertical: 0 stay, 1 up, 2 down
        # fire: 0/1
        # convert charge to health: 0/1
        self.action_space = spaces.MultiDiscrete([3, 3, 2, 2])

        # Observation space (vector)
        # Player: pos(2) health(1) charges(1) mode one-hot(3) mode time left(1)
        # Each enemy: rel pos(2)
        # Each power-up: rel pos(2) kind(1)
        obs_dim = 2 + 1 + 1 + len(MODES) + 1 + (self.k_enemies * 2) + (self.m_power_ups * 3)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.clock = ManualClock()
        self.store = MemoryHighScoreStore()
        self.sim: Simulation = None  # type: ignore
        self.scheduler: SpawnScheduler = None  # type: ignore
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        if self.sim is None:
            self.sim = Simulation(
                clock=self.clock,
                rng=random.Random(seed),
                store=self.store,
                **self.game_config,
            )
            self.scheduler = SpawnScheduler(self.sim, self.spawn_intervals)
        else:
            if seed is not None:
                self.sim.rng.seed(seed)
            self.sim.restart()
            self.scheduler.reset()

        # Light start
        self.sim.spawn_enemy()

        return self._get_obs(), self._get_info()

    def step(self, action):
        horizontal, vertical, fire, convert = (int(a) for a in action)
        keys = {
            "left": horizontal == 1,
            "right": horizontal == 2,
            "up": vertical == 1,
            "down": vertical == 2,
            "fire": fire == 1,
        }

        score_before = self.sim.score
        if convert:
            self.sim.convert_charge()

        self.scheduler.update()
        events = self.sim.tick(keys)
        self.clock.advance(self.frame_ms)

        reward = float(self.sim.score - score_before) - self.damage_penalty * events["damage"]

        terminated = self.sim.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        info = self._get_info()
        info["events"] = events
        return self._get_obs(), reward, terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        sim = self.sim
        p = sim.player
        w, h = sim.width, sim.height
        px, py = p.x + p.width / 2, p.y + p.height / 2

        obs_parts = [
            (px / w) * 2 - 1,
            (py / h) * 2 - 1,
            (sim.health / sim.max_health) * 2 - 1,
            clamp(sim.charges / 10.0, 0, 1) * 2 - 1,
        ]
        obs_parts += [1.0 if sim.bullet_mode == m else -1.0 for m in MODES]
        obs_parts.append(clamp(sim.mode_time_left() / max(1.0, sim.power_up_duration), 0, 1) * 2 - 1)

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            sim.enemies,
            key=lambda e: (e.center[0] - px) ** 2 + (e.center[1] - py) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                ex, ey = enemies_sorted[i].center
                obs_parts += [clamp((ex - px) / w, -1, 1), clamp((ey - py) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        # Power-ups: top-M nearest
        power_ups_sorted = sorted(
            sim.power_ups,
            key=lambda u: (u.x - px) ** 2 + (u.y - py) ** 2
        )
        for i in range(self.m_power_ups):
            if i < len(power_ups_sorted):
                u = power_ups_sorted[i]
                cx, cy = u.x + u.size / 2, u.y + u.size / 2
                kind = (KINDS.index(u.kind) + 1) / len(KINDS)
                obs_parts += [clamp((cx - px) / w, -1, 1), clamp((cy - py) / h, -1, 1), kind]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        info = self.sim.get_info()
        info["step"] = self._step_count
        return info

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Imported here so headless use never touches the display
            from .window import StarfallWindow
            self._window = StarfallWindow(self.sim, self.scheduler, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42) -> Dict[str, Any]:
    """Run one episode with random actions; returns the final info dict"""
    env = StarfallEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    info["return"] = total
    logger.info(f"Random episode return: {total:.1f} after {info['step']} steps")
    env.close()
    return info


if __name__ == "__main__":
    result = run_random_episode(render=True)
    print(f"Final score {result['score']}, return {result['return']:.1f}")
