"""
Simulation - the per-frame core of the Starfall arcade shooter
--------------------------------------------------------------
- One player ship that moves, fires (with cooldown) and collects power-ups
- Enemies that fall from the top in three patterns (straight / zigzag / fast)
- Power-ups: health, companion escorts, spread and bounce firing modes
- Charges: one per pickup, convertible to health on demand
- AABB collisions with mark-and-compact removal

All mutable game state lives on one Simulation instance. Time comes from an
injected millisecond clock and randomness from an injected random.Random, so
a ManualClock plus a seeded RNG gives fully deterministic runs.

Spawning is driven from outside (see scheduler.SpawnScheduler); the spawn
methods become no-ops once the game is over.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Mapping, Optional, Union

from .clock import SystemClock
from .entities import (
    COMPANION_TYPES,
    ENEMY_TYPES,
    Bullet,
    BulletMode,
    Companion,
    CompanionBullet,
    Enemy,
    EnemyPattern,
    Explosion,
    Player,
    PowerUp,
    PowerUpKind,
)
from .highscore import HighScoreStore, MemoryHighScoreStore
from .hud import Hud
from .logger import get_logger
from .utils import clamp, random_choice, random_range, rects_overlap

logger = get_logger(__name__)

EVENT_KEYS = ("shots", "kills", "companion_kills", "damage", "pickups", "escaped")


class Simulation:
    """Game state plus the fixed-order tick that advances it"""

    def __init__(
        self,
        clock=None,
        rng: Optional[random.Random] = None,
        store: Optional[HighScoreStore] = None,
        hud: Optional[Hud] = None,
        width: int = 800,
        height: int = 600,
        player_speed: float = 5.0,
        shoot_cooldown: float = 300.0,
        bullet_speed: float = 7.0,
        shot_penalty: int = 2,
        max_health: int = 5,
        start_health: int = 3,
        power_up_duration: float = 8000.0,
        bounce_budget: int = 3,
        spread_dx: float = 2.0,
        kill_score: int = 10,
        companion_kill_score: int = 15,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Arena must have positive size, got {width}x{height}")
        if max_health < 1 or not 0 < start_health <= max_health:
            raise ValueError(f"Invalid health settings: start={start_health} max={max_health}")

        self.clock = clock if clock is not None else SystemClock()
        self.rng = rng if rng is not None else random.Random()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.hud = hud if hud is not None else Hud()

        # Arena
        self.width = width
        self.height = height

        # Gameplay config
        self.player_speed = player_speed
        self.shoot_cooldown = shoot_cooldown
        self.bullet_speed = bullet_speed
        self.shot_penalty = shot_penalty
        self.max_health = max_health
        self.start_health = start_health
        self.power_up_duration = power_up_duration
        self.bounce_budget = bounce_budget
        self.spread_dx = spread_dx
        self.kill_score = kill_score
        self.companion_kill_score = companion_kill_score

        # World state
        self.player: Player = None  # type: ignore
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.power_ups: List[PowerUp] = []
        self.companions: List[Companion] = []
        self.explosions: List[Explosion] = []

        self.score = 0
        self.high_score = 0
        self.health = start_health
        self.charges = 0
        self.bullet_mode = BulletMode.NORMAL
        self.bullet_mode_end_time = 0.0
        self.game_over = False
        self.tick_count = 0

        # Event counters of the last tick
        self._events: Dict[str, float] = {k: 0.0 for k in EVENT_KEYS}

        self._reset_state()

    # ----------------------------
    # Host API
    # ----------------------------

    def tick(self, keys: Optional[Mapping[str, bool]] = None) -> Dict[str, float]:
        """Advance one frame; returns the event counters of this frame"""
        self._events = {k: 0.0 for k in EVENT_KEYS}
        if self.game_over:
            return dict(self._events)

        keys = keys or {}
        now = self.clock.now()

        self._move_player(keys)
        self._shoot(keys, now)

        self._update_bullets()
        self._update_enemies()
        self._update_power_ups(now)
        self._update_companions(now)
        self._update_explosions(now)
        self._update_bullet_mode(now)

        self._handle_collisions(now)

        self.tick_count += 1
        if self.game_over:
            # Reported once the frame is complete so the HUD sees the final score
            self.hud.game_over(self.score)
            logger.info(f"Game over at tick {self.tick_count}, score {self.score}")
        return dict(self._events)

    def restart(self):
        """Reset everything except the high score, which is re-read from the store"""
        self._reset_state()
        logger.info(f"Game restarted (high score {self.high_score})")

    def convert_charge(self) -> bool:
        """Spend one charge for one health point"""
        if self.game_over:
            return False
        if self.charges <= 0 or self.health >= self.max_health:
            return False
        self.charges -= 1
        self.health += 1
        self.hud.charges_changed(self.charges)
        self.hud.health_changed(self.health)
        return True

    def spawn_enemy(self) -> Optional[Enemy]:
        if self.game_over:
            return None
        etype = random_choice(self.rng, ENEMY_TYPES)
        size = random_range(self.rng, *etype.size_range)
        enemy = Enemy(
            x=random_range(self.rng, 0, self.width - size),
            y=-size,
            size=size,
            speed=random_range(self.rng, *etype.speed_range),
            color=etype.color,
            pattern=etype.pattern,
        )
        self.enemies.append(enemy)
        return enemy

    def spawn_power_up(self, kind: Union[PowerUpKind, str, None] = None) -> Optional[PowerUp]:
        if self.game_over:
            return None
        if kind is None:
            kind = random_choice(self.rng, list(PowerUpKind))
        else:
            kind = PowerUpKind(kind)
        size = 20.0
        power_up = PowerUp(x=random_range(self.rng, 0, self.width - size), y=-size, kind=kind, size=size)
        self.power_ups.append(power_up)
        return power_up

    def spawn_companion_power_up(self) -> Optional[PowerUp]:
        return self.spawn_power_up(PowerUpKind.COMPANION)

    def spawn_health_power_up(self) -> Optional[PowerUp]:
        return self.spawn_power_up(PowerUpKind.HEALTH)

    def mode_time_left(self) -> float:
        if self.bullet_mode == BulletMode.NORMAL:
            return 0.0
        return max(0.0, self.bullet_mode_end_time - self.clock.now())

    def get_info(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "high_score": self.high_score,
            "health": self.health,
            "charges": self.charges,
            "bullet_mode": self.bullet_mode.value,
            "game_over": self.game_over,
            "num_bullets": len(self.bullets),
            "num_enemies": len(self.enemies),
            "num_power_ups": len(self.power_ups),
            "num_companions": len(self.companions),
            "tick": self.tick_count,
        }

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _reset_state(self):
        self.player = Player(
            x=self.width / 2 - 20,
            y=self.height - 40 - 10,
            speed=self.player_speed,
            shoot_cooldown=self.shoot_cooldown,
        )
        self.bullets = []
        self.enemies = []
        self.power_ups = []
        self.companions = []
        self.explosions = []

        self.score = 0
        self.high_score = max(0, int(self.store.load() or 0))
        self.health = self.start_health
        self.charges = 0
        self.bullet_mode = BulletMode.NORMAL
        self.bullet_mode_end_time = 0.0
        self.game_over = False
        self.tick_count = 0

        self.hud.reset()
        self.hud.score_changed(self.score, self.high_score)
        self.hud.health_changed(self.health)
        self.hud.charges_changed(self.charges)

    def _move_player(self, keys: Mapping[str, bool]):
        p = self.player
        if keys.get("left"):
            p.x -= p.speed
        if keys.get("right"):
            p.x += p.speed
        if keys.get("up"):
            p.y -= p.speed
        if keys.get("down"):
            p.y += p.speed

        # Keep in bounds
        p.x = clamp(p.x, 0, self.width - p.width)
        p.y = clamp(p.y, 0, self.height - p.height)

    def _shoot(self, keys: Mapping[str, bool], now: float):
        p = self.player
        if not (keys.get("fire") and p.can_shoot and not self.game_over):
            return
        if p.last_shot_time is not None and now - p.last_shot_time <= p.shoot_cooldown:
            return

        v = self.bullet_speed
        if self.bullet_mode == BulletMode.SPREAD:
            for dx in (-self.spread_dx, 0.0, self.spread_dx):
                self.bullets.append(self._make_bullet(dx, -v))
        elif self.bullet_mode == BulletMode.BOUNCE:
            self.bullets.append(self._make_bullet(self.spread_dx, -v, bounces=self.bounce_budget))
        else:
            self.bullets.append(self._make_bullet(0.0, -v))

        p.last_shot_time = now
        self._events["shots"] += 1.0
        self._add_score(-self.shot_penalty)

    def _make_bullet(self, dx: float, dy: float, bounces: int = 0) -> Bullet:
        p = self.player
        bullet = Bullet(x=0.0, y=p.y, dx=dx, dy=dy, bounces=bounces)
        bullet.x = p.x + p.width / 2 - bullet.width / 2
        return bullet

    def _update_bullets(self):
        bouncing = self.bullet_mode == BulletMode.BOUNCE
        for b in self.bullets:
            b.x += b.dx
            b.y += b.dy

            if bouncing and b.bounces > 0 and (b.x <= 0 or b.x + b.width >= self.width):
                b.dx = -b.dx
                b.bounces -= 1
            if bouncing and b.bounces > 0 and b.y <= 0:
                b.dy = -b.dy
                b.bounces -= 1

            # Fully off-screen -> kill
            if b.y + b.height < 0 or b.y > self.height:
                b.alive = False

        self.bullets = [b for b in self.bullets if b.alive]

    def _update_enemies(self):
        for e in self.enemies:
            if e.pattern == EnemyPattern.ZIGZAG:
                e.x += e.speed * e.zigzag_direction
                if e.x <= 0 or e.x + e.size >= self.width:
                    e.zigzag_direction *= -1
            e.y += e.speed

            if e.y > self.height:
                e.alive = False
                self._events["escaped"] += 1.0
                self._damage_player()

        self.enemies = [e for e in self.enemies if e.alive]

    def _update_power_ups(self, now: float):
        p = self.player
        for pu in self.power_ups:
            pu.y += pu.speed
            if pu.y > self.height:
                pu.alive = False
                continue
            if rects_overlap(pu.x, pu.y, pu.size, pu.size, p.x, p.y, p.width, p.height):
                pu.alive = False
                self._activate_power_up(pu, now)

        self.power_ups = [pu for pu in self.power_ups if pu.alive]

    def _activate_power_up(self, power_up: PowerUp, now: float):
        self.charges += 1
        self.hud.charges_changed(self.charges)
        self._events["pickups"] += 1.0

        if power_up.kind == PowerUpKind.COMPANION:
            self._add_companion(now)
        elif power_up.kind == PowerUpKind.HEALTH:
            if self.health < self.max_health:
                self.health += 1
                self.hud.health_changed(self.health)
        else:
            self.bullet_mode = BulletMode(power_up.kind.value)
            self.bullet_mode_end_time = now + self.power_up_duration
        logger.info(f"Picked up {power_up.kind.value} power-up (charges {self.charges})")

    def _add_companion(self, now: float):
        ctype = random_choice(self.rng, COMPANION_TYPES)
        companion = Companion(
            x=self.player.x + ctype.offset_x,
            y=0.0,
            color=ctype.color,
            shoot_interval=ctype.shoot_interval,
            bullet_speed=ctype.bullet_speed,
            bullet_width=ctype.bullet_width,
            bullet_height=ctype.bullet_height,
            offset_x=ctype.offset_x,
            end_time=now + self.power_up_duration,
        )
        companion.y = self.player.y - companion.height - 10
        self.companions.append(companion)

    def _update_companions(self, now: float):
        p = self.player
        for c in self.companions:
            # Follow the player
            c.x = p.x + c.offset_x
            c.y = p.y - c.height - 10

            if c.last_shot_time is None or now - c.last_shot_time > c.shoot_interval:
                c.bullets.append(CompanionBullet(
                    x=c.x + c.width / 2 - c.bullet_width / 2,
                    y=c.y,
                    width=c.bullet_width,
                    height=c.bullet_height,
                    speed=c.bullet_speed,
                ))
                c.last_shot_time = now

            for b in c.bullets:
                b.y -= b.speed
                if b.y + b.height < 0:
                    b.alive = False
            c.bullets = [b for b in c.bullets if b.alive]

        self.companions = [c for c in self.companions if now <= c.end_time]

    def _update_explosions(self, now: float):
        self.explosions = [x for x in self.explosions if now - x.start_time < x.duration]

    def _update_bullet_mode(self, now: float):
        if self.bullet_mode != BulletMode.NORMAL and now > self.bullet_mode_end_time:
            logger.info(f"{self.bullet_mode.value} mode expired")
            self.bullet_mode = BulletMode.NORMAL

    def _handle_collisions(self, now: float):
        # Player bullets vs enemies
        for b in self.bullets:
            if not b.alive:
                continue
            for e in self.enemies:
                if not e.alive:
                    continue
                if rects_overlap(b.x, b.y, b.width, b.height, e.x, e.y, e.size, e.size):
                    b.alive = False
                    e.alive = False
                    self._add_score(self.kill_score)
                    self._explode(*e.center, now)
                    self._events["kills"] += 1.0
                    break

        # Companion bullets vs enemies
        for c in self.companions:
            for b in c.bullets:
                if not b.alive:
                    continue
                for e in self.enemies:
                    if not e.alive:
                        continue
                    if rects_overlap(b.x, b.y, b.width, b.height, e.x, e.y, e.size, e.size):
                        b.alive = False
                        e.alive = False
                        self._add_score(self.companion_kill_score)
                        self._explode(*e.center, now)
                        self._events["companion_kills"] += 1.0
                        break

        # Enemies vs player
        p = self.player
        for e in self.enemies:
            if not e.alive:
                continue
            if rects_overlap(e.x, e.y, e.size, e.size, p.x, p.y, p.width, p.height):
                e.alive = False
                self._explode(*p.center, now)
                self._damage_player()

        # Cleanup after collisions
        self.enemies = [e for e in self.enemies if e.alive]
        self.bullets = [b for b in self.bullets if b.alive]
        for c in self.companions:
            c.bullets = [b for b in c.bullets if b.alive]

    # ----------------------------
    # Score / health bookkeeping
    # ----------------------------

    def _add_score(self, delta: int):
        self.score = max(0, self.score + delta)
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.save(self.high_score)
        self.hud.score_changed(self.score, self.high_score)

    def _damage_player(self):
        self.health = int(clamp(self.health - 1, 0, self.max_health))
        self.hud.health_changed(self.health)
        self._events["damage"] += 1.0
        if self.health <= 0:
            self._trigger_game_over()

    def _explode(self, x: float, y: float, now: float):
        self.explosions.append(Explosion(x=x, y=y, start_time=now))

    def _trigger_game_over(self):
        self.game_over = True
