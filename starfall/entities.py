"""
Game entity dataclasses and archetype tables
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class EnemyPattern(str, Enum):
    STRAIGHT = "straight"
    ZIGZAG = "zigzag"
    FAST = "fast"


class PowerUpKind(str, Enum):
    HEALTH = "health"
    COMPANION = "companion"
    SPREAD = "spread"
    BOUNCE = "bounce"


class BulletMode(str, Enum):
    NORMAL = "normal"
    SPREAD = "spread"
    BOUNCE = "bounce"


@dataclass
class Player:
    """Player ship"""
    x: float
    y: float
    width: float = 40.0
    height: float = 40.0
    speed: float = 5.0
    can_shoot: bool = True
    shoot_cooldown: float = 300.0  # ms
    last_shot_time: Optional[float] = None

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Bullet:
    """Player projectile"""
    x: float
    y: float
    dx: float
    dy: float
    width: float = 6.0
    height: float = 12.0
    bounces: int = 0
    alive: bool = True


@dataclass
class Enemy:
    """Descending enemy"""
    x: float
    y: float
    size: float
    speed: float
    color: str = "#f00"
    pattern: EnemyPattern = EnemyPattern.STRAIGHT
    zigzag_direction: int = 1
    alive: bool = True

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.size / 2, self.y + self.size / 2


@dataclass
class PowerUp:
    """Falling collectible; carries exactly one effect kind"""
    x: float
    y: float
    kind: PowerUpKind
    size: float = 20.0
    speed: float = 1.5
    alive: bool = True


@dataclass
class CompanionBullet:
    x: float
    y: float
    width: float
    height: float
    speed: float
    alive: bool = True


@dataclass
class Companion:
    """Escort that follows the player and fires on its own interval"""
    x: float
    y: float
    color: str
    shoot_interval: float  # ms
    bullet_speed: float
    bullet_width: float
    bullet_height: float
    offset_x: float
    end_time: float
    width: float = 30.0
    height: float = 30.0
    last_shot_time: Optional[float] = None
    bullets: List[CompanionBullet] = field(default_factory=list)


@dataclass
class Explosion:
    """Purely visual; expires after `duration` ms"""
    x: float
    y: float
    start_time: float
    radius: float = 30.0
    duration: float = 500.0


@dataclass(frozen=True)
class EnemyType:
    size_range: Tuple[float, float]
    speed_range: Tuple[float, float]
    color: str
    pattern: EnemyPattern


@dataclass(frozen=True)
class CompanionType:
    color: str
    shoot_interval: float
    bullet_speed: float
    bullet_width: float
    bullet_height: float
    offset_x: float


ENEMY_TYPES = (
    EnemyType((20, 30), (1.5, 2.5), "#f00", EnemyPattern.STRAIGHT),
    EnemyType((30, 50), (1.0, 1.8), "#a00", EnemyPattern.ZIGZAG),
    EnemyType((15, 25), (2.0, 3.0), "#f55", EnemyPattern.FAST),
)

COMPANION_TYPES = (
    CompanionType("#0ff", 500, 6, 4, 10, -30),
    CompanionType("#ff0", 700, 5, 6, 12, 30),
    CompanionType("#f0f", 1000, 8, 3, 8, 0),
)
