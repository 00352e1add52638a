"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple

from .vector import Vector2


class EntityKind(Enum):
    """Closed set of things that live in the world"""
    SHIP = "ship"
    ASTEROID = "asteroid"
    BULLET = "bullet"


class SizeTier(Enum):
    """Asteroid size classes, largest first"""
    LARGE = 3
    MEDIUM = 2
    SMALL = 1

    def degrade(self) -> Optional["SizeTier"]:
        """Tier of the fragments this asteroid breaks into"""
        if self is SizeTier.LARGE:
            return SizeTier.MEDIUM
        if self is SizeTier.MEDIUM:
            return SizeTier.SMALL
        return None


# Collision radius per tier (world units)
TIER_RADIUS: Dict[SizeTier, float] = {
    SizeTier.LARGE: 40.0,
    SizeTier.MEDIUM: 20.0,
    SizeTier.SMALL: 10.0,
}

# Points awarded for shooting an asteroid; smaller is worth more
TIER_SCORE: Dict[SizeTier, int] = {
    SizeTier.LARGE: 20,
    SizeTier.MEDIUM: 50,
    SizeTier.SMALL: 100,
}

# Speed band per tier (units/frame)
TIER_SPEED: Dict[SizeTier, Tuple[float, float]] = {
    SizeTier.LARGE: (0.5, 1.5),
    SizeTier.MEDIUM: (1.0, 2.5),
    SizeTier.SMALL: (1.5, 3.5),
}


@dataclass
class Ship:
    """Player ship"""
    kind: ClassVar[EntityKind] = EntityKind.SHIP

    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2.zero)
    rotation: float = 0.0
    radius: float = 12.0
    alive: bool = True
    invulnerable_until: int = 0  # frame number
    fire_cooldown: int = 0  # frames until the next shot
    thrusting: bool = False

    def is_invulnerable(self, frame: int) -> bool:
        return frame < self.invulnerable_until

    def forward(self) -> Vector2:
        return Vector2.from_angle(self.rotation)

    def nose(self) -> Vector2:
        """Tip of the hull, where bullets leave"""
        return self.position + self.forward() * self.radius


@dataclass
class Asteroid:
    """Drifting rock; rotation and spin are cosmetic"""
    kind: ClassVar[EntityKind] = EntityKind.ASTEROID

    id: int
    tier: SizeTier
    position: Vector2
    velocity: Vector2
    rotation: float = 0.0
    spin: float = 0.0  # radians/frame

    @property
    def radius(self) -> float:
        return TIER_RADIUS[self.tier]

    @property
    def score_value(self) -> int:
        return TIER_SCORE[self.tier]


@dataclass
class Bullet:
    """Bullet projectile entity"""
    kind: ClassVar[EntityKind] = EntityKind.BULLET

    id: int
    position: Vector2
    velocity: Vector2
    ttl: int = 60  # frames
    radius: float = 2.0
