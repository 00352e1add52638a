"""
Asteroid spawning: opening waves, split fragments and wave progression
"""

from __future__ import annotations

import itertools
import random
from typing import List, Optional

from .config import GameConfig
from .entities import TIER_SPEED, Asteroid, SizeTier
from .utils import TAU, clamp, toroidal_distance, wrap_position
from .vector import Vector2


class Spawner:
    """Creates asteroids. Owns the session's only random number generator."""

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    # ----------------------------
    # Waves
    # ----------------------------

    def spawn_wave(self, n: int, ship_position: Vector2) -> List[Asteroid]:
        """n LARGE asteroids, none closer than the spawn distance to the ship"""
        return [
            self._make(SizeTier.LARGE, self._safe_position(ship_position), self._random_velocity(SizeTier.LARGE))
            for _ in range(n)
        ]

    def next_wave_size(self, current: int) -> int:
        return min(current + self.config.wave_increment, self.config.max_wave_size)

    def _safe_position(self, ship_position: Vector2) -> Vector2:
        cfg = self.config
        for _ in range(cfg.spawn_attempts):
            pos = Vector2(self.rng.uniform(0, cfg.width), self.rng.uniform(0, cfg.height))
            if toroidal_distance(pos, ship_position, cfg.width, cfg.height) >= cfg.spawn_distance:
                return pos

        # Ring around the ship; radius is below half the shortest side so it cannot wrap closer
        offset = Vector2.from_angle(self.rng.uniform(0, TAU), cfg.spawn_distance)
        return wrap_position(ship_position + offset, cfg.width, cfg.height)

    # ----------------------------
    # Splitting
    # ----------------------------

    def split(self, asteroid: Asteroid) -> List[Asteroid]:
        """Two fragments of the next tier down, or nothing for SMALL"""
        child_tier = asteroid.tier.degrade()
        if child_tier is None:
            return []

        cfg = self.config
        divergence = self.rng.uniform(cfg.split_divergence_min, cfg.split_divergence_max)
        children = []
        for sign in (1.0, -1.0):
            vel = self._fragment_velocity(asteroid.velocity, sign * divergence, child_tier)
            children.append(self._make(child_tier, asteroid.position, vel))
        return children

    def _fragment_velocity(self, parent: Vector2, angle: float, tier: SizeTier) -> Vector2:
        lo, hi = TIER_SPEED[tier]
        speed = parent.length() * self.config.split_speed_multiplier
        if speed <= 1e-8:
            # Stationary parent: pick any heading and fan out from it
            return self._random_velocity(tier).rotated(angle)
        return parent.rotated(angle).scaled_to(clamp(speed, lo, hi))

    # ----------------------------
    # Helpers
    # ----------------------------

    def _random_velocity(self, tier: SizeTier) -> Vector2:
        lo, hi = TIER_SPEED[tier]
        return Vector2.from_angle(self.rng.uniform(0, TAU), self.rng.uniform(lo, hi))

    def _make(self, tier: SizeTier, position: Vector2, velocity: Vector2) -> Asteroid:
        return Asteroid(
            id=self.next_id(),
            tier=tier,
            position=position,
            velocity=velocity,
            rotation=self.rng.uniform(0, TAU),
            spin=self.rng.uniform(-0.03, 0.03),
        )
