"""
Collision detection and resolution.

Detection runs over a consistent view of the world and only records what should
happen; `apply_collisions` then performs every removal in one pass. This keeps the
outcome independent of the order in which the arenas are mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .entities import Asteroid, Bullet, Ship
from .utils import circle_collide


@dataclass
class CollisionOutcome:
    """Pending results of one frame's collision pass"""
    bullets_hit: List[int] = field(default_factory=list)
    asteroids_destroyed: List[int] = field(default_factory=list)  # detection order, no duplicates
    asteroids_shot: List[int] = field(default_factory=list)  # subset that scores
    score: int = 0
    ship_destroyed: bool = False
    ship_hit_by: Optional[int] = None

    @property
    def empty(self) -> bool:
        return not (self.bullets_hit or self.asteroids_destroyed or self.ship_destroyed)


def collides(a, b, bounds: Tuple[float, float]) -> bool:
    """Wrap-aware circle test between any two entities"""
    return circle_collide(a.position, a.radius, b.position, b.radius, bounds)


def detect_collisions(
    ship: Ship,
    asteroids: Dict[int, Asteroid],
    bullets: Dict[int, Bullet],
    frame: int,
    bounds: Tuple[float, float],
) -> CollisionOutcome:
    out = CollisionOutcome()
    destroyed = set()

    # Bullets vs asteroids: first asteroid in collection order wins
    for bid, b in bullets.items():
        for aid, a in asteroids.items():
            if not collides(b, a, bounds):
                continue
            out.bullets_hit.append(bid)
            if aid not in destroyed:
                # Several bullets on one rock all get consumed; it only scores once
                destroyed.add(aid)
                out.asteroids_destroyed.append(aid)
                out.asteroids_shot.append(aid)
                out.score += a.score_value
            break

    # Ship vs asteroids
    if ship.alive and not ship.is_invulnerable(frame):
        for aid, a in asteroids.items():
            if collides(ship, a, bounds):
                out.ship_destroyed = True
                out.ship_hit_by = aid
                if aid not in destroyed:
                    destroyed.add(aid)
                    out.asteroids_destroyed.append(aid)
                break

    return out


def apply_collisions(
    outcome: CollisionOutcome,
    ship: Ship,
    asteroids: Dict[int, Asteroid],
    bullets: Dict[int, Bullet],
) -> List[Asteroid]:
    """Remove everything the outcome marked. Returns the destroyed asteroids for splitting."""
    for bid in outcome.bullets_hit:
        bullets.pop(bid, None)

    removed = []
    for aid in outcome.asteroids_destroyed:
        a = asteroids.pop(aid, None)
        if a is not None:
            removed.append(a)

    if outcome.ship_destroyed:
        ship.alive = False
        ship.thrusting = False

    return removed
