"""
Per-frame integration: motion, rotation, thrust and toroidal wrap.

Nothing in here creates or destroys entities except bullet expiry, which drops
bullets whose ttl reaches zero from the arena it is handed.
"""

from __future__ import annotations

from typing import Dict, List, Union

from .entities import Asteroid, Bullet, Ship
from .utils import normalize_angle, wrap_position

Movable = Union[Ship, Asteroid, Bullet]


def integrate(entity: Movable, delta: float, width: float, height: float) -> None:
    """position += velocity * delta, then wrap onto the torus"""
    entity.position = wrap_position(entity.position + entity.velocity * delta, width, height)


def rotate_ship(ship: Ship, turn: int, rotation_speed: float, delta: float) -> None:
    """turn is -1 (left), 0 or +1 (right)"""
    if turn:
        ship.rotation = normalize_angle(ship.rotation + turn * rotation_speed * delta)


def apply_thrust(
    ship: Ship,
    thrusting: bool,
    thrust: float,
    max_speed: float,
    drag: float,
    delta: float,
) -> None:
    ship.thrusting = thrusting
    if thrusting:
        ship.velocity = ship.velocity + ship.forward() * (thrust * delta)
        if ship.velocity.length() > max_speed:
            ship.velocity = ship.velocity.scaled_to(max_speed)
    elif drag < 1.0:
        ship.velocity = ship.velocity * (drag ** delta)


def advance_ship(ship: Ship, delta: float, width: float, height: float) -> None:
    if not ship.alive:
        return
    integrate(ship, delta, width, height)
    if ship.fire_cooldown > 0:
        ship.fire_cooldown -= 1


def advance_asteroids(asteroids: Dict[int, Asteroid], delta: float, width: float, height: float) -> None:
    for a in asteroids.values():
        integrate(a, delta, width, height)
        a.rotation = normalize_angle(a.rotation + a.spin * delta)


def advance_bullets(bullets: Dict[int, Bullet], delta: float, width: float, height: float) -> List[int]:
    """Move bullets, tick their ttl and drop the expired ones. Returns expired ids."""
    expired = []
    for bid, b in bullets.items():
        integrate(b, delta, width, height)
        b.ttl -= 1
        if b.ttl <= 0:
            b.ttl = 0
            expired.append(bid)

    for bid in expired:
        del bullets[bid]
    return expired
