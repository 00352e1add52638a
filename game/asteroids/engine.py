"""
GameSession - the Asteroids simulation state machine
----------------------------------------------------
- One session owns one World: the ship, asteroid/bullet arenas, score and lives
- `step(control)` advances exactly one fixed frame:
    input -> physics -> collisions -> spawner -> lives/score -> terminal check
- PLAYING until the last life is lost, then GAME_OVER (terminal, nothing moves)
- Each new wave recentres the ship and may hold the world still for `wave_pause_frames`
- Seeded sessions are fully deterministic

Renderers and agents only ever read `snapshot()` between frames.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .collision import apply_collisions, detect_collisions
from .config import GameConfig
from .entities import Asteroid, Bullet, Ship, SizeTier
from .physics import advance_asteroids, advance_bullets, advance_ship, apply_thrust, rotate_ship
from .spawner import Spawner
from .vector import Vector2

logger = logging.getLogger(__name__)


class Phase(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class ControlSignal:
    """One frame of player input"""
    rotate_left: bool = False
    rotate_right: bool = False
    thrust: bool = False
    fire: bool = False

    @property
    def turn(self) -> int:
        return int(self.rotate_right) - int(self.rotate_left)


@dataclass
class FrameEvents:
    """What happened during one step; used for rewards, metrics and HUD cues"""
    bullets_fired: int = 0
    bullets_expired: int = 0
    asteroids_destroyed: Dict[SizeTier, int] = field(default_factory=dict)
    score_gained: int = 0
    ship_destroyed: bool = False
    wave_spawned: bool = False
    game_over: bool = False

    @property
    def kills(self) -> int:
        return sum(self.asteroids_destroyed.values())


# ----------------------------
# Read-only views
# ----------------------------

@dataclass(frozen=True)
class ShipView:
    position: Tuple[float, float]
    rotation: float
    alive: bool
    invulnerable: bool
    thrusting: bool
    radius: float


@dataclass(frozen=True)
class AsteroidView:
    id: int
    position: Tuple[float, float]
    rotation: float
    tier: SizeTier
    radius: float


@dataclass(frozen=True)
class BulletView:
    id: int
    position: Tuple[float, float]


@dataclass(frozen=True)
class WorldSnapshot:
    ship: ShipView
    asteroids: Tuple[AsteroidView, ...]
    bullets: Tuple[BulletView, ...]
    score: int
    lives: int
    phase: Phase
    wave: int
    frame: int
    width: float
    height: float
    pause_frames: int = 0


@dataclass
class World:
    """Mutable simulation state; only GameSession writes to it"""
    ship: Ship
    width: float
    height: float
    asteroids: Dict[int, Asteroid] = field(default_factory=dict)
    bullets: Dict[int, Bullet] = field(default_factory=dict)
    frame: int = 0
    score: int = 0
    lives: int = 3
    phase: Phase = Phase.PLAYING
    wave: int = 0
    wave_size: int = 0
    pause_frames: int = 0

    @property
    def bounds(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def center(self) -> Vector2:
        return Vector2(self.width * 0.5, self.height * 0.5)

    def add_asteroids(self, asteroids: List[Asteroid]) -> None:
        for a in asteroids:
            self.asteroids[a.id] = a


class GameSession:
    """Single-player Asteroids session"""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = (config or GameConfig()).validate()
        cfg = self.config

        self.spawner = Spawner(cfg, rng)
        self._bullet_ids = 0

        ship = Ship(position=Vector2.zero(), radius=cfg.ship_radius)
        self.world = World(ship=ship, width=cfg.width, height=cfg.height, lives=cfg.starting_lives)
        self._respawn_ship()

        self._start_wave(cfg.starting_wave_size)

    # ----------------------------
    # Public API
    # ----------------------------

    @property
    def phase(self) -> Phase:
        return self.world.phase

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def lives(self) -> int:
        return self.world.lives

    @property
    def game_over(self) -> bool:
        return self.world.phase is Phase.GAME_OVER

    def step(self, control: Optional[ControlSignal] = None) -> FrameEvents:
        """Advance one frame. Does nothing once the game is over."""
        events = FrameEvents()
        if self.game_over:
            return events

        w = self.world
        cfg = self.config
        control = control or ControlSignal()

        if w.pause_frames > 0:
            self._hold()
            return events

        # 1. Input
        self._apply_control(control, events)

        # 2. Physics
        advance_ship(w.ship, cfg.delta, w.width, w.height)
        advance_asteroids(w.asteroids, cfg.delta, w.width, w.height)
        events.bullets_expired = len(advance_bullets(w.bullets, cfg.delta, w.width, w.height))

        # 3. Collisions
        outcome = detect_collisions(w.ship, w.asteroids, w.bullets, w.frame, w.bounds)
        destroyed = apply_collisions(outcome, w.ship, w.asteroids, w.bullets)
        w.score += outcome.score
        events.score_gained = outcome.score
        for a in destroyed:
            events.asteroids_destroyed[a.tier] = events.asteroids_destroyed.get(a.tier, 0) + 1

        # 4. Spawner
        for a in destroyed:
            w.add_asteroids(self.spawner.split(a))
        if not w.asteroids:
            self._start_wave(self.spawner.next_wave_size(w.wave_size))
            events.wave_spawned = True

        # 5. Lives
        if outcome.ship_destroyed:
            events.ship_destroyed = True
            w.lives -= 1
            logger.debug("Ship destroyed at frame %d, %d lives left", w.frame, w.lives)
            if w.lives > 0:
                self._respawn_ship()
            else:
                w.phase = Phase.GAME_OVER
                events.game_over = True
                logger.debug("Game over at frame %d with score %d", w.frame, w.score)

        w.frame += 1
        return events

    def snapshot(self) -> WorldSnapshot:
        w = self.world
        s = w.ship
        return WorldSnapshot(
            ship=ShipView(
                position=s.position.as_tuple(),
                rotation=s.rotation,
                alive=s.alive,
                invulnerable=s.is_invulnerable(w.frame),
                thrusting=s.thrusting,
                radius=s.radius,
            ),
            asteroids=tuple(
                AsteroidView(a.id, a.position.as_tuple(), a.rotation, a.tier, a.radius)
                for a in w.asteroids.values()
            ),
            bullets=tuple(BulletView(b.id, b.position.as_tuple()) for b in w.bullets.values()),
            score=w.score,
            lives=w.lives,
            phase=w.phase,
            wave=w.wave,
            frame=w.frame,
            width=w.width,
            height=w.height,
            pause_frames=w.pause_frames,
        )

    # ----------------------------
    # Frame stages
    # ----------------------------

    def _apply_control(self, control: ControlSignal, events: FrameEvents) -> None:
        ship = self.world.ship
        cfg = self.config
        if not ship.alive:
            return

        rotate_ship(ship, control.turn, cfg.rotation_speed, cfg.delta)
        apply_thrust(ship, control.thrust, cfg.ship_thrust, cfg.ship_max_speed, cfg.ship_drag, cfg.delta)

        if control.fire and ship.fire_cooldown <= 0:
            self.spawn_bullet(ship.nose(), ship.velocity + ship.forward() * cfg.bullet_speed)
            ship.fire_cooldown = cfg.fire_cooldown_frames
            events.bullets_fired += 1

    def spawn_bullet(self, position: Vector2, velocity: Vector2, ttl: Optional[int] = None) -> Bullet:
        """Insert a bullet into the world; the ship's fire action goes through here"""
        cfg = self.config
        self._bullet_ids += 1
        b = Bullet(
            id=self._bullet_ids,
            position=position,
            velocity=velocity,
            ttl=cfg.bullet_ttl if ttl is None else ttl,
            radius=cfg.bullet_radius,
        )
        self.world.bullets[b.id] = b
        return b

    def _start_wave(self, size: int) -> None:
        w = self.world
        w.wave += 1
        w.wave_size = size
        # Waves are placed around the centre, where a live ship is moved and a dead one respawns
        w.ship.position = w.center
        w.add_asteroids(self.spawner.spawn_wave(size, w.center))
        w.pause_frames = self.config.wave_pause_frames
        logger.debug("Wave %d: spawned %d asteroids", w.wave, size)

    def _hold(self) -> None:
        """A paused frame: nothing moves, only the clock runs"""
        w = self.world
        w.pause_frames -= 1
        # The grace period does not run out while the world is frozen
        if w.ship.is_invulnerable(w.frame):
            w.ship.invulnerable_until += 1
        w.frame += 1

    def _respawn_ship(self) -> None:
        w = self.world
        ship = w.ship
        ship.position = w.center
        ship.velocity = Vector2.zero()
        ship.rotation = 0.0
        ship.alive = True
        ship.thrusting = False
        ship.fire_cooldown = 0
        ship.invulnerable_until = w.frame + self.config.invulnerability_frames
