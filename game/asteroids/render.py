"""
Arcade rendering of a WorldSnapshot.

World coordinates grow downwards (heading 0 points up the screen); Arcade's
origin is bottom-left, so every y is flipped on the way out.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Dict, List, Tuple

import numpy as np
import arcade

from .engine import Phase, WorldSnapshot

# Hull outline relative to the ship centre, nose up, for a ship of radius 20
SHIP_POINTS = [(0.0, -20.0), (-10.0, 10.0), (0.0, 5.0), (10.0, 10.0)]
FLAME_POINTS = [(-5.0, 8.0), (0.0, 18.0), (5.0, 8.0)]
ASTEROID_VERTICES = 10
WAVE_BANNER_FRAMES = 120


def asteroid_outline(asteroid_id: int, radius: float) -> List[Tuple[float, float]]:
    """Jagged outline, stable for a given asteroid id"""
    rng = random.Random(asteroid_id)
    step = math.pi * 2 / ASTEROID_VERTICES
    return [
        (math.sin(i * step) * radius * rng.uniform(0.75, 1.15),
         math.cos(i * step) * radius * rng.uniform(0.75, 1.15))
        for i in range(ASTEROID_VERTICES)
    ]


def transform(points, x: float, y: float, rotation: float, scale: float, height: float):
    """Rotate, scale and place model points, then flip into screen space"""
    c, s = math.cos(rotation), math.sin(rotation)
    out = []
    for px, py in points:
        rx = (px * c - py * s) * scale + x
        ry = (px * s + py * c) * scale + y
        out.append((rx, height - ry))
    return out


class AsteroidsWindow(arcade.Window):
    """Arcade window that draws whatever the snapshot provider returns"""

    def __init__(
        self,
        snapshot_fn: Callable[[], WorldSnapshot],
        width: int,
        height: int,
        title: str = "Asteroids",
        visible: bool = True,
    ):
        super().__init__(width, height, title, visible=visible)
        self.snapshot_fn = snapshot_fn

        # Colors
        self.BG = (0, 0, 0)
        self.SHIP_C = (235, 235, 235)
        self.FLAME_C = (255, 170, 80)
        self.ASTEROID_C = (200, 200, 200)
        self.BULLET_C = (255, 250, 200)
        self.HUD_C = (220, 220, 220)
        self.WARN_C = (255, 120, 120)

        self.reset_view()

    def reset_view(self):
        """Forget per-session drawing state (outline cache, wave banner)"""
        self._outlines: Dict[int, List[Tuple[float, float]]] = {}
        self._wave_seen = 0
        self._wave_started = 0

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        arcade.set_background_color(self.BG)
        snap = self.snapshot_fn()
        h = snap.height

        if snap.wave != self._wave_seen:
            self._wave_seen = snap.wave
            self._wave_started = snap.frame

        # Drop outlines of asteroids that no longer exist
        live = {a.id for a in snap.asteroids}
        for aid in [aid for aid in self._outlines if aid not in live]:
            del self._outlines[aid]

        for a in snap.asteroids:
            outline = self._outlines.get(a.id)
            if outline is None:
                outline = self._outlines[a.id] = asteroid_outline(a.id, a.radius)
            pts = transform(outline, a.position[0], a.position[1], a.rotation, 1.0, h)
            arcade.draw_polygon_outline(pts, self.ASTEROID_C, 2)

        for b in snap.bullets:
            arcade.draw_circle_filled(b.position[0], h - b.position[1], 2, self.BULLET_C)

        self._draw_ship(snap)
        self._draw_hud(snap)

    def _draw_ship(self, snap: WorldSnapshot):
        ship = snap.ship
        if not ship.alive:
            return
        # Blink while invulnerable
        if ship.invulnerable and (snap.frame // 8) % 2:
            return
        scale = ship.radius / 20.0
        x, y = ship.position
        hull = transform(SHIP_POINTS, x, y, ship.rotation, scale, snap.height)
        arcade.draw_polygon_outline(hull, self.SHIP_C, 2)
        if ship.thrusting:
            flame = transform(FLAME_POINTS, x, y, ship.rotation, scale, snap.height)
            arcade.draw_line_strip(flame, self.FLAME_C, 2)

    def _draw_hud(self, snap: WorldSnapshot):
        arcade.draw_text(f"Score: {snap.score}", 12, self.height - 28, self.HUD_C, 16)
        arcade.draw_text(f"Lives: {snap.lives}", 12, self.height - 50, self.HUD_C, 14)
        arcade.draw_text(f"Wave: {snap.wave}", 12, self.height - 70, self.HUD_C, 14)

        if snap.phase is Phase.GAME_OVER:
            arcade.draw_text("GAME OVER", self.width / 2, self.height / 2, self.WARN_C, 48,
                             anchor_x="center", anchor_y="center")
            arcade.draw_text("Press R to restart", self.width / 2, self.height / 2 - 50, self.HUD_C, 16,
                             anchor_x="center", anchor_y="center")
        elif snap.pause_frames > 0 or snap.frame - self._wave_started < WAVE_BANNER_FRAMES:
            arcade.draw_text(f"Wave {snap.wave}", self.width / 2, self.height / 2 - 80, self.HUD_C, 40,
                             anchor_x="center", anchor_y="center")

    def capture_frame(self) -> np.ndarray:
        """Draw and read back the framebuffer as an (H, W, 3) uint8 array"""
        self.switch_to()
        self.on_draw()
        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)
