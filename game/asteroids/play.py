"""
Play Asteroids with the keyboard.

    python -m game.asteroids.play --seed 7

A/Left and D/Right rotate, W/Up thrusts, Space fires, R restarts after a game over,
Escape quits. Every wave opens with a short freeze while its banner is shown.
"""

from __future__ import annotations

import argparse
from typing import Optional, Set

import arcade

from .config import GameConfig
from .engine import ControlSignal, GameSession
from .render import AsteroidsWindow

LEFT_KEYS = {arcade.key.A, arcade.key.LEFT}
RIGHT_KEYS = {arcade.key.D, arcade.key.RIGHT}
THRUST_KEYS = {arcade.key.W, arcade.key.UP}
FIRE_KEYS = {arcade.key.SPACE}


class KeyboardControls:
    """Tracks held keys and turns them into a ControlSignal"""

    def __init__(self):
        self.held: Set[int] = set()

    def press(self, symbol: int):
        self.held.add(symbol)

    def release(self, symbol: int):
        self.held.discard(symbol)

    def signal(self) -> ControlSignal:
        return ControlSignal(
            rotate_left=bool(self.held & LEFT_KEYS),
            rotate_right=bool(self.held & RIGHT_KEYS),
            thrust=bool(self.held & THRUST_KEYS),
            fire=bool(self.held & FIRE_KEYS),
        )


class PlayWindow(AsteroidsWindow):
    """Fixed-timestep game loop on top of the renderer"""

    def __init__(self, game_config: GameConfig, fps: int = 60):
        super().__init__(lambda: self.session.snapshot(), int(game_config.width), int(game_config.height))
        self.game_config = game_config
        self.session = GameSession(game_config)
        self.controls = KeyboardControls()
        self.frame_time = 1.0 / fps
        self._accumulator = 0.0

    def on_update(self, delta_time: float):
        self._accumulator += delta_time
        # Cap catch-up so a stalled window does not fast-forward the game
        self._accumulator = min(self._accumulator, self.frame_time * 5)
        while self._accumulator >= self.frame_time:
            self.session.step(self.controls.signal())
            self._accumulator -= self.frame_time

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if symbol == arcade.key.R and self.session.game_over:
            self.session = GameSession(self.game_config)
            self.reset_view()
            return
        self.controls.press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.controls.release(symbol)


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Play Asteroids")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    parser.add_argument("--width", type=int, default=800, help="Field width (default: 800)")
    parser.add_argument("--height", type=int, default=800, help="Field height (default: 800)")
    parser.add_argument("--lives", type=int, default=3, help="Starting lives (default: 3)")
    parser.add_argument("--wave-size", type=int, default=4, help="Asteroids in the first wave (default: 4)")
    parser.add_argument("--fps", type=int, default=60, help="Simulation frames per second (default: 60)")
    parser.add_argument("--wave-pause", type=int, default=120,
                        help="Frames the field stays frozen when a wave starts (default: 120)")

    args = parser.parse_args(argv)

    config = GameConfig(
        width=float(args.width),
        height=float(args.height),
        starting_lives=args.lives,
        starting_wave_size=args.wave_size,
        max_wave_size=max(args.wave_size, GameConfig.max_wave_size),
        seed=args.seed,
        wave_pause_frames=args.wave_pause,
    )

    window = PlayWindow(config, fps=args.fps)
    window.set_update_rate(1.0 / args.fps)
    arcade.run()
    print(f"Final score: {window.session.score} (wave {window.session.world.wave})")


if __name__ == "__main__":
    main()
