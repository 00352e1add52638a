"""
AsteroidsEnv - the Asteroids simulation as an RL environment
------------------------------------------------------------
- GameSession does all simulation; this is only the Gymnasium adapter
- MultiDiscrete action space: [rotate_left(2), rotate_right(2), thrust(2), fire(2)]
- Vector observation: ship state + K nearest asteroids (wrap-aware)
- Reward from score, kills, shots fired and lives lost
- Arcade rendering, imported lazily so headless training never opens a window

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.asteroids.asteroids_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .engine import ControlSignal, FrameEvents, GameSession
from .entities import TIER_RADIUS, TIER_SPEED, SizeTier
from .utils import clamp, toroidal_delta, toroidal_distance

DEFAULT_REWARD_CONFIG = {
    "R_SCORE": 0.01,   # per point scored
    "R_KILL": 0.5,     # per asteroid destroyed by a bullet or a ram
    "R_SHOT": 0.01,    # cost per bullet fired
    "R_LIFE": 5.0,     # penalty per life lost
    "R_TIME": 0.001,   # per-frame cost
}

SHIP_FEATURES = 9
ASTEROID_FEATURES = 5


class AsteroidsEnv(gym.Env):
    """Single-ship Asteroids environment backed by GameSession"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 800,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_asteroids: int = 6,
        starting_lives: int = 3,
        starting_wave_size: int = 4,
        wave_increment: int = 2,
        max_wave_size: int = 12,
        reward_config: Optional[Dict[str, float]] = None,
        **game_overrides,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.max_steps = max_steps
        self.k_asteroids = k_asteroids
        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # Validated up front so a bad env config fails at construction, not at reset
        self.game_config = GameConfig.from_dict(dict(
            game_overrides,
            width=float(width),
            height=float(height),
            starting_lives=starting_lives,
            starting_wave_size=starting_wave_size,
            wave_increment=wave_increment,
            max_wave_size=max_wave_size,
        )).validate()

        self.action_space = spaces.MultiDiscrete([2, 2, 2, 2])

        # Ship: pos(2) vel(2) heading(2) cooldown(1) invulnerable(1) lives(1)
        # Each asteroid: rel pos(2) rel vel(2) size(1)
        obs_dim = SHIP_FEATURES + self.k_asteroids * ASTEROID_FEATURES
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._rel_speed_scale = self.game_config.ship_max_speed + TIER_SPEED[SizeTier.SMALL][1]

        self._window = None
        self.session: GameSession = None  # type: ignore
        self._step_count = 0
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        # Session RNG is derived from the env's seeded generator
        session_seed = int(self.np_random.integers(0, 2**31 - 1))
        cfg = GameConfig.from_dict(dict(vars(self.game_config), seed=session_seed))
        self.session = GameSession(cfg)

        self._step_count = 0
        self._totals = {"asteroids_destroyed": 0, "lives_lost": 0, "shots": 0}

        return self._get_obs(), self._get_info()

    def step(self, action):
        control = self.action_to_control(action)
        events = self.session.step(control)

        self._totals["asteroids_destroyed"] += events.kills
        self._totals["lives_lost"] += int(events.ship_destroyed)
        self._totals["shots"] += events.bullets_fired

        reward = self._compute_reward(events)

        terminated = self.session.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    @staticmethod
    def action_to_control(action) -> ControlSignal:
        left, right, thrust, fire = (bool(int(a)) for a in action)
        return ControlSignal(rotate_left=left, rotate_right=right, thrust=thrust, fire=fire)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        w = self.session.world
        cfg = self.game_config
        ship = w.ship

        obs_parts = [
            ship.position.x / w.width * 2 - 1,
            ship.position.y / w.height * 2 - 1,
            clamp(ship.velocity.x / cfg.ship_max_speed, -1, 1),
            clamp(ship.velocity.y / cfg.ship_max_speed, -1, 1),
            math.sin(ship.rotation),
            math.cos(ship.rotation),
            clamp(ship.fire_cooldown / max(1, cfg.fire_cooldown_frames) * 2 - 1, -1, 1),
            1.0 if ship.is_invulnerable(w.frame) else -1.0,
            w.lives / cfg.starting_lives * 2 - 1,
        ]

        # Asteroids: top-K nearest across the wrapped edges
        nearest = sorted(
            w.asteroids.values(),
            key=lambda a: toroidal_distance(ship.position, a.position, w.width, w.height),
        )
        half_w, half_h = w.width / 2, w.height / 2
        for i in range(self.k_asteroids):
            if i < len(nearest):
                a = nearest[i]
                d = toroidal_delta(ship.position, a.position, w.width, w.height)
                dv = a.velocity - ship.velocity
                obs_parts += [
                    clamp(d.x / half_w, -1, 1),
                    clamp(d.y / half_h, -1, 1),
                    clamp(dv.x / self._rel_speed_scale, -1, 1),
                    clamp(dv.y / self._rel_speed_scale, -1, 1),
                    a.radius / TIER_RADIUS[SizeTier.LARGE],
                ]
            else:
                obs_parts += [0.0] * ASTEROID_FEATURES

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: FrameEvents) -> float:
        rc = self.reward_config
        reward = 0.0
        reward += rc["R_SCORE"] * events.score_gained
        reward += rc["R_KILL"] * events.kills
        reward -= rc["R_SHOT"] * events.bullets_fired
        if events.ship_destroyed:
            reward -= rc["R_LIFE"]
        reward -= rc["R_TIME"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        w = self.session.world
        return {
            "score": w.score,
            "lives": w.lives,
            "wave": w.wave,
            "num_asteroids": len(w.asteroids),
            "num_bullets": len(w.bullets),
            "asteroids_destroyed": self._totals["asteroids_destroyed"],
            "lives_lost": self._totals["lives_lost"],
            "shots": self._totals["shots"],
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import AsteroidsWindow
            self._window = AsteroidsWindow(
                self.session.snapshot,
                int(self.game_config.width),
                int(self.game_config.height),
                title="AsteroidsEnv - Arcade",
                visible=self.render_mode == "human",
            )

        if self.render_mode == "human":
            self._window.on_draw()
            return None
        return self._window.capture_frame()

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42) -> float:
    """Run a random episode for testing"""
    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f} "
          f"(score {info['score']}, wave {info['wave']}, "
          f"asteroids destroyed {info['asteroids_destroyed']})")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
