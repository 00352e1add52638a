"""2D Game module - Asteroids simulation engine and agent environment"""

from .config import ConfigurationError, GameConfig
from .engine import ControlSignal, FrameEvents, GameSession, Phase, WorldSnapshot
from .entities import Asteroid, Bullet, EntityKind, Ship, SizeTier
from .vector import Vector2
from .asteroids_env import AsteroidsEnv, run_random_episode

__all__ = [
    'ConfigurationError',
    'GameConfig',
    'ControlSignal',
    'FrameEvents',
    'GameSession',
    'Phase',
    'WorldSnapshot',
    'Asteroid',
    'Bullet',
    'EntityKind',
    'Ship',
    'SizeTier',
    'Vector2',
    'AsteroidsEnv',
    'run_random_episode',
]
