"""
Session configuration and validation
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


# Safe radius around the ship for new waves when the host does not set one
DEFAULT_SPAWN_DISTANCE = 150.0


class ConfigurationError(ValueError):
    """Raised when a session is built from an unusable configuration"""


@dataclass
class GameConfig:
    """Everything a host needs to set up a session; units are world units and frames"""

    # Play field
    width: float = 800.0
    height: float = 800.0
    delta: float = 1.0  # fixed timestep, in frames

    # Session
    starting_lives: int = 3
    starting_wave_size: int = 4
    wave_increment: int = 2
    max_wave_size: int = 12
    seed: Optional[int] = None

    # Ship
    ship_radius: float = 12.0
    ship_thrust: float = 0.15  # units/frame^2
    ship_max_speed: float = 6.0
    ship_drag: float = 0.99  # velocity multiplier per frame while not thrusting; 1.0 disables
    rotation_speed: float = 0.08  # radians/frame
    fire_cooldown_frames: int = 10
    invulnerability_frames: int = 120
    wave_pause_frames: int = 0  # frozen frames at the start of each wave

    # Bullets
    bullet_speed: float = 8.0
    bullet_ttl: int = 60
    bullet_radius: float = 2.0

    # Spawning
    min_spawn_distance: Optional[float] = None  # None: derived from the field size
    spawn_attempts: int = 100
    split_divergence_min: float = 0.25  # radians
    split_divergence_max: float = 0.9
    split_speed_multiplier: float = 1.2

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "GameConfig":
        """Build from a plain dict, ignoring keys that are not config fields"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})

    @property
    def spawn_distance(self) -> float:
        """Safe wave radius; the default shrinks to fit small fields"""
        if self.min_spawn_distance is not None:
            return self.min_spawn_distance
        return min(DEFAULT_SPAWN_DISTANCE, 0.45 * min(self.width, self.height))

    def validate(self) -> "GameConfig":
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Field bounds must be positive, got {self.width}x{self.height}"
            )
        if self.delta <= 0:
            raise ConfigurationError(f"delta must be positive, got {self.delta}")
        if self.starting_wave_size <= 0:
            raise ConfigurationError(
                f"starting_wave_size must be positive, got {self.starting_wave_size}"
            )
        if self.wave_increment < 0:
            raise ConfigurationError(f"wave_increment must be >= 0, got {self.wave_increment}")
        if self.max_wave_size < self.starting_wave_size:
            raise ConfigurationError(
                f"max_wave_size ({self.max_wave_size}) is below "
                f"starting_wave_size ({self.starting_wave_size})"
            )
        if self.starting_lives <= 0:
            raise ConfigurationError(f"starting_lives must be positive, got {self.starting_lives}")
        if self.ship_radius <= 0 or self.bullet_radius <= 0:
            raise ConfigurationError("Ship and bullet radii must be positive")
        if self.bullet_ttl <= 0:
            raise ConfigurationError(f"bullet_ttl must be positive, got {self.bullet_ttl}")
        if self.ship_max_speed <= 0 or self.bullet_speed <= 0:
            raise ConfigurationError("ship_max_speed and bullet_speed must be positive")
        if not 0.0 < self.ship_drag <= 1.0:
            raise ConfigurationError(f"ship_drag must be in (0, 1], got {self.ship_drag}")
        if min(self.fire_cooldown_frames, self.invulnerability_frames, self.wave_pause_frames) < 0:
            raise ConfigurationError("Frame counters must be >= 0")
        explicit = self.min_spawn_distance
        if explicit is not None and not 0.0 <= explicit < min(self.width, self.height) / 2:
            raise ConfigurationError(
                f"min_spawn_distance must be in [0, {min(self.width, self.height) / 2}), "
                f"got {self.min_spawn_distance}"
            )
        if self.spawn_attempts <= 0:
            raise ConfigurationError(f"spawn_attempts must be positive, got {self.spawn_attempts}")
        if self.split_divergence_min > self.split_divergence_max:
            raise ConfigurationError("split_divergence_min is above split_divergence_max")
        return self
