"""Small factories shared by the test modules"""

from game.asteroids import Asteroid, GameConfig, GameSession, SizeTier, Vector2


def make_session(**overrides) -> GameSession:
    overrides.setdefault("seed", 1)
    return GameSession(GameConfig(**overrides))


def place(session: GameSession, tier: SizeTier, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Asteroid:
    """Put a motionless (unless told otherwise) asteroid into the world"""
    a = Asteroid(
        id=session.spawner.next_id(),
        tier=tier,
        position=Vector2(x, y),
        velocity=Vector2(vx, vy),
    )
    session.world.asteroids[a.id] = a
    return a


def clear_asteroids(session: GameSession):
    session.world.asteroids.clear()


def tiers(session: GameSession):
    return sorted(a.tier.name for a in session.world.asteroids.values())
