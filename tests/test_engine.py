import pytest

from game.asteroids import ConfigurationError, ControlSignal, GameConfig, GameSession, Phase, SizeTier
from game.asteroids.entities import TIER_SCORE
from game.asteroids.utils import toroidal_distance
from game.asteroids.vector import Vector2

from helpers import clear_asteroids, make_session, place, tiers

FIRE = ControlSignal(fire=True)


def test_initial_state():
    s = make_session()
    snap = s.snapshot()
    assert snap.phase is Phase.PLAYING
    assert snap.lives == 3
    assert snap.score == 0
    assert snap.wave == 1
    assert len(snap.asteroids) == 4
    assert all(a.tier is SizeTier.LARGE for a in snap.asteroids)
    assert snap.ship.alive and snap.ship.invulnerable
    assert snap.ship.position == (400.0, 400.0)
    ship = s.world.ship.position
    for a in s.world.asteroids.values():
        assert toroidal_distance(a.position, ship, 800.0, 800.0) >= s.config.spawn_distance


@pytest.mark.parametrize("overrides", [
    {"width": 0},
    {"height": -10},
    {"starting_wave_size": 0},
    {"starting_lives": 0},
    {"ship_drag": 0.0},
    {"ship_drag": 1.5},
    {"max_wave_size": 2, "starting_wave_size": 4},
    {"min_spawn_distance": 500.0},
    {"width": 300.0, "height": 300.0, "min_spawn_distance": 150.0},
    {"wave_pause_frames": -1},
])
def test_bad_configuration_fails_at_construction(overrides):
    with pytest.raises(ConfigurationError):
        GameSession(GameConfig(**overrides))


def test_config_from_dict_ignores_unknown_keys():
    cfg = GameConfig.from_dict({"width": 640, "height": 480, "k_asteroids": 6})
    assert cfg.width == 640 and cfg.height == 480


@pytest.mark.parametrize("width, height", [(300.0, 300.0), (120.0, 80.0)])
def test_small_field_builds_with_a_scaled_spawn_distance(width, height):
    s = GameSession(GameConfig(width=width, height=height, seed=1))
    assert s.config.spawn_distance == pytest.approx(0.45 * min(width, height))
    centre = Vector2(width * 0.5, height * 0.5)
    assert s.world.ship.position == centre
    for a in s.world.asteroids.values():
        assert toroidal_distance(a.position, centre, width, height) >= s.config.spawn_distance
    for _ in range(20):
        s.step()


def test_shooting_a_large_asteroid_splits_it():
    s = make_session()
    clear_asteroids(s)
    place(s, SizeTier.LARGE, 400.0, 340.0)    # straight ahead of the ship
    place(s, SizeTier.LARGE, 100.0, 100.0)
    place(s, SizeTier.LARGE, 700.0, 100.0)
    place(s, SizeTier.LARGE, 100.0, 700.0)

    events = s.step(FIRE)

    assert events.bullets_fired == 1
    assert tiers(s) == ["LARGE", "LARGE", "LARGE", "MEDIUM", "MEDIUM"]
    assert s.score == TIER_SCORE[SizeTier.LARGE]
    assert events.score_gained == TIER_SCORE[SizeTier.LARGE]
    assert events.asteroids_destroyed == {SizeTier.LARGE: 1}
    assert s.world.bullets == {}
    assert not events.wave_spawned


def test_small_asteroid_vanishes():
    s = make_session()
    clear_asteroids(s)
    place(s, SizeTier.SMALL, 400.0, 370.0)
    place(s, SizeTier.LARGE, 100.0, 100.0)

    s.step(FIRE)
    assert tiers(s) == ["LARGE"]
    assert s.score == TIER_SCORE[SizeTier.SMALL]


def test_bullet_expires_after_its_ttl():
    s = make_session()
    clear_asteroids(s)
    place(s, SizeTier.LARGE, 100.0, 100.0)
    b = s.spawn_bullet(Vector2(600.0, 600.0), Vector2(0.0, 0.0), ttl=60)

    for _ in range(59):
        s.step()
    assert b.id in s.world.bullets
    assert s.world.bullets[b.id].ttl == 1

    s.step()
    assert b.id not in s.world.bullets


def test_fire_respects_cooldown():
    s = make_session(fire_cooldown_frames=10)
    fired = sum(s.step(FIRE).bullets_fired for _ in range(25))
    assert fired == 3


def test_bullet_leaves_the_nose_with_ship_velocity_added():
    s = make_session(bullet_speed=8.0)
    clear_asteroids(s)
    place(s, SizeTier.LARGE, 100.0, 100.0)
    s.world.ship.velocity = Vector2(1.0, 0.0)

    s.step(ControlSignal(fire=True))
    (b,) = s.world.bullets.values()
    assert b.velocity.x == pytest.approx(1.0 * s.config.ship_drag)
    assert b.velocity.y == pytest.approx(-8.0)
    assert b.ttl == s.config.bullet_ttl - 1


def test_empty_field_starts_the_next_wave():
    s = make_session(starting_wave_size=4, wave_increment=2, max_wave_size=5)
    clear_asteroids(s)
    place(s, SizeTier.SMALL, 100.0, 100.0)
    s.spawn_bullet(Vector2(100.0, 100.0), Vector2(0.0, 0.0))

    events = s.step()
    assert events.wave_spawned
    assert s.world.wave == 2
    assert len(s.world.asteroids) == 5
    assert tiers(s) == ["LARGE"] * 5

    # Capped from here on
    clear_asteroids(s)
    place(s, SizeTier.SMALL, 100.0, 100.0)
    s.spawn_bullet(Vector2(100.0, 100.0), Vector2(0.0, 0.0))
    s.step()
    assert s.world.wave == 3
    assert len(s.world.asteroids) == 5


def test_fatal_collision_costs_exactly_one_life():
    s = make_session(invulnerability_frames=30)
    s.world.ship.invulnerable_until = 0
    clear_asteroids(s)
    place(s, SizeTier.LARGE, 400.0, 400.0)

    events = s.step()
    assert events.ship_destroyed
    assert s.lives == 2
    assert s.phase is Phase.PLAYING

    # Respawned at the centre, at rest, with a fresh grace period
    ship = s.world.ship
    assert ship.alive
    assert ship.position == Vector2(400.0, 400.0)
    assert ship.velocity == Vector2(0.0, 0.0)
    assert ship.invulnerable_until == 30

    # Fragments sit on the respawn point but the grace period protects the ship
    assert tiers(s) == ["MEDIUM", "MEDIUM"]
    for _ in range(10):
        assert not s.step().ship_destroyed
    assert s.lives == 2


def test_invulnerable_ship_survives_contact():
    s = make_session()
    clear_asteroids(s)
    place(s, SizeTier.LARGE, 400.0, 400.0)
    for _ in range(5):
        s.step()
    assert s.lives == 3
    assert s.world.ship.alive


def test_last_life_ends_the_game_and_freezes_the_world():
    s = make_session(starting_lives=1, invulnerability_frames=0)
    clear_asteroids(s)
    place(s, SizeTier.LARGE, 400.0, 400.0, vx=1.0)
    place(s, SizeTier.MEDIUM, 100.0, 100.0, vx=1.0)
    s.spawn_bullet(Vector2(600.0, 600.0), Vector2(2.0, 0.0))

    events = s.step()
    assert events.game_over
    assert s.lives == 0
    assert s.phase is Phase.GAME_OVER
    assert not s.world.ship.alive

    frozen = s.snapshot()
    for _ in range(20):
        events = s.step(ControlSignal(fire=True, thrust=True, rotate_left=True))
        assert events.kills == 0 and events.bullets_fired == 0
    assert s.snapshot() == frozen
    assert s.lives == 0


def test_lives_and_score_over_a_long_run():
    s = make_session(seed=5, invulnerability_frames=0, starting_lives=5)
    last_score, last_lives = s.score, s.lives
    deaths = 0
    game_overs = 0
    for i in range(3000):
        control = ControlSignal(fire=True, rotate_right=i % 90 < 30, thrust=i % 120 < 20)
        events = s.step(control)
        assert s.score >= last_score
        deaths += int(events.ship_destroyed)
        game_overs += int(events.game_over)
        if events.ship_destroyed:
            assert s.lives == last_lives - 1
        else:
            assert s.lives == last_lives
        last_score, last_lives = s.score, s.lives
        if s.game_over:
            break

    assert s.lives == 5 - deaths
    assert game_overs == (1 if s.lives == 0 else 0)
    assert (s.phase is Phase.GAME_OVER) == (s.lives == 0)


def test_seeded_sessions_are_deterministic():
    def run(seed):
        s = make_session(seed=seed)
        for i in range(400):
            s.step(ControlSignal(fire=i % 3 == 0, rotate_left=i % 50 < 10, thrust=i % 70 < 15))
        return s.snapshot()

    assert run(21) == run(21)
    assert run(21) != run(22)


@pytest.mark.parametrize("seed", range(20))
def test_ramming_the_last_asteroid_respawns_clear_of_the_new_wave(seed):
    s = make_session(seed=seed, invulnerability_frames=0)
    clear_asteroids(s)
    s.world.ship.position = Vector2(100.0, 100.0)
    place(s, SizeTier.SMALL, 100.0, 100.0)

    events = s.step()
    assert events.ship_destroyed and events.wave_spawned
    assert s.lives == 2 and s.world.wave == 2

    centre = Vector2(400.0, 400.0)
    assert s.world.ship.position == centre
    for a in s.world.asteroids.values():
        assert toroidal_distance(a.position, centre, 800.0, 800.0) >= s.config.spawn_distance
    assert not s.step().ship_destroyed
    assert s.lives == 2


def test_wave_start_freezes_the_field():
    s = make_session(wave_pause_frames=30)
    before = s.snapshot()
    assert before.pause_frames == 30

    for _ in range(30):
        events = s.step(ControlSignal(fire=True, thrust=True, rotate_left=True))
        assert events.bullets_fired == 0

    after = s.snapshot()
    assert after.frame == 30
    assert after.pause_frames == 0
    assert after.asteroids == before.asteroids
    assert after.ship == before.ship
    # The grace period is held for the length of the pause
    assert s.world.ship.invulnerable_until == 30 + s.config.invulnerability_frames

    assert s.step(FIRE).bullets_fired == 1


def test_clearing_a_wave_recentres_the_ship_and_pauses():
    s = make_session(wave_pause_frames=5)
    for _ in range(5):
        s.step()
    clear_asteroids(s)
    s.world.ship.position = Vector2(100.0, 650.0)
    s.world.ship.velocity = Vector2(2.0, 0.0)
    place(s, SizeTier.SMALL, 600.0, 200.0)
    s.spawn_bullet(Vector2(600.0, 200.0), Vector2(0.0, 0.0))

    events = s.step()
    assert events.wave_spawned
    assert s.world.ship.position == Vector2(400.0, 400.0)
    assert s.snapshot().pause_frames == 5

    frozen = s.snapshot().asteroids
    for _ in range(5):
        s.step()
    assert s.snapshot().asteroids == frozen
    s.step()
    assert s.snapshot().asteroids != frozen
