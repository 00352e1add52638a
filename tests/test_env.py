import numpy as np
import pytest

from game.asteroids import AsteroidsEnv, ConfigurationError, ControlSignal, SizeTier
from game.asteroids.asteroids_env import ASTEROID_FEATURES, SHIP_FEATURES

from helpers import clear_asteroids, place


def test_reset_and_step_shapes():
    env = AsteroidsEnv(k_asteroids=4)
    obs, info = env.reset(seed=0)

    assert obs.shape == (SHIP_FEATURES + 4 * ASTEROID_FEATURES,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["lives"] == 3 and info["score"] == 0 and info["wave"] == 1

    for _ in range(50):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
    env.close()


def test_missing_asteroids_are_zero_padded():
    env = AsteroidsEnv(k_asteroids=8, starting_wave_size=2)
    obs, _ = env.reset(seed=1)
    tail = obs[SHIP_FEATURES + 2 * ASTEROID_FEATURES:]
    assert tail.shape == (6 * ASTEROID_FEATURES,)
    assert not tail.any()


def test_action_mapping():
    assert AsteroidsEnv.action_to_control([1, 0, 1, 1]) == ControlSignal(
        rotate_left=True, rotate_right=False, thrust=True, fire=True
    )
    assert AsteroidsEnv.action_to_control(np.array([0, 0, 0, 0])) == ControlSignal()


def test_same_seed_same_episode():
    def rollout(seed):
        env = AsteroidsEnv()
        obs, _ = env.reset(seed=seed)
        frames = [obs]
        for i in range(100):
            obs, *_ = env.step([i % 2, 0, int(i % 7 == 0), 1])
            frames.append(obs)
        return np.stack(frames)

    np.testing.assert_array_equal(rollout(3), rollout(3))


def test_terminates_on_game_over():
    env = AsteroidsEnv(starting_lives=1, invulnerability_frames=0)
    env.reset(seed=0)
    session = env.session
    clear_asteroids(session)
    place(session, SizeTier.LARGE, 400.0, 400.0)

    obs, reward, terminated, truncated, info = env.step([0, 0, 0, 0])
    assert terminated
    assert info["lives"] == 0
    assert info["lives_lost"] == 1
    assert reward < 0


def test_truncates_at_max_steps():
    env = AsteroidsEnv(max_steps=5)
    env.reset(seed=0)
    results = [env.step([0, 0, 0, 0]) for _ in range(5)]
    assert [r[3] for r in results] == [False, False, False, False, True]


def test_kill_is_rewarded():
    env = AsteroidsEnv(reward_config={"R_TIME": 0.0, "R_SHOT": 0.0})
    env.reset(seed=0)
    session = env.session
    clear_asteroids(session)
    place(session, SizeTier.LARGE, 400.0, 340.0)
    place(session, SizeTier.LARGE, 100.0, 100.0)

    _, reward, _, _, info = env.step([0, 0, 0, 1])
    assert info["asteroids_destroyed"] == 1
    assert reward == pytest.approx(0.01 * 20 + 0.5)


def test_bad_env_config_fails_at_construction():
    with pytest.raises(ConfigurationError):
        AsteroidsEnv(width=0)
