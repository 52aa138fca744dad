import numpy as np
import pytest

from starfall.configs import ENV_CONFIG
from starfall.entities import Enemy
from starfall.play import main
from starfall.shooter_env import StarfallEnv, run_random_episode


@pytest.fixture
def env():
    env = StarfallEnv(max_steps=200)
    yield env
    env.close()


def test_reset_and_step_shapes(env):
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert info["health"] == 3
    assert info["num_enemies"] == 1

    obs, reward, terminated, truncated, info = env.step(np.array([1, 0, 1, 0]))
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated and not truncated
    assert info["events"]["shots"] == 1
    assert info["step"] == 1


def test_clock_advances_one_frame_per_step(env):
    env.reset(seed=0)
    start = env.clock.now()
    for _ in range(60):
        env.step(np.array([0, 0, 0, 0]))
    assert env.clock.now() == pytest.approx(start + 1000.0)


def test_truncates_at_max_steps():
    env = StarfallEnv(max_steps=5)
    env.reset(seed=1)
    for i in range(5):
        _, _, terminated, truncated, _ = env.step(np.array([0, 0, 0, 0]))
    assert truncated and not terminated


def test_game_over_terminates_with_penalty(env):
    env.reset(seed=0)
    env.sim.health = 1
    env.sim.enemies = [Enemy(x=0, y=599, size=20, speed=2)]

    _, reward, terminated, _, info = env.step(np.array([0, 0, 0, 0]))
    assert terminated
    assert info["game_over"]
    assert reward == -ENV_CONFIG["damage_penalty"]


def test_convert_action_spends_charge(env):
    env.reset(seed=0)
    env.sim.charges = 1
    _, _, _, _, info = env.step(np.array([0, 0, 0, 1]))
    assert info["charges"] == 0
    assert info["health"] == 4


def test_same_seed_same_episode():
    actions = np.random.default_rng(0).integers(0, [3, 3, 2, 2], size=(300, 4))

    finals = []
    for _ in range(2):
        env = StarfallEnv(max_steps=300)
        obs, _ = env.reset(seed=7)
        for a in actions:
            obs, _, terminated, truncated, info = env.step(a)
            if terminated or truncated:
                break
        finals.append((obs, info["score"], info["num_enemies"]))

    assert np.array_equal(finals[0][0], finals[1][0])
    assert finals[0][1:] == finals[1][1:]


def test_seed_drives_simulation_not_global_rng(env):
    np.random.seed(99)
    expected = np.random.random()

    np.random.seed(99)
    env.reset(seed=3)
    first = [(e.x, e.size, e.speed) for e in env.sim.enemies]
    assert np.random.random() == expected

    env.sim.score = 40
    env.reset(seed=3)
    assert [(e.x, e.size, e.speed) for e in env.sim.enemies] == first


def test_reset_restarts_same_simulation(env):
    env.reset(seed=0)
    sim = env.sim
    sim.score = 40
    env.reset(seed=0)
    assert env.sim is sim
    assert sim.score == 0
    assert env.store.load() == 0


def test_run_random_episode_headless():
    info = run_random_episode(render=False, seed=3)
    assert info["step"] > 0
    assert "return" in info


def test_cli_headless(monkeypatch, capsys):
    monkeypatch.setitem(ENV_CONFIG, "max_steps", 50)
    main(["--headless", "--episodes", "2", "--seed", "3", "--log-level", "WARNING"])
    out = capsys.readouterr().out
    assert "Episode 1/2" in out
    assert "Episode 2/2" in out
    assert "Mean score over 2 episodes" in out
