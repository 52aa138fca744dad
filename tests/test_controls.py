from types import SimpleNamespace

import pytest

from starfall.configs import KEY_BINDINGS
from starfall.controls import Controls, resolve_bindings
from starfall.entities import Enemy
from starfall.scheduler import SpawnScheduler

# Stands in for arcade.key: distinct int code per key name
KEY_NAMES = ["LEFT", "A", "RIGHT", "D", "UP", "W", "DOWN", "S", "SPACE", "J", "H", "R", "ENTER", "ESCAPE"]
key = SimpleNamespace(**{name: code for code, name in enumerate(KEY_NAMES, start=65)})


@pytest.fixture
def scheduler(sim):
    return SpawnScheduler(sim)


@pytest.fixture
def controls(sim, scheduler):
    return Controls.for_key_module(sim, scheduler, key)


def end_game(sim):
    sim.health = 1
    sim.enemies.append(Enemy(x=100, y=599, size=20, speed=2))
    sim.tick()
    assert sim.game_over


def test_every_binding_resolves():
    bindings = resolve_bindings(key)
    assert len(bindings) == len(KEY_BINDINGS)
    assert set(bindings.values()) == {"left", "right", "up", "down", "fire"}


@pytest.mark.parametrize("name, action", [
    ("LEFT", "left"), ("A", "left"),
    ("RIGHT", "right"), ("D", "right"),
    ("UP", "up"), ("W", "up"),
    ("DOWN", "down"), ("S", "down"),
    ("SPACE", "fire"), ("J", "fire"),
])
def test_press_and_release_hold_action(controls, name, action):
    assert controls.press(getattr(key, name)) == action
    assert controls.held[action]
    controls.release(getattr(key, name))
    assert not controls.held[action]


def test_held_keys_drive_the_tick(sim, controls):
    x = sim.player.x
    controls.press(key.LEFT)
    sim.tick(controls.held)
    assert sim.player.x == x - 5

    controls.release(key.LEFT)
    sim.tick(controls.held)
    assert sim.player.x == x - 5


def test_unbound_key_ignored(controls):
    assert controls.press(key.ESCAPE) is None
    controls.release(key.ESCAPE)
    assert controls.held == {}


def test_h_converts_charge(sim, controls):
    sim.charges = 1
    assert controls.press(key.H) == "convert"
    assert (sim.charges, sim.health) == (0, 4)


def test_restart_keys_ignored_while_playing(sim, controls):
    sim.score = 40
    for code in (key.R, key.ENTER):
        assert controls.press(code) is None
    assert sim.score == 40


@pytest.mark.parametrize("name", ["R", "ENTER"])
def test_restart_keys_restart_after_game_over(sim, controls, scheduler, clock, name):
    controls.press(key.SPACE)
    end_game(sim)
    clock.advance(1000)

    assert controls.press(getattr(key, name)) == "restart"
    assert not sim.game_over
    assert sim.health == 3
    assert controls.held == {}
    assert all(t.last_fired == clock.now() for t in scheduler.timers)
