import pytest

from starfall.entities import Enemy, PowerUpKind
from starfall.scheduler import SpawnScheduler


def test_enemy_timer_fires_on_interval(sim, clock):
    scheduler = SpawnScheduler(sim)

    clock.advance(1499)
    assert scheduler.update() == 0
    assert sim.enemies == []

    clock.advance(1)
    assert scheduler.update() == 1
    assert len(sim.enemies) == 1


def test_stall_fires_each_timer_once(sim, clock):
    scheduler = SpawnScheduler(sim)
    clock.advance(60_000)
    assert scheduler.update() == 4
    assert len(sim.enemies) == 1
    assert len(sim.power_ups) == 3
    assert scheduler.update() == 0


def test_stall_keeps_timer_phase(sim, clock):
    scheduler = SpawnScheduler(sim)
    clock.advance(4500)
    assert scheduler.update() == 1
    assert len(sim.enemies) == 1

    clock.advance(1499)
    assert scheduler.update() == 0
    clock.advance(1)
    assert scheduler.update() == 1
    assert len(sim.enemies) == 2


def test_all_four_timers(sim, clock):
    scheduler = SpawnScheduler(sim)
    for _ in range(400):
        clock.advance(100)
        scheduler.update()

    # 26 enemies, 4 random power-ups, 1 companion, 1 health
    assert len(sim.enemies) == 26
    assert len(sim.power_ups) == 6
    kinds = [p.kind for p in sim.power_ups]
    assert kinds.count(PowerUpKind.COMPANION) >= 1
    assert kinds.count(PowerUpKind.HEALTH) >= 1


def test_game_over_suspends_and_reset_resumes(sim, clock):
    scheduler = SpawnScheduler(sim)
    sim.health = 1
    sim.enemies.append(Enemy(x=0, y=599, size=20, speed=2))
    sim.tick()
    assert sim.game_over

    clock.advance(10_000)
    assert scheduler.update() == 0
    assert sim.enemies == []

    sim.restart()
    scheduler.reset()
    assert scheduler.update() == 0

    clock.advance(1500)
    assert scheduler.update() == 1
    assert len(sim.enemies) == 1


def test_custom_intervals(sim, clock):
    scheduler = SpawnScheduler(sim, {"enemy": 100.0})
    fired = 0
    for _ in range(10):
        clock.advance(100)
        fired += scheduler.update()
    assert fired == 10
    assert sim.power_ups == []


def test_bad_intervals_rejected(sim):
    with pytest.raises(ValueError):
        SpawnScheduler(sim, {"boss": 1000.0})
    with pytest.raises(ValueError):
        SpawnScheduler(sim, {"enemy": 0})
