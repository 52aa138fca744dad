import random

import pytest

from starfall.clock import ManualClock
from starfall.highscore import MemoryHighScoreStore
from starfall.hud import Hud
from starfall.simulation import Simulation


@pytest.fixture
def clock():
    return ManualClock(start=10_000.0)


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def sim(clock, store):
    return Simulation(clock=clock, rng=random.Random(1234), store=store, hud=Hud())
