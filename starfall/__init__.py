"""Starfall - arcade shooter simulation with an Arcade front end"""

from .simulation import Simulation
from .scheduler import SpawnScheduler
from .clock import ManualClock, SystemClock

__all__ = ['Simulation', 'SpawnScheduler', 'ManualClock', 'SystemClock']
