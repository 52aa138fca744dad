"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Sequence


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def random_range(rng: random.Random, lo: float, hi: float) -> float:
    """Sample uniformly in [lo, hi)"""
    return rng.random() * (hi - lo) + lo


def random_choice(rng: random.Random, items: Sequence):
    """Pick one element uniformly"""
    return items[int(rng.random() * len(items))]


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges do not count)"""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by

