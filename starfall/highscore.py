"""
High score persistence.

The simulation reads the stored value on startup and restart and writes it
back whenever the score beats it. A missing or broken file reads as 0.
"""

import json
import os
import time
from typing import Protocol

from .logger import get_logger

logger = get_logger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, value: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the value in memory; used by tests and headless runs"""

    def __init__(self, value: int = 0):
        self.value = value
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = int(value)
        self.saves += 1


class JsonHighScoreStore:
    """Stores {"high_score": int, "last_updated": iso} in a JSON file"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = int(data.get("high_score", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Could not read high score from {self.path}: {e}")
            return 0
        return max(0, value)

    def save(self, value: int) -> None:
        data = {
            "high_score": int(value),
            "last_updated": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        }
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            # The game keeps running on a read-only disk
            logger.warning(f"Could not write high score to {self.path}: {e}")
