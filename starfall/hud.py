"""
HUD collaborator: receives score, health, charge count and the final score.

`Hud` keeps the latest values so a renderer can display them, and logs the
changes. Hosts can subclass it to push values elsewhere.
"""

from typing import Optional

from .logger import get_logger

logger = get_logger(__name__)


class Hud:
    def __init__(self):
        self.score = 0
        self.high_score = 0
        self.health = 0
        self.charges = 0
        self.final_score: Optional[int] = None

    def score_changed(self, score: int, high_score: int):
        self.score = score
        self.high_score = high_score
        logger.debug(f"score={score} high_score={high_score}")

    def health_changed(self, health: int):
        self.health = health
        logger.debug(f"health={health}")

    def charges_changed(self, charges: int):
        self.charges = charges
        logger.debug(f"charges={charges}")

    def game_over(self, final_score: int):
        self.final_score = final_score
        logger.info(f"Game over, final score {final_score}")

    def reset(self):
        self.final_score = None
