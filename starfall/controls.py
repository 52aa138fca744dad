"""
Keyboard dispatch for the interactive host.

Key codes are whatever the host uses; the window resolves the names in
KEY_BINDINGS against `arcade.key`. Nothing here touches the display.
"""

from typing import Dict, Iterable, Optional

from .configs import CONVERT_KEYS, KEY_BINDINGS, RESTART_KEYS
from .logger import get_logger

logger = get_logger(__name__)


def resolve_keys(key_module, names: Iterable[str]) -> set:
    return {getattr(key_module, name) for name in names}


def resolve_bindings(key_module, bindings: Optional[Dict[str, str]] = None) -> Dict[int, str]:
    bindings = KEY_BINDINGS if bindings is None else bindings
    return {getattr(key_module, name): action for name, action in bindings.items()}


class Controls:
    """Tracks held actions and routes the discrete keys (convert, restart)"""

    def __init__(self, sim, scheduler, bindings: Dict[int, str], convert_keys, restart_keys):
        self.sim = sim
        self.scheduler = scheduler
        self.bindings = bindings
        self.convert_keys = set(convert_keys)
        self.restart_keys = set(restart_keys)
        self.held: Dict[str, bool] = {}

    @classmethod
    def for_key_module(cls, sim, scheduler, key_module):
        return cls(
            sim,
            scheduler,
            resolve_bindings(key_module),
            resolve_keys(key_module, CONVERT_KEYS),
            resolve_keys(key_module, RESTART_KEYS),
        )

    def press(self, symbol: int) -> Optional[str]:
        """Handle a key press; returns what it did, or None if the key is unbound"""
        action = self.bindings.get(symbol)
        if action is not None:
            self.held[action] = True
            return action
        if symbol in self.convert_keys:
            self.sim.convert_charge()
            return "convert"
        if symbol in self.restart_keys and self.sim.game_over:
            self.restart()
            return "restart"
        return None

    def release(self, symbol: int):
        action = self.bindings.get(symbol)
        if action is not None:
            self.held[action] = False

    def restart(self):
        logger.info(f"Restarting after score {self.sim.score}")
        self.sim.restart()
        self.scheduler.reset()
        self.held.clear()
