from .game_config import (
    CONVERT_KEYS,
    ENV_CONFIG,
    GAME_CONFIG,
    HIGHSCORE_FILE,
    KEY_BINDINGS,
    RESTART_KEYS,
    SPAWN_INTERVALS,
    WINDOW_TITLE,
)

__all__ = ['GAME_CONFIG', 'SPAWN_INTERVALS', 'ENV_CONFIG', 'KEY_BINDINGS', 'CONVERT_KEYS', 'RESTART_KEYS',
           'HIGHSCORE_FILE', 'WINDOW_TITLE']
