"""
Default configuration for the Starfall simulation, spawn timers,
headless environment and window key bindings
"""

# Simulation parameters (keyword arguments of Simulation)
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "player_speed": 5.0,
    "shoot_cooldown": 300.0,  # ms between player shots
    "bullet_speed": 7.0,
    "shot_penalty": 2,
    "max_health": 5,
    "start_health": 3,
    "power_up_duration": 8000.0,  # ms, firing modes and companions
    "bounce_budget": 3,
    "spread_dx": 2.0,
    "kill_score": 10,
    "companion_kill_score": 15,
}

# Host-side spawn timers, ms
SPAWN_INTERVALS = {
    "enemy": 1500.0,
    "power_up": 10000.0,
    "companion_power_up": 30000.0,
    "health_power_up": 40000.0,
}

# Headless environment parameters (keyword arguments of StarfallEnv)
ENV_CONFIG = {
    "fps": 60,
    "max_steps": 3600,  # 60s at 60 FPS
    "k_enemies": 5,
    "m_power_ups": 3,
    "damage_penalty": 10.0,
}

WINDOW_TITLE = "Starfall"

HIGHSCORE_FILE = "highscore.json"

# Key names are attributes of arcade.key; resolved by the window
KEY_BINDINGS = {
    "LEFT": "left",
    "A": "left",
    "RIGHT": "right",
    "D": "right",
    "UP": "up",
    "W": "up",
    "DOWN": "down",
    "S": "down",
    "SPACE": "fire",
    "J": "fire",
}

CONVERT_KEYS = ("H",)
RESTART_KEYS = ("R", "ENTER")
