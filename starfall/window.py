"""
Arcade host for interactive play.

The window owns the Simulation and its SpawnScheduler, hands key events to
Controls, runs one tick per on_update while the game is alive and
draws through ArcadeSurface. Arcade has y pointing up, so the surface flips
canvas coordinates on the way out.
"""

from typing import Optional

import arcade

from .configs import WINDOW_TITLE
from .controls import Controls
from .logger import get_logger
from .render import BACKGROUND, FONT, Renderer, flip_rect, flip_y
from .scheduler import SpawnScheduler
from .simulation import Simulation

logger = get_logger(__name__)


class ArcadeSurface:
    """Surface backed by arcade's immediate-mode draw calls"""

    def __init__(self, height: int):
        self.height = height
        self.color = (255, 255, 255, 255)
        self.font_size = 14
        self.font_name = FONT

    def set_fill(self, color):
        self.color = color

    def set_font(self, size, name=FONT):
        self.font_size = size
        self.font_name = name

    def fill_path(self, points):
        arcade.draw_polygon_filled([(x, flip_y(y, self.height)) for x, y in points], self.color)

    def fill_rect(self, x, y, w, h):
        arcade.draw_lrbt_rectangle_filled(*flip_rect(x, y, w, h, self.height), self.color)

    def fill_arc(self, cx, cy, r):
        if r <= 0:
            return
        arcade.draw_circle_filled(cx, flip_y(cy, self.height), r, self.color)

    def fill_text(self, text, x, y):
        arcade.draw_text(text, x, flip_y(y, self.height), self.color, self.font_size, font_name=self.font_name)


class StarfallWindow(arcade.Window):
    """Arcade window running the Starfall game loop"""

    def __init__(self, sim: Simulation, scheduler: Optional[SpawnScheduler] = None, interactive: bool = True):
        super().__init__(sim.width, sim.height, WINDOW_TITLE)
        self.sim = sim
        self.scheduler = scheduler if scheduler is not None else SpawnScheduler(sim)
        self.interactive = interactive
        self.renderer = Renderer(ArcadeSurface(sim.height))
        self.controls = Controls.for_key_module(sim, self.scheduler, arcade.key)
        self.background_color = BACKGROUND

    def on_update(self, delta_time: float):
        if not self.interactive or self.sim.game_over:
            return
        self.scheduler.update()
        self.sim.tick(self.controls.held)

    def on_draw(self):
        self.clear()
        self.renderer.draw(self.sim)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if not self.interactive:
            return
        self.controls.press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.controls.release(symbol)

    def restart(self):
        self.controls.restart()


def play(sim: Simulation, scheduler: Optional[SpawnScheduler] = None):
    """Open a window and run until it is closed"""
    window = StarfallWindow(sim, scheduler)
    logger.info(f"Starting {WINDOW_TITLE} ({sim.width}x{sim.height})")
    arcade.run()
    return window
