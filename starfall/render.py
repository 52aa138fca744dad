"""
Draws a Simulation onto any Surface.

A Surface is a small stateful drawing target in canvas coordinates (origin
top-left, y down): a current fill color and font, plus filled path,
rectangle, circle and text primitives. `window.ArcadeSurface` is the real
one; tests use a recording surface.
"""

from typing import Optional, Protocol, Sequence, Tuple, Union

from .entities import BulletMode, PowerUpKind

Color = Tuple[int, int, int, int]
ColorLike = Union[str, Sequence[int]]

BACKGROUND = (18, 18, 22, 255)
PLAYER_C = "#0ff"
BULLET_C = "#ff0"
HEART_C = "#f00"
SCORE_C = "#0ff"
HIGH_SCORE_C = "#ff0"
TEXT_C = "#ddd"
EXPLOSION_RGB = (255, 69, 0)

POWER_UP_COLORS = {
    PowerUpKind.HEALTH: "#ff69b4",
    PowerUpKind.COMPANION: "#7f7",
    PowerUpKind.SPREAD: "#fa0",
    PowerUpKind.BOUNCE: "#88f",
}

FONT = ("Orbitron", "Arial")
HEART_SIZE = 20
PADDING = 10


def parse_color(color: ColorLike) -> Color:
    """'#rgb', '#rrggbb' or an (r, g, b[, a]) sequence -> RGBA tuple"""
    if isinstance(color, str):
        h = color.lstrip("#")
        if len(h) == 3:
            h = "".join(ch * 2 for ch in h)
        if len(h) != 6:
            raise ValueError(f"Bad color: {color!r}")
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), 255
    rgba = tuple(int(c) for c in color)
    if len(rgba) == 3:
        return rgba + (255,)
    if len(rgba) != 4:
        raise ValueError(f"Bad color: {color!r}")
    return rgba


def flip_y(y: float, height: float) -> float:
    """Canvas y (down) -> window y (up)"""
    return height - y


def flip_rect(x: float, y: float, w: float, h: float, height: float) -> Tuple[float, float, float, float]:
    """Canvas rect with top-left origin -> (left, right, bottom, top) with y up"""
    return x, x + w, flip_y(y + h, height), flip_y(y, height)


class Surface(Protocol):
    def set_fill(self, color: Color) -> None: ...

    def set_font(self, size: int, name=FONT) -> None: ...

    def fill_path(self, points: Sequence[Tuple[float, float]]) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_arc(self, cx: float, cy: float, r: float) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...


class Renderer:
    def __init__(self, surface: Surface):
        self.surface = surface

    def draw(self, sim, now: Optional[float] = None):
        now = sim.clock.now() if now is None else now
        s = self.surface

        self._draw_player(sim.player)

        self._fill(BULLET_C)
        for b in sim.bullets:
            s.fill_rect(b.x, b.y, b.width, b.height)

        for e in sim.enemies:
            self._fill(e.color)
            r = e.size / 2
            s.fill_arc(e.x + r, e.y + r, r)

        for pu in sim.power_ups:
            self._fill(POWER_UP_COLORS[pu.kind])
            r = pu.size / 2
            s.fill_arc(pu.x + r, pu.y + r, r)

        for c in sim.companions:
            self._fill(c.color)
            for b in c.bullets:
                s.fill_rect(b.x, b.y, b.width, b.height)

        for c in sim.companions:
            self._draw_companion(c)

        for x in sim.explosions:
            self._draw_explosion(x, now)

        self._draw_hud(sim)

    def _fill(self, color: ColorLike):
        self.surface.set_fill(parse_color(color))

    def _draw_player(self, p):
        self._fill(PLAYER_C)
        self.surface.fill_path([
            (p.x + p.width / 2, p.y),
            (p.x, p.y + p.height),
            (p.x + p.width, p.y + p.height),
        ])

    def _draw_companion(self, c):
        # Diamond
        cx = c.x + c.width / 2
        cy = c.y + c.height / 2
        size = min(c.width, c.height) / 2
        self._fill(c.color)
        self.surface.fill_path([
            (cx, cy - size),
            (cx - size, cy),
            (cx, cy + size),
            (cx + size, cy),
        ])

    def _draw_explosion(self, x, now: float):
        alpha = 1 - (now - x.start_time) / x.duration
        alpha = min(1.0, max(0.0, alpha))
        self._fill(EXPLOSION_RGB + (int(alpha * 255),))
        self.surface.fill_arc(x.x, x.y, x.radius * (1 - alpha))

    def _draw_heart(self, x: float, y: float, size: float):
        # Two lobes plus a point
        r = size / 4
        self.surface.fill_arc(x + r, y + r, r)
        self.surface.fill_arc(x + 3 * r, y + r, r)
        self.surface.fill_path([
            (x, y + r),
            (x + size, y + r),
            (x + size / 2, y + size),
        ])

    def _draw_hud(self, sim):
        s = self.surface

        self._fill(HEART_C)
        for i in range(sim.health):
            self._draw_heart(PADDING + i * (HEART_SIZE + 5), PADDING, HEART_SIZE)

        self._fill(SCORE_C)
        s.set_font(20)
        s.fill_text(f"Score: {sim.score}", sim.width - 120, PADDING + 20)

        self._fill(HIGH_SCORE_C)
        s.set_font(18)
        s.fill_text(f"H Score: {sim.high_score}", sim.width - 140, PADDING + 45)

        self._fill(TEXT_C)
        s.set_font(14)
        s.fill_text(f"Charges: {sim.charges} (H to heal)", PADDING, PADDING + HEART_SIZE + 22)
        if sim.bullet_mode != BulletMode.NORMAL:
            secs = sim.mode_time_left() / 1000.0
            s.fill_text(f"{sim.bullet_mode.value.upper()} {secs:.1f}s", PADDING, PADDING + HEART_SIZE + 42)

        if sim.game_over:
            s.set_font(36)
            s.fill_text("GAME OVER", sim.width / 2 - 110, sim.height / 2 - 20)
            s.set_font(18)
            s.fill_text(f"Final score: {sim.score}", sim.width / 2 - 80, sim.height / 2 + 15)
            s.fill_text("Press R to restart", sim.width / 2 - 85, sim.height / 2 + 45)
