from __future__ import annotations

Color = tuple[int, int, int]

BACKGROUND: Color = (100, 200, 250)
SHADE: Color = (40, 40, 40)
WHITE: Color = (255, 255, 255)

RED: Color = (200, 0, 0)
GREY: Color = (100, 100, 100)
BLUE: Color = (64, 95, 237)
PINK: Color = (255, 0, 175)
GREEN: Color = (28, 173, 123)
ORANGE: Color = (255, 165, 0)

WALL_YELLOW: Color = (255, 255, 115)
WALL_ORANGE: Color = (255, 175, 75)
WALL_GREEN: Color = (220, 235, 16)
WALL_PINK: Color = (255, 180, 200)
WALL_BLUE: Color = (175, 195, 235)
ROOF: Color = (190, 110, 88)
BASE: Color = (80, 80, 80)
DOOR: Color = (210, 45, 10)


def clamp01(v: float) -> float:
    if v < 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


def lerp_color(a: Color, b: Color, t: float) -> Color:
    tt = clamp01(t)
    return (
        int(a[0] + (b[0] - a[0]) * tt),
        int(a[1] + (b[1] - a[1]) * tt),
        int(a[2] + (b[2] - a[2]) * tt),
    )
