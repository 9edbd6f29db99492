from __future__ import annotations

import logging
from typing import Sequence

import pygame

from house_raycaster.core.color import BACKGROUND, PINK, WHITE, Color
from house_raycaster.logging_config import setup_logging
from house_raycaster.scene.house import create_house, default_lights
from house_raycaster.viewer import DisplayOptions, Viewer

logger = logging.getLogger(__name__)

DIVIDER = 160
PANEL_SIZE = 128
SWEEP_SIZE = 400
SWEEP_PREVIEW_SIZE = 16

# Number keys toggle these, in order (1..9, then 0).
TOGGLES = (
    "lights",
    "camera",
    "camera_direction",
    "pixel_grid",
    "all_rays",
    "primary_ray",
    "shadow_ray",
    "reflected_ray",
    "image",
    "points",
)


class PygameCanvas:
    """Draws scene parts onto a pygame surface, shifted by a screen offset."""

    def __init__(self, surface: pygame.Surface, offset: tuple[float, float]):
        self.surface = surface
        self.ox, self.oy = offset

    def _pt(self, x: float, y: float) -> tuple[float, float]:
        return (self.ox + x, self.oy + y)

    def draw_point(self, x: float, y: float, radius: float, color: Color) -> None:
        pygame.draw.circle(self.surface, color, self._pt(x, y), max(1.0, radius * 0.5))

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, color: Color, thickness: int
    ) -> None:
        pygame.draw.line(
            self.surface, color, self._pt(x1, y1), self._pt(x2, y2), thickness
        )

    def draw_triangle(self, pts: Sequence[tuple[float, float]], color: Color) -> None:
        self._polygon(pts, color)

    def draw_quad(self, pts: Sequence[tuple[float, float]], color: Color) -> None:
        self._polygon(pts, color)

    def _polygon(self, pts: Sequence[tuple[float, float]], color: Color) -> None:
        screen_pts = [self._pt(x, y) for x, y in pts]
        pygame.draw.polygon(self.surface, color, screen_pts)
        # Outline in the fill colour hides seams between neighbouring faces.
        pygame.draw.polygon(self.surface, color, screen_pts, 1)


def draw_pixel_panel(
    screen: pygame.Surface, viewer: Viewer, left: int, top: int, size: int
) -> None:
    cam = viewer.camera
    n = cam.n
    d = size / n

    pygame.draw.rect(screen, BACKGROUND, (left - 1, top - 1, size + 2, size + 2))
    pygame.draw.rect(screen, WHITE, (left - 1, top - 1, size + 2, size + 2), 1)

    for x, row in enumerate(cam.colors):
        for y, col in enumerate(row):
            rect = (int(left + x * d), int(top + y * d), int(d) + 1, int(d) + 1)
            pygame.draw.rect(screen, col, rect)

    if viewer.options.pixel_grid:
        for i in range(n + 1):
            o = int(i * d)
            pygame.draw.line(screen, WHITE, (left + o, top), (left + o, top + size))
            pygame.draw.line(screen, WHITE, (left, top + o), (left + size, top + o))

    if viewer.options.primary_ray:
        sx, sy = cam.selected
        rect = (int(left + sx * d), int(top + sy * d), int(d) + 1, int(d) + 1)
        pygame.draw.rect(screen, PINK, rect, 2)


def run() -> None:
    pygame.init()
    pygame.display.set_caption("House ray casting (Python + pygame)")

    screen = pygame.display.set_mode((900, 600), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 18)

    viewer = Viewer(default_lights(), create_house(1.0), options=DisplayOptions())

    cam_yaw = 0.0
    cam_pitch = 0.0
    zoom = viewer.camera.zoom

    dragging = False
    last_mouse = (0, 0)
    show_sweep = False
    sweep_surface: pygame.Surface | None = None

    def start_sweep(size: int) -> None:
        nonlocal show_sweep, sweep_surface
        viewer.start_sweep(size)
        sweep_surface = pygame.Surface((size, size))
        sweep_surface.fill(BACKGROUND)
        show_sweep = True

    running = True
    while running:
        w, h = screen.get_size()
        panel_left = 12
        panel_top = h - PANEL_SIZE - 40

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    start_sweep(SWEEP_SIZE)
                elif event.key == pygame.K_q:
                    start_sweep(SWEEP_PREVIEW_SIZE)
                elif event.key == pygame.K_SPACE:
                    viewer.reset_rotation()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    zoom = min(280.0, zoom + 10.0)
                    viewer.move_camera(cam_yaw, cam_pitch, zoom)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    zoom = max(40.0, zoom - 10.0)
                    viewer.move_camera(cam_yaw, cam_pitch, zoom)
                elif pygame.K_0 <= event.key <= pygame.K_9:
                    idx = (event.key - pygame.K_1) % 10
                    viewer.collect_parts(viewer.options.toggled(TOGGLES[idx]))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                show_sweep = False
                mx, my = event.pos
                if mx < DIVIDER:
                    if viewer.options.image:
                        cell = viewer.camera.pixel_at(
                            mx, my, panel_left, panel_top, PANEL_SIZE
                        )
                        if cell is not None:
                            viewer.select_pixel(*cell)
                else:
                    dragging = True
                    last_mouse = event.pos
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                dragging = False
            elif event.type == pygame.MOUSEMOTION and dragging:
                mx, my = event.pos
                lx, ly = last_mouse
                last_mouse = event.pos
                viewer.drag(mx - lx, my - ly)

        keys = pygame.key.get_pressed()
        moved = False
        if keys[pygame.K_LEFT]:
            cam_yaw = (cam_yaw - 2.0) % 360.0
            moved = True
        if keys[pygame.K_RIGHT]:
            cam_yaw = (cam_yaw + 2.0) % 360.0
            moved = True
        if keys[pygame.K_UP]:
            cam_pitch = min(90.0, cam_pitch + 2.0)
            moved = True
        if keys[pygame.K_DOWN]:
            cam_pitch = max(-90.0, cam_pitch - 2.0)
            moved = True
        if moved:
            viewer.move_camera(cam_yaw, cam_pitch)

        screen.fill(BACKGROUND)

        sweep = viewer.sweep
        if show_sweep and sweep is not None and sweep_surface is not None:
            # One row of the full-resolution image per frame.
            for x, y, col in sweep.next_row():
                sweep_surface.set_at((x, y), col)
            side = min(SWEEP_SIZE, w - DIVIDER - 20, h - 90)
            preview = pygame.transform.scale(sweep_surface, (side, side))
            screen.blit(preview, (DIVIDER, 70))
            pygame.draw.rect(screen, WHITE, (DIVIDER - 1, 69, side + 2, side + 2), 1)
        else:
            offset = (DIVIDER + (w - DIVIDER) * 0.5 + 0.5, h * 0.5 + 0.5)
            canvas = PygameCanvas(screen, offset)
            for part in viewer.parts:
                part.draw(canvas)

        if viewer.options.image:
            draw_pixel_panel(screen, viewer, panel_left, panel_top, PANEL_SIZE)

        y = 10
        for i, name in enumerate(TOGGLES):
            on = getattr(viewer.options, name)
            label = f"{(i + 1) % 10}: {name.replace('_', ' ')}"
            surf = font.render(label, True, (20, 20, 20) if on else (90, 110, 120))
            screen.blit(surf, (10, y))
            y += 18

        hud_lines = [
            f"camera yaw {cam_yaw:0.0f}  pitch {cam_pitch:0.0f}  zoom {zoom:0.0f}",
            "drag: rotate | space: reset | arrows: camera | +/-: zoom | R/Q: sweep",
            f"fps: {clock.get_fps():0.1f}",
        ]
        if sweep is not None and show_sweep:
            hud_lines.append(f"sweep: {sweep.progress * 100.0:0.0f}%")
        for line in hud_lines:
            surf = font.render(line, True, (20, 20, 20))
            screen.blit(surf, (10, y))
            y += 18

        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


def main() -> None:
    setup_logging()
    logger.info("starting viewer")
    run()
