from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from house_raycaster.core.color import (
    BACKGROUND,
    GREY,
    PINK,
    RED,
    WHITE,
    Color,
    lerp_color,
)
from house_raycaster.core.vec import (
    IDENTITY,
    Matrix,
    Vec3,
    add,
    average,
    dot,
    mat_mul,
    normalize,
    rotate_x_matrix,
    rotate_y_matrix,
    scale,
    sub,
)
from house_raycaster.render.intersect import ray_intersection
from house_raycaster.render.lighting import (
    AMBIENT,
    Light,
    illumination,
    ray_collision,
    shade,
)
from house_raycaster.scene.graph import Face, Point, Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraParams:
    # Centre of the image plane; the origin sits `zoom` units in front of it.
    x: float = 0.0
    y: float = 0.0
    z: float = -120.0
    zoom: float = 120.0
    width: float = 112.0
    n: int = 16

    reflection_distance: float = 160.0
    reflection_facing: int = -1
    reflection_mix: float = 0.4
    ray_tint: float = 0.3


@dataclass
class PixelSample:
    hit: Point
    ray: Segment
    color: Color = BACKGROUND
    face: Face | None = None
    shadow: Segment | None = None
    shadow_end: Point | None = None
    reflection: Segment | None = None
    reflection_end: Point | None = None

    def points(self) -> list[Point]:
        pts = [self.hit]
        if self.shadow_end is not None:
            pts.append(self.shadow_end)
        if self.reflection_end is not None:
            pts.append(self.reflection_end)
        return pts

    def segments(self) -> list[Segment]:
        segs = [self.ray]
        if self.shadow is not None:
            segs.append(self.shadow)
        if self.reflection is not None:
            segs.append(self.reflection)
        return segs


class Camera:
    """Pinhole camera with an n x n image plane sampled by ray casting.

    Rays are cast in the scene's own frame, so rotating the whole scene only
    moves the displayed geometry and never changes a pixel.
    """

    def __init__(self, params: CameraParams | None = None):
        self.params = params or CameraParams()
        p = self.params
        if p.n < 1:
            raise ValueError(f"camera needs at least one pixel, got n={p.n}")
        if p.zoom <= 0.0:
            raise ValueError(f"zoom must be positive, got {p.zoom}")

        self.n = p.n
        self.tile = p.width / p.n
        self.zoom = p.zoom
        self.yaw = 0.0
        self.pitch = 0.0

        self.origin = Point(p.x, p.y, p.z - p.zoom, WHITE)
        self.focal = Point(p.x, p.y, p.z)
        self.direction = Segment(self.origin, self.focal, RED)

        self.grid_points: list[Point] = []
        self.grid: list[Segment] = []
        self._build_screen()

        self.samples: list[PixelSample] = []
        self.colors: list[list[Color]] = []
        self.ray = Segment(self.origin, self.focal, PINK, 2)
        self.selected = (0, 0)

    def _build_screen(self) -> None:
        n = self.n
        n1 = n + 1
        half = n / 2
        bx, by, bz = self.focal.canonical

        for i in range(n1):
            x = (i - half) * self.tile
            for j in range(n1):
                y = (j - half) * self.tile
                self.grid_points.append(Point(bx + x, by + y, bz))

        g = self.grid_points
        for i in range(n1):
            for j in range(n1):
                node = g[i * n1 + j]
                if j > 0:
                    self.grid.append(Segment(node, g[i * n1 + j - 1]))
                if i > 0:
                    self.grid.append(Segment(node, g[(i - 1) * n1 + j]))

        corners = (0, n, n1 * n1 - 1, n * n1)
        for k in range(4):
            a = g[corners[k]]
            b = g[corners[(k + 1) % 4]]
            self.grid.append(Segment(a, b, WHITE, 2))

    @property
    def nodes(self) -> list[Point]:
        return [self.origin, self.focal, *self.grid_points]

    def corner(self, i: int, j: int) -> Point:
        return self.grid_points[i * (self.n + 1) + j]

    def pixel_center(self, x: int, y: int) -> Vec3:
        a = self.corner(x, y).canonical
        b = self.corner(x + 1, y + 1).canonical
        return average(a, b)

    def pixel_index(self, x: int, y: int) -> int:
        return x * self.n + y

    # -- ray casting --------------------------------------------------------

    def add_rays(
        self,
        faces: Sequence[Face],
        lights: Sequence[Light],
        ambient: float = AMBIENT,
    ) -> None:
        self.samples = []
        for x in range(self.n):
            for y in range(self.n):
                hit = Point(*self.origin.canonical)
                sample = PixelSample(hit=hit, ray=Segment(self.origin, hit, WHITE, 2))
                self.samples.append(sample)
        self.update_rays(faces, lights, ambient)

    def update_rays(
        self,
        faces: Sequence[Face],
        lights: Sequence[Light],
        ambient: float = AMBIENT,
    ) -> None:
        if not self.samples:
            self.add_rays(faces, lights, ambient)
            return

        hits = 0
        self.colors = []
        for x in range(self.n):
            row: list[Color] = []
            for y in range(self.n):
                sample = self.samples[self.pixel_index(x, y)]
                pixel = self.pixel_center(x, y)
                self._sample_pixel(sample, pixel, faces, lights, ambient)
                if sample.face is not None:
                    hits += 1
                row.append(sample.color)
            self.colors.append(row)

        self.select_pixel(*self.selected, force=True)
        logger.debug(
            "cast %d primary rays against %d faces (%d hits)",
            len(self.samples),
            len(faces),
            hits,
        )

    def _sample_pixel(
        self,
        sample: PixelSample,
        pixel: Vec3,
        faces: Sequence[Face],
        lights: Sequence[Light],
        ambient: float,
    ) -> None:
        origin = self.origin.canonical
        direction = normalize(sub(pixel, origin))
        hit = ray_intersection(faces, origin, direction)

        sample.hit.move_to(hit.point)
        sample.face = hit.face
        sample.shadow = sample.shadow_end = None
        sample.reflection = sample.reflection_end = None

        color = BACKGROUND
        if hit.face is not None:
            level = illumination(faces, hit.face, hit.point, lights, ambient)
            color = shade(hit.face, level)
            if lights:
                self._shadow_ray(sample, hit.face, hit.point, faces, lights[0])
            if hit.face.reflectivity > 0.0:
                reflected = self._reflection(
                    sample, hit.face, hit.point, direction, faces
                )
                color = lerp_color(color, reflected, self.params.reflection_mix)

        sample.color = color
        sample.ray.color = lerp_color(color, WHITE, self.params.ray_tint)

    def _shadow_ray(
        self,
        sample: PixelSample,
        face: Face,
        point: Vec3,
        faces: Sequence[Face],
        light: Light,
    ) -> None:
        lit = dot(face.normal, light.normal) > 0.0
        if lit and ray_collision(faces, point, light) == 0.0:
            # Show the ray up to whatever blocks the light.
            to_light = normalize(sub(light.position, point))
            block = ray_intersection(faces, point, to_light, facing=0)
            end = Point.from_vec(block.point)
            sample.shadow_end = end
            sample.shadow = Segment(end, sample.hit, GREY, 2)
        else:
            sample.shadow = Segment(light.source, sample.hit, WHITE, 2)

    def _reflection(
        self,
        sample: PixelSample,
        face: Face,
        point: Vec3,
        direction: Vec3,
        faces: Sequence[Face],
    ) -> Color:
        normal = face.normal
        mirrored = sub(direction, scale(normal, 2.0 * dot(direction, normal)))
        reflected = normalize(mirrored)
        bounce = ray_intersection(
            faces,
            point,
            reflected,
            self.params.reflection_distance,
            self.params.reflection_facing,
        )

        end = Point.from_vec(bounce.point)
        sample.reflection_end = end
        sample.reflection = Segment(end, sample.hit, PINK, 2)

        if bounce.face is not None:
            return bounce.face.lit
        return BACKGROUND

    # -- pixel selection ----------------------------------------------------

    def pixel_at(
        self, sx: float, sy: float, left: float, top: float, size: float
    ) -> tuple[int, int] | None:
        # Maps a position on the 2D pixel panel to its cell.
        if not (left < sx < left + size and top < sy < top + size):
            return None
        x = min(self.n - 1, int((sx - left) / size * self.n))
        y = min(self.n - 1, int((sy - top) / size * self.n))
        return (x, y)

    def select_pixel(self, x: int, y: int, force: bool = False) -> bool:
        if not (0 <= x < self.n and 0 <= y < self.n):
            return False
        changed = (x, y) != self.selected
        if not (changed or force):
            return False
        self.selected = (x, y)
        if self.samples:
            self.ray.b = self.samples[self.pixel_index(x, y)].hit
            self.ray.update()
        return changed

    @property
    def selected_sample(self) -> PixelSample | None:
        if not self.samples:
            return None
        return self.samples[self.pixel_index(*self.selected)]

    @property
    def shadow_ray(self) -> Segment | None:
        s = self.selected_sample
        return s.shadow if s is not None else None

    @property
    def reflected_ray(self) -> Segment | None:
        s = self.selected_sample
        return s.reflection if s is not None else None

    @property
    def rays(self) -> list[Segment]:
        return [s.ray for s in self.samples]

    # -- movement -----------------------------------------------------------

    def move(self, yaw: float, pitch: float) -> bool:
        """Turn the camera about its focal point to absolute yaw/pitch (radians).

        The camera orientation is pitch applied after yaw, so the step is
        X(pitch) . Y(yaw - old_yaw) . X(-old_pitch).
        """
        dyaw = yaw - self.yaw
        if dyaw == 0.0 and pitch == self.pitch:
            return False

        m = rotate_x_matrix(-self.pitch)
        if dyaw != 0.0:
            m = mat_mul(rotate_y_matrix(dyaw), m)
        m = mat_mul(rotate_x_matrix(pitch), m)

        pivot = self.focal.canonical
        self.origin.apply(m, pivot)
        for p in self.grid_points:
            p.apply(m, pivot)
        self.yaw = yaw
        self.pitch = pitch
        return True

    def set_zoom(self, zoom: float) -> None:
        if zoom <= 0.0:
            raise ValueError(f"zoom must be positive, got {zoom}")
        axis = normalize(sub(self.origin.canonical, self.focal.canonical))
        self.origin.move_to(add(self.focal.canonical, scale(axis, zoom)))
        self.zoom = zoom

    def update(self, matrix: Matrix = IDENTITY) -> None:
        for p in self.nodes:
            p.update(matrix)
        for s in self.samples:
            for p in s.points():
                p.update(matrix)

        self.direction.update()
        for seg in self.grid:
            seg.update()
        for s in self.samples:
            for seg in s.segments():
                seg.update()
        self.ray.update()
