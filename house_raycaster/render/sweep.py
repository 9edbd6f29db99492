from __future__ import annotations

import logging
from typing import Iterator, Sequence

from house_raycaster.core.color import BACKGROUND, Color
from house_raycaster.core.vec import add, normalize, scale, sub
from house_raycaster.render.camera import Camera
from house_raycaster.render.intersect import ray_intersection
from house_raycaster.render.lighting import AMBIENT, Light, illumination, shade
from house_raycaster.scene.graph import Face

logger = logging.getLogger(__name__)

Sample = tuple[int, int, Color]


class RaySweep:
    """Resumable full-resolution scan of the camera's image plane.

    Each ``next()`` casts a single primary ray (plus its shadow tests), so a
    caller can spread the image over many frames. The image plane is
    captured when the sweep is created; later camera moves do not affect it.
    """

    def __init__(
        self,
        camera: Camera,
        faces: Sequence[Face],
        lights: Sequence[Light],
        size: int,
        ambient: float = AMBIENT,
    ):
        if size < 1:
            raise ValueError(f"sweep size must be positive, got {size}")
        self.size = size
        self.faces = faces
        self.lights = lights
        self.ambient = ambient

        n = camera.n
        self._origin = camera.origin.canonical
        self._corner = camera.corner(0, 0).canonical
        self._dx = sub(camera.corner(n, 0).canonical, self._corner)
        self._dy = sub(camera.corner(0, n).canonical, self._corner)

        self.x = 0
        self.y = 0

    @property
    def done(self) -> bool:
        return self.y >= self.size

    @property
    def progress(self) -> float:
        return min(1.0, (self.y * self.size + self.x) / (self.size * self.size))

    def restart(self) -> None:
        self.x = 0
        self.y = 0

    def __iter__(self) -> Iterator[Sample]:
        return self

    def __next__(self) -> Sample:
        if self.done:
            raise StopIteration
        x, y = self.x, self.y
        color = self.sample(x, y)

        self.x += 1
        if self.x >= self.size:
            self.x = 0
            self.y += 1
            if self.done:
                logger.info("sweep finished (%d x %d)", self.size, self.size)
        return (x, y, color)

    def next_row(self) -> list[Sample]:
        out: list[Sample] = []
        for _ in range(self.size):
            if self.done:
                break
            out.append(next(self))
        return out

    def sample(self, x: int, y: int) -> Color:
        s = self.size
        offset = add(scale(self._dx, x / s), scale(self._dy, y / s))
        pixel = add(self._corner, offset)
        direction = normalize(sub(pixel, self._origin))

        hit = ray_intersection(self.faces, pixel, direction)
        if hit.face is None:
            return BACKGROUND
        level = illumination(self.faces, hit.face, hit.point, self.lights, self.ambient)
        return shade(hit.face, level)
