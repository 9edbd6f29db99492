from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from math import radians
from typing import Sequence

from house_raycaster.core.vec import (
    IDENTITY,
    Matrix,
    mat_mul,
    rotate_x_matrix,
    rotate_y_matrix,
)
from house_raycaster.render.camera import Camera, CameraParams
from house_raycaster.render.lighting import AMBIENT, Light, update_face_lighting
from house_raycaster.render.sweep import RaySweep
from house_raycaster.scene.graph import Drawable, Face, update_all
from house_raycaster.scene.mesh import Mesh

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayOptions:
    lights: bool = True
    camera: bool = True
    camera_direction: bool = True
    pixel_grid: bool = True
    all_rays: bool = False
    primary_ray: bool = True
    shadow_ray: bool = False
    reflected_ray: bool = False
    image: bool = True
    points: bool = False

    def toggled(self, name: str) -> DisplayOptions:
        if name not in {f.name for f in fields(self)}:
            raise ValueError(f"unknown display option: {name!r}")
        return replace(self, **{name: not getattr(self, name)})


@dataclass(frozen=True)
class ViewerParams:
    drag_degrees_per_pixel: float = 0.4
    ambient: float = AMBIENT


class Viewer:
    """Owns the scene, its lights and the camera, and the global rotation."""

    def __init__(
        self,
        lights: Sequence[Light],
        mesh: Mesh,
        camera_params: CameraParams | None = None,
        params: ViewerParams | None = None,
        options: DisplayOptions | None = None,
    ):
        self.params = params or ViewerParams()
        self.options = options or DisplayOptions()
        self.mesh = mesh
        self.lights = list(lights)
        self.camera = Camera(camera_params)
        self.matrix: Matrix = IDENTITY
        self.parts: list[Drawable] = []
        self.sweep: RaySweep | None = None

        self.update_lights()
        self.camera.add_rays(self.faces, self.lights, self.params.ambient)
        self.collect_parts()
        logger.info(
            "viewer ready: %d points, %d faces, %d lights, %dx%d pixels",
            len(mesh.points),
            len(mesh.faces),
            len(self.lights),
            self.camera.n,
            self.camera.n,
        )

    @property
    def faces(self) -> list[Face]:
        return self.mesh.faces

    def update_lights(self) -> None:
        update_face_lighting(self.faces, self.lights, self.params.ambient)

    def update(self) -> None:
        # Points first, then everything that reads them.
        for light in self.lights:
            light.update(self.matrix)
        update_all(self.mesh.points, (), self.faces, self.matrix)
        self.camera.update(self.matrix)

    def rotate(self, yaw: float, pitch: float) -> None:
        """Compose an incremental rotation (radians) onto the global matrix.

        The step is pitch . yaw and it is applied on the left of the matrix
        accumulated so far.
        """
        m = IDENTITY
        if yaw:
            m = rotate_y_matrix(yaw)
        if pitch:
            m = mat_mul(rotate_x_matrix(pitch), m)
        if yaw or pitch:
            self.matrix = mat_mul(m, self.matrix)
        self.update_lights()
        self.collect_parts()

    def drag(self, dx: float, dy: float) -> None:
        k = self.params.drag_degrees_per_pixel
        self.rotate(radians(-k * dx), radians(k * dy))

    def reset_rotation(self) -> None:
        self.matrix = IDENTITY
        self.collect_parts()

    def move_camera(
        self, yaw_deg: float, pitch_deg: float, zoom: float | None = None
    ) -> None:
        self.camera.move(radians(yaw_deg), radians(pitch_deg))
        if zoom is not None and zoom != self.camera.zoom:
            self.camera.set_zoom(zoom)
        self.camera.update_rays(self.faces, self.lights, self.params.ambient)
        self.collect_parts()

    def select_pixel(self, x: int, y: int) -> bool:
        changed = self.camera.select_pixel(x, y)
        if changed:
            self.collect_parts()
        return changed

    def collect_parts(self, options: DisplayOptions | None = None) -> list[Drawable]:
        if options is not None:
            self.options = options
        opts = self.options
        cam = self.camera

        self.update()

        parts: list[Drawable] = []
        if opts.points:
            parts.extend(self.mesh.points)
        parts.extend(f for f in self.faces if f.depth is not None)

        if opts.lights:
            for light in self.lights:
                parts.append(light.source)
                parts.append(light.indicator)
        if opts.camera:
            parts.append(cam.origin)
        if opts.camera_direction:
            parts.append(cam.direction)
        if opts.primary_ray and cam.samples:
            parts.append(cam.ray)
        if opts.shadow_ray and cam.shadow_ray is not None:
            parts.append(cam.shadow_ray)
        if opts.reflected_ray and cam.reflected_ray is not None:
            parts.append(cam.reflected_ray)
        if opts.all_rays:
            parts.extend(cam.rays)
        if opts.pixel_grid:
            parts.extend(cam.grid)

        # Painter's order: farthest first.
        parts.sort(key=lambda part: part.depth, reverse=True)
        self.parts = parts
        return parts

    def start_sweep(self, size: int) -> RaySweep:
        self.sweep = RaySweep(
            self.camera, self.faces, self.lights, size, self.params.ambient
        )
        logger.info("sweep started (%d x %d)", size, size)
        return self.sweep
