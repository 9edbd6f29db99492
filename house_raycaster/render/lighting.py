from __future__ import annotations

from typing import Sequence

from house_raycaster.core.color import SHADE, WHITE, Color, lerp_color
from house_raycaster.core.vec import (
    IDENTITY,
    Matrix,
    Vec3,
    add,
    dist_sq,
    dot,
    normalize,
    scale,
    sub,
)
from house_raycaster.render.intersect import triangle_intersection
from house_raycaster.scene.graph import Face, Point, Segment

AMBIENT = 0.3
FALLOFF = 400000.0


class Light:
    def __init__(self, position: Vec3, target: Vec3, intensity: float):
        if not 0.0 <= intensity <= 1.0:
            raise ValueError(f"light intensity must be in [0, 1], got {intensity}")
        self.intensity = intensity
        self.source = Point.from_vec(position, WHITE)
        self.target = Point.from_vec(target)
        # Unit vector pointing from the lit surface towards the light.
        self.normal = normalize(sub(position, target))
        self.tip = Point.from_vec(add(position, scale(self.normal, -40.0 * intensity)))
        self.indicator = Segment(self.source, self.tip)

    @property
    def position(self) -> Vec3:
        return self.source.canonical

    @property
    def points(self) -> list[Point]:
        return [self.source, self.target, self.tip]

    def update(self, matrix: Matrix = IDENTITY) -> None:
        for p in self.points:
            p.update(matrix)
        self.indicator.update()


def face_lit_color(
    face: Face, lights: Sequence[Light], ambient: float = AMBIENT
) -> Color:
    intensity = ambient
    for light in lights:
        intensity += light.intensity * max(0.0, dot(face.normal, light.normal)) / 2.0
    # Degenerate (NaN) normals contribute nothing.
    intensity = min(1.0, max(ambient, intensity + ambient))
    return lerp_color(SHADE, face.color, intensity)


def update_face_lighting(
    faces: Sequence[Face], lights: Sequence[Light], ambient: float = AMBIENT
) -> None:
    for face in faces:
        face.lit = face_lit_color(face, lights, ambient)


def ray_collision(faces: Sequence[Face], point: Vec3, light: Light) -> float:
    """Light reaching ``point`` from ``light``.

    Zero when any face is hit along the ray toward the light, even one
    beyond it; otherwise the intensity scaled by the distance falloff.
    """
    target = light.position
    d2 = dist_sq(point, target)
    p = light.intensity * FALLOFF / (FALLOFF + d2)

    direction = normalize(sub(target, point))
    for face in faces:
        d = triangle_intersection(point, direction, face.corners)
        if d is not None:
            return 0.0
    return p


def illumination(
    faces: Sequence[Face],
    face: Face,
    point: Vec3,
    lights: Sequence[Light],
    ambient: float = AMBIENT,
) -> float:
    total = 0.0
    for light in lights:
        # Faces turned away from a light are shadowed by themselves.
        if dot(face.normal, light.normal) > 0.0:
            total += ray_collision(faces, point, light)
    return min(1.0, ambient + total * (1.0 - ambient))


def shade(face: Face, level: float) -> Color:
    return lerp_color(SHADE, face.lit, level)
