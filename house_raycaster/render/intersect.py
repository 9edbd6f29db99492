from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from house_raycaster.core.vec import Vec3, add, cross, dot, is_finite, scale, sub
from house_raycaster.scene.graph import Face

EPSILON = 1e-4
MAX_DISTANCE = 550.0


@dataclass(frozen=True)
class RayHit:
    face: Face | None
    point: Vec3
    distance: float

    @property
    def hit(self) -> bool:
        return self.face is not None


def triangle_intersection(
    origin: Vec3, direction: Vec3, corners: Sequence[Vec3]
) -> float | None:
    """Möller–Trumbore ray/triangle test.

    Returns the distance along ``direction`` to the hit, or None when the ray
    is parallel to the plane, passes outside the triangle, or the hit lies at
    or behind the origin.
    """
    p1, p2, p3 = corners[0], corners[1], corners[2]
    e1 = sub(p2, p1)
    e2 = sub(p3, p1)

    p = cross(direction, e2)
    det = dot(e1, p)
    if -EPSILON < det < EPSILON:
        return None
    inv = 1.0 / det

    t = sub(origin, p1)
    u = dot(t, p) * inv
    if u < 0.0 or u > 1.0:
        return None

    q = cross(t, e1)
    v = dot(direction, q) * inv
    if v < 0.0 or u + v > 1.0:
        return None

    dist = dot(e2, q) * inv
    if dist > EPSILON:
        return dist
    return None


def ray_intersection(
    faces: Sequence[Face],
    origin: Vec3,
    direction: Vec3,
    max_distance: float = MAX_DISTANCE,
    facing: int = 1,
) -> RayHit:
    # A ray that hits nothing ends at max_distance so it can still be drawn.
    # facing=0 accepts faces from either side.
    if not is_finite(direction):
        return RayHit(None, origin, 0.0)

    best = max_distance
    target: Face | None = None
    for face in faces:
        if facing and not facing * dot(face.normal, direction) < 0.0:
            continue
        d = triangle_intersection(origin, direction, face.corners)
        if d is not None and d < best:
            best = d
            target = face

    return RayHit(target, add(origin, scale(direction, best)), best)
