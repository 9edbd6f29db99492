from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from house_raycaster.core.color import GREEN, ORANGE, Color
from house_raycaster.core.vec import Vec3
from house_raycaster.scene.graph import Face, Point


@dataclass(frozen=True)
class FaceGroup:
    # Each entry lists point indices of one polygon, in winding order.
    ids: Sequence[Sequence[int]]
    color: Color = GREEN
    reflectivity: float = 0.0


@dataclass(frozen=True)
class Mesh:
    points: list[Point]
    faces: list[Face]

    @classmethod
    def empty(cls) -> Mesh:
        return cls(points=[], faces=[])


def build_mesh(
    coords: Sequence[Vec3],
    groups: Sequence[FaceGroup],
    scale: float = 1.0,
    center: Vec3 = (0.0, 0.0, 0.0),
    triangulate: bool = True,
) -> Mesh:
    """Build a mesh from a shared coordinate array and indexed face groups.

    Coordinates are shifted by ``center`` and scaled; y is flipped so that
    author-space "up" is screen-space up. Polygons are fan-triangulated unless
    ``triangulate`` is False, in which case quads stay as 4-point faces (only
    their first triangle takes part in ray casting).
    """
    cx, cy, cz = center
    points = [
        Point((x - cx) * scale, (cy - y) * scale, (z - cz) * scale, ORANGE)
        for x, y, z in coords
    ]
    n = len(points)

    faces: list[Face] = []
    for gi, group in enumerate(groups):
        for poly in group.ids:
            if len(poly) < 3:
                raise ValueError(f"group {gi}: polygon {list(poly)} has < 3 points")
            for i in poly:
                if i < 0 or i >= n:
                    raise IndexError(f"group {gi}: point index {i} out of range")
            if not triangulate and len(poly) <= 4:
                faces.append(
                    Face([points[i] for i in poly], group.color, group.reflectivity)
                )
                continue
            first = points[poly[0]]
            for k in range(1, len(poly) - 1):
                faces.append(
                    Face(
                        [first, points[poly[k]], points[poly[k + 1]]],
                        group.color,
                        group.reflectivity,
                    )
                )
    return Mesh(points=points, faces=faces)
