from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from house_raycaster.core.color import GREEN, WHITE, Color
from house_raycaster.core.vec import (
    IDENTITY,
    Matrix,
    Vec3,
    add,
    apply_matrix,
    cross,
    normalize,
    sub,
)


class Canvas(Protocol):
    """Immediate-mode 2D surface the drawable parts render onto."""

    def draw_point(self, x: float, y: float, radius: float, color: Color) -> None: ...

    def draw_line(
        self, x1: float, y1: float, x2: float, y2: float, color: Color, thickness: int
    ) -> None: ...

    def draw_triangle(
        self, pts: Sequence[tuple[float, float]], color: Color
    ) -> None: ...

    def draw_quad(self, pts: Sequence[tuple[float, float]], color: Color) -> None: ...


class Drawable(Protocol):
    @property
    def depth(self) -> float | None: ...

    def draw(self, canvas: Canvas) -> None: ...


class Point:
    __slots__ = ("x", "y", "z", "px", "py", "pz", "color", "radius")

    def __init__(
        self,
        x: float,
        y: float,
        z: float,
        color: Color | None = None,
        radius: float = 7.0,
    ):
        # Canonical (author-space) coordinates.
        self.x = x
        self.y = y
        self.z = z
        # Coordinates after the global rotation.
        self.px = x
        self.py = y
        self.pz = z
        self.color = color
        self.radius = radius

    @classmethod
    def from_vec(cls, v: Vec3, color: Color | None = None) -> Point:
        return cls(v[0], v[1], v[2], color)

    @property
    def canonical(self) -> Vec3:
        return (self.x, self.y, self.z)

    @property
    def transformed(self) -> Vec3:
        return (self.px, self.py, self.pz)

    @property
    def depth(self) -> float:
        return self.pz

    def update(self, matrix: Matrix = IDENTITY) -> None:
        self.px, self.py, self.pz = apply_matrix(matrix, self.canonical)

    def move_to(self, v: Vec3) -> None:
        self.x, self.y, self.z = v

    def apply(self, matrix: Matrix, pivot: Vec3 = (0.0, 0.0, 0.0)) -> None:
        # Rotates the canonical position itself (camera nodes only).
        self.move_to(add(pivot, apply_matrix(matrix, sub(self.canonical, pivot))))

    def draw(self, canvas: Canvas) -> None:
        if self.color is None:
            return
        canvas.draw_point(self.px, self.py, self.radius, self.color)

    def __repr__(self) -> str:
        return f"Point({self.x!r}, {self.y!r}, {self.z!r})"


class Segment:
    def __init__(
        self, a: Point, b: Point, color: Color = WHITE, thickness: int = 1
    ):
        self.a = a
        self.b = b
        self.color = color
        self.thickness = thickness
        self.x1 = self.y1 = self.x2 = self.y2 = 0.0
        self._depth = 0.0
        self.update()

    @property
    def depth(self) -> float:
        return self._depth

    def update(self) -> None:
        self.x1 = self.a.px
        self.y1 = self.a.py
        self.x2 = self.b.px
        self.y2 = self.b.py
        self._depth = 0.5 * (self.a.pz + self.b.pz)

    def draw(self, canvas: Canvas) -> None:
        canvas.draw_line(self.x1, self.y1, self.x2, self.y2, self.color, self.thickness)


def _plane_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    # Only the first three points define the plane.
    return normalize(cross(sub(a, b), sub(a, c)))


class Face:
    """Planar triangle or quad sharing its points with the rest of the mesh.

    ``normal`` is taken from the canonical coordinates and drives lighting and
    ray casting; ``rotated_normal`` follows the global rotation and decides
    whether the face is drawn this frame. ``depth`` is the mean transformed z
    when the face points towards the viewer (rotated normal z < 0) and
    ``None`` otherwise.
    """

    def __init__(
        self,
        points: Sequence[Point],
        color: Color = GREEN,
        reflectivity: float = 0.0,
    ):
        if len(points) not in (3, 4):
            raise ValueError(f"a face needs 3 or 4 points, got {len(points)}")
        if not 0.0 <= reflectivity <= 1.0:
            raise ValueError(f"reflectivity must be in [0, 1], got {reflectivity}")
        self.points = tuple(points)
        self.color = color
        self.lit: Color = color
        self.reflectivity = reflectivity
        self.normal = _plane_normal(
            self.points[0].canonical, self.points[1].canonical, self.points[2].canonical
        )
        self.rotated_normal: Vec3 = self.normal
        self._depth: float | None = None
        self.update()

    @property
    def is_triangle(self) -> bool:
        return len(self.points) == 3

    @property
    def depth(self) -> float | None:
        return self._depth

    @property
    def corners(self) -> tuple[Vec3, Vec3, Vec3]:
        p = self.points
        return (p[0].canonical, p[1].canonical, p[2].canonical)

    def update(self) -> None:
        p = self.points
        self.rotated_normal = _plane_normal(
            p[0].transformed, p[1].transformed, p[2].transformed
        )
        if self.rotated_normal[2] < 0.0:
            self._depth = sum(q.pz for q in p) / len(p)
        else:
            self._depth = None

    def draw(self, canvas: Canvas) -> None:
        pts = [(q.px, q.py) for q in self.points]
        if self.is_triangle:
            canvas.draw_triangle(pts, self.lit)
        else:
            canvas.draw_quad(pts, self.lit)


def update_all(
    points: Iterable[Point],
    segments: Iterable[Segment],
    faces: Iterable[Face],
    matrix: Matrix,
) -> None:
    # Segments and faces read the points' transformed coordinates.
    for p in points:
        p.update(matrix)
    for s in segments:
        s.update()
    for f in faces:
        f.update()
