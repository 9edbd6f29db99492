from __future__ import annotations

from house_raycaster.core.color import (
    BASE,
    ROOF,
    WALL_BLUE,
    WALL_GREEN,
    WALL_ORANGE,
    WALL_PINK,
    WALL_YELLOW,
)
from house_raycaster.core.vec import Vec3
from house_raycaster.render.lighting import Light
from house_raycaster.scene.mesh import FaceGroup, Mesh, build_mesh


def create_house(scale: float = 1.0, reflectivity: float = 0.0) -> Mesh:
    d = 150.0  # depth
    d2 = 24.0  # front step, left side
    d3 = 30.0  # porch depth
    d4 = d - 15.0  # back step, left side
    d5 = 15.0  # inset of the right front part
    j = 60.0 + 32.0 * 0.8

    coords: list[Vec3] = [
        # Front step
        (0, 0, d2), (60, 0, d2), (60, 5, d2), (0, 5, d2),
        # Inset front
        (0, 5, d2 + d3), (60, 4, d2 + d3), (60, 45, d2 + d3), (0, 45, d2 + d3),
        # Porch top
        (0, 45, d2), (60, 45, d2), (60, 60, d2), (0, 60, d2),
        # Front wall, right
        (60 + d5, 0, 0), (124 - d5, 0, 0), (124, 0, d2), (124, 60, d2),
        (124 - d5, 60, 0), (60 + d5, 60, 0), (60, 60, 0), (124, 60, 0),
        # Back wall, left
        (60, 0, d4), (0, 0, d4), (0, 60, d4), (60, 60, d4),
        # Back wall, right
        (124, 0, d), (60, 0, d), (60, 60, d), (124, 60, d),
        # Roof ridges
        (0, 120, d / 2), (j, 120, d / 2),
        (92, 135, 0), (92, 135, d),
    ]  # fmt: skip

    r = reflectivity
    groups = [
        FaceGroup([(0, 1, 2, 3), (3, 2, 5, 4)], WALL_PINK, r),
        FaceGroup([(4, 5, 6, 7)], WALL_ORANGE, r),
        # Underhang of the right front part
        FaceGroup([(10, 17, 18), (15, 19, 16)], WALL_ORANGE, r),
        FaceGroup([(8, 9, 10, 11), (7, 6, 9, 8)], WALL_BLUE, r),
        FaceGroup(
            [(1, 12, 17, 10), (12, 13, 16, 17), (13, 14, 15, 16), (5, 2, 9, 6)],
            WALL_GREEN,
            r,
        ),
        # Gables
        FaceGroup([(18, 19, 30), (27, 26, 31)], WALL_YELLOW, r),
        # Left side
        FaceGroup(
            [
                (0, 3, 4), (0, 4, 21), (4, 7, 21), (7, 22, 21),
                (7, 8, 11), (7, 11, 22), (22, 11, 28),
            ],  # fmt: skip
            WALL_ORANGE,
            r,
        ),
        FaceGroup([(14, 24, 27, 15)], WALL_PINK, r),
        FaceGroup([(20, 21, 22, 23)], WALL_ORANGE, r),
        FaceGroup([(24, 25, 26, 27), (20, 23, 26, 25)], WALL_GREEN, r),
        FaceGroup(
            [
                (11, 10, 29, 28), (23, 22, 28, 29),
                (10, 18, 30), (10, 30, 29), (26, 23, 31), (23, 29, 31), (29, 30, 31),
                (19, 27, 31, 30),
            ],  # fmt: skip
            ROOF,
            r,
        ),
        FaceGroup([(0, 21, 20, 1), (25, 24, 14, 1), (1, 14, 13, 12)], BASE, r),
    ]

    return build_mesh(coords, groups, scale=scale, center=(124 / 2, 135 / 2, d / 2))


def default_lights() -> list[Light]:
    return [
        Light((40.0, -80.0, -120.0), (0.0, 0.0, 0.0), 0.7),
        Light((-160.0, -10.0, -50.0), (0.0, 0.0, 0.0), 0.25),
    ]
