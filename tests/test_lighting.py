from __future__ import annotations

import pytest

from house_raycaster.core.color import SHADE, lerp_color
from house_raycaster.core.vec import Vec3
from house_raycaster.render.lighting import (
    AMBIENT,
    FALLOFF,
    Light,
    face_lit_color,
    illumination,
    ray_collision,
    update_face_lighting,
)
from house_raycaster.scene.graph import Face, Point


def _face(*corners: Vec3) -> Face:
    return Face([Point(*c) for c in corners], color=(200, 100, 50))


def _floor() -> Face:
    # Lies in z=0 with its normal towards -z.
    return _face((-10.0, -10.0, 0.0), (-10.0, 10.0, 0.0), (10.0, -10.0, 0.0))


def _blocker(z: float) -> Face:
    return _face((-10.0, -10.0, z), (10.0, -10.0, z), (0.0, 10.0, z))


def test_light_geometry() -> None:
    light = Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 0.5)
    assert light.normal == pytest.approx((0.0, 0.0, -1.0))
    assert light.tip.canonical == pytest.approx((0.0, 0.0, -80.0))
    with pytest.raises(ValueError):
        Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 1.5)


def test_blocked_point_gets_no_light() -> None:
    light = Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 0.7)
    assert ray_collision([_blocker(-50.0)], (0.0, 0.0, 0.0), light) == 0.0


def test_face_beyond_the_light_still_blocks() -> None:
    light = Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 0.7)
    assert ray_collision([_blocker(-150.0)], (0.0, 0.0, 0.0), light) == 0.0


def test_unblocked_light_falls_off_with_distance() -> None:
    values = []
    for dist in (50.0, 100.0, 400.0, 1000.0):
        light = Light((0.0, 0.0, -dist), (0.0, 0.0, 0.0), 0.7)
        p = ray_collision([], (0.0, 0.0, 0.0), light)
        assert 0.0 < p <= 0.7
        assert p == pytest.approx(0.7 * FALLOFF / (FALLOFF + dist * dist))
        values.append(p)
    assert values == sorted(values, reverse=True)


def test_point_on_its_own_face_is_not_self_shadowed() -> None:
    floor = _floor()
    light = Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 0.7)
    assert ray_collision([floor], (0.5, 0.5, 0.0), light) > 0.0


def test_lit_color_blends_from_shade() -> None:
    floor = _floor()
    light = Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 0.7)
    expected = lerp_color(SHADE, floor.color, (AMBIENT + 0.7 / 2.0) + AMBIENT)
    assert face_lit_color(floor, [light]) == expected
    assert face_lit_color(floor, []) == lerp_color(SHADE, floor.color, 2 * AMBIENT)


def test_light_behind_face_adds_nothing_to_lit_color() -> None:
    floor = _floor()
    behind = Light((0.0, 0.0, 100.0), (0.0, 0.0, 0.0), 1.0)
    assert face_lit_color(floor, [behind]) == face_lit_color(floor, [])


def test_light_never_darkens_a_point() -> None:
    floor = _floor()
    light = Light((0.0, 0.0, -100.0), (0.0, 0.0, 0.0), 0.7)
    update_face_lighting([floor], [light])
    point = (0.5, 0.5, 0.0)
    lit = illumination([floor], floor, point, [light])
    dark = illumination([floor], floor, point, [])
    assert dark == pytest.approx(AMBIENT)
    assert lit > dark


def test_face_turned_away_stays_at_ambient() -> None:
    floor = _floor()
    behind = Light((0.0, 0.0, 100.0), (0.0, 0.0, 0.0), 1.0)
    assert illumination([floor], floor, (0.5, 0.5, 0.0), [behind]) == AMBIENT
