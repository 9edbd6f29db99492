from __future__ import annotations

from math import cos, radians, sin

import pytest

from house_raycaster.core.color import BACKGROUND
from house_raycaster.core.vec import (
    IDENTITY,
    mat_mul,
    rotate_x_matrix,
    rotate_y_matrix,
)
from house_raycaster.render.camera import CameraParams
from house_raycaster.render.lighting import AMBIENT, Light, shade
from house_raycaster.scene.graph import Face, Point
from house_raycaster.scene.house import create_house, default_lights
from house_raycaster.scene.mesh import Mesh
from house_raycaster.viewer import DisplayOptions, Viewer

NOTHING = DisplayOptions(
    lights=False,
    camera=False,
    camera_direction=False,
    pixel_grid=False,
    primary_ray=False,
)


def _house_viewer() -> Viewer:
    return Viewer(default_lights(), create_house(), CameraParams(n=6))


def _wall_mesh() -> Mesh:
    corners = [(-300.0, -300.0, 0.0), (-300.0, 900.0, 0.0), (900.0, -300.0, 0.0)]
    pts = [Point(*c) for c in corners]
    return Mesh(points=pts, faces=[Face(pts)])


def test_drag_composes_pitch_after_yaw_on_the_left() -> None:
    v = Viewer([], Mesh.empty(), CameraParams(n=2))
    yaw = radians(10.0)
    pitch = radians(5.0)
    v.rotate(yaw, pitch)
    expected = mat_mul(rotate_x_matrix(pitch), mat_mul(rotate_y_matrix(yaw), IDENTITY))
    assert v.matrix == expected

    cy, sy, cp, sp = cos(yaw), sin(yaw), cos(pitch), sin(pitch)
    by_hand = (
        (cy, 0.0, sy),
        (sp * sy, cp, -sp * cy),
        (-cp * sy, sp, cp * cy),
    )
    for i in range(3):
        assert v.matrix[i] == pytest.approx(by_hand[i])

    # A second step goes on the left of the accumulated matrix.
    v.rotate(yaw, 0.0)
    assert v.matrix == mat_mul(rotate_y_matrix(yaw), expected)


def test_drag_converts_pixels_to_degrees() -> None:
    a = Viewer([], Mesh.empty(), CameraParams(n=2))
    b = Viewer([], Mesh.empty(), CameraParams(n=2))
    a.drag(25.0, -10.0)
    b.rotate(radians(-0.4 * 25.0), radians(0.4 * -10.0))
    assert a.matrix == b.matrix


def test_inverse_rotation_restores_canonical_coordinates() -> None:
    v = _house_viewer()
    v.rotate(radians(37.0), radians(-21.0))
    v.rotate(0.0, radians(21.0))
    v.rotate(radians(-37.0), 0.0)
    for p in v.mesh.points:
        assert p.transformed == pytest.approx(p.canonical, abs=1e-9)


def test_reset_rotation_returns_to_canonical_view() -> None:
    v = _house_viewer()
    v.drag(40.0, -25.0)
    assert v.matrix != IDENTITY
    v.reset_rotation()
    assert v.matrix == IDENTITY
    for p in v.mesh.points:
        assert p.transformed == pytest.approx(p.canonical)


def test_parts_are_painted_back_to_front() -> None:
    v = _house_viewer()
    v.rotate(radians(30.0), radians(20.0))
    parts = v.collect_parts(DisplayOptions(all_rays=True, points=True))
    depths = [p.depth for p in parts]
    assert None not in depths
    assert depths == sorted(depths, reverse=True)

    visible = {id(f) for f in v.faces if f.depth is not None}
    drawn = {id(p) for p in parts if isinstance(p, Face)}
    assert drawn == visible
    assert visible


def test_display_options_gate_parts() -> None:
    v = _house_viewer()
    parts = v.collect_parts(NOTHING)
    assert all(isinstance(p, Face) for p in parts)

    parts = v.collect_parts(NOTHING.toggled("lights"))
    for light in v.lights:
        assert light.source in parts
        assert light.indicator in parts

    parts = v.collect_parts(DisplayOptions())
    assert v.camera.origin in parts
    assert v.camera.direction in parts
    assert v.camera.ray in parts
    assert all(seg in parts for seg in v.camera.grid)


def test_toggled_rejects_unknown_option() -> None:
    opts = DisplayOptions()
    assert opts.toggled("shadow_ray").shadow_ray is True
    with pytest.raises(ValueError):
        opts.toggled("refracted_ray")


def test_house_is_seen_by_the_camera() -> None:
    v = _house_viewer()
    assert any(s.face is not None for s in v.camera.samples)


def test_scene_rotation_does_not_change_pixels() -> None:
    v = _house_viewer()
    before = [row[:] for row in v.camera.colors]
    v.drag(40.0, 15.0)
    assert v.camera.colors == before


def test_move_camera_recasts_rays() -> None:
    v = Viewer([], _wall_mesh(), CameraParams(n=3))
    assert all(s.face is not None for s in v.camera.samples)
    v.move_camera(180.0, 0.0)
    # Turned round, the camera looks away from the wall.
    assert all(s.face is None for s in v.camera.samples)
    assert all(c == BACKGROUND for row in v.camera.colors for c in row)


def test_select_pixel_refreshes_parts() -> None:
    v = _house_viewer()
    assert v.select_pixel(3, 3)
    assert v.camera.ray in v.parts
    assert v.camera.ray.b is v.camera.samples[v.camera.pixel_index(3, 3)].hit
    assert not v.select_pixel(3, 3)


def test_empty_scene_renders() -> None:
    v = Viewer(default_lights(), Mesh.empty(), CameraParams(n=5))
    assert all(c == BACKGROUND for row in v.camera.colors for c in row)
    parts = v.collect_parts(DisplayOptions(all_rays=True, shadow_ray=True))
    assert not any(isinstance(p, Face) for p in parts)

    sweep = v.start_sweep(4)
    assert [c for _, _, c in sweep] == [BACKGROUND] * 16


def test_sweep_is_resumable() -> None:
    v = Viewer([], _wall_mesh(), CameraParams(n=2))
    sweep = v.start_sweep(3)
    assert sweep.progress == 0.0

    row = sweep.next_row()
    assert [(x, y) for x, y, _ in row] == [(0, 0), (1, 0), (2, 0)]
    assert all(c != BACKGROUND for _, _, c in row)
    assert sweep.progress == pytest.approx(1.0 / 3.0)

    rest = list(sweep)
    assert len(rest) == 6
    assert sweep.done
    assert sweep.next_row() == []

    sweep.restart()
    assert not sweep.done
    assert next(sweep)[:2] == (0, 0)


def test_sweep_leaves_blocked_samples_in_shadow() -> None:
    light = Light((300.0, 0.0, -60.0), (0.0, 0.0, 0.0), 0.7)
    open_sky = Viewer([light], _wall_mesh(), CameraParams(n=2))
    lit = list(open_sky.start_sweep(4))

    # Same plane as the wall but wound the other way: invisible to the camera,
    # yet every shadow ray crosses it on the way to the light.
    corners = [
        (-300.0, -300.0, -30.0),
        (900.0, -300.0, -30.0),
        (-300.0, 900.0, -30.0),
    ]
    pts = [Point(*c) for c in corners]
    base = _wall_mesh()
    covered = Mesh(points=base.points + pts, faces=base.faces + [Face(pts)])
    v = Viewer([light], covered, CameraParams(n=2))
    shadowed = list(v.start_sweep(4))

    target = v.faces[0]
    assert len(shadowed) == 16
    for (_, _, dark), (_, _, bright) in zip(shadowed, lit):
        assert dark == shade(target, AMBIENT)
        assert bright != dark


def test_sweep_rejects_empty_image() -> None:
    v = Viewer([], Mesh.empty(), CameraParams(n=2))
    with pytest.raises(ValueError):
        v.start_sweep(0)
