from __future__ import annotations

from math import isnan, pi

import pytest

from house_raycaster.core.vec import (
    IDENTITY,
    along,
    apply_matrix,
    cross,
    dot,
    is_finite,
    length,
    mat_mul,
    normalize,
    rotate_x_matrix,
    rotate_y_matrix,
    transpose,
)


def test_along_hits_both_ends() -> None:
    a = (1.0, 2.0, 3.0)
    b = (5.0, -2.0, 7.0)
    assert along(a, b, 0.0) == a
    assert along(a, b, 1.0) == b
    assert along(a, b, 0.5) == (3.0, 0.0, 5.0)


def test_normalize_zero_vector_is_nan() -> None:
    v = normalize((0.0, 0.0, 0.0))
    assert all(isnan(c) for c in v)
    assert not is_finite(v)


def test_normalize_has_unit_length() -> None:
    v = normalize((3.0, 4.0, 12.0))
    assert length(v) == pytest.approx(1.0)
    assert is_finite(v)


def test_cross_and_dot() -> None:
    x = (1.0, 0.0, 0.0)
    y = (0.0, 1.0, 0.0)
    assert cross(x, y) == (0.0, 0.0, 1.0)
    assert cross(y, x) == (0.0, 0.0, -1.0)
    assert dot(x, y) == 0.0
    assert dot((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)) == 32.0


def test_rotation_matrices_turn_axes() -> None:
    ry = rotate_y_matrix(pi / 2)
    assert apply_matrix(ry, (1.0, 0.0, 0.0)) == pytest.approx((0.0, 0.0, -1.0))
    rx = rotate_x_matrix(pi / 2)
    assert apply_matrix(rx, (0.0, 1.0, 0.0)) == pytest.approx((0.0, 0.0, 1.0))


def test_transpose_inverts_rotation() -> None:
    m = mat_mul(rotate_x_matrix(0.3), rotate_y_matrix(-1.1))
    back = mat_mul(transpose(m), m)
    for i in range(3):
        assert back[i] == pytest.approx(IDENTITY[i])


def test_yaw_and_pitch_do_not_commute() -> None:
    a = mat_mul(rotate_x_matrix(0.4), rotate_y_matrix(0.7))
    b = mat_mul(rotate_y_matrix(0.7), rotate_x_matrix(0.4))
    assert any(a[i][j] != pytest.approx(b[i][j]) for i in range(3) for j in range(3))
