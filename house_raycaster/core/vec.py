from __future__ import annotations

from math import cos, isfinite, nan, sin, sqrt

Vec3 = tuple[float, float, float]
Matrix = tuple[Vec3, Vec3, Vec3]

IDENTITY: Matrix = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def along(a: Vec3, b: Vec3, t: float) -> Vec3:
    # Start at a and move towards b by t (t=0 -> a, t=1 -> b).
    return (
        a[0] + t * (b[0] - a[0]),
        a[1] + t * (b[1] - a[1]),
        a[2] + t * (b[2] - a[2]),
    )


def average(a: Vec3, b: Vec3) -> Vec3:
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5, (a[2] + b[2]) * 0.5)


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Vec3) -> float:
    return sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def dist_sq(a: Vec3, b: Vec3) -> float:
    d = sub(a, b)
    return dot(d, d)


def normalize(v: Vec3) -> Vec3:
    """Unit vector along ``v``.

    A zero-length input has no direction: the result is ``(nan, nan, nan)``
    rather than an exception, and callers are expected to check it with
    :func:`is_finite` before using it as a ray direction.
    """
    n = length(v)
    if n == 0.0:
        return (nan, nan, nan)
    return (v[0] / n, v[1] / n, v[2] / n)


def is_finite(v: Vec3) -> bool:
    return isfinite(v[0]) and isfinite(v[1]) and isfinite(v[2])


def mat_mul(m1: Matrix, m2: Matrix) -> Matrix:
    rows = []
    for i in range(3):
        row = []
        for j in range(3):
            s = 0.0
            for k in range(3):
                s += m1[i][k] * m2[k][j]
            row.append(s)
        rows.append((row[0], row[1], row[2]))
    return (rows[0], rows[1], rows[2])


def transpose(m: Matrix) -> Matrix:
    # For a rotation matrix this is also the inverse.
    return (
        (m[0][0], m[1][0], m[2][0]),
        (m[0][1], m[1][1], m[2][1]),
        (m[0][2], m[1][2], m[2][2]),
    )


def apply_matrix(m: Matrix, v: Vec3) -> Vec3:
    x, y, z = v
    return (
        m[0][0] * x + m[0][1] * y + m[0][2] * z,
        m[1][0] * x + m[1][1] * y + m[1][2] * z,
        m[2][0] * x + m[2][1] * y + m[2][2] * z,
    )


def rotate_x_matrix(theta: float) -> Matrix:
    c = cos(theta)
    s = sin(theta)
    return ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c))


def rotate_y_matrix(theta: float) -> Matrix:
    c = cos(theta)
    s = sin(theta)
    return ((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c))
