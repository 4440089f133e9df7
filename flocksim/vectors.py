"""Small three-component vector algebra used throughout the simulation."""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = tuple[float, ...]

_EPS = 1e-10


def vect_abs(v: Sequence[float]) -> float:
    """Length of a 3D vector."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vect_abs_xy(v: Sequence[float]) -> float:
    """Length of the XY projection of a vector."""
    return math.hypot(v[0], v[1])


def vect_sum(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Component-wise sum of two 3D vectors."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vect_difference(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Component-wise difference ``a - b`` of two 3D vectors."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Sequence[float], scalar: float, dim: int = 3) -> Vector:
    """Multiply the first ``dim`` components by ``scalar``; the rest are kept."""
    return tuple(scalar * x if i < dim else x for i, x in enumerate(v))


def unit_vect(v: Sequence[float]) -> Vector:
    """Unit vector parallel to ``v``; a (near) zero vector gives zeros."""
    length = vect_abs(v)
    if length < _EPS:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def normalize_vector(v: Sequence[float], value: float) -> Vector:
    """Vector parallel to ``v`` with length ``value``."""
    return scale(unit_vect(v), value, 3)


def scalar_product(a: Sequence[float], b: Sequence[float], dim: int = 3) -> float:
    """Inner product over the first ``dim`` components."""
    return sum(x * y for x, y in zip(a[:dim], b[:dim]))


def vectorial_product(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Cross product of two 3D vectors."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def rotate_xy(v: Sequence[float], angle: float) -> Vector:
    """Rotate around the Z axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return (v[0] * c - v[1] * s, v[0] * s + v[1] * c, v[2])


def rotate_zy(v: Sequence[float], angle: float) -> Vector:
    """Rotate around the X axis by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return (v[0], v[1] * c - v[2] * s, v[1] * s + v[2] * c)


def rotate_zx(v: Sequence[float], angle: float) -> Vector:
    """Rotate in the ZX plane (around the Y axis) by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return (v[0] * c - v[2] * s, v[1], v[0] * s + v[2] * c)


def rotate_around_axis(
    v: Sequence[float], axis: Sequence[float], angle: float
) -> Vector:
    """Rotate ``v`` around ``axis`` by ``angle`` radians (Rodrigues formula)."""
    ux, uy, uz = unit_vect(axis)
    c, s = math.cos(angle), math.sin(angle)
    t = 1 - c
    x, y, z = v[0], v[1], v[2]
    return (
        (c + ux * ux * t) * x + (ux * uy * t - uz * s) * y + (ux * uz * t + uy * s) * z,
        (ux * uy * t + uz * s) * x + (c + uy * uy * t) * y + (uy * uz * t - ux * s) * z,
        (uz * ux * t - uy * s) * x + (uz * uy * t + ux * s) * y + (c + uz * uz * t) * z,
    )


def angle_of_two_vectors(v: Sequence[float], w: Sequence[float], dim: int = 3) -> float:
    """Angle between two vectors in radians."""
    cosine = scalar_product(unit_vect(v), unit_vect(w), dim)
    return math.acos(max(-1.0, min(1.0, cosine)))


def distance_2d(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Distance of two points projected onto the XY plane."""
    return vect_abs_xy(vect_difference(p1, p2))


def project_onto_line(v: Sequence[float], direction: Sequence[float]) -> Vector:
    """Orthogonal projection of ``v`` onto a line through the origin."""
    u = unit_vect(direction)
    dot = scalar_product(u, v, 3)
    return (u[0] * dot, u[1] * dot, u[2] * dot)


def project_onto_plane(v: Sequence[float], normal: Sequence[float]) -> Vector:
    """Orthogonal projection of ``v`` onto the plane with the given normal."""
    return vect_difference(v, project_onto_line(v, normal))


def distance_from_line(
    point: Sequence[float], end1: Sequence[float], end2: Sequence[float]
) -> float:
    """Distance of ``point`` from the line through ``end1`` and ``end2`` (3D)."""
    direction = unit_vect(vect_difference(end1, end2))
    offset = vect_difference(end1, point)
    along = scale(direction, scalar_product(offset, direction, 3), 3)
    return vect_abs(vect_difference(offset, along))


def distance_from_line_xy(
    point: Sequence[float], end1: Sequence[float], end2: Sequence[float]
) -> float:
    """Distance of ``point`` from a line, measured in the XY plane."""
    d = vect_difference(end1, end2)
    direction = unit_vect((d[0], d[1], 0.0))
    o = vect_difference(end1, point)
    offset = (o[0], o[1], 0.0)
    along = scale(direction, scalar_product(offset, direction, 3), 3)
    return vect_abs_xy(vect_difference(offset, along))


def sigma_norm(v: Sequence[float], epsilon: float) -> float:
    """Sigma norm of a vector (smooth, differentiable everywhere)."""
    length = vect_abs(v)
    return (math.sqrt(1 + epsilon * length * length) - 1) / epsilon


def sigma_grad(v: Sequence[float], epsilon: float, dim: int = 3) -> Vector:
    """Gradient of the sigma norm; components beyond ``dim`` are zero."""
    factor = 1 / (1 + epsilon * sigma_norm(v, epsilon))
    return tuple(factor * x if i < dim else 0.0 for i, x in enumerate(v[:3]))


def bump_function(z: float, h: float) -> float:
    """Smooth step from 1 (for ``0 <= z < h``) down to 0 (for ``z > 1``)."""
    if 0 <= z < h:
        return 1.0
    if h <= z <= 1:
        return 0.5 * (1 + math.cos(math.pi * (z - h) / (1 - h)))
    return 0.0