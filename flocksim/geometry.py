"""Planar and spatial geometry: shadows, tangents, intersections, closest points."""

from __future__ import annotations

import math
from collections.abc import Sequence

from flocksim.vectors import (
    Vector,
    rotate_around_axis,
    rotate_xy,
    scalar_product,
    scale,
    unit_vect,
    vect_abs,
    vect_abs_xy,
    vect_difference,
    vect_sum,
    vectorial_product,
)

_EPS = 1e-10


def at_shadow(x1: Sequence[float], x2: Sequence[float], point: Sequence[float]) -> int:
    """Whether ``point`` lies in the strip spanned by segment x1-x2 (2D).

    Returns 1 if clockwise-outside, -1 if clockwise-inside and 0 if not in
    the shadow at all.
    """
    to_point_1 = vect_difference(point, x1)
    to_point_2 = vect_difference(point, x2)
    back = vect_difference(x1, x2)
    forward = vect_difference(x2, x1)
    to_point_1 = (to_point_1[0], to_point_1[1], 0.0)
    to_point_2 = (to_point_2[0], to_point_2[1], 0.0)
    back = (back[0], back[1], 0.0)
    forward = (forward[0], forward[1], 0.0)

    if scalar_product(to_point_1, forward, 2) >= 0 and scalar_product(to_point_2, back, 2) >= 0:
        cross = vectorial_product(unit_vect(forward), unit_vect(to_point_1))
        return 1 if cross[2] >= 0 else -1
    return 0


def tangents_of_circle(
    point: Sequence[float], centre: Sequence[float], radius: float
) -> tuple[Vector, ...]:
    """Tangent points of a circle seen from ``point`` (XY plane).

    Returns no points if ``point`` is inside the circle, the point itself
    (with zero Z) if it is on the circle, and two tangent points otherwise.
    """
    to_centre = vect_difference(centre, point)
    d = vect_abs_xy(to_centre)
    if d < radius:
        return ()
    if d > radius:
        h = math.sqrt(d * d - radius * radius)
        reach = scale(unit_vect(to_centre), h, 2)
        angle = math.asin(radius / d)
        return (
            vect_sum(rotate_xy(reach, angle), point),
            vect_sum(rotate_xy(reach, -angle), point),
        )
    return ((point[0], point[1], 0.0),)


def tangents_of_sphere_slice(
    point: Sequence[float],
    centre: Sequence[float],
    normal: Sequence[float],
    radius: float,
) -> tuple[Vector, ...]:
    """Tangent points of a circle lying in the plane with the given normal.

    The normal has to be perpendicular to ``centre - point``; otherwise no
    points are returned.
    """
    from_centre = vect_difference(centre, point)
    if abs(scalar_product(from_centre, normal, 3)) > _EPS:
        return ()
    d = vect_abs(from_centre)
    if d > radius:
        h = math.sqrt(d * d - radius * radius)
        reach = scale(unit_vect(from_centre), h, 2)
        angle = math.asin(radius / d)
        return (
            vect_sum(rotate_around_axis(reach, normal, angle), point),
            vect_sum(rotate_around_axis(reach, normal, -angle), point),
        )
    if d == radius:
        return ((point[0], point[1], 0.0),)
    return ()


def intersection_of_segment_and_half_line(
    a1: Sequence[float],
    a2: Sequence[float],
    b: Sequence[float],
    vb: Sequence[float],
) -> Vector | None:
    """Intersection of segment a1-a2 and the half-line from ``b`` along ``vb``."""
    sa = vect_difference(a2, a1)
    denom = sa[0] * vb[1] - sa[1] * vb[0]
    if abs(denom) < _EPS:
        return None
    s = (-sa[1] * (a1[0] - b[0]) + sa[0] * (a1[1] - b[1])) / denom
    t = (vb[0] * (a1[1] - b[1]) - vb[1] * (a1[0] - b[0])) / denom
    if s >= 0 and 0 <= t <= 1:
        return (a1[0] + t * sa[0], a1[1] + t * sa[1], 0.0)
    return None


def intersection_of_segments(
    a1: Sequence[float],
    a2: Sequence[float],
    b1: Sequence[float],
    b2: Sequence[float],
) -> Vector | None:
    """Intersection of segments a1-a2 and b1-b2 in the XY plane, or None."""
    sa = vect_difference(a2, a1)
    sb = vect_difference(b2, b1)
    denom = sa[0] * sb[1] - sa[1] * sb[0]
    if abs(denom) < _EPS:
        return None
    s = (-sa[1] * (a1[0] - b1[0]) + sa[0] * (a1[1] - b1[1])) / denom
    t = (sb[0] * (a1[1] - b1[1]) - sb[1] * (a1[0] - b1[0])) / denom
    if 0 <= s <= 1 and 0 <= t <= 1:
        return (a1[0] + t * sa[0], a1[1] + t * sa[1], 0.0)
    return None


def intersection_of_lines_2d(
    a1: Sequence[float],
    a2: Sequence[float],
    b1: Sequence[float],
    b2: Sequence[float],
) -> Vector | None:
    """Intersection of the line through a1, a2 and the line through b1, b2."""
    det = (a1[0] - a2[0]) * (b1[1] - b2[1]) - (a1[1] - a2[1]) * (b1[0] - b2[0])
    if abs(det) < _EPS:
        return None
    coeff_a = a1[0] * a2[1] - a1[1] * a2[0]
    coeff_b = b1[0] * b2[1] - b1[1] * b2[0]
    x = ((b1[0] - b2[0]) * coeff_a - (a1[0] - a2[0]) * coeff_b) / det
    y = ((b1[1] - b2[1]) * coeff_a - (a1[1] - a2[1]) * coeff_b) / det
    return (x, y, 0.0)


def intersection_of_lines_2d_dir(
    point_a: Sequence[float],
    direction_a: Sequence[float],
    point_b: Sequence[float],
    direction_b: Sequence[float],
) -> Vector | None:
    """Intersection of two lines given by a point and a direction each."""
    return intersection_of_lines_2d(
        point_a,
        vect_sum(point_a, direction_a),
        point_b,
        vect_sum(point_b, direction_b),
    )


def intersection_of_segment_and_line_2d(
    line1: Sequence[float],
    line2: Sequence[float],
    end1: Sequence[float],
    end2: Sequence[float],
) -> Vector | None:
    """Intersection of the line through line1, line2 with segment end1-end2."""
    hit = intersection_of_lines_2d(line1, line2, end1, end2)
    if hit is None:
        return None
    if abs(end1[0] - end2[0]) > abs(hit[0] - end2[0]) and abs(end1[1] - end2[1]) > abs(
        hit[1] - end2[1]
    ):
        return hit
    return None


def points_on_line_at_distance_from_origin(
    radius: float, point_on_line: Sequence[float], direction: Sequence[float]
) -> tuple[Vector, ...]:
    """Points of a line at distance ``radius`` from the origin.

    With two points, the one further along ``direction`` comes first.
    """
    n_dir = unit_vect(direction)
    b = 2 * scalar_product(point_on_line, n_dir, 3)
    length = vect_abs(point_on_line)
    c = length * length - radius * radius
    disc = b * b - 4 * c
    if disc < 0:
        return ()
    root = math.sqrt(disc)
    first = vect_sum(scale(n_dir, (-b + root) / 2, 3), point_on_line)
    if disc == 0:
        return (first,)
    second = vect_sum(scale(n_dir, (-b - root) / 2, 3), point_on_line)
    return (first, second)


def points_on_segment_at_distance(
    end1: Sequence[float],
    end2: Sequence[float],
    ref_point: Sequence[float],
    distance: float,
) -> tuple[Vector, ...]:
    """Points on the line through end1, end2 at ``distance`` from ``ref_point``."""
    direction = unit_vect(vect_difference(end2, end1))
    projected = scalar_product(direction, vect_difference(ref_point, end1), 3)
    foot = vect_sum(scale(direction, projected, 3), end1)
    offset = vect_abs(vect_difference(foot, ref_point))
    if offset > distance:
        return ()
    if offset == distance:
        return (foot,)
    extra = math.sqrt(distance * distance - offset * offset)
    return (
        vect_sum(scale(direction, projected + extra, 3), end1),
        vect_sum(scale(direction, projected - extra, 3), end1),
    )


def closest_point_of_lines_3d(
    p0: Sequence[float],
    u: Sequence[float],
    q0: Sequence[float],
    v: Sequence[float],
) -> tuple[float, float, bool]:
    """Parameters ``(s, t, parallel)`` of the closest points ``p0 + s u`` and ``q0 + t v``.

    For parallel lines ``s`` is 0 and ``t`` places the foot of ``p0``.
    """
    w0 = vect_difference(p0, q0)
    a = scalar_product(u, u, 3)
    b = scalar_product(u, v, 3)
    c = scalar_product(v, v, 3)
    d = scalar_product(u, w0, 3)
    e = scalar_product(v, w0, 3)
    denom = a * c - b * b
    if denom == 0:
        return 0.0, d / b, True
    return (b * e - c * d) / denom, (a * e - b * d) / denom, False


def two_points_on_same_side(
    point1: Sequence[float], point2: Sequence[float], reference: Sequence[float]
) -> bool:
    """True if both points lie on the same side of ``reference``."""
    return (
        scalar_product(
            vect_difference(point1, reference), vect_difference(point2, reference), 3
        )
        >= 0
    )