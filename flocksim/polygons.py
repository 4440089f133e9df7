"""Polygon helpers in the XY plane; a polygon is a sequence of (x, y) vertices."""

from __future__ import annotations

from collections.abc import Sequence

from flocksim.geometry import intersection_of_segments
from flocksim.vectors import Vector

Polygon = Sequence[Sequence[float]]


def _xyz(p: Sequence[float]) -> Vector:
    return (p[0], p[1], p[2] if len(p) > 2 else 0.0)


def _edges(polygon: Polygon):
    return zip(polygon, list(polygon[1:]) + list(polygon[:1]))


def is_inside_polygon(point: Sequence[float], polygon: Polygon) -> bool:
    """Ray-casting test of whether ``point`` is inside ``polygon``."""
    n = len(polygon)
    if n < 3:
        return False
    px, py = point[0], point[1]
    inside = False
    p1x, p1y = polygon[0][0], polygon[0][1]
    xints = 0.0
    for i in range(n + 1):
        p2x, p2y = polygon[i % n][0], polygon[i % n][1]
        if min(p1y, p2y) < py <= max(p1y, p2y) and px <= max(p1x, p2x):
            if p1y != p2y:
                xints = (py - p1y) * (p2x - p1x) / (p2y - p1y) + p1x
            if p1x == p2x or px <= xints:
                inside = not inside
        p1x, p1y = p2x, p2y
    return inside


def intersecting_polygons(polygon1: Polygon, polygon2: Polygon) -> bool:
    """True if any edge of ``polygon1`` crosses an edge of ``polygon2``."""
    return any(
        intersection_of_segments(_xyz(a1), _xyz(a2), _xyz(b1), _xyz(b2)) is not None
        for a1, a2 in _edges(polygon1)
        for b1, b2 in _edges(polygon2)
    )


def centre_of_polygon_2d(polygon: Polygon) -> Vector:
    """Mean of the vertices."""
    if not polygon:
        raise ValueError("polygon has no vertices")
    n = len(polygon)
    return (sum(p[0] for p in polygon) / n, sum(p[1] for p in polygon) / n, 0.0)


def centroid_of_polygon_2d(polygon: Polygon) -> Vector:
    """Area centroid of a simple polygon."""
    if not polygon:
        raise ValueError("polygon has no vertices")
    signed_area = cx = cy = 0.0
    for (x0, y0, *_), (x1, y1, *_) in _edges(polygon):
        a = x0 * y1 - x1 * y0
        signed_area += a
        cx += (x0 + x1) * a
        cy += (y0 + y1) * a
    signed_area *= 0.5
    if signed_area == 0:
        raise ValueError("polygon has zero area")
    return (cx / (6.0 * signed_area), cy / (6.0 * signed_area), 0.0)


def intersection_of_segment_and_polygon_2d(
    p1: Sequence[float], p2: Sequence[float], polygon: Polygon
) -> list[Vector]:
    """Points where segment p1-p2 crosses the edges of ``polygon``, in edge order."""
    a1, a2 = _xyz(p1), _xyz(p2)
    hits = (
        intersection_of_segments(a1, a2, (v1[0], v1[1], 0.0), (v2[0], v2[1], 0.0))
        for v1, v2 in _edges(polygon)
    )
    return [hit for hit in hits if hit is not None]


def envelope_square(polygons: Sequence[Polygon]) -> list[tuple[float, float]]:
    """Rectangle around all polygons, enlarged by half the extent on every side."""
    vertices = [v for polygon in polygons for v in polygon]
    if not vertices:
        raise ValueError("no vertices given")
    xs = [v[0] for v in vertices]
    ys = [v[1] for v in vertices]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    pad_x = abs(max_x - min_x) * 0.5
    pad_y = abs(max_y - min_y) * 0.5
    return [
        (min_x - pad_x, min_y - pad_y),
        (max_x + pad_x, min_y - pad_y),
        (max_x + pad_x, max_y + pad_y),
        (min_x - pad_x, max_y + pad_y),
    ]


def polygon_area(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Area of a simple polygon by the shoelace formula."""
    if len(xs) != len(ys):
        raise ValueError("coordinate sequences differ in length")
    n = len(xs)
    area = sum(
        (xs[j] + xs[i]) * (ys[j] - ys[i]) for i, j in ((i, i - 1) for i in range(n))
    )
    return abs(area / 2.0)