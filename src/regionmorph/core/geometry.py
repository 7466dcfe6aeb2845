"""Geometric primitives for ring and region calculations.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Perimeter and area-weighted centroid
- Point distances and interpolation
- Ear-clipping triangulation of a single outline

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math
from collections.abc import Sequence

import mapbox_earcut as earcut
import numpy as np

from regionmorph.domain import Point, Ring
from regionmorph.exceptions import GeometryError


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    Args:
        points: Points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> signed_area([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        1.0
        >>> signed_area([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])
        -1.0
    """
    return Ring(points=tuple(points)).signed_area()


def polygon_area(points: Sequence[Point]) -> float:
    """Unsigned polygon area."""
    return abs(signed_area(points))


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def squared_distance(a: Point, b: Point) -> float:
    """Squared Euclidean distance between two points."""
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def point_between(a: Point, b: Point, t: float) -> Point:
    """Point at fraction ``t`` along the segment from ``a`` to ``b``."""
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def perimeter(points: Sequence[Point]) -> float:
    """Length of the closed polyline through ``points``, closing edge included."""
    n = len(points)
    if n < 2:
        return 0.0
    return sum(distance(points[i], points[(i + 1) % n]) for i in range(n))


def centroid(points: Sequence[Point]) -> Point:
    """Area-weighted centroid of a polygon.

    Falls back to the vertex mean for polygons with zero area, so collinear
    or single-point rings still have a well-defined position.

    Args:
        points: Points forming the polygon boundary

    Returns:
        Centroid point

    Raises:
        ValueError: If ``points`` is empty
    """
    n = len(points)
    if n == 0:
        raise ValueError("Cannot compute the centroid of an empty polygon")

    cx = 0.0
    cy = 0.0
    doubled_area = 0.0
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        cross = a.x * b.y - b.x * a.y
        doubled_area += cross
        cx += (a.x + b.x) * cross
        cy += (a.y + b.y) * cross

    if abs(doubled_area) < 1e-12:
        return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)

    factor = 1.0 / (3.0 * doubled_area)
    return Point(cx * factor, cy * factor)


def ring_centroid(ring: Ring) -> Point:
    """Centroid of a ring."""
    return centroid(ring.points)


def triangulate(ring: Ring, area_tolerance: float = 1e-6) -> list[tuple[int, int, int]]:
    """Triangulate a simple outline by ear clipping.

    Args:
        ring: Outline to triangulate
        area_tolerance: Allowed relative difference between the outline area
            and the summed triangle area

    Returns:
        Triangles as index triples into ``ring.points``

    Raises:
        GeometryError: If the outline is degenerate, or the triangulation does
            not cover the outline (self-intersecting input)
    """
    if len(set(ring.points)) < 3:
        raise GeometryError(f"Outline needs at least 3 distinct points, got {len(set(ring.points))}")

    outline_area = polygon_area(ring.points)
    if outline_area == 0.0:
        raise GeometryError("Outline has zero area")

    vertices = np.array([p.to_tuple() for p in ring.points], dtype=np.float64).reshape(-1, 2)
    ring_end_indices = np.array([len(ring.points)], dtype=np.uint32)
    indices = earcut.triangulate_float64(vertices, ring_end_indices)
    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)

    if faces.shape[0] == 0:
        raise GeometryError("Triangulation produced no triangles")

    triangles = [(int(a), int(b), int(c)) for a, b, c in faces]
    covered = sum(
        polygon_area([ring.points[a], ring.points[b], ring.points[c]]) for a, b, c in triangles
    )
    if abs(covered - outline_area) > area_tolerance * outline_area:
        raise GeometryError(
            f"Triangulation covers area {covered:.6g} but the outline encloses "
            f"{outline_area:.6g}; the outline is probably self-intersecting"
        )

    return triangles
