"""Topology construction from a triangle set.

Converts triangles over a shared point list into an arc-indexed topology
with one region per triangle. Edges shared by two triangles are stored
once and referenced in opposite directions.
"""

from collections.abc import Sequence

from regionmorph.core.geometry import polygon_area, signed_area
from regionmorph.domain import Arc, ArcRef, AreaOrderedRegions, Point, Region, Topology

Edge = tuple[int, int]
Triangle = tuple[Edge, Edge, Edge]


def triangles_from_indices(faces: Sequence[tuple[int, int, int]]) -> list[Triangle]:
    """Expand index triples into edge triples ``[a, b], [b, c], [c, a]``."""
    return [((a, b), (b, c), (c, a)) for a, b, c in faces]


def _oriented(triangle: Triangle, points: Sequence[Point]) -> Triangle:
    """Return the triangle wound counter-clockwise (positive area).

    Zero-area triangles are returned unchanged.
    """
    vertices = [points[edge[0]] for edge in triangle]
    if signed_area(vertices) >= 0:
        return triangle
    return tuple((b, a) for a, b in reversed(triangle))  # type: ignore[return-value]


def build_topology(triangles: Sequence[Triangle], points: Sequence[Point]) -> Topology:
    """Build an arc-indexed topology with one region per triangle.

    Args:
        triangles: Triangles as three (from, to) point-index edges
        points: Coordinates referenced by the edges

    Returns:
        Topology with regions sorted ascending by area

    Examples:
        >>> pts = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> topo = build_topology(triangles_from_indices([(0, 1, 2), (0, 2, 3)]), pts)
        >>> len(topo.arcs), len(topo.regions)
        (5, 2)
    """
    arc_indices: dict[Edge, int] = {}
    arcs: list[Arc] = []
    regions: list[Region] = []

    for region_id, triangle in enumerate(triangles):
        refs: list[ArcRef] = []
        for start, end in _oriented(triangle, points):
            arc = Arc(start, end)
            if arc.key in arc_indices:
                index = arc_indices[arc.key]
                refs.append(ArcRef(index, reversed=arcs[index] != arc))
            else:
                arc_indices[arc.key] = len(arcs)
                refs.append(ArcRef(len(arcs)))
                arcs.append(arc)

        area = polygon_area([points[edge[0]] for edge in triangle])
        regions.append(Region(id=region_id, arcs=refs, area=area))

    return Topology(points=list(points), arcs=arcs, regions=AreaOrderedRegions(regions))
