"""Path data parser.

Reads SVG path data into a Shape with one ring per subpath, using
svgpathtools for command expansion. Only the end point of each segment
becomes a ring vertex: curves and arcs contribute their end points and their
control geometry is dropped.
"""

import svgpathtools

from regionmorph.domain import Point, Ring, Shape
from regionmorph.exceptions import PathDataError


def _to_point(z: complex) -> Point:
    return Point(z.real, z.imag)


def _split_subpaths(path: svgpathtools.Path) -> list[list[Point]]:
    """Split parsed segments into vertex lists, one per subpath.

    A new subpath starts at a move-to discontinuity, or after a subpath has
    returned to its first point. Zero-length segments add no vertex.
    """
    subpaths: list[list[Point]] = []
    current: list[Point] = []
    for seg in path:
        start = _to_point(seg.start)
        closed = len(current) > 1 and current[-1] == current[0]
        if not current or current[-1] != start or closed:
            current = [start]
            subpaths.append(current)

        end = _to_point(seg.end)
        if current[-1] != end:
            current.append(end)
    return subpaths


def parse_path(data: str, name: str | None = None) -> Shape:
    """Parse path data into a Shape.

    Args:
        data: SVG path data
        name: Optional shape name

    Returns:
        Shape with one ring per subpath; subpaths with a single distinct
        point (a lone move-to) are dropped

    Raises:
        PathDataError: If the data is malformed

    Examples:
        >>> shape = parse_path("M0 0 h10 v10 h-10 z m20 0 l5 5 l-5 5 z")
        >>> [len(ring) for ring in shape.subpaths]
        [4, 3]
    """
    try:
        path = svgpathtools.parse_path(data)
    except (ValueError, IndexError) as e:
        raise PathDataError(data, str(e) or type(e).__name__) from e

    return Shape(
        subpaths=[Ring.from_points(points) for points in _split_subpaths(path) if len(points) > 1],
        name=name,
    )
