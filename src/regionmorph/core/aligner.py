"""Ring alignment for point-to-point morphing.

Given a matched source/target ring pair, the aligner produces two rings with
the same number of points, the same winding, and a start point chosen so
that corresponding points travel as little as possible. Steps run strictly
in order:

1. Orientation: reverse the source if the windings disagree
2. Bisection: split long edges of both rings at their midpoints
3. Equalization: resample the shorter ring by even arc-length spacing
4. Winding: rotate the source to the start offset with least squared travel
"""

from collections.abc import Sequence

from regionmorph.core.geometry import (
    distance,
    perimeter,
    point_between,
    squared_distance,
)
from regionmorph.domain import AlignedPair, Point, Ring
from regionmorph.exceptions import AlignError


def orient(source: Ring, target: Ring) -> Ring:
    """Reverse ``source`` if its winding is opposite to ``target``'s."""
    if None not in (source.direction, target.direction) and source.direction != target.direction:
        return source.reversed()
    return source


def bisect_segments(points: Sequence[Point], threshold: float) -> list[Point]:
    """Split every edge longer than ``threshold``, closing edge included.

    Repeated midpoint bisection of an edge ends with 2^k equal pieces, k being
    the smallest count that brings each piece within the threshold, so the
    pieces are inserted directly.

    Args:
        points: Ring points
        threshold: Maximum edge length to keep

    Returns:
        New point list with no edge longer than ``threshold``
    """
    n = len(points)
    if n < 2:
        return list(points)

    result: list[Point] = []
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        result.append(a)

        length = distance(a, b)
        pieces = 1
        while length / pieces > threshold:
            pieces *= 2
        for j in range(1, pieces):
            result.append(point_between(a, b, j / pieces))

    return result


def add_points(points: Sequence[Point], count: int) -> list[Point]:
    """Insert ``count`` points spaced evenly along the ring's perimeter.

    The first point goes half a step from the start; each following one a
    full step (perimeter / count) further, measured along the original
    outline. A ring with no length repeats its position.

    Args:
        points: Ring points
        count: Number of points to add

    Returns:
        New point list of length ``len(points) + count``
    """
    ring = list(points)
    if count <= 0 or not ring:
        return ring

    desired = len(ring) + count
    total = perimeter(ring)
    if total == 0.0:
        return ring + [ring[0]] * count

    step = total / count
    i = 0
    cursor = 0.0
    insert_at = step / 2

    while len(ring) < desired:
        if i >= len(ring):
            # Rounding at the very end of the outline
            ring.extend([ring[-1]] * (desired - len(ring)))
            break

        a = ring[i]
        b = ring[(i + 1) % len(ring)]
        segment = distance(a, b)

        if insert_at <= cursor + segment:
            ring.insert(i + 1, point_between(a, b, (insert_at - cursor) / segment))
            insert_at += step
            continue

        cursor += segment
        i += 1

    return ring


def rotation_cost(source: Sequence[Point], target: Sequence[Point], offset: int) -> float:
    """Sum of squared distances from ``source`` rotated by ``offset`` to ``target``."""
    n = len(source)
    return sum(squared_distance(source[(offset + i) % n], target[i]) for i in range(n))


def best_rotation(source: Sequence[Point], target: Sequence[Point]) -> tuple[int, float]:
    """Find the rotation offset of ``source`` closest to ``target``.

    Args:
        source: Points to rotate
        target: Points to compare against, same length as ``source``

    Returns:
        Tuple of (offset, cost); the first offset wins ties
    """
    best_offset = 0
    best_cost = float("inf")
    for offset in range(len(source)):
        cost = rotation_cost(source, target, offset)
        if cost < best_cost:
            best_cost = cost
            best_offset = offset
    return best_offset, best_cost


class RingAligner:
    """Aligns matched ring pairs for interpolation.

    Example:
        aligner = RingAligner(bisect_threshold=25.0)
        pair = aligner.align(source_ring, target_ring)
        assert len(pair.source) == len(pair.target)
    """

    def __init__(self, bisect_threshold: float = 25.0) -> None:
        """Initialize the aligner.

        Args:
            bisect_threshold: Maximum edge length after bisection
        """
        if bisect_threshold <= 0:
            raise ValueError("bisect_threshold must be positive")
        self.bisect_threshold = bisect_threshold

    def align(self, source: Ring, target: Ring) -> AlignedPair:
        """Align ``source`` to ``target``.

        Args:
            source: Ring the morph starts from
            target: Ring the morph ends at

        Returns:
            AlignedPair with equal point counts and matching winding

        Raises:
            AlignError: If either ring is empty
        """
        if source.is_empty() or target.is_empty():
            raise AlignError(
                f"rings must not be empty (source has {len(source)} points, "
                f"target has {len(target)})"
            )

        source = orient(source, target)

        a = bisect_segments(source.points, self.bisect_threshold)
        b = bisect_segments(target.points, self.bisect_threshold)

        if len(a) < len(b):
            a = add_points(a, len(b) - len(a))
        elif len(b) < len(a):
            b = add_points(b, len(a) - len(b))

        offset, _ = best_rotation(a, b)
        return AlignedPair(
            source=Ring(points=tuple(a)).rotated(offset),
            target=Ring(points=tuple(b)),
        )
