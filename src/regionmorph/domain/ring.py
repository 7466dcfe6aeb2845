"""Core geometric types for ring representation.

This module defines the fundamental geometric types used throughout regionmorph:
- Point: An immutable 2D point
- Ring: An immutable closed sequence of points
- WindingDirection: Enum for ring winding direction
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class WindingDirection(Enum):
    """Ring winding direction.

    Positive signed area (in a y-up coordinate system) is counter-clockwise,
    negative is clockwise. In a y-down system such as SVG the visual sense
    flips but the sign comparison used for alignment does not.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Ring:
    """A closed ring of points.

    The ring is implicitly closed: the last point connects back to the
    first. Orientation is encoded by the sign of the signed area.

    Attributes:
        points: Points forming the ring, without a repeated closing point
    """

    points: tuple[Point, ...]

    @classmethod
    def from_points(cls, points: Iterable[Point | tuple[float, float]]) -> "Ring":
        """Build a ring from points or (x, y) pairs.

        An explicit closing point equal to the first point is dropped.

        Args:
            points: Points or coordinate pairs

        Returns:
            Ring instance
        """
        pts = [p if isinstance(p, Point) else Point(float(p[0]), float(p[1])) for p in points]
        if len(pts) > 1 and pts[0] == pts[-1]:
            pts.pop()
        return cls(points=tuple(pts))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def is_empty(self) -> bool:
        """Check if the ring has no points."""
        return len(self.points) == 0

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Returns:
            Signed area of the ring, 0.0 for fewer than three points
        """
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return area / 2.0

    @property
    def direction(self) -> WindingDirection | None:
        """Winding direction, or None for a zero-area ring."""
        area = self.signed_area()
        if area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        if area < 0:
            return WindingDirection.CLOCKWISE
        return None

    def reversed(self) -> "Ring":
        """Return the ring with its traversal order reversed."""
        return Ring(points=tuple(reversed(self.points)))

    def rotated(self, offset: int) -> "Ring":
        """Return the ring cyclically rotated to start at ``offset``."""
        if not self.points:
            return self
        offset %= len(self.points)
        return Ring(points=self.points[offset:] + self.points[:offset])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ring":
        """Deserialize from dictionary."""
        return cls(points=tuple(Point.from_dict(p) for p in data["points"]))
