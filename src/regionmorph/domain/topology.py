"""Arc-indexed topology of polygonal regions.

Regions never store coordinates directly. Each region is an ordered walk
over directed references into a shared arc table, so two adjacent regions
share one arc traversed in opposite directions. Merging two regions drops
the arcs they share and keeps the rest.

Key classes:
- Arc: Undirected edge between two point indices, stored once
- ArcRef: Directed reference into the arc table
- Region: One polygon tracked through coarsening
- AreaOrderedRegions: Region collection kept sorted by area
- Topology: Points, arcs and regions together
"""

from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from dataclasses import dataclass, field

from regionmorph.domain.ring import Point, Ring


@dataclass(frozen=True, slots=True)
class Arc:
    """An edge between two point indices.

    Stored in the traversal order of the first triangle that used it.

    Attributes:
        start: Index of the first point
        end: Index of the second point
    """

    start: int
    end: int

    @property
    def key(self) -> tuple[int, int]:
        """Canonical (low, high) index pair identifying the edge."""
        return (self.start, self.end) if self.start < self.end else (self.end, self.start)


@dataclass(frozen=True, slots=True)
class ArcRef:
    """A directed reference to an arc.

    Attributes:
        index: Position of the arc in the topology arc table
        reversed: True when the arc is traversed from end to start
    """

    index: int
    reversed: bool = False


@dataclass(eq=False)
class Region:
    """A polygon made of directed arcs.

    Regions compare by identity; two distinct regions with equal arcs are
    still different members of a topology.

    Attributes:
        id: Identifier unique within its topology
        arcs: Directed arc references forming one closed boundary walk
        area: Unsigned area, additive under merging
    """

    id: int
    arcs: list[ArcRef]
    area: float

    def arc_indices(self) -> set[int]:
        """Get the set of arc table indices this region uses."""
        return {ref.index for ref in self.arcs}

    def shares_arc_with(self, other: "Region") -> bool:
        """Check whether two regions are adjacent."""
        return not self.arc_indices().isdisjoint(other.arc_indices())


class AreaOrderedRegions:
    """Region collection kept sorted ascending by area.

    Insertion uses binary search on a parallel key list. A region whose area
    ties existing ones is placed before them.
    """

    def __init__(self, regions: list[Region] | None = None) -> None:
        self._regions: list[Region] = []
        self._keys: list[float] = []
        for region in sorted(regions or [], key=lambda r: r.area):
            self._regions.append(region)
            self._keys.append(region.area)

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __getitem__(self, index: int) -> Region:
        return self._regions[index]

    def __contains__(self, region: object) -> bool:
        return any(r is region for r in self._regions)

    def smallest(self) -> Region:
        """Get the region with the smallest area.

        Raises:
            IndexError: If the collection is empty
        """
        return self._regions[0]

    def add(self, region: Region) -> int:
        """Insert a region preserving ascending order.

        Returns:
            The position the region was inserted at
        """
        index = bisect_left(self._keys, region.area)
        self._keys.insert(index, region.area)
        self._regions.insert(index, region)
        return index

    def remove(self, region: Region) -> None:
        """Remove a region by identity.

        Raises:
            ValueError: If the region is not in the collection
        """
        lo = bisect_left(self._keys, region.area)
        hi = bisect_right(self._keys, region.area)
        for i in range(lo, hi):
            if self._regions[i] is region:
                del self._regions[i]
                del self._keys[i]
                return
        raise ValueError(f"Region {region.id} is not in the collection")

    def areas(self) -> list[float]:
        """Get region areas in collection order."""
        return list(self._keys)

    def total_area(self) -> float:
        """Sum of all region areas."""
        return sum(self._keys)


@dataclass
class Topology:
    """Regions over a shared arc table.

    Attributes:
        points: Coordinates referenced by arc endpoints
        arcs: Deduplicated arc table
        regions: Live regions sorted by area
    """

    points: list[Point]
    arcs: list[Arc] = field(default_factory=list)
    regions: AreaOrderedRegions = field(default_factory=AreaOrderedRegions)

    def endpoints(self, ref: ArcRef) -> tuple[int, int]:
        """Resolve a directed arc reference to (from, to) point indices."""
        arc = self.arcs[ref.index]
        if ref.reversed:
            return (arc.end, arc.start)
        return (arc.start, arc.end)

    def neighbors(self, region: Region) -> list[Region]:
        """Get regions sharing at least one arc with ``region``.

        Returns:
            Adjacent regions in collection order
        """
        return [
            other for other in self.regions if other is not region and region.shares_arc_with(other)
        ]

    def region_ring(self, region: Region) -> Ring:
        """Reconstruct the closed ring bounding a region.

        Each directed arc contributes its starting point; the walk is closed,
        so the end of one arc is the start of the next.
        """
        return Ring(points=tuple(self.points[self.endpoints(ref)[0]] for ref in region.arcs))

    def total_area(self) -> float:
        """Sum of all live region areas."""
        return self.regions.total_area()
