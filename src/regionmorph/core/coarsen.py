"""Region coarsening and ring extraction.

The coarsener repeatedly merges the smallest region into one of its
neighbours until a target region count is reached. When the smallest region
has several neighbours one is picked at random from an injected generator,
so a fixed seed reproduces the same merge sequence.

Key classes:
- MergeStep: Record of one merge
- RegionCoarsener: Merges regions down to a target count

Key functions:
- merge_regions: Union of two adjacent regions
- extract_rings: Closed rings for every live region
"""

import random
from collections import defaultdict
from dataclasses import dataclass

from regionmorph.domain import ArcRef, Region, Ring, Topology
from regionmorph.exceptions import CoarsenError, GeometryError


@dataclass(frozen=True)
class MergeStep:
    """One merge performed during coarsening.

    Attributes:
        smallest: Id of the smallest region at the time of the merge
        neighbor: Id of the neighbour it was merged with
        merged: Id of the resulting region
        area: Area of the resulting region
    """

    smallest: int
    neighbor: int
    merged: int
    area: float


def _stitch(topology: Topology, refs: list[ArcRef]) -> list[ArcRef]:
    """Order directed arcs into one closed walk.

    Uses Hierholzer's algorithm so a boundary that touches itself at a
    vertex still comes out as a single walk.

    Raises:
        GeometryError: If the arcs do not form one connected closed walk
    """
    outgoing: dict[int, list[ArcRef]] = defaultdict(list)
    for ref in reversed(refs):
        outgoing[topology.endpoints(ref)[0]].append(ref)

    start = topology.endpoints(refs[0])[0]
    stack: list[tuple[int, ArcRef | None]] = [(start, None)]
    walk: list[ArcRef] = []

    while stack:
        vertex, via = stack[-1]
        if outgoing[vertex]:
            ref = outgoing[vertex].pop()
            stack.append((topology.endpoints(ref)[1], ref))
        else:
            stack.pop()
            if via is not None:
                walk.append(via)

    if len(walk) != len(refs):
        raise GeometryError(
            f"Merged boundary is not a single closed walk ({len(walk)} of {len(refs)} arcs)"
        )

    walk.reverse()
    return walk


def merge_regions(topology: Topology, a: Region, b: Region, region_id: int) -> Region:
    """Merge two adjacent regions into one.

    Arcs used by both regions are interior to the union and are dropped;
    the remaining arcs are stitched into one boundary walk starting from
    ``a``'s first surviving arc. The area is the exact sum of both areas.

    Args:
        topology: Topology the regions belong to
        a: First region
        b: Second region, adjacent to ``a``
        region_id: Id for the merged region

    Returns:
        New region; neither input is modified

    Raises:
        GeometryError: If the regions share no arc or the union is not one walk
    """
    shared = a.arc_indices() & b.arc_indices()
    if not shared:
        raise GeometryError(f"Regions {a.id} and {b.id} are not adjacent")

    remaining = [ref for ref in a.arcs + b.arcs if ref.index not in shared]
    if not remaining:
        raise GeometryError(f"Regions {a.id} and {b.id} cancel each other out")

    return Region(id=region_id, arcs=_stitch(topology, remaining), area=a.area + b.area)


class RegionCoarsener:
    """Merges smallest-area regions until a target count remains.

    Example:
        coarsener = RegionCoarsener(random.Random(7))
        steps = coarsener.coarsen(topology, 3)
        rings = extract_rings(topology)
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize the coarsener.

        Args:
            rng: Generator used to pick among several neighbours. A private
                unseeded generator is created when omitted.
        """
        self._rng = rng if rng is not None else random.Random()

    def coarsen(self, topology: Topology, target: int) -> list[MergeStep]:
        """Merge regions in place until exactly ``target`` remain.

        Args:
            topology: Topology to coarsen
            target: Number of regions to keep

        Returns:
            The merges performed, in order

        Raises:
            CoarsenError: If ``target`` is below 1 or not strictly smaller than
                the current region count, or the smallest region is isolated
        """
        regions = topology.regions
        available = len(regions)
        if target < 1 or target >= available:
            raise CoarsenError(target, available)

        next_id = max(region.id for region in regions) + 1
        steps: list[MergeStep] = []

        while len(regions) > target:
            smallest = regions.smallest()
            candidates = topology.neighbors(smallest)
            if not candidates:
                raise CoarsenError(
                    target,
                    len(regions),
                    reason=f"region {smallest.id} has no neighbour to merge with",
                )

            neighbor = self._rng.choice(candidates)
            merged = merge_regions(topology, smallest, neighbor, next_id)
            next_id += 1

            regions.remove(smallest)
            regions.remove(neighbor)
            regions.add(merged)
            steps.append(MergeStep(smallest.id, neighbor.id, merged.id, merged.area))

        return steps


def extract_rings(topology: Topology) -> list[Ring]:
    """Reconstruct one closed ring per live region, in collection order."""
    return [topology.region_ring(region) for region in topology.regions]
