"""Region matching by minimum total cost.

Finds the ordering of source regions that pairs best with a fixed ordering
of destination regions. The cost of a pair and the search used to find the
best assignment are both pluggable; the default is squared centroid distance
searched exhaustively, which is only practical for small region counts.

Key classes:
- Assignment: A permutation and its total cost
- AssignmentStrategy: Protocol for assignment solvers
- ExhaustiveAssignment: N! search with a hard size ceiling
- GreedyAssignment: Nearest unused source per destination
- RegionMatcher: Builds the cost matrix and applies a strategy
"""

import itertools
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from regionmorph.core.geometry import ring_centroid, squared_distance
from regionmorph.domain import Ring
from regionmorph.exceptions import MatchError, MatchTimeoutError

CostFunction = Callable[[Ring, Ring], float]
CostMatrix = Sequence[Sequence[float]]

# Permutations evaluated between deadline checks
_DEADLINE_CHECK_INTERVAL = 1024


def centroid_cost(a: Ring, b: Ring) -> float:
    """Squared distance between the centroids of two rings."""
    return squared_distance(ring_centroid(a), ring_centroid(b))


@dataclass(frozen=True)
class Assignment:
    """Result of a region assignment.

    Attributes:
        order: ``order[i]`` is the source index paired with destination ``i``
        cost: Total cost of the assignment
        strategy: Name of the strategy that produced it
    """

    order: tuple[int, ...]
    cost: float
    strategy: str = "exhaustive"

    def apply(self, sources: Sequence[Ring]) -> list[Ring]:
        """Reorder ``sources`` to follow the destination order."""
        return [sources[i] for i in self.order]


class AssignmentStrategy(Protocol):
    """Solves a square assignment problem over a cost matrix.

    ``costs[s][d]`` is the cost of pairing source ``s`` with destination ``d``.
    """

    name: str

    def solve(self, costs: CostMatrix) -> Assignment: ...


class ExhaustiveAssignment:
    """Tries every assignment and keeps the cheapest.

    Permutations are visited in lexicographic order and the total is only
    compared once an assignment is complete, so among equal-cost assignments
    the first one visited wins.
    """

    name = "exhaustive"

    def __init__(self, max_size: int = 8, timeout_seconds: float | None = None) -> None:
        """Initialize the strategy.

        Args:
            max_size: Largest problem size accepted; beyond it the N! search
                is refused rather than attempted
            timeout_seconds: Optional deadline for a single search
        """
        self.max_size = max_size
        self.timeout_seconds = timeout_seconds

    def solve(self, costs: CostMatrix) -> Assignment:
        """Find the minimum-cost assignment.

        Raises:
            MatchError: If the problem is larger than ``max_size``
            MatchTimeoutError: If the deadline passes during the search
        """
        n = len(costs)
        if n > self.max_size:
            raise MatchError(
                n,
                n,
                f"exhaustive matching is limited to {self.max_size} regions",
            )

        deadline = (
            time.monotonic() + self.timeout_seconds if self.timeout_seconds is not None else None
        )
        best_order: tuple[int, ...] = tuple(range(n))
        best_cost = float("inf")

        for count, order in enumerate(itertools.permutations(range(n))):
            if deadline is not None and count % _DEADLINE_CHECK_INTERVAL == 0:
                if time.monotonic() > deadline:
                    raise MatchTimeoutError(n, self.timeout_seconds or 0.0)

            total = sum(costs[source][dest] for dest, source in enumerate(order))
            if total < best_cost:
                best_cost = total
                best_order = order

        return Assignment(order=best_order, cost=best_cost, strategy=self.name)


class GreedyAssignment:
    """Pairs each destination, in order, with the cheapest unused source.

    Runs in O(N^2) and is not optimal; it exists as a bounded fallback when
    the exhaustive search is out of reach.
    """

    name = "greedy"

    def solve(self, costs: CostMatrix) -> Assignment:
        """Build an assignment greedily."""
        n = len(costs)
        unused = list(range(n))
        order: list[int] = []
        total = 0.0

        for dest in range(n):
            source = min(unused, key=lambda s: costs[s][dest])
            unused.remove(source)
            order.append(source)
            total += costs[source][dest]

        return Assignment(order=tuple(order), cost=total, strategy=self.name)


class RegionMatcher:
    """Matches source regions to destination regions.

    Example:
        matcher = RegionMatcher()
        ordered_sources = matcher.match(sources, destinations)
    """

    def __init__(
        self,
        strategy: AssignmentStrategy | None = None,
        cost: CostFunction = centroid_cost,
    ) -> None:
        """Initialize the matcher.

        Args:
            strategy: Assignment solver (exhaustive search by default)
            cost: Cost of pairing one source ring with one destination ring
        """
        self.strategy = strategy if strategy is not None else ExhaustiveAssignment()
        self.cost = cost

    def cost_matrix(self, sources: Sequence[Ring], destinations: Sequence[Ring]) -> list[list[float]]:
        """Pairwise costs, ``matrix[s][d]``."""
        return [[self.cost(a, b) for b in destinations] for a in sources]

    def assign(self, sources: Sequence[Ring], destinations: Sequence[Ring]) -> Assignment:
        """Find the best assignment of sources to destinations.

        Raises:
            MatchError: If the lists differ in length, or the strategy refuses
        """
        if len(sources) != len(destinations):
            raise MatchError(
                len(sources),
                len(destinations),
                "region counts must be equal",
            )
        return self.strategy.solve(self.cost_matrix(sources, destinations))

    def match(self, sources: Sequence[Ring], destinations: Sequence[Ring]) -> list[Ring]:
        """Reorder ``sources`` so ``sources[i]`` pairs with ``destinations[i]``."""
        return self.assign(sources, destinations).apply(sources)
