"""Unit tests for topology construction."""

import pytest

from regionmorph.core.topology import build_topology, triangles_from_indices
from regionmorph.domain import Point


@pytest.fixture
def square_points() -> list[Point]:
    return [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


class TestTrianglesFromIndices:
    """Tests for index triple expansion."""

    def test_edges_close_the_triangle(self) -> None:
        assert triangles_from_indices([(0, 1, 2)]) == [((0, 1), (1, 2), (2, 0))]


class TestBuildTopology:
    """Tests for build_topology."""

    def test_shared_edge_stored_once(self, square_points: list[Point]) -> None:
        topology = build_topology(triangles_from_indices([(0, 1, 2), (0, 2, 3)]), square_points)
        assert len(topology.arcs) == 5
        assert len({arc.key for arc in topology.arcs}) == 5

    def test_shared_edge_referenced_in_opposite_directions(
        self, square_points: list[Point]
    ) -> None:
        topology = build_topology(triangles_from_indices([(0, 1, 2), (0, 2, 3)]), square_points)
        first, second = list(topology.regions)
        shared = first.arc_indices() & second.arc_indices()
        assert len(shared) == 1

        index = shared.pop()
        (ref_a,) = [ref for ref in first.arcs if ref.index == index]
        (ref_b,) = [ref for ref in second.arcs if ref.index == index]
        assert topology.endpoints(ref_a) == tuple(reversed(topology.endpoints(ref_b)))

    def test_regions_are_counter_clockwise_walks(self, square_points: list[Point]) -> None:
        """Clockwise input triangles are rewound so every region is a closed walk."""
        topology = build_topology(triangles_from_indices([(0, 2, 1), (0, 3, 2)]), square_points)
        for region in topology.regions:
            ring = topology.region_ring(region)
            assert ring.signed_area() > 0
            for current, following in zip(region.arcs, region.arcs[1:] + region.arcs[:1]):
                assert topology.endpoints(current)[1] == topology.endpoints(following)[0]

    def test_region_areas(self, square_points: list[Point]) -> None:
        topology = build_topology(triangles_from_indices([(0, 1, 2), (0, 2, 3)]), square_points)
        assert topology.regions.areas() == [50.0, 50.0]
        assert topology.total_area() == 100.0

    def test_regions_sorted_by_area(self) -> None:
        points = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 5)]
        topology = build_topology(triangles_from_indices([(0, 1, 2), (0, 2, 3)]), points)
        areas = topology.regions.areas()
        assert areas == sorted(areas)
        assert topology.regions.smallest().id == 1

    def test_region_ids_follow_triangle_order(self, square_points: list[Point]) -> None:
        topology = build_topology(triangles_from_indices([(0, 1, 2), (0, 2, 3)]), square_points)
        assert sorted(region.id for region in topology.regions) == [0, 1]
