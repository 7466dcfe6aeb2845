"""Unit tests for path string output."""

import re

import pytest

from regionmorph.domain import AlignedPair, Ring
from regionmorph.io import PathStringEmitter, format_number


@pytest.fixture
def pairs() -> list[AlignedPair]:
    return [
        AlignedPair(
            source=Ring.from_points([(0, 0), (10, 0), (5, 10)]),
            target=Ring.from_points([(0, 0), (8, 0), (4, 6)]),
        ),
        AlignedPair(
            source=Ring.from_points([(1.25, 2.5), (3.125, 4.0), (0.3333333, -1)]),
            target=Ring.from_points([(20, 20), (22, 20), (21, 23)]),
        ),
    ]


class TestFormatNumber:
    """Tests for coordinate formatting."""

    @pytest.mark.parametrize(
        ("value", "precision", "expected"),
        [
            (10.0, 3, "10"),
            (2.5, 3, "2.5"),
            (1.23456, 3, "1.235"),
            (-0.0001, 3, "0"),
            (-0.0, 3, "0"),
            (-4.1, 3, "-4.1"),
            (1.5, 0, "2"),
            (100.0, 0, "100"),
        ],
    )
    def test_format(self, value: float, precision: int, expected: str) -> None:
        assert format_number(value, precision) == expected


class TestPathStringEmitter:
    """Tests for PathStringEmitter."""

    def test_format_ring(self) -> None:
        ring = Ring.from_points([(0, 0), (10, 0), (5, 10)])
        assert PathStringEmitter().format_ring(ring) == "M 0 0 L 10 0 L 5 10 Z"

    def test_empty_ring(self) -> None:
        assert PathStringEmitter().format_ring(Ring(points=())) == ""

    def test_rings_joined_with_space(self, pairs: list[AlignedPair]) -> None:
        start, end = PathStringEmitter().emit(pairs)
        assert start == "M 0 0 L 10 0 L 5 10 Z M 1.25 2.5 L 3.125 4 L 0.333 -1 Z"
        assert end == "M 0 0 L 8 0 L 4 6 Z M 20 20 L 22 20 L 21 23 Z"

    def test_same_command_sequence(self, pairs: list[AlignedPair]) -> None:
        start, end = PathStringEmitter().emit(pairs)
        assert re.findall(r"[MLZ]", start) == re.findall(r"[MLZ]", end)

    def test_idempotent(self, pairs: list[AlignedPair]) -> None:
        emitter = PathStringEmitter(precision=2)
        assert emitter.emit(pairs) == emitter.emit(pairs)

    def test_precision(self, pairs: list[AlignedPair]) -> None:
        start, _ = PathStringEmitter(precision=1).emit(pairs[1:])
        assert start == "M 1.2 2.5 L 3.1 4 L 0.3 -1 Z"

    def test_no_pairs(self) -> None:
        assert PathStringEmitter().emit([]) == ("", "")
