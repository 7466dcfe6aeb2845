"""Unit tests for the path data parser."""

import pytest

from regionmorph.domain import Point
from regionmorph.exceptions import PathDataError
from regionmorph.io import parse_path


class TestParsePath:
    """Tests for parse_path."""

    def test_absolute_lines(self) -> None:
        shape = parse_path("M0 0 L10 0 L5 10 Z", name="tri")
        assert shape.name == "tri"
        assert len(shape) == 1
        assert shape.subpaths[0].points == (Point(0, 0), Point(10, 0), Point(5, 10))

    def test_relative_commands(self) -> None:
        shape = parse_path("m10 10 h5 v5 h-5 z")
        assert shape.subpaths[0].points == (
            Point(10, 10),
            Point(15, 10),
            Point(15, 15),
            Point(10, 15),
        )

    def test_multiple_subpaths(self) -> None:
        shape = parse_path("M0 0 h10 v10 h-10 z m20 0 l5 5 l-5 5 z")
        assert [len(ring) for ring in shape.subpaths] == [4, 3]
        assert shape.subpaths[1][0] == Point(20, 0)

    def test_implicit_line_to_after_move(self) -> None:
        shape = parse_path("M0,0 10,0 10,10")
        assert shape.subpaths[0].points == (Point(0, 0), Point(10, 0), Point(10, 10))

    def test_implicit_relative_line_to_after_move(self) -> None:
        shape = parse_path("m1 1 2 0 0 2")
        assert shape.subpaths[0].points == (Point(1, 1), Point(3, 1), Point(3, 3))

    def test_curves_keep_end_points(self) -> None:
        shape = parse_path("M0 0 C1 1 2 1 3 0 Q4 -1 5 0 S7 1 8 0 T10 0 L5 -5 Z")
        assert shape.subpaths[0].points == (
            Point(0, 0),
            Point(3, 0),
            Point(5, 0),
            Point(8, 0),
            Point(10, 0),
            Point(5, -5),
        )

    def test_arc_end_point(self) -> None:
        shape = parse_path("M0 0 A5 5 0 0 1 10 0 a5 5 0 1 0 -5 5 Z")
        assert shape.subpaths[0].points == (Point(0, 0), Point(10, 0), Point(5, 5))

    def test_compact_numbers(self) -> None:
        shape = parse_path("M.5.5L1e1-2.5l-1-1z")
        assert shape.subpaths[0].points == (Point(0.5, 0.5), Point(10, -2.5), Point(9, -3.5))

    def test_drawing_after_close_starts_new_subpath(self) -> None:
        shape = parse_path("M0 0 L4 0 L4 4 Z L0 4 L-4 0")
        assert len(shape) == 2
        assert shape.subpaths[1].points == (Point(0, 0), Point(0, 4), Point(-4, 0))

    def test_move_back_to_closed_start_is_new_subpath(self) -> None:
        shape = parse_path("M0 0 L4 0 L0 4 Z M0 0 L-4 0 L0 -4 Z")
        assert len(shape) == 2
        assert shape.subpaths[1].points == (Point(0, 0), Point(-4, 0), Point(0, -4))

    def test_error_keeps_data(self) -> None:
        with pytest.raises(PathDataError) as exc_info:
            parse_path("M0 0 L1")
        assert exc_info.value.data == "M0 0 L1"

    def test_duplicate_points_skipped(self) -> None:
        shape = parse_path("M0 0 L0 0 L5 0 L5 0 L5 5 L0 0 Z")
        assert shape.subpaths[0].points == (Point(0, 0), Point(5, 0), Point(5, 5))

    def test_lone_move_dropped(self) -> None:
        shape = parse_path("M3 3 M0 0 L1 0 L0 1 Z")
        assert len(shape) == 1

    def test_empty_data(self) -> None:
        assert parse_path("   ").is_empty()

    @pytest.mark.parametrize(
        "data",
        [
            "0 0 L1 1",
            "M0 0 L1",
            "M0 0 L1 1 Z 5",
            "M0 0 L",
        ],
    )
    def test_malformed(self, data: str) -> None:
        with pytest.raises(PathDataError):
            parse_path(data)
