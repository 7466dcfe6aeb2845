"""Tests for the morph pipeline and batch orchestration."""

import math
import re
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest

from regionmorph.config import CoarsenConfig, MatchConfig, MatchFallback, MorphSettings
from regionmorph.core.processor import MorphProcessor, MorphResult, morph_job
from regionmorph.domain import Ring, Shape
from regionmorph.exceptions import CoarsenError, GeometryError, MatchError, PathDataError
from regionmorph.io import MorphJob, parse_path

TRIANGLE = "M0 0 L10 0 L5 10 Z"
SMALL_TRIANGLE = "M0 0 L8 0 L4 6 Z"
SQUARE = "M0 0 L10 0 L10 10 L0 10 Z"
TWO_SQUARES = "M0 0 L4 0 L4 4 L0 4 Z M6 6 L9 6 L9 9 L6 9 Z"
THREE_TRIANGLES = "M0 0 L3 0 L0 3 Z M10 0 L13 0 L10 3 Z M5 10 L8 10 L5 13 Z"


def _star(points: int = 5, outer: float = 10.0, inner: float = 4.0) -> str:
    coords = []
    for i in range(points * 2):
        radius = outer if i % 2 == 0 else inner
        angle = math.pi * i / points
        coords.append(f"{radius * math.cos(angle):.4f} {radius * math.sin(angle):.4f}")
    return "M" + " L".join(coords) + " Z"


def _commands(path: str) -> list[str]:
    return re.findall(r"[MLZ]", path)


@pytest.fixture
def settings() -> MorphSettings:
    return MorphSettings(coarsen=CoarsenConfig(seed=7))


class TestMorphProcessor:
    """Tests for MorphProcessor.morph."""

    def test_single_triangle(self, settings: MorphSettings) -> None:
        """A triangle needs no coarsening and keeps its three vertices."""
        result = MorphProcessor(settings).morph_paths(TRIANGLE, SMALL_TRIANGLE)

        assert len(result.pairs) == 1
        assert result.merges == []
        assert _commands(result.start_path) == ["M", "L", "L", "Z"]
        assert _commands(result.end_path) == ["M", "L", "L", "Z"]
        assert result.point_count == 3

    def test_square_into_two_regions(self, settings: MorphSettings) -> None:
        result = MorphProcessor(settings).morph_paths(SQUARE, TWO_SQUARES)

        assert len(result.pairs) == 2
        assert len(result.merges) == 0
        assert _commands(result.start_path) == _commands(result.end_path)
        destination = parse_path(TWO_SQUARES)
        for pair, ring in zip(result.pairs, destination.subpaths):
            assert len(pair.source) == len(pair.target)
            assert len(pair.target) >= max(3, len(ring))
            assert pair.source.signed_area() * pair.target.signed_area() > 0

    def test_star_into_three_regions(self, settings: MorphSettings) -> None:
        result = MorphProcessor(settings).morph_paths(_star(), THREE_TRIANGLES)

        assert len(result.pairs) == 3
        assert len(result.merges) == 5
        assert _commands(result.start_path) == _commands(result.end_path)
        assert _commands(result.start_path).count("M") == 3
        destination = parse_path(THREE_TRIANGLES)
        for pair, ring in zip(result.pairs, destination.subpaths):
            assert len(pair.source) == len(pair.target) >= len(ring)

    def test_destination_order_preserved(self, settings: MorphSettings) -> None:
        """Target rings come out in destination subpath order."""
        result = MorphProcessor(settings).morph_paths(_star(), THREE_TRIANGLES)
        corners = [min(p.x for p in pair.target) for pair in result.pairs]
        assert corners == [0.0, 10.0, 5.0]

    def test_seed_reproduces_output(self, settings: MorphSettings) -> None:
        first = MorphProcessor(settings).morph_paths(_star(7), THREE_TRIANGLES)
        second = MorphProcessor(settings).morph_paths(_star(7), THREE_TRIANGLES)
        assert first.start_path == second.start_path
        assert first.end_path == second.end_path

    def test_calls_are_independent(self, settings: MorphSettings) -> None:
        processor = MorphProcessor(settings)
        first = processor.morph_paths(_star(7), THREE_TRIANGLES)
        processor.morph_paths(_star(6), TWO_SQUARES)
        again = processor.morph_paths(_star(7), THREE_TRIANGLES)
        assert first.start_path == again.start_path

    def test_multi_outline_source_rejected(self, settings: MorphSettings) -> None:
        with pytest.raises(GeometryError, match="exactly one outline"):
            MorphProcessor(settings).morph_paths(TWO_SQUARES, SQUARE)

    def test_empty_destination_rejected(self, settings: MorphSettings) -> None:
        source = Shape(subpaths=[Ring.from_points([(0, 0), (10, 0), (5, 10)])])
        with pytest.raises(GeometryError, match="no outlines"):
            MorphProcessor(settings).morph(source, Shape())

    def test_too_many_destination_outlines(self, settings: MorphSettings) -> None:
        with pytest.raises(CoarsenError):
            MorphProcessor(settings).morph_paths(TRIANGLE, TWO_SQUARES)

    def test_malformed_path(self, settings: MorphSettings) -> None:
        with pytest.raises(PathDataError):
            MorphProcessor(settings).morph_paths("M0 0 L", SQUARE)

    def test_exhaustive_ceiling_without_fallback(self) -> None:
        settings = MorphSettings(
            coarsen=CoarsenConfig(seed=1),
            match=MatchConfig(max_exhaustive_regions=2),
        )
        with pytest.raises(MatchError, match="limited to 2 regions"):
            MorphProcessor(settings).morph_paths(_star(), THREE_TRIANGLES)

    def test_greedy_fallback(self) -> None:
        settings = MorphSettings(
            coarsen=CoarsenConfig(seed=1),
            match=MatchConfig(max_exhaustive_regions=2, fallback=MatchFallback.GREEDY),
        )
        result = MorphProcessor(settings).morph_paths(_star(), THREE_TRIANGLES)
        assert len(result.pairs) == 3


class TestMorphResult:
    """Tests for MorphResult."""

    @pytest.fixture
    def result(self, settings: MorphSettings) -> MorphResult:
        return MorphProcessor(settings).morph_paths(SQUARE, TWO_SQUARES, name="squares")

    def test_interpolate_endpoints(self, result: MorphResult) -> None:
        assert result.interpolate(0.0) == result.start_path
        assert result.interpolate(1) == result.end_path

    def test_interpolate_keeps_commands(self, result: MorphResult) -> None:
        assert _commands(result.interpolate(0.5)) == _commands(result.start_path)

    @pytest.mark.parametrize("t", [-0.1, 1.5])
    def test_interpolate_out_of_range(self, result: MorphResult, t: float) -> None:
        with pytest.raises(ValueError, match=r"t must be in \[0, 1\]"):
            result.interpolate(t)

    def test_to_dict(self, result: MorphResult) -> None:
        data = result.to_dict()
        assert data["name"] == "squares"
        assert data["start"] == result.start_path
        assert data["end"] == result.end_path
        assert data["source"] == "M 0 0 L 10 0 L 10 10 L 0 10 Z"
        assert data["regions"] == 2
        assert data["points"] == result.point_count


class TestMorphJob:
    """Tests for the picklable worker function."""

    def test_success(self, settings: MorphSettings) -> None:
        job = MorphJob(name="tri", source=TRIANGLE, destination=SMALL_TRIANGLE)
        output = morph_job(job.to_dict(), settings.model_dump())

        assert "error" not in output
        assert output["name"] == "tri"
        assert output["regions"] == 1
        assert output["duration_ms"] >= 0

    def test_error_is_returned(self, settings: MorphSettings) -> None:
        job = MorphJob(name="bad", source=TWO_SQUARES, destination=SQUARE)
        output = morph_job(job.to_dict(), settings.model_dump())

        assert output["name"] == "bad"
        assert output["error_type"] == "GeometryError"
        assert "exactly one outline" in output["error"]
        assert "Traceback" in output["traceback"]

    def test_settings_roundtrip(self, settings: MorphSettings) -> None:
        """Settings survive the dict form used to reach worker processes."""
        job = MorphJob(name="star", source=_star(), destination=THREE_TRIANGLES)
        direct = MorphProcessor(settings).morph_paths(_star(), THREE_TRIANGLES, name="star")
        output = morph_job(job.to_dict(), settings.model_dump())
        assert output["start"] == direct.start_path


class TestProcessMany:
    """Tests for batch processing."""

    @patch("regionmorph.core.processor.ProcessPoolExecutor", ThreadPoolExecutor)
    def test_results_in_job_order(self, settings: MorphSettings) -> None:
        jobs = [
            MorphJob("a", TRIANGLE, SMALL_TRIANGLE),
            MorphJob("b", TWO_SQUARES, SQUARE),
            MorphJob("c", _star(), THREE_TRIANGLES),
        ]
        progress = []

        results, stats = MorphProcessor(settings).process_many(
            jobs,
            max_workers=2,
            progress_callback=lambda done, total, name, ok: progress.append((name, ok)),
        )

        assert [r["name"] for r in results] == ["a", "b", "c"]
        assert "error" in results[1]
        assert stats.processed_count == 2
        assert stats.error_count == 1
        assert stats.errors[0][0] == "b"
        assert sorted(progress) == [("a", True), ("b", False), ("c", True)]
        assert stats.duration_seconds >= 0

    @patch("regionmorph.core.processor.as_completed")
    @patch("regionmorph.core.processor.ProcessPoolExecutor")
    def test_executor_failure_reported(
        self,
        mock_executor_class: MagicMock,
        mock_as_completed: MagicMock,
        settings: MorphSettings,
    ) -> None:
        mock_future = MagicMock()
        mock_future.result.side_effect = RuntimeError("worker died")

        mock_executor = MagicMock()
        mock_executor.submit.return_value = mock_future
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor
        mock_as_completed.return_value = [mock_future]

        results, stats = MorphProcessor(settings).process_many(
            [MorphJob("a", TRIANGLE, SMALL_TRIANGLE)], max_workers=1
        )

        assert results[0]["error"] == "worker died"
        assert results[0]["error_type"] == "RuntimeError"
        assert stats.error_count == 1
        assert stats.processed_count == 0

    @patch("regionmorph.core.processor.as_completed")
    @patch("regionmorph.core.processor.ProcessPoolExecutor")
    def test_cancellation(
        self,
        mock_executor_class: MagicMock,
        mock_as_completed: MagicMock,
        settings: MorphSettings,
    ) -> None:
        mock_executor = MagicMock()
        mock_executor.submit.side_effect = [MagicMock(), MagicMock()]
        mock_executor.__enter__.return_value = mock_executor
        mock_executor.__exit__.return_value = None
        mock_executor_class.return_value = mock_executor
        mock_as_completed.side_effect = KeyboardInterrupt

        processor = MorphProcessor(settings)
        jobs = [MorphJob("a", TRIANGLE, SMALL_TRIANGLE), MorphJob("b", TRIANGLE, SMALL_TRIANGLE)]
        with pytest.raises(KeyboardInterrupt):
            processor.process_many(jobs, max_workers=1)

        assert processor.morph_logger.stats.was_cancelled
        assert processor.morph_logger.stats.cancelled_count == 2
        mock_executor.shutdown.assert_called_once_with(wait=True, cancel_futures=True)
