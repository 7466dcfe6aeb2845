"""Shape-pair morph pipeline and batch orchestration.

This module runs the full pipeline for one shape pair:

    triangulate source -> build topology -> coarsen to the destination's
    subpath count -> extract rings -> match by centroid -> align -> emit

and runs independent shape pairs in parallel using ProcessPoolExecutor.

Key components:
- MorphResult: Aligned pairs with their start/end path strings
- morph_job: Top-level picklable function for parallel execution
- MorphProcessor: Pipeline orchestrator
"""

import random
import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

import structlog

from regionmorph.config import MatchFallback, MorphSettings, get_default_settings
from regionmorph.core.aligner import RingAligner
from regionmorph.core.coarsen import MergeStep, RegionCoarsener, extract_rings
from regionmorph.core.geometry import triangulate
from regionmorph.core.matcher import (
    Assignment,
    ExhaustiveAssignment,
    GreedyAssignment,
    RegionMatcher,
)
from regionmorph.core.topology import build_topology, triangles_from_indices
from regionmorph.domain import AlignedPair, Ring, Shape
from regionmorph.exceptions import GeometryError, MatchError, RegionMorphError
from regionmorph.io import MorphJob, PathStringEmitter, parse_path
from regionmorph.utils import MorphLogger, MorphStats


@dataclass
class MorphResult:
    """Output of one shape-pair morph.

    Attributes:
        pairs: Aligned ring pairs, in destination subpath order
        start_path: Path string of the source side
        end_path: Path string of the destination side
        source_path: The source outline as a single ring, for showing the
            shape without region seams once the morph has finished
        merges: Merges performed during coarsening
        name: Label of the morph
        precision: Decimals used when formatting coordinates
    """

    pairs: list[AlignedPair]
    start_path: str
    end_path: str
    source_path: str
    merges: list[MergeStep] = field(default_factory=list)
    name: str | None = None
    precision: int = 3

    @property
    def point_count(self) -> int:
        """Total points per side across all pairs."""
        return sum(len(pair) for pair in self.pairs)

    def interpolate(self, t: float) -> str:
        """Path string at fraction ``t`` of the morph.

        Args:
            t: 0.0 gives ``start_path``, 1.0 gives ``end_path``

        Raises:
            ValueError: If ``t`` is outside [0, 1]
        """
        t = float(t)
        if t < 0.0 or t > 1.0:
            raise ValueError("t must be in [0, 1].")
        emitter = PathStringEmitter(self.precision)
        return emitter.format_rings(pair.interpolate(t) for pair in self.pairs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the path strings and summary counts."""
        return {
            "name": self.name,
            "start": self.start_path,
            "end": self.end_path,
            "source": self.source_path,
            "regions": len(self.pairs),
            "points": self.point_count,
            "merges": len(self.merges),
        }


def morph_job(job_dict: dict[str, Any], settings_dict: dict[str, Any]) -> dict[str, Any]:
    """Morph a single shape pair.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor.

    Args:
        job_dict: Serialized job (from MorphJob.to_dict())
        settings_dict: Serialized settings (from MorphSettings.model_dump())

    Returns:
        Dictionary containing either:
        - Success: MorphResult.to_dict() plus "duration_ms"
        - Error: {"name", "error", "error_type", "traceback", "duration_ms"}
    """
    start_time = time.time()
    name = job_dict.get("name", "unknown")

    try:
        job = MorphJob.from_dict(job_dict)
        processor = MorphProcessor(MorphSettings.model_validate(settings_dict))
        result = processor.morph_paths(job.source, job.destination, name=job.name)

        output = result.to_dict()
        output["duration_ms"] = (time.time() - start_time) * 1000
        return output

    except Exception as e:
        return {
            "name": name,
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class MorphProcessor:
    """Orchestrates shape-pair morphing.

    Each call to ``morph`` creates its own random generator from the
    configured seed, so calls are independent and a fixed seed reproduces
    the same output.

    Example:
        settings = MorphSettings()
        processor = MorphProcessor(settings)
        result = processor.morph_paths("M0 0 L10 0 L5 10 Z", "M0 0 L8 0 L4 6 Z")
        print(result.start_path, result.end_path)
    """

    def __init__(
        self,
        config: MorphSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Settings (defaults when omitted)
            logger: Logger to report to (module logger when omitted)
        """
        self.config = config if config is not None else get_default_settings()
        self.logger = logger if logger is not None else structlog.get_logger("regionmorph")
        self.morph_logger = MorphLogger(self.logger)

        match = self.config.match
        self.matcher = RegionMatcher(
            strategy=ExhaustiveAssignment(
                max_size=match.max_exhaustive_regions,
                timeout_seconds=match.timeout_seconds,
            )
        )
        self.fallback_matcher = RegionMatcher(strategy=GreedyAssignment())
        self.aligner = RingAligner(bisect_threshold=self.config.align.bisect_threshold)
        self.emitter = PathStringEmitter(precision=self.config.output.precision)

    def coarsen_outline(
        self,
        outline: Ring,
        target: int,
        rng: random.Random,
    ) -> tuple[list[Ring], list[MergeStep], int]:
        """Triangulate an outline and coarsen it to ``target`` regions.

        A triangulation that already has ``target`` triangles is used as is.

        Args:
            outline: Source outline
            target: Number of regions wanted
            rng: Generator for the neighbour tie-break

        Returns:
            Tuple of (region rings, merges performed, triangle count)

        Raises:
            GeometryError: If the outline cannot be triangulated
            CoarsenError: If the triangulation has fewer than ``target`` triangles
        """
        faces = triangulate(outline, area_tolerance=self.config.geometry.area_tolerance)
        topology = build_topology(triangles_from_indices(faces), outline.points)

        steps: list[MergeStep] = []
        if len(topology.regions) != target:
            steps = RegionCoarsener(rng).coarsen(topology, target)

        return extract_rings(topology), steps, len(faces)

    def match_regions(self, sources: Sequence[Ring], destinations: Sequence[Ring]) -> Assignment:
        """Match source regions to destination regions.

        Uses the exhaustive matcher, switching to the greedy matcher only when
        the greedy fallback is configured and the exhaustive search is refused
        or times out.

        Raises:
            MatchError: If counts differ, or exhaustive matching is unavailable
                and no fallback is configured
        """
        try:
            return self.matcher.assign(sources, destinations)
        except MatchError as e:
            if (
                len(sources) != len(destinations)
                or self.config.match.fallback != MatchFallback.GREEDY
            ):
                raise
            self.logger.warning(
                "Exhaustive matching unavailable, using greedy fallback",
                regions=len(sources),
                reason=e.reason,
            )
            return self.fallback_matcher.assign(sources, destinations)

    def morph(self, source: Shape, destination: Shape) -> MorphResult:
        """Morph a single-outline source into a destination shape.

        Args:
            source: Shape with exactly one outline
            destination: Shape with one or more sub-outlines

        Returns:
            MorphResult with one aligned pair per destination sub-outline

        Raises:
            GeometryError: If either shape is unusable
            CoarsenError: If the source cannot be split into enough regions
            MatchError: If regions cannot be matched
            AlignError: If a ring pair cannot be aligned
        """
        start_time = time.time()
        name = source.name or destination.name or "morph"

        try:
            outline = source.outline()
            destinations = destination.subpaths
            if not destinations:
                raise GeometryError("Destination shape has no outlines")

            self.morph_logger.log_morph_start(name, len(outline), len(destinations))

            rng = random.Random(self.config.coarsen.seed)
            pieces, steps, triangle_count = self.coarsen_outline(outline, len(destinations), rng)
            self.morph_logger.log_coarsening(name, triangle_count, len(pieces), len(steps))

            assignment = self.match_regions(pieces, destinations)
            self.morph_logger.log_match(name, assignment.strategy, assignment.cost)

            pairs = [
                self.aligner.align(piece, target)
                for piece, target in zip(assignment.apply(pieces), destinations)
            ]
            start_path, end_path = self.emitter.emit(pairs)

        except RegionMorphError as e:
            self.morph_logger.log_morph_error(name, e)
            raise

        result = MorphResult(
            pairs=pairs,
            start_path=start_path,
            end_path=end_path,
            source_path=self.emitter.format_ring(outline),
            merges=steps,
            name=name,
            precision=self.config.output.precision,
        )
        self.morph_logger.log_morph_complete(
            name,
            points=result.point_count,
            merges=len(steps),
            duration_ms=(time.time() - start_time) * 1000,
        )
        return result

    def morph_paths(
        self,
        source_data: str,
        destination_data: str,
        name: str | None = None,
    ) -> MorphResult:
        """Parse two path data strings and morph them.

        Raises:
            PathDataError: If either string is malformed
        """
        source = parse_path(source_data, name=name)
        destination = parse_path(destination_data, name=name)
        return self.morph(source, destination)

    def process_many(
        self,
        jobs: Sequence[MorphJob],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[list[dict[str, Any]], MorphStats]:
        """Morph many shape pairs in parallel worker processes.

        A failing job is reported in its result entry and does not affect
        the others.

        Args:
            jobs: Shape pairs to morph
            max_workers: Maximum worker processes (None = config, then auto)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            Tuple of (results in job order, statistics)

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.morph_logger.reset()
        stats = self.morph_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        settings_dict = self.config.model_dump()
        total = len(jobs)
        completed = 0
        results: dict[int, dict[str, Any]] = {}
        pending_futures: dict = {}

        self.logger.info("Starting batch", job_count=total, max_workers=max_workers)

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, job in enumerate(jobs):
                future = executor.submit(morph_job, job.to_dict(), settings_dict)
                pending_futures[future] = index

            try:
                for future in as_completed(pending_futures):
                    index = pending_futures.pop(future)
                    name = jobs[index].name
                    success = False

                    try:
                        result = future.result()
                    except Exception as e:
                        # Executor-level error
                        result = {
                            "name": name,
                            "error": str(e),
                            "error_type": type(e).__name__,
                            "traceback": traceback.format_exc(),
                        }

                    if "error" in result:
                        self.morph_logger.log_morph_error(
                            name,
                            RegionMorphError(result["error"]),
                            traceback=result.get("traceback"),
                        )
                    else:
                        success = True
                        self.morph_logger.log_morph_complete(
                            name,
                            points=result["points"],
                            merges=result["merges"],
                            duration_ms=result.get("duration_ms", 0.0),
                        )

                    results[index] = result
                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        stats.end_time = time.time()
        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return [results[i] for i in sorted(results)], stats
