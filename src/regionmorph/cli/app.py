"""CLI application entry point for regionmorph.

This module provides the main CLI interface using Typer.
"""

import json
import time
from pathlib import Path
from typing import Annotated

import typer

from regionmorph import __version__
from regionmorph.cli.output import (
    console,
    create_progress,
    print_batch_summary,
    print_cancellation_summary,
    print_error,
    print_header,
    print_morph_summary,
    print_path,
    print_shape_info,
    print_step,
)
from regionmorph.config import (
    AlignConfig,
    CoarsenConfig,
    LoggingConfig,
    MatchConfig,
    MatchFallback,
    MorphSettings,
    OutputConfig,
    ProcessingConfig,
)
from regionmorph.core import MorphProcessor
from regionmorph.exceptions import RegionMorphError
from regionmorph.io import load_jobs, parse_path, write_results
from regionmorph.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="regionmorph",
    help="Morph between unrelated outlines by matching triangulated regions.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Regionmorph[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Morph between unrelated outlines by matching triangulated regions."""


def read_path_data(value: str) -> str:
    """Resolve a path data argument.

    A value starting with ``@`` names a file holding the path data; anything
    else is the path data itself.

    Raises:
        typer.BadParameter: If the named file cannot be read
    """
    if not value.startswith("@"):
        return value
    path = Path(value[1:])
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise typer.BadParameter(f"Cannot read path data from '{path}': {e}") from e


@app.command()
def morph(
    source: Annotated[
        str,
        typer.Argument(
            help="Source path data with a single outline, or @FILE",
            show_default=False,
        ),
    ],
    destination: Annotated[
        str,
        typer.Argument(
            help="Destination path data with one or more outlines, or @FILE",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the result as JSON to this file",
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option(
            "--seed",
            "-s",
            help="Seed for the region merge tie-break (default: random)",
        ),
    ] = None,
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="Split edges longer than this before resampling",
            min=0.001,
        ),
    ] = 25.0,
    precision: Annotated[
        int,
        typer.Option(
            "--precision",
            "-p",
            help="Maximum decimals per coordinate",
            min=0,
            max=12,
        ),
    ] = 3,
    max_regions: Annotated[
        int,
        typer.Option(
            "--max-regions",
            help="Largest region count matched exhaustively",
            min=1,
            max=10,
        ),
    ] = 8,
    greedy: Annotated[
        bool,
        typer.Option(
            "--greedy",
            help="Fall back to greedy matching above --max-regions",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Print only the two path strings",
        ),
    ] = False,
) -> None:
    """Morph one source outline into a destination shape.

    The source is split into as many regions as the destination has
    outlines, then each region is paired and aligned with one outline.

    Example:
        regionmorph morph "M0 0 L10 0 L5 10 Z" "M0 0 L8 0 L4 6 Z"
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    settings = MorphSettings(
        coarsen=CoarsenConfig(seed=seed),
        match=MatchConfig(
            max_exhaustive_regions=max_regions,
            fallback=MatchFallback.GREEDY if greedy else MatchFallback.ERROR,
        ),
        align=AlignConfig(bisect_threshold=threshold),
        output=OutputConfig(precision=precision),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )

    try:
        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )

        if not quiet:
            print_header(__version__)
            print_step("Reading shapes")

        source_shape = parse_path(read_path_data(source), name="source")
        destination_shape = parse_path(read_path_data(destination), name="destination")

        if not quiet:
            print_shape_info(
                "source",
                len(source_shape),
                sum(len(ring) for ring in source_shape.subpaths),
            )
            print_shape_info(
                "destination",
                len(destination_shape),
                sum(len(ring) for ring in destination_shape.subpaths),
            )
            print_step("Morphing")

        start = time.time()
        result = MorphProcessor(settings, logger=logger).morph(source_shape, destination_shape)
        elapsed = time.time() - start

        if output is not None:
            output.write_text(json.dumps(result.to_dict(), indent=2) + "\n", encoding="utf-8")

        if quiet:
            typer.echo(result.start_path)
            typer.echo(result.end_path)
            return

        print_morph_summary(
            total_time_s=elapsed,
            regions=len(result.pairs),
            points=result.point_count,
            merges=len(result.merges),
        )
        if output is not None:
            console.print(f"  Written to {output}")
        if verbose or output is None:
            print_path("Start", result.start_path)
            print_path("End", result.end_path)

    except RegionMorphError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except typer.BadParameter:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def batch(
    jobs_file: Annotated[
        Path,
        typer.Argument(
            help="JSON file with a list of {name, source, destination} jobs",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Results file (default: {name}-morphed.json)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option(
            "--seed",
            "-s",
            help="Seed for the region merge tie-break (default: random)",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Morph every shape pair of a JSON job file in parallel."""
    if not jobs_file.is_file():
        print_error(
            f"Input file not found: {jobs_file}",
            details=f"The file '{jobs_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    settings = MorphSettings(
        coarsen=CoarsenConfig(seed=seed),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    output_path = output or jobs_file.with_name(f"{jobs_file.stem}-morphed.json")

    try:
        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )

        jobs = load_jobs(jobs_file)
        if not quiet:
            print_header(__version__)
            print_step(f"Morphing {len(jobs)} shape pairs")

        processor = MorphProcessor(settings, logger=logger)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("Morphing", total=len(jobs))

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    results, stats = processor.process_many(
                        jobs,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                results, stats = processor.process_many(jobs, max_workers=workers)
        except KeyboardInterrupt:
            if not quiet:
                current = processor.morph_logger.stats
                print_cancellation_summary(
                    processed=current.processed_count,
                    cancelled=current.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        write_results(output_path, results)

        if not quiet:
            print_batch_summary(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_morph_time_ms,
            )

    except RegionMorphError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
