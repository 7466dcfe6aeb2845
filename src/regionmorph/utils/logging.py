"""Logging utilities for Regionmorph."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers added by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class MorphStats:
    """Statistics from a morph run."""

    processed_count: int = 0
    error_count: int = 0
    merges: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    morph_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_morph_time_ms(self) -> float | None:
        """Average time per successful morph."""
        if not self.morph_timings_ms:
            return None
        return sum(self.morph_timings_ms) / len(self.morph_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("regionmorph")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level if log_file else console_level,
    )

    return logger


class MorphLogger:
    """Logger for tracking morph progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = MorphStats()

    def log_morph_start(self, name: str, source_points: int, destination_regions: int) -> None:
        """Log start of a shape-pair morph."""
        self._logger.debug(
            "Morph started",
            morph=name,
            source_points=source_points,
            destination_regions=destination_regions,
        )

    def log_coarsening(self, name: str, triangles: int, regions: int, merges: int) -> None:
        """Log coarsening results."""
        self._logger.debug(
            "Topology coarsened",
            morph=name,
            triangles=triangles,
            regions=regions,
            merges=merges,
        )

    def log_match(self, name: str, strategy: str, cost: float) -> None:
        """Log the chosen region assignment."""
        self._logger.debug("Regions matched", morph=name, strategy=strategy, cost=round(cost, 3))

    def log_morph_complete(self, name: str, points: int, merges: int, duration_ms: float) -> None:
        """Log successful morph."""
        self._logger.info(
            "Morph complete",
            morph=name,
            points=points,
            merges=merges,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.merges += merges
        self._stats.morph_timings_ms.append(duration_ms)

    def log_morph_error(
        self,
        name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log morph failure."""
        self._logger.error(
            "Morph failed",
            morph=name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((name, str(error)))

    def reset(self) -> MorphStats:
        """Start a fresh statistics run, returning the previous one."""
        previous = self._stats
        self._stats = MorphStats()
        return previous

    @property
    def stats(self) -> MorphStats:
        """Get current processing statistics."""
        return self._stats
