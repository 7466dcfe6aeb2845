"""Configuration settings for Regionmorph."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class MatchFallback(str, Enum):
    """What to do when exhaustive region matching is out of reach."""

    ERROR = "error"
    GREEDY = "greedy"


class GeometryConfig(BaseModel):
    """Configuration for triangulation checks."""

    area_tolerance: float = Field(
        default=1e-6,
        gt=0.0,
        le=0.1,
        description="Relative tolerance between outline area and triangulated area",
    )


class CoarsenConfig(BaseModel):
    """Configuration for region coarsening."""

    seed: int | None = Field(
        default=None,
        description="Seed for the neighbour tie-break (None = fresh entropy per morph)",
    )


class MatchConfig(BaseModel):
    """Configuration for region matching."""

    max_exhaustive_regions: int = Field(
        default=8,
        ge=1,
        le=10,
        description="Largest region count searched exhaustively (N! assignments)",
    )
    fallback: MatchFallback = Field(
        default=MatchFallback.ERROR,
        description="Behaviour above the exhaustive ceiling or past the deadline",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        description="Deadline for the exhaustive search (None = no deadline)",
    )


class AlignConfig(BaseModel):
    """Configuration for ring alignment."""

    bisect_threshold: float = Field(
        default=25.0,
        gt=0.0,
        description="Edges longer than this are split at their midpoint",
    )


class OutputConfig(BaseModel):
    """Configuration for path string output."""

    precision: int = Field(
        default=3,
        ge=0,
        le=12,
        description="Maximum decimals per coordinate",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class MorphSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    coarsen: CoarsenConfig = Field(default_factory=CoarsenConfig)
    match: MatchConfig = Field(default_factory=MatchConfig)
    align: AlignConfig = Field(default_factory=AlignConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> MorphSettings:
    """Get default application settings."""
    return MorphSettings()
