"""Configuration management for regionmorph.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Triangulation tolerance
- CoarsenConfig: Neighbour tie-break seed
- MatchConfig: Matching ceiling, fallback and deadline
- AlignConfig: Segment bisection threshold
- OutputConfig: Path string precision
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- MorphSettings: Main application settings
"""

from regionmorph.config.settings import (
    AlignConfig,
    CoarsenConfig,
    GeometryConfig,
    LoggingConfig,
    MatchConfig,
    MatchFallback,
    MorphSettings,
    OutputConfig,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "AlignConfig",
    "CoarsenConfig",
    "GeometryConfig",
    "LoggingConfig",
    "MatchConfig",
    "MatchFallback",
    "MorphSettings",
    "OutputConfig",
    "ProcessingConfig",
    "get_default_settings",
]
