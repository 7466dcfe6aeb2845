"""Utility functions for regionmorph.

This module provides utility functions including:

- Logging setup and configuration
- Morph statistics tracking
"""

from regionmorph.utils.logging import (
    MorphLogger,
    MorphStats,
    configure_logging,
)

__all__ = [
    "MorphLogger",
    "MorphStats",
    "configure_logging",
]
