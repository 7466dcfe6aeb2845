"""Command-line interface for regionmorph.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Single shape-pair morphs from path data or files
- Parallel batch morphs from a JSON job file
- Verbose/quiet output modes
- Detailed error reporting
"""

from regionmorph.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
