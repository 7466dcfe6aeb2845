"""Path data I/O layer for regionmorph.

This module handles reading and writing path strings and batch job files.
It provides a clean abstraction layer between text formats and the domain
models.

Key responsibilities:
- Parse SVG path data into shapes
- Emit aligned ring pairs as start/end path strings
- Read and write JSON batch files

Key classes:
- PathStringEmitter: Format aligned rings as path strings
- MorphJob: One shape pair of a batch
"""

from regionmorph.io.batch import MorphJob, load_jobs, write_results
from regionmorph.io.emitter import PathStringEmitter, format_number
from regionmorph.io.parser import parse_path

__all__ = [
    "MorphJob",
    "PathStringEmitter",
    "format_number",
    "load_jobs",
    "parse_path",
    "write_results",
]
