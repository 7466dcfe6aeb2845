"""Core processing algorithms for regionmorph.

This module contains the core algorithms for:

- Geometry operations (signed area, perimeter, centroid, triangulation)
- Topology construction (arc table with one region per triangle)
- Region coarsening (smallest-first merging down to a target count)
- Region matching (minimum total centroid distance)
- Ring alignment (orientation, bisection, resampling, rotation)

Key functions:
- signed_area: Calculate polygon area using shoelace formula
- centroid: Area-weighted polygon centroid
- triangulate: Ear-clipping triangulation of an outline
- build_topology: Arc-indexed topology from triangles
- extract_rings: Closed rings of the live regions

Key classes:
- RegionCoarsener: Merges regions down to a target count
- RegionMatcher: Pairs source and destination regions
- RingAligner: Aligns matched ring pairs
- MorphProcessor: Runs the whole pipeline
"""

from regionmorph.core.aligner import RingAligner, add_points, best_rotation, bisect_segments
from regionmorph.core.coarsen import MergeStep, RegionCoarsener, extract_rings, merge_regions
from regionmorph.core.geometry import (
    centroid,
    distance,
    perimeter,
    polygon_area,
    signed_area,
    triangulate,
)
from regionmorph.core.matcher import (
    Assignment,
    ExhaustiveAssignment,
    GreedyAssignment,
    RegionMatcher,
    centroid_cost,
)
from regionmorph.core.processor import MorphProcessor, MorphResult, morph_job
from regionmorph.core.topology import build_topology, triangles_from_indices

__all__ = [
    # Aligner
    "RingAligner",
    "add_points",
    "best_rotation",
    "bisect_segments",
    # Coarsening
    "MergeStep",
    "RegionCoarsener",
    "extract_rings",
    "merge_regions",
    # Geometry functions
    "centroid",
    "distance",
    "perimeter",
    "polygon_area",
    "signed_area",
    "triangulate",
    # Matching
    "Assignment",
    "ExhaustiveAssignment",
    "GreedyAssignment",
    "RegionMatcher",
    "centroid_cost",
    # Processor
    "MorphProcessor",
    "MorphResult",
    "morph_job",
    # Topology
    "build_topology",
    "triangles_from_indices",
]
