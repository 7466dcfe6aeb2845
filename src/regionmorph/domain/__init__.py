"""Domain models for regionmorph.

This module contains the domain models representing rings, shapes, arc
topologies and aligned ring pairs. Models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (batch processing)
- Independent of the triangulation library

Key classes:
- Point: A 2D point
- Ring: A closed ring of points
- Shape: One or more sub-outlines
- Arc, ArcRef, Region, Topology: Arc-indexed region mesh
- AreaOrderedRegions: Region collection sorted by area
- AlignedPair: Two rings with matching point counts
"""

from regionmorph.domain.pair import AlignedPair
from regionmorph.domain.ring import Point, Ring, WindingDirection
from regionmorph.domain.shape import Shape
from regionmorph.domain.topology import Arc, ArcRef, AreaOrderedRegions, Region, Topology

__all__: list[str] = [
    # Enums
    "WindingDirection",
    # Core types
    "Point",
    "Ring",
    "Shape",
    # Topology
    "Arc",
    "ArcRef",
    "Region",
    "AreaOrderedRegions",
    "Topology",
    # Alignment
    "AlignedPair",
]
