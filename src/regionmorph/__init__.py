"""Regionmorph - Vertex-corresponded morphing between unrelated planar shapes.

Regionmorph takes a source outline and a destination shape made of one or more
sub-outlines and produces two path strings with matching point counts, so that
a renderer can tween one into the other by interpolating coordinates.

Example:
    $ regionmorph morph "M0 0 L10 0 L5 10 Z" "M0 0 L8 0 L4 6 Z"

The source outline is triangulated, coarsened down to as many regions as the
destination has sub-outlines, matched region-to-region by centroid and aligned
ring by ring.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
