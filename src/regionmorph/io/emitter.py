"""Path string output for aligned ring pairs.

Each ring becomes ``M x y`` for its first point, ``L x y`` for every
following point and a closing ``Z``. Rings are joined with a single space,
so the start and end strings have identical command sequences and differ
only in coordinates.
"""

from collections.abc import Iterable, Sequence

from regionmorph.domain import AlignedPair, Ring


def format_number(value: float, precision: int = 3) -> str:
    """Format a coordinate with at most ``precision`` decimals.

    Examples:
        >>> format_number(10.0)
        '10'
        >>> format_number(-0.0001)
        '0'
        >>> format_number(2.50049, precision=3)
        '2.5'
    """
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


class PathStringEmitter:
    """Serializes rings into ``M``/``L``/``Z`` path strings."""

    def __init__(self, precision: int = 3) -> None:
        self.precision = precision

    def format_ring(self, ring: Ring) -> str:
        """Format one closed ring. An empty ring produces an empty string."""
        if ring.is_empty():
            return ""
        commands = []
        for i, point in enumerate(ring):
            command = "M" if i == 0 else "L"
            x = format_number(point.x, self.precision)
            y = format_number(point.y, self.precision)
            commands.append(f"{command} {x} {y}")
        commands.append("Z")
        return " ".join(commands)

    def format_rings(self, rings: Iterable[Ring]) -> str:
        """Format several rings into one path string."""
        return " ".join(text for text in (self.format_ring(r) for r in rings) if text)

    def emit(self, pairs: Sequence[AlignedPair]) -> tuple[str, str]:
        """Build the start and end path strings for aligned pairs.

        Returns:
            Tuple of (start, end) path strings
        """
        start = self.format_rings(pair.source for pair in pairs)
        end = self.format_rings(pair.target for pair in pairs)
        return start, end
