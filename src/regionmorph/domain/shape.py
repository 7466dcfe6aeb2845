"""Shape representation.

A shape is the input boundary of a morph: an ordered list of sub-outlines,
each a closed ring. Sources must have exactly one sub-outline; destinations
may have any number.
"""

from dataclasses import dataclass, field
from typing import Any

from regionmorph.domain.ring import Ring
from regionmorph.exceptions import GeometryError


@dataclass
class Shape:
    """A planar shape made of one or more sub-outlines.

    Attributes:
        subpaths: Closed rings, one per sub-outline
        name: Optional label used in logs and batch output
    """

    subpaths: list[Ring] = field(default_factory=list)
    name: str | None = None

    def __len__(self) -> int:
        return len(self.subpaths)

    def is_empty(self) -> bool:
        """Check if the shape has no sub-outlines."""
        return len(self.subpaths) == 0

    def outline(self) -> Ring:
        """Get the single outline of a one-subpath shape.

        Returns:
            The only sub-outline

        Raises:
            GeometryError: If the shape has zero or several sub-outlines
        """
        if len(self.subpaths) != 1:
            label = f"'{self.name}' " if self.name else ""
            raise GeometryError(
                f"Shape {label}must have exactly one outline to be triangulated, "
                f"got {len(self.subpaths)}"
            )
        return self.subpaths[0]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "name": self.name,
            "subpaths": [ring.to_dict() for ring in self.subpaths],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary."""
        return cls(
            subpaths=[Ring.from_dict(r) for r in data["subpaths"]],
            name=data.get("name"),
        )
