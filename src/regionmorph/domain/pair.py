"""Aligned ring pairs produced by the ring aligner."""

from dataclasses import dataclass
from typing import Any

from regionmorph.domain.ring import Point, Ring


@dataclass(frozen=True)
class AlignedPair:
    """A source ring and target ring with one-to-one point correspondence.

    Attributes:
        source: Ring the morph starts from
        target: Ring the morph ends at, same length as ``source``
    """

    source: Ring
    target: Ring

    def __post_init__(self) -> None:
        if len(self.source) != len(self.target):
            raise ValueError(
                f"Aligned rings must have equal lengths, got {len(self.source)} "
                f"and {len(self.target)}"
            )

    def __len__(self) -> int:
        return len(self.source)

    def interpolate(self, t: float) -> Ring:
        """Linearly interpolate corresponding points at ``t`` in [0, 1]."""
        return Ring(
            points=tuple(
                Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)
                for a, b in zip(self.source, self.target)
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"source": self.source.to_dict(), "target": self.target.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AlignedPair":
        """Deserialize from dictionary."""
        return cls(source=Ring.from_dict(data["source"]), target=Ring.from_dict(data["target"]))
