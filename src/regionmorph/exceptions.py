"""Exception hierarchy for Regionmorph."""


class RegionMorphError(Exception):
    """Base exception for all Regionmorph errors."""

    pass


class GeometryError(RegionMorphError):
    """Outline is degenerate or cannot be triangulated."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class CoarsenError(RegionMorphError):
    """Requested region count cannot be reached by merging."""

    def __init__(self, requested: int, available: int, reason: str | None = None) -> None:
        self.requested = requested
        self.available = available
        self.reason = reason or "target must be at least 1 and below the current region count"
        super().__init__(
            f"Cannot coarsen {available} regions to {requested}: {self.reason}"
        )


class MatchError(RegionMorphError):
    """Source and destination regions cannot be matched."""

    def __init__(self, source_count: int, destination_count: int, reason: str) -> None:
        self.source_count = source_count
        self.destination_count = destination_count
        self.reason = reason
        super().__init__(
            f"Cannot match {source_count} source regions to "
            f"{destination_count} destination regions: {reason}"
        )


class MatchTimeoutError(MatchError):
    """Exhaustive matching ran past its deadline."""

    def __init__(self, region_count: int, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            region_count,
            region_count,
            f"exhaustive search exceeded {timeout_seconds:g}s",
        )


class AlignError(RegionMorphError):
    """A ring pair cannot be aligned."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Ring alignment failed: {reason}")


class PathDataError(RegionMorphError):
    """Malformed path data."""

    def __init__(self, data: str, reason: str) -> None:
        self.data = data
        self.reason = reason
        preview = data if len(data) <= 40 else data[:37] + "..."
        super().__init__(f"Invalid path data '{preview}': {reason}")


class BatchError(RegionMorphError):
    """Error reading or writing a batch job file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Batch file '{path}': {reason}")
