from __future__ import annotations


class PlacementError(ValueError):
    """Base class for probe placement failures."""


class InvalidSpacing(PlacementError):
    def __init__(self, spacing: float) -> None:
        super().__init__(f"Probe spacing must be a number > 0, got {spacing!r}")
        self.spacing = spacing


class InvalidBoxSize(PlacementError):
    def __init__(self, size: object) -> None:
        super().__init__(f"Box size components must be finite, got {size!r}")
        self.size = size


class SamplingCancelled(Exception):
    """Raised when a caller-supplied cancel check fires mid-sampling."""
