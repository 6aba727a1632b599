from probeplacer.placement.bounds import estimate_box_size, points_to_array
from probeplacer.placement.config import PlacerSettings
from probeplacer.placement.errors import InvalidBoxSize, InvalidSpacing, PlacementError, SamplingCancelled
from probeplacer.placement.grid import (
    AxisStepping,
    Box,
    axis_values,
    grid_point_count,
    sample_probe_grid,
)

__all__ = [
    "estimate_box_size",
    "points_to_array",
    "PlacerSettings",
    "PlacementError",
    "InvalidSpacing",
    "InvalidBoxSize",
    "SamplingCancelled",
    "AxisStepping",
    "Box",
    "axis_values",
    "grid_point_count",
    "sample_probe_grid",
]
