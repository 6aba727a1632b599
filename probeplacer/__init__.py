"""
Probeplacer: regular light-probe grids for scene anchors.

Fills an anchor-local box with probe positions at a fixed spacing, drops
positions that come too close to solid geometry, and infers default box sizes
from existing probe sets.
"""

from probeplacer.anchor import ProbeGroup, generate_probes, suggest_box_size
from probeplacer.geometry.core import Transform, Vector3
from probeplacer.geometry.layers import LayerMask
from probeplacer.placement.bounds import estimate_box_size
from probeplacer.placement.config import PlacerSettings
from probeplacer.placement.errors import InvalidBoxSize, InvalidSpacing, PlacementError, SamplingCancelled
from probeplacer.placement.grid import AxisStepping, Box, sample_probe_grid

__version__ = "0.1.0"

__all__ = [
    "Vector3",
    "Transform",
    "LayerMask",
    "Box",
    "AxisStepping",
    "PlacerSettings",
    "ProbeGroup",
    "estimate_box_size",
    "suggest_box_size",
    "sample_probe_grid",
    "generate_probes",
    "PlacementError",
    "InvalidSpacing",
    "InvalidBoxSize",
    "SamplingCancelled",
]
