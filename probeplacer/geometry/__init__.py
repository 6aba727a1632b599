"""
Probeplacer Geometry Module

Provides 3D geometry primitives, layer masks, room modeling and the
bounding-volume hierarchy used by mesh collision queries.
"""

from probeplacer.geometry.core import (
    Vector3,
    Transform,
    Polygon,
    Surface,
    Room,
)
from probeplacer.geometry.layers import LayerMask

__all__ = [
    "Vector3",
    "Transform",
    "Polygon",
    "Surface",
    "Room",
    "LayerMask",
]
