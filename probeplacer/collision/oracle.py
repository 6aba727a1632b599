from __future__ import annotations

from typing import Protocol

from probeplacer.geometry.core import Vector3
from probeplacer.geometry.layers import LayerMask


class CollisionOracle(Protocol):
    """
    Proximity query against solid geometry.

    Returns True when any geometry on a layer selected by ``mask`` lies within
    ``radius`` of ``world_position`` (touching counts). Implementations must be
    read-only so queries can run from several threads.
    """

    def __call__(self, world_position: Vector3, radius: float, mask: LayerMask) -> bool: ...


class NeverIntersects:
    """Oracle for callers without a collision scene: nothing is ever hit."""

    def __call__(self, world_position: Vector3, radius: float, mask: LayerMask) -> bool:
        return False


class AlwaysIntersects:
    def __call__(self, world_position: Vector3, radius: float, mask: LayerMask) -> bool:
        return True
