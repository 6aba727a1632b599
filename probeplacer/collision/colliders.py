from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from probeplacer.geometry.bvh import AABB, BVHNode, Triangle, any_overlap, build_bvh, merge_aabbs, triangle_aabb, triangulate_surfaces
from probeplacer.geometry.core import Room, Surface, Vector3
from probeplacer.geometry.layers import LayerMask, object_layer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SphereCollider:
    center: Vector3
    radius: float
    layer: int = 0

    def bounds(self) -> AABB:
        r = Vector3(self.radius, self.radius, self.radius)
        return AABB(min=self.center - r, max=self.center + r)

    def overlaps_sphere(self, center: Vector3, radius: float) -> bool:
        reach = self.radius + radius
        return (center - self.center).length_squared() <= reach * reach


@dataclass(frozen=True)
class BoxCollider:
    """Solid axis-aligned box in world space."""

    center: Vector3
    size: Vector3
    layer: int = 0

    def bounds(self) -> AABB:
        half = self.size / 2.0
        return AABB(min=self.center - half, max=self.center + half)

    def overlaps_sphere(self, center: Vector3, radius: float) -> bool:
        return self.bounds().intersects_sphere(center, radius)


@dataclass
class MeshCollider:
    """Triangle soup; queries measure distance to the surface, not the enclosed volume."""

    triangles: List[Triangle]
    layer: int = 0
    max_leaf: int = 8
    _root: Optional[BVHNode] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.triangles:
            raise ValueError("MeshCollider requires at least one triangle")
        self._root = build_bvh(list(self.triangles), max_leaf=self.max_leaf)

    @classmethod
    def from_surfaces(cls, surfaces: Sequence[Surface], layer: int = 0) -> "MeshCollider":
        return cls(triangulate_surfaces(list(surfaces)), layer=layer)

    def bounds(self) -> AABB:
        if self._root is not None:
            return self._root.aabb
        return merge_aabbs([triangle_aabb(t) for t in self.triangles])

    def overlaps_sphere(self, center: Vector3, radius: float) -> bool:
        return any_overlap(self._root, center, radius)


Collider = Union[SphereCollider, BoxCollider, MeshCollider]


def colliders_from_surfaces(surfaces: Sequence[Surface]) -> List[MeshCollider]:
    """One mesh collider per layer, in order of first appearance."""
    by_layer: Dict[int, List[Surface]] = {}
    for s in surfaces:
        by_layer.setdefault(object_layer(s), []).append(s)
    return [MeshCollider.from_surfaces(group, layer=layer) for layer, group in by_layer.items()]


def _vec(value: object, name: str) -> Vector3:
    try:
        return Vector3.coerce(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Collider field '{name}' must be a 3-item list, got {value!r}") from exc


def collider_from_dict(d: Dict[str, object]) -> List[Collider]:
    t = str(d.get("type", ""))
    layer = int(d.get("layer", 0))  # type: ignore[arg-type]
    if t == "sphere":
        return [SphereCollider(center=_vec(d.get("center"), "center"), radius=float(d.get("radius", 0.5)), layer=layer)]  # type: ignore[arg-type]
    if t == "box":
        return [BoxCollider(center=_vec(d.get("center"), "center"), size=_vec(d.get("size"), "size"), layer=layer)]
    if t == "room":
        room = Room.rectangular(
            str(d.get("name", "room")),
            width=float(d["width"]),  # type: ignore[arg-type]
            length=float(d["length"]),  # type: ignore[arg-type]
            height=float(d["height"]),  # type: ignore[arg-type]
            origin=_vec(d.get("origin", (0.0, 0.0, 0.0)), "origin"),
            layer=layer,
        )
        return list(colliders_from_surfaces(room.get_surfaces()))
    if t == "mesh":
        tris: List[Triangle] = []
        for row in d.get("triangles", []):  # type: ignore[union-attr]
            a, b, c = row
            tris.append(Triangle(a=_vec(a, "triangles"), b=_vec(b, "triangles"), c=_vec(c, "triangles")))
        return [MeshCollider(tris, layer=layer)]
    raise ValueError(f"Unsupported collider type: {t}")


class CollisionWorld:
    """
    Collision oracle over a fixed set of colliders.

    Colliders are filtered by layer mask, then by bounding box, before the
    exact overlap test. The collider set is frozen at construction.
    """

    def __init__(self, colliders: Sequence[Collider] = ()) -> None:
        self._colliders: Tuple[Collider, ...] = tuple(colliders)
        self._bounds: Tuple[AABB, ...] = tuple(c.bounds() for c in self._colliders)

    @classmethod
    def from_dicts(cls, rows: Sequence[Dict[str, object]]) -> "CollisionWorld":
        colliders: List[Collider] = []
        for row in rows:
            colliders.extend(collider_from_dict(row))
        logger.debug("Loaded %d colliders from %d entries", len(colliders), len(rows))
        return cls(colliders)

    @property
    def colliders(self) -> Tuple[Collider, ...]:
        return self._colliders

    def __len__(self) -> int:
        return len(self._colliders)

    def check_sphere(self, position: Vector3, radius: float, mask: LayerMask) -> bool:
        r = max(0.0, float(radius))
        for collider, box in zip(self._colliders, self._bounds):
            if not mask.contains(collider.layer):
                continue
            if not box.intersects_sphere(position, r):
                continue
            if collider.overlaps_sphere(position, r):
                return True
        return False

    def __call__(self, world_position: Vector3, radius: float, mask: LayerMask) -> bool:
        return self.check_sphere(world_position, radius, mask)
