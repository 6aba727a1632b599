from probeplacer.collision.colliders import (
    BoxCollider,
    Collider,
    CollisionWorld,
    MeshCollider,
    SphereCollider,
    collider_from_dict,
    colliders_from_surfaces,
)
from probeplacer.collision.oracle import AlwaysIntersects, CollisionOracle, NeverIntersects

__all__ = [
    "CollisionOracle",
    "NeverIntersects",
    "AlwaysIntersects",
    "Collider",
    "SphereCollider",
    "BoxCollider",
    "MeshCollider",
    "CollisionWorld",
    "collider_from_dict",
    "colliders_from_surfaces",
]
