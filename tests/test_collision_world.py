from __future__ import annotations

import pytest

from probeplacer.collision.colliders import (
    BoxCollider,
    CollisionWorld,
    MeshCollider,
    SphereCollider,
    collider_from_dict,
    colliders_from_surfaces,
)
from probeplacer.geometry.core import Room, Transform, Vector3
from probeplacer.geometry.layers import LayerMask
from probeplacer.placement.grid import Box, sample_probe_grid


def test_sphere_collider_touching_counts_as_hit() -> None:
    c = SphereCollider(center=Vector3(0.0, 0.0, 0.0), radius=1.0)
    assert c.overlaps_sphere(Vector3(1.5, 0.0, 0.0), 0.5)
    assert not c.overlaps_sphere(Vector3(1.6, 0.0, 0.0), 0.5)


def test_box_collider_is_solid() -> None:
    c = BoxCollider(center=Vector3(0.0, 0.0, 0.0), size=Vector3(2.0, 2.0, 2.0))
    assert c.overlaps_sphere(Vector3(0.0, 0.0, 0.0), 0.0)
    assert c.overlaps_sphere(Vector3(1.2, 0.0, 0.0), 0.25)
    assert not c.overlaps_sphere(Vector3(1.3, 0.0, 0.0), 0.25)


def test_mesh_collider_measures_distance_to_surface() -> None:
    room = Room.rectangular("r", width=4.0, length=4.0, height=3.0)
    mesh = MeshCollider.from_surfaces(room.get_surfaces())
    assert mesh.overlaps_sphere(Vector3(2.0, 2.0, 0.1), 0.2)
    assert mesh.overlaps_sphere(Vector3(0.05, 2.0, 1.5), 0.1)
    assert not mesh.overlaps_sphere(Vector3(2.0, 2.0, 1.5), 0.5)


def test_world_respects_layer_mask() -> None:
    world = CollisionWorld(
        [
            SphereCollider(center=Vector3(0.0, 0.0, 0.0), radius=1.0, layer=4),
            BoxCollider(center=Vector3(5.0, 0.0, 0.0), size=Vector3(1.0, 1.0, 1.0), layer=0),
        ]
    )
    water = LayerMask.from_names(["Water"])
    default = LayerMask.from_names(["Default"])
    assert world(Vector3(0.0, 0.0, 0.0), 0.1, water)
    assert not world(Vector3(0.0, 0.0, 0.0), 0.1, default)
    assert world.check_sphere(Vector3(5.0, 0.0, 0.0), 0.1, default)
    assert not world.check_sphere(Vector3(5.0, 0.0, 0.0), 0.1, LayerMask.nothing())


def test_colliders_from_surfaces_groups_by_layer() -> None:
    a = Room.rectangular("a", 2.0, 2.0, 2.0, layer=0).get_surfaces()
    b = Room.rectangular("b", 2.0, 2.0, 2.0, origin=Vector3(10.0, 0.0, 0.0), layer=7).get_surfaces()
    meshes = colliders_from_surfaces(a + b)
    assert [m.layer for m in meshes] == [0, 7]
    assert all(len(m.triangles) == 12 for m in meshes)


def test_collider_from_dict_variants() -> None:
    assert isinstance(collider_from_dict({"type": "sphere", "center": [0, 0, 0], "radius": 1.0})[0], SphereCollider)
    assert isinstance(collider_from_dict({"type": "box", "center": [0, 0, 0], "size": [1, 1, 1]})[0], BoxCollider)
    room = collider_from_dict({"type": "room", "width": 4, "length": 4, "height": 3, "layer": 2})
    assert len(room) == 1 and room[0].layer == 2
    tri = collider_from_dict({"type": "mesh", "triangles": [[[0, 0, 0], [1, 0, 0], [0, 1, 0]]]})
    assert len(tri[0].triangles) == 1
    with pytest.raises(ValueError):
        collider_from_dict({"type": "capsule"})


def test_probes_in_room_keep_clear_of_walls() -> None:
    room = Room.rectangular("r", width=4.0, length=4.0, height=3.0)
    world = CollisionWorld(colliders_from_surfaces(room.get_surfaces()))
    anchor = Transform(position=Vector3(2.0, 2.0, 1.5))
    pts = sample_probe_grid(Box.from_size(4.0, 4.0, 3.0), 1.0, anchor, world, avoidance_radius=0.2)
    # Outer x/y layers and the z extremes sit on walls, floor or ceiling.
    assert len(pts) == 3 * 3 * 2
    for p in pts:
        w = anchor.transform_point(p)
        assert 0.2 < w.x < 3.8 and 0.2 < w.y < 3.8 and 0.2 < w.z < 2.8


def test_sphere_obstacle_removes_nearby_probes_only() -> None:
    world = CollisionWorld([SphereCollider(center=Vector3(0.0, 0.0, 0.0), radius=0.5)])
    pts = sample_probe_grid((2.0, 2.0, 2.0), 1.0, oracle=world, avoidance_radius=0.2)
    assert len(pts) == 26
    assert Vector3(0.0, 0.0, 0.0) not in pts
