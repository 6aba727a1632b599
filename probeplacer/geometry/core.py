"""
Probeplacer Geometry Module

Core 3D geometry primitives used by probe placement: vectors, local-to-world
transforms, and the polygon/surface/room representation that collision
meshes are built from.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import numpy as np


# =============================================================================
# Vectors
# =============================================================================

@dataclass
class Vector3:
    """3D vector for positions, sizes and displacements."""
    x: float
    y: float
    z: float

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> 'Vector3':
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: 'Vector3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def length_squared(self) -> float:
        """Squared length (faster when comparing distances)."""
        return self.x**2 + self.y**2 + self.z**2

    def scaled(self, other: 'Vector3') -> 'Vector3':
        """Componentwise product."""
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @staticmethod
    def from_array(arr: np.ndarray) -> 'Vector3':
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]))

    @staticmethod
    def coerce(value: object) -> 'Vector3':
        """Accept a Vector3 or any 3-item sequence."""
        if isinstance(value, Vector3):
            return value
        x, y, z = value  # type: ignore[misc]
        return Vector3(float(x), float(y), float(z))

    @staticmethod
    def zero() -> 'Vector3':
        return Vector3(0, 0, 0)

    @staticmethod
    def one() -> 'Vector3':
        return Vector3(1, 1, 1)


# =============================================================================
# Transform
# =============================================================================

@dataclass
class Transform:
    """
    Local-to-world mapping: position, rotation, and scale.

    Rotation is stored as Euler angles (degrees) in ZYX order (yaw, pitch, roll).
    Points are mapped as scale, then rotate, then translate.
    """
    position: Vector3 = field(default_factory=Vector3.zero)
    rotation: Vector3 = field(default_factory=Vector3.zero)  # Euler angles in degrees
    scale: Vector3 = field(default_factory=Vector3.one)

    def get_rotation_matrix(self) -> np.ndarray:
        """Get 3x3 rotation matrix from Euler angles."""
        rx = math.radians(self.rotation.x)
        ry = math.radians(self.rotation.y)
        rz = math.radians(self.rotation.z)

        Rx = np.array([
            [1, 0, 0],
            [0, math.cos(rx), -math.sin(rx)],
            [0, math.sin(rx), math.cos(rx)]
        ])
        Ry = np.array([
            [math.cos(ry), 0, math.sin(ry)],
            [0, 1, 0],
            [-math.sin(ry), 0, math.cos(ry)]
        ])
        Rz = np.array([
            [math.cos(rz), -math.sin(rz), 0],
            [math.sin(rz), math.cos(rz), 0],
            [0, 0, 1]
        ])

        return Rz @ Ry @ Rx

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def from_euler_zyx(
        cls,
        position: Vector3,
        yaw_deg: float,
        pitch_deg: float,
        roll_deg: float,
        scale: Optional[Vector3] = None,
    ) -> "Transform":
        """
        Build transform from Euler ZYX (yaw, pitch, roll) in degrees.
        """
        rot = Vector3(roll_deg, pitch_deg, yaw_deg)
        return cls(position=position, rotation=rot, scale=scale or Vector3.one())

    def transform_point(self, p: Vector3) -> Vector3:
        """Apply transformation to a point."""
        scaled = p.scaled(self.scale)
        R = self.get_rotation_matrix()
        rotated = Vector3.from_array(R @ scaled.to_array())
        return rotated + self.position


# =============================================================================
# Polygon and Surface
# =============================================================================

@dataclass
class Polygon:
    """
    A planar polygon defined by vertices in order.

    Vertices should be specified in counter-clockwise order when
    viewed from the front.
    """
    vertices: List[Vector3]

    def __post_init__(self):
        if len(self.vertices) < 3:
            raise ValueError("Polygon requires at least 3 vertices")


@dataclass
class Surface:
    """A solid surface in the scene: geometry plus the layer it is tagged with."""
    id: str
    polygon: Polygon
    layer: int = 0


# =============================================================================
# Room Geometry
# =============================================================================

@dataclass
class Room:
    """
    A room defined by its boundary and height.

    The room is represented as an extruded polygon with:
    - Floor at z=0
    - Ceiling at z=height
    - Walls connecting floor to ceiling
    """
    name: str
    floor_vertices: List[Vector3]  # 2D points (z ignored), counter-clockwise
    height: float
    layer: int = 0

    def __post_init__(self):
        if len(self.floor_vertices) < 3:
            raise ValueError("Room requires at least 3 floor vertices")
        self.floor_vertices = [Vector3(v.x, v.y, 0) for v in self.floor_vertices]

    @staticmethod
    def rectangular(
        name: str,
        width: float,
        length: float,
        height: float,
        origin: Optional[Vector3] = None,
        layer: int = 0,
    ) -> 'Room':
        """Create a rectangular room."""
        if origin is None:
            origin = Vector3.zero()

        floor_verts = [
            Vector3(origin.x, origin.y, 0),
            Vector3(origin.x + width, origin.y, 0),
            Vector3(origin.x + width, origin.y + length, 0),
            Vector3(origin.x, origin.y + length, 0),
        ]

        return Room(name, floor_verts, height, layer=layer)

    def get_surfaces(self) -> List[Surface]:
        """
        Generate all surfaces (floor, ceiling, walls) for the room.
        """
        surfaces = []

        surfaces.append(Surface(
            id=f"{self.name}_floor",
            polygon=Polygon(self.floor_vertices),
            layer=self.layer,
        ))

        ceiling_verts = [Vector3(v.x, v.y, self.height) for v in reversed(self.floor_vertices)]
        surfaces.append(Surface(
            id=f"{self.name}_ceiling",
            polygon=Polygon(ceiling_verts),
            layer=self.layer,
        ))

        n = len(self.floor_vertices)
        for i in range(n):
            v0 = self.floor_vertices[i]
            v1 = self.floor_vertices[(i + 1) % n]

            # Counter-clockwise when viewed from inside
            wall_verts = [
                Vector3(v0.x, v0.y, 0),
                Vector3(v1.x, v1.y, 0),
                Vector3(v1.x, v1.y, self.height),
                Vector3(v0.x, v0.y, self.height),
            ]
            surfaces.append(Surface(
                id=f"{self.name}_wall_{i}",
                polygon=Polygon(wall_verts),
                layer=self.layer,
            ))

        return surfaces
