from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from probeplacer.geometry.core import Surface, Vector3
from probeplacer.geometry.tolerance import EPS_AREA


@dataclass(frozen=True)
class Triangle:
    a: Vector3
    b: Vector3
    c: Vector3
    payload: Any = None

    @property
    def centroid(self) -> Vector3:
        return Vector3((self.a.x + self.b.x + self.c.x) / 3.0, (self.a.y + self.b.y + self.c.y) / 3.0, (self.a.z + self.b.z + self.c.z) / 3.0)


@dataclass(frozen=True)
class AABB:
    min: Vector3
    max: Vector3

    def distance_squared_to(self, p: Vector3) -> float:
        d2 = 0.0
        for axis in ("x", "y", "z"):
            v = getattr(p, axis)
            mn = getattr(self.min, axis)
            mx = getattr(self.max, axis)
            if v < mn:
                d2 += (mn - v) ** 2
            elif v > mx:
                d2 += (v - mx) ** 2
        return d2

    def intersects_sphere(self, center: Vector3, radius: float) -> bool:
        return self.distance_squared_to(center) <= radius * radius


@dataclass
class BVHNode:
    aabb: AABB
    left: Optional["BVHNode"] = None
    right: Optional["BVHNode"] = None
    triangles: Optional[List[Triangle]] = None


def triangle_aabb(tri: Triangle) -> AABB:
    xs = [tri.a.x, tri.b.x, tri.c.x]
    ys = [tri.a.y, tri.b.y, tri.c.y]
    zs = [tri.a.z, tri.b.z, tri.c.z]
    return AABB(min=Vector3(min(xs), min(ys), min(zs)), max=Vector3(max(xs), max(ys), max(zs)))


def merge_aabbs(boxes: Sequence[AABB]) -> AABB:
    xs = [b.min.x for b in boxes] + [b.max.x for b in boxes]
    ys = [b.min.y for b in boxes] + [b.max.y for b in boxes]
    zs = [b.min.z for b in boxes] + [b.max.z for b in boxes]
    return AABB(min=Vector3(min(xs), min(ys), min(zs)), max=Vector3(max(xs), max(ys), max(zs)))


def build_bvh(triangles: List[Triangle], max_leaf: int = 8) -> Optional[BVHNode]:
    if not triangles:
        return None
    if len(triangles) <= max_leaf:
        return BVHNode(aabb=merge_aabbs([triangle_aabb(t) for t in triangles]), triangles=triangles)

    cents = [t.centroid for t in triangles]
    xs = [c.x for c in cents]
    ys = [c.y for c in cents]
    zs = [c.z for c in cents]
    spans = (max(xs) - min(xs), max(ys) - min(ys), max(zs) - min(zs))
    axis = spans.index(max(spans))
    key = (lambda t: t.centroid.x) if axis == 0 else (lambda t: t.centroid.y) if axis == 1 else (lambda t: t.centroid.z)
    ordered = sorted(triangles, key=key)
    mid = len(ordered) // 2
    left = build_bvh(ordered[:mid], max_leaf=max_leaf)
    right = build_bvh(ordered[mid:], max_leaf=max_leaf)
    children = [n.aabb for n in (left, right) if n is not None]
    if not children:
        return None
    return BVHNode(aabb=merge_aabbs(children), left=left, right=right)


def query_sphere(node: Optional[BVHNode], center: Vector3, radius: float) -> List[Triangle]:
    """Candidate triangles whose leaf bounds touch the sphere."""
    if node is None:
        return []
    if not node.aabb.intersects_sphere(center, radius):
        return []
    if node.triangles is not None:
        return node.triangles
    out: List[Triangle] = []
    out.extend(query_sphere(node.left, center, radius))
    out.extend(query_sphere(node.right, center, radius))
    return out


def closest_point_on_triangle(p: Vector3, tri: Triangle) -> Vector3:
    # Voronoi-region walk (Ericson, Real-Time Collision Detection 5.1.5)
    a, b, c = tri.a, tri.b, tri.c
    ab = b - a
    ac = c - a
    ap = p - a
    d1 = ab.dot(ap)
    d2 = ac.dot(ap)
    if d1 <= 0.0 and d2 <= 0.0:
        return a

    bp = p - b
    d3 = ab.dot(bp)
    d4 = ac.dot(bp)
    if d3 >= 0.0 and d4 <= d3:
        return b

    vc = d1 * d4 - d3 * d2
    if vc <= 0.0 and d1 >= 0.0 and d3 <= 0.0:
        v = d1 / (d1 - d3)
        return a + ab * v

    cp = p - c
    d5 = ab.dot(cp)
    d6 = ac.dot(cp)
    if d6 >= 0.0 and d5 <= d6:
        return c

    vb = d5 * d2 - d1 * d6
    if vb <= 0.0 and d2 >= 0.0 and d6 <= 0.0:
        w = d2 / (d2 - d6)
        return a + ac * w

    va = d3 * d6 - d5 * d4
    if va <= 0.0 and (d4 - d3) >= 0.0 and (d5 - d6) >= 0.0:
        w = (d4 - d3) / ((d4 - d3) + (d5 - d6))
        return b + (c - b) * w

    denom = 1.0 / (va + vb + vc)
    v = vb * denom
    w = vc * denom
    return a + ab * v + ac * w


def sphere_intersects_triangle(center: Vector3, radius: float, tri: Triangle) -> bool:
    q = closest_point_on_triangle(center, tri)
    return (q - center).length_squared() <= radius * radius


def any_overlap(node: Optional[BVHNode], center: Vector3, radius: float) -> bool:
    if node is None:
        return False
    for tri in query_sphere(node, center, radius):
        if sphere_intersects_triangle(center, radius, tri):
            return True
    return False


def triangulate_surfaces(surfaces: List[Surface]) -> List[Triangle]:
    """Fan-triangulate surface polygons, dropping degenerate triangles."""
    tris: List[Triangle] = []
    for s in surfaces:
        verts = s.polygon.vertices
        v0 = verts[0]
        for i in range(1, len(verts) - 1):
            a, b = verts[i], verts[i + 1]
            if (a - v0).cross(b - v0).length() * 0.5 <= EPS_AREA:
                continue
            tris.append(Triangle(a=v0, b=a, c=b, payload=s.id))
    return tris
