from __future__ import annotations

import random
import time

from probeplacer.collision.colliders import CollisionWorld, MeshCollider
from probeplacer.geometry.bvh import Triangle, sphere_intersects_triangle
from probeplacer.geometry.core import Vector3
from probeplacer.geometry.layers import LayerMask
from probeplacer.placement.grid import Box, sample_probe_grid


def _random_triangles(n: int, seed: int = 7) -> list[Triangle]:
    rng = random.Random(seed)
    tris: list[Triangle] = []
    for _ in range(n):
        x = rng.uniform(-10.0, 10.0)
        y = rng.uniform(-10.0, 10.0)
        z = rng.uniform(-4.0, 4.0)
        s = rng.uniform(0.2, 1.2)
        tris.append(
            Triangle(
                a=Vector3(x, y, z),
                b=Vector3(x + s, y, z),
                c=Vector3(x, y + s, z + 0.1 * s),
            )
        )
    return tris


class _BruteForce:
    def __init__(self, tris: list[Triangle]) -> None:
        self.tris = tris

    def __call__(self, pos: Vector3, radius: float, mask: LayerMask) -> bool:
        return any(sphere_intersects_triangle(pos, radius, t) for t in self.tris)


def main() -> None:
    tris = _random_triangles(2000)
    box = Box.from_size(20.0, 20.0, 8.0)
    spacing = 1.0

    t0 = time.perf_counter()
    brute = sample_probe_grid(box, spacing, oracle=_BruteForce(tris), avoidance_radius=0.3)
    t1 = time.perf_counter()
    world = CollisionWorld([MeshCollider(tris)])
    bvh = sample_probe_grid(box, spacing, oracle=world, avoidance_radius=0.3)
    t2 = time.perf_counter()
    threaded = sample_probe_grid(box, spacing, oracle=world, avoidance_radius=0.3, workers=4)
    t3 = time.perf_counter()

    brute_s = t1 - t0
    bvh_s = t2 - t1
    speedup = brute_s / bvh_s if bvh_s > 0 else float("inf")

    print("Probe Sampling Benchmark")
    print(f"Triangles:  {len(tris)}")
    print(f"Bruteforce: {brute_s:.4f}s ({len(brute)} probes)")
    print(f"BVH:        {bvh_s:.4f}s ({len(bvh)} probes)")
    print(f"BVH x4:     {t3 - t2:.4f}s ({len(threaded)} probes)")
    print(f"Speedup:    {speedup:.2f}x")


if __name__ == "__main__":
    main()
