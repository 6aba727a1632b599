"""
Regular 3D probe grids over an anchor-local box.

The box is centred on the anchor origin. Every axis is walked from -size/2
to +size/2 inclusive in steps of ``spacing``; each candidate is mapped to
world space and, when avoidance is enabled, rejected if the collision oracle
reports geometry within the avoidance radius. Accepted points are returned in
local space, in x-major / y / z enumeration order.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, Union

from probeplacer.collision.oracle import CollisionOracle
from probeplacer.geometry.core import Transform, Vector3
from probeplacer.geometry.layers import LayerMask
from probeplacer.geometry.tolerance import EPS_GRID
from probeplacer.placement.errors import InvalidBoxSize, InvalidSpacing, SamplingCancelled

logger = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]
ProgressCallback = Callable[[int, int], None]


class AxisStepping(str, Enum):
    """How successive coordinates along one axis are produced."""

    # Running sum: v, v + s, v + 2s, ... while v <= max (drift accumulates).
    ACCUMULATE = "accumulate"
    # min + i * s for i in [0, floor((max - min) / s)].
    INDEXED = "indexed"


class PointTransform(Protocol):
    def transform_point(self, p: Vector3) -> Vector3: ...


@dataclass(frozen=True)
class Box:
    """Axis-aligned box centred on the local origin, given by its full extents."""

    size: Vector3

    @classmethod
    def from_size(cls, x: float, y: float, z: float) -> "Box":
        return cls(Vector3(float(x), float(y), float(z)))

    @property
    def min_corner(self) -> Vector3:
        return -self.size / 2.0

    @property
    def max_corner(self) -> Vector3:
        return self.size / 2.0

    def contains(self, p: Vector3, eps: float = 1e-9) -> bool:
        lo, hi = self.min_corner, self.max_corner
        return (
            lo.x - eps <= p.x <= hi.x + eps
            and lo.y - eps <= p.y <= hi.y + eps
            and lo.z - eps <= p.z <= hi.z + eps
        )


BoxLike = Union[Box, Vector3, Sequence[float]]


def as_box(box: BoxLike) -> Box:
    if isinstance(box, Box):
        return box
    return Box(Vector3.coerce(box))


def validate_spacing(spacing: float) -> float:
    """Spacing as a float; NaN and values <= 0 raise InvalidSpacing (+inf gives one sample per axis)."""
    s = float(spacing)
    if math.isnan(s) or s <= 0.0:
        raise InvalidSpacing(spacing)
    return s


def effective_size(box: Box) -> Vector3:
    """Size actually sampled: non-finite components fail, negative ones clamp to zero."""
    size = box.size
    if not size.is_finite():
        raise InvalidBoxSize(size.to_tuple())
    if size.x < 0.0 or size.y < 0.0 or size.z < 0.0:
        logger.warning("Negative box size %s clamped to zero width", size.to_tuple())
        return Vector3(max(size.x, 0.0), max(size.y, 0.0), max(size.z, 0.0))
    return size


def axis_values(
    minimum: float,
    maximum: float,
    spacing: float,
    stepping: AxisStepping = AxisStepping.ACCUMULATE,
) -> List[float]:
    """Coordinates visited along one axis, upper bound inclusive."""
    s = validate_spacing(spacing)
    lo = float(minimum)
    hi = float(maximum)
    if AxisStepping(stepping) is AxisStepping.INDEXED:
        if hi < lo:
            return []
        n = int(math.floor((hi - lo) / s + EPS_GRID))
        # First sample is lo itself: 0 * inf is NaN.
        return [lo] + [lo + i * s for i in range(1, n + 1)]

    out: List[float] = []
    v = lo
    while v <= hi:
        out.append(v)
        nxt = v + s
        if nxt == v:
            # Spacing is below float resolution at this magnitude.
            raise InvalidSpacing(spacing)
        v = nxt
    return out


def grid_axes(box: BoxLike, spacing: float, stepping: AxisStepping = AxisStepping.ACCUMULATE) -> tuple[List[float], List[float], List[float]]:
    b = as_box(box)
    s = validate_spacing(spacing)
    size = effective_size(b)
    xs = axis_values(-size.x / 2.0, size.x / 2.0, s, stepping)
    ys = axis_values(-size.y / 2.0, size.y / 2.0, s, stepping)
    zs = axis_values(-size.z / 2.0, size.z / 2.0, s, stepping)
    return xs, ys, zs


def grid_point_count(box: BoxLike, spacing: float, stepping: AxisStepping = AxisStepping.ACCUMULATE) -> int:
    """Number of candidates the sampler would visit, without querying any oracle."""
    xs, ys, zs = grid_axes(box, spacing, stepping)
    return len(xs) * len(ys) * len(zs)


def _sample_slice(
    x: float,
    ys: Sequence[float],
    zs: Sequence[float],
    transform: PointTransform,
    oracle: Optional[CollisionOracle],
    radius: float,
    mask: LayerMask,
    should_cancel: Optional[CancelCheck],
) -> List[Vector3]:
    kept: List[Vector3] = []
    for y in ys:
        for z in zs:
            if should_cancel is not None and should_cancel():
                raise SamplingCancelled("Probe sampling cancelled")
            pos = Vector3(x, y, z)
            if oracle is not None:
                world = transform.transform_point(pos)
                if oracle(world, radius, mask):
                    continue
            kept.append(pos)
    return kept


def sample_probe_grid(
    box: BoxLike,
    spacing: float,
    transform: Optional[PointTransform] = None,
    oracle: Optional[CollisionOracle] = None,
    *,
    avoid_intersection: bool = True,
    avoidance_radius: float = 0.2,
    mask: Optional[LayerMask] = None,
    stepping: AxisStepping = AxisStepping.ACCUMULATE,
    workers: int = 1,
    should_cancel: Optional[CancelCheck] = None,
    progress: Optional[ProgressCallback] = None,
) -> List[Vector3]:
    """
    Enumerate the probe grid of ``box`` and keep the points clear of geometry.

    Args:
        box: Box, Vector3 or 3-sequence giving the full local extents.
        spacing: Distance between neighbouring probes; must be > 0.
        transform: Local-to-world mapping of the anchor (identity when None).
        oracle: Collision query ``(world_pos, radius, mask) -> bool``. When None,
            or when ``avoid_intersection`` is False, every candidate is kept.
        avoidance_radius: Required clearance in world units (negative -> 0).
        mask: Layers that count as obstacles (all layers when None).
        stepping: Axis stepping mode, see AxisStepping.
        workers: Thread count for oracle queries; x-slices are merged back in
            order so the result does not depend on it.
        should_cancel: Polled before every candidate; raises SamplingCancelled.
        progress: Called with (finished_slices, total_slices).

    Returns:
        Accepted points in anchor-local space.
    """
    xs, ys, zs = grid_axes(box, spacing, stepping)
    xf = transform if transform is not None else Transform.identity()
    active_oracle = oracle if avoid_intersection else None
    radius = max(0.0, float(avoidance_radius))
    layer_mask = mask if mask is not None else LayerMask.everything()
    total = len(xs)

    logger.debug(
        "Sampling probe grid %dx%dx%d (spacing=%g, stepping=%s, avoidance=%s)",
        len(xs),
        len(ys),
        len(zs),
        float(spacing),
        AxisStepping(stepping).value,
        active_oracle is not None,
    )

    slices: List[List[Vector3]] = []
    if int(workers) <= 1 or total <= 1:
        for i, x in enumerate(xs):
            slices.append(_sample_slice(x, ys, zs, xf, active_oracle, radius, layer_mask, should_cancel))
            if progress is not None:
                progress(i + 1, total)
    else:
        with ThreadPoolExecutor(max_workers=int(workers), thread_name_prefix="probe-sampler") as pool:
            futures: List[Future[List[Vector3]]] = [
                pool.submit(_sample_slice, x, ys, zs, xf, active_oracle, radius, layer_mask, should_cancel)
                for x in xs
            ]
            try:
                for i, future in enumerate(futures):
                    slices.append(future.result())
                    if progress is not None:
                        progress(i + 1, total)
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    points = [p for chunk in slices for p in chunk]
    candidates = len(xs) * len(ys) * len(zs)
    logger.debug("Probe grid kept %d of %d candidates", len(points), candidates)
    return points
