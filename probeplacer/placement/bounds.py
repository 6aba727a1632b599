from __future__ import annotations

from typing import Iterable, Sequence, Union

import numpy as np

from probeplacer.geometry.core import Vector3


PointsLike = Union[np.ndarray, Sequence[Vector3], Iterable[Sequence[float]]]


def points_to_array(points: PointsLike) -> np.ndarray:
    """Normalise Vector3s, 3-tuples or an array into an (N, 3) float array."""
    if isinstance(points, np.ndarray):
        return np.asarray(points, dtype=float).reshape(-1, 3)
    rows = [p.to_tuple() if isinstance(p, Vector3) else tuple(float(c) for c in p) for p in points]
    if not rows:
        return np.zeros((0, 3), dtype=float)
    return np.asarray(rows, dtype=float).reshape(-1, 3)


def estimate_box_size(points: PointsLike) -> Vector3:
    """
    Smallest origin-centred box (full extents) that encloses every point.

    Each axis is handled independently: twice the largest absolute coordinate.
    An empty point set yields a zero size; whether to keep a previous size
    instead is up to the caller.
    """
    arr = points_to_array(points)
    if arr.shape[0] == 0:
        return Vector3.zero()
    half = np.max(np.abs(arr), axis=0)
    return Vector3.from_array(half * 2.0)
