from __future__ import annotations

import pytest

from probeplacer.core.hashing import hash_point_set, stable_json_dumps
from probeplacer.geometry.core import Vector3


def test_hash_ignores_float_noise_and_signed_zero() -> None:
    a = [Vector3(0.1 + 0.2, -0.0, 1.0)]
    b = [Vector3(0.3, 0.0, 1.0)]
    assert hash_point_set(a) == hash_point_set(b)


def test_hash_is_order_sensitive() -> None:
    p, q = Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0)
    assert hash_point_set([p, q]) != hash_point_set([q, p])


def test_stable_json_rejects_nan() -> None:
    with pytest.raises(ValueError):
        stable_json_dumps({"x": float("nan")})
