from __future__ import annotations

import numpy as np
import pytest

from probeplacer.anchor import suggest_box_size
from probeplacer.geometry.core import Vector3
from probeplacer.placement.bounds import estimate_box_size, points_to_array


def test_estimate_box_size_uses_max_abs_per_axis() -> None:
    pts = [Vector3(1.0, -3.0, 0.5), Vector3(-2.0, 1.0, 0.25), Vector3(0.5, 0.0, -1.5)]
    size = estimate_box_size(pts)
    assert size.x == pytest.approx(4.0)
    assert size.y == pytest.approx(6.0)
    assert size.z == pytest.approx(3.0)


def test_estimate_box_size_accepts_tuples_and_arrays() -> None:
    rows = [(0.5, 0.5, 0.5), (-1.0, 0.0, 0.0)]
    a = estimate_box_size(rows)
    b = estimate_box_size(np.asarray(rows))
    assert a.to_tuple() == pytest.approx((2.0, 1.0, 1.0))
    assert b.to_tuple() == pytest.approx(a.to_tuple())


def test_estimate_box_size_empty_is_zero() -> None:
    assert estimate_box_size([]).to_tuple() == (0.0, 0.0, 0.0)
    assert points_to_array([]).shape == (0, 3)


def test_suggest_box_size_keeps_default_for_empty_group() -> None:
    default = Vector3(1.0, 1.0, 1.0)
    assert suggest_box_size([], default) is default
    assert suggest_box_size([Vector3(0.0, 2.0, 0.0)], default).to_tuple() == pytest.approx((0.0, 4.0, 0.0))


def test_suggest_box_size_consumes_iterator_once() -> None:
    rows = (r for r in [(1.0, 2.0, 3.0)])
    size = suggest_box_size(rows, Vector3(9.0, 9.0, 9.0))
    assert size.to_tuple() == pytest.approx((2.0, 4.0, 6.0))
