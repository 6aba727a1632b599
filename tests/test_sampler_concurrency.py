from __future__ import annotations

import threading

import pytest

from probeplacer.collision.colliders import CollisionWorld, SphereCollider
from probeplacer.core.hashing import hash_point_set
from probeplacer.geometry.core import Transform, Vector3
from probeplacer.placement.errors import SamplingCancelled
from probeplacer.placement.grid import sample_probe_grid


def _world() -> CollisionWorld:
    return CollisionWorld(
        [
            SphereCollider(center=Vector3(0.0, 0.0, 0.0), radius=0.6),
            SphereCollider(center=Vector3(1.5, -1.0, 0.5), radius=0.4),
        ]
    )


def test_repeated_runs_are_identical() -> None:
    xf = Transform.from_euler_zyx(Vector3(0.1, 0.2, 0.3), yaw_deg=20.0, pitch_deg=0.0, roll_deg=0.0)
    a = sample_probe_grid((4.0, 3.0, 2.0), 0.5, xf, _world())
    b = sample_probe_grid((4.0, 3.0, 2.0), 0.5, xf, _world())
    assert a == b
    assert hash_point_set(a) == hash_point_set(b)


def test_worker_count_does_not_change_result() -> None:
    serial = sample_probe_grid((4.0, 3.0, 2.0), 0.25, oracle=_world())
    parallel = sample_probe_grid((4.0, 3.0, 2.0), 0.25, oracle=_world(), workers=4)
    assert parallel == serial


def test_progress_reports_every_x_slice() -> None:
    seen = []
    sample_probe_grid((2.0, 1.0, 1.0), 1.0, avoid_intersection=False, progress=lambda done, total: seen.append((done, total)))
    assert seen == [(1, 3), (2, 3), (3, 3)]


def test_cancel_check_aborts_serial_run() -> None:
    calls = {"n": 0}

    def should_cancel() -> bool:
        calls["n"] += 1
        return calls["n"] > 5

    with pytest.raises(SamplingCancelled):
        sample_probe_grid((2.0, 2.0, 2.0), 1.0, avoid_intersection=False, should_cancel=should_cancel)
    assert calls["n"] == 6


def test_cancel_event_aborts_parallel_run() -> None:
    stop = threading.Event()
    stop.set()
    with pytest.raises(SamplingCancelled):
        sample_probe_grid((2.0, 2.0, 2.0), 0.5, oracle=_world(), workers=3, should_cancel=stop.is_set)


def test_cancellation_is_not_a_value_error() -> None:
    stop = threading.Event()
    stop.set()
    with pytest.raises(SamplingCancelled) as info:
        sample_probe_grid((1.0, 1.0, 1.0), 1.0, avoid_intersection=False, should_cancel=stop.is_set)
    assert not isinstance(info.value, ValueError)


def test_oracle_errors_propagate_from_workers() -> None:
    def broken(pos, radius, mask):
        raise RuntimeError("physics scene unloaded")

    with pytest.raises(RuntimeError, match="unloaded"):
        sample_probe_grid((2.0, 2.0, 2.0), 1.0, oracle=broken, workers=2)
