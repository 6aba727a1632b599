from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from probeplacer.collision.oracle import CollisionOracle
from probeplacer.geometry.core import Transform, Vector3
from probeplacer.placement.bounds import PointsLike, estimate_box_size, points_to_array
from probeplacer.placement.config import PlacerSettings
from probeplacer.placement.grid import sample_probe_grid

logger = logging.getLogger(__name__)


@dataclass
class ProbeGroup:
    """Scene anchor owning a local frame and its persisted probe positions."""

    name: str
    transform: Transform = field(default_factory=Transform.identity)
    probe_positions: List[Vector3] = field(default_factory=list)

    @property
    def probe_count(self) -> int:
        return len(self.probe_positions)

    def replace_positions(self, points: Sequence[Vector3]) -> None:
        self.probe_positions = list(points)

    def world_positions(self) -> List[Vector3]:
        return [self.transform.transform_point(p) for p in self.probe_positions]


def suggest_box_size(points: PointsLike, default: Vector3) -> Vector3:
    """Inferred box for an existing point set, or ``default`` when there are no points."""
    arr = points_to_array(points)
    if arr.shape[0] == 0:
        return default
    return estimate_box_size(arr)


def settings_for_group(group: ProbeGroup, base: Optional[PlacerSettings] = None) -> PlacerSettings:
    settings = base or PlacerSettings()
    return settings.with_size(suggest_box_size(group.probe_positions, settings.size))


def generate_probes(
    group: ProbeGroup,
    settings: PlacerSettings,
    oracle: Optional[CollisionOracle] = None,
    *,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> List[Vector3]:
    """Run the sampler in the group's frame. The caller decides whether to commit the result."""
    settings.validate()
    points = sample_probe_grid(
        settings.box,
        settings.spacing,
        group.transform,
        oracle,
        avoid_intersection=settings.avoid_intersection,
        avoidance_radius=settings.margin,
        mask=settings.mask,
        stepping=settings.stepping,
        workers=settings.workers,
        should_cancel=should_cancel,
    )
    logger.info("Generated %d probes for '%s' (previously %d)", len(points), group.name, group.probe_count)
    return points
