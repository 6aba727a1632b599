from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from probeplacer.geometry.core import Vector3
from probeplacer.geometry.layers import LayerMask
from probeplacer.placement.grid import AxisStepping, Box, effective_size, validate_spacing


@dataclass(frozen=True)
class PlacerSettings:
    """Parameters of one probe generation run. The mask defaults to every layer."""

    size: Vector3 = field(default_factory=Vector3.one)
    spacing: float = 1.0
    avoid_intersection: bool = True
    margin: float = 0.2
    mask: LayerMask = field(default_factory=LayerMask.everything)
    stepping: AxisStepping = AxisStepping.ACCUMULATE
    workers: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", Vector3.coerce(self.size))
        object.__setattr__(self, "margin", max(0.0, float(self.margin)))
        object.__setattr__(self, "stepping", AxisStepping(self.stepping))
        object.__setattr__(self, "workers", max(1, int(self.workers)))

    @property
    def box(self) -> Box:
        return Box(self.size)

    def validate(self) -> "PlacerSettings":
        validate_spacing(self.spacing)
        effective_size(self.box)
        return self

    def with_size(self, size: Vector3) -> "PlacerSettings":
        return replace(self, size=size)

    def to_dict(self) -> Dict[str, object]:
        return {
            "size": list(self.size.to_tuple()),
            "spacing": self.spacing,
            "avoid_intersection": self.avoid_intersection,
            "margin": self.margin,
            "mask": self.mask.bits,
            "stepping": self.stepping.value,
            "workers": self.workers,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, object], base: Optional["PlacerSettings"] = None) -> "PlacerSettings":
        """Overlay known keys of ``d`` onto ``base`` (defaults when None)."""
        out = base or cls()
        kwargs: Dict[str, object] = {}
        if "size" in d:
            kwargs["size"] = Vector3.coerce(d["size"])
        if "spacing" in d:
            kwargs["spacing"] = float(d["spacing"])  # type: ignore[arg-type]
        if "avoid_intersection" in d:
            kwargs["avoid_intersection"] = bool(d["avoid_intersection"])
        if "margin" in d:
            kwargs["margin"] = float(d["margin"])  # type: ignore[arg-type]
        if "mask" in d:
            kwargs["mask"] = LayerMask(int(d["mask"]))  # type: ignore[arg-type]
        if "stepping" in d:
            kwargs["stepping"] = AxisStepping(str(d["stepping"]))
        if "workers" in d:
            kwargs["workers"] = int(d["workers"])  # type: ignore[arg-type]
        return replace(out, **kwargs)
