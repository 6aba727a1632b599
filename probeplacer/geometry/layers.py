from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional


LAYER_COUNT = 32
_ALL_BITS = (1 << LAYER_COUNT) - 1

# Built-in layer names; indices not listed here are free for user layers.
BUILTIN_LAYERS: dict[str, int] = {
    "Default": 0,
    "TransparentFX": 1,
    "Ignore Raycast": 2,
    "Water": 4,
    "UI": 5,
}


def _check_layer(layer: int) -> int:
    idx = int(layer)
    if idx < 0 or idx >= LAYER_COUNT:
        raise ValueError(f"Layer index must be in [0, {LAYER_COUNT - 1}], got {layer}")
    return idx


@dataclass(frozen=True)
class LayerMask:
    """Bitset selecting which geometry layers take part in collision queries."""

    bits: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "bits", int(self.bits) & _ALL_BITS)

    @classmethod
    def everything(cls) -> "LayerMask":
        return cls(_ALL_BITS)

    @classmethod
    def nothing(cls) -> "LayerMask":
        return cls(0)

    @classmethod
    def from_layers(cls, layers: Iterable[int]) -> "LayerMask":
        bits = 0
        for layer in layers:
            bits |= 1 << _check_layer(layer)
        return cls(bits)

    @classmethod
    def from_names(cls, names: Iterable[str], table: Optional[Mapping[str, int]] = None) -> "LayerMask":
        lookup = dict(BUILTIN_LAYERS)
        if table:
            lookup.update(table)
        indices = []
        for name in names:
            if name not in lookup:
                raise KeyError(f"Unknown layer name: {name}")
            indices.append(lookup[name])
        return cls.from_layers(indices)

    def contains(self, layer: int) -> bool:
        return bool(self.bits & (1 << _check_layer(layer)))

    def layers(self) -> Iterator[int]:
        return (i for i in range(LAYER_COUNT) if self.bits & (1 << i))

    def is_empty(self) -> bool:
        return self.bits == 0

    def __or__(self, other: "LayerMask") -> "LayerMask":
        return LayerMask(self.bits | other.bits)

    def __and__(self, other: "LayerMask") -> "LayerMask":
        return LayerMask(self.bits & other.bits)

    def __invert__(self) -> "LayerMask":
        return LayerMask(~self.bits & _ALL_BITS)


def object_layer(obj: object, default: int = 0) -> int:
    lid = getattr(obj, "layer", None)
    if lid is None:
        return default
    return _check_layer(lid)
