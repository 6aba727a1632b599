from __future__ import annotations

import json
import math
import hashlib
from dataclasses import is_dataclass, asdict
from typing import Any, Sequence

from probeplacer.geometry.core import Vector3


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _normalize(obj: Any) -> Any:
    if isinstance(obj, Vector3):
        return [_normalize(obj.x), _normalize(obj.y), _normalize(obj.z)]
    if is_dataclass(obj) and not isinstance(obj, type):
        return _normalize(asdict(obj))
    if isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_normalize(v) for v in obj]
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN/Inf not allowed in stable JSON")
        # -0.0 and 0.0 hash the same
        return float(f"{obj:.12g}") + 0.0
    return obj


def stable_json_dumps(obj: Any) -> str:
    normalized = _normalize(obj)
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_point_set(points: Sequence[Vector3]) -> str:
    """Order-sensitive digest of a point list, stable to 12 significant digits."""
    data = stable_json_dumps(list(points)).encode("utf-8")
    return sha256_bytes(data)
