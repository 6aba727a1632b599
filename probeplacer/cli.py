from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List

from probeplacer.anchor import ProbeGroup, generate_probes, suggest_box_size
from probeplacer.collision.colliders import CollisionWorld
from probeplacer.core.hashing import hash_point_set
from probeplacer.core.logging import setup_logging
from probeplacer.geometry.core import Transform, Vector3
from probeplacer.geometry.layers import LayerMask
from probeplacer.placement.config import PlacerSettings
from probeplacer.placement.grid import AxisStepping, grid_point_count


def _load_json(path_arg: str) -> Any:
    path = Path(path_arg).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def _points_from_payload(payload: Any) -> List[Vector3]:
    rows = payload.get("points", []) if isinstance(payload, dict) else payload
    return [Vector3.coerce(r) for r in rows]


def _cmd_estimate(args: argparse.Namespace) -> int:
    points = _points_from_payload(_load_json(args.file))
    size = suggest_box_size(points, Vector3.coerce(args.default))
    print(f"Points: {len(points)}")
    print(f"Size:   {size.x:g} {size.y:g} {size.z:g}")
    return 0


def _build_mask(args: argparse.Namespace) -> LayerMask:
    if args.layers:
        return LayerMask.from_names(args.layers)
    if args.mask is not None:
        return LayerMask(int(args.mask, 0))
    return LayerMask.everything()


def _cmd_grid(args: argparse.Namespace) -> int:
    settings = PlacerSettings(
        size=Vector3.coerce(args.size),
        spacing=args.spacing,
        avoid_intersection=not args.no_avoid,
        margin=args.margin,
        mask=_build_mask(args),
        stepping=AxisStepping.INDEXED if args.indexed else AxisStepping.ACCUMULATE,
        workers=args.workers,
    ).validate()

    yaw, pitch, roll = args.rotation
    transform = Transform.from_euler_zyx(
        Vector3.coerce(args.position), yaw_deg=yaw, pitch_deg=pitch, roll_deg=roll, scale=Vector3.coerce(args.scale)
    )
    group = ProbeGroup(name=args.name, transform=transform)

    world = None
    if args.colliders:
        world = CollisionWorld.from_dicts(_load_json(args.colliders))

    candidates = grid_point_count(settings.box, settings.spacing, settings.stepping)
    points = generate_probes(group, settings, world)
    digest = hash_point_set(points)

    print("Probe Grid")
    print(f"  Candidates: {candidates}")
    print(f"  Accepted:   {len(points)}")
    print(f"  Digest:     {digest}")

    if args.out:
        outpath = Path(args.out).expanduser().resolve()
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "anchor": group.name,
            "settings": settings.to_dict(),
            "count": len(points),
            "digest": digest,
            "points": [list(p.to_tuple()) for p in points],
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"  Saved:      {outpath}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="probeplacer")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    e = sub.add_parser("estimate", help="Infer a box size from an existing point set (JSON).")
    e.add_argument("file", help="JSON list of [x, y, z] or {\"points\": [...]}")
    e.add_argument("--default", nargs=3, type=float, default=(1.0, 1.0, 1.0), metavar=("X", "Y", "Z"), help="Size used when the point set is empty")
    e.set_defaults(func=_cmd_estimate)

    g = sub.add_parser("grid", help="Generate a probe grid and optionally save it as JSON.")
    g.add_argument("--size", nargs=3, type=float, default=(1.0, 1.0, 1.0), metavar=("X", "Y", "Z"))
    g.add_argument("--spacing", type=float, default=1.0)
    g.add_argument("--margin", type=float, default=0.2, help="Clearance to colliders (default: 0.2)")
    g.add_argument("--no-avoid", action="store_true", help="Keep probes regardless of colliders")
    g.add_argument("--colliders", help="JSON list of collider entries (sphere/box/room/mesh)")
    g.add_argument("--layers", nargs="+", help="Layer names that count as obstacles")
    g.add_argument("--mask", help="Raw layer bitmask, e.g. 0x11 (ignored with --layers)")
    g.add_argument("--position", nargs=3, type=float, default=(0.0, 0.0, 0.0), metavar=("X", "Y", "Z"))
    g.add_argument("--rotation", nargs=3, type=float, default=(0.0, 0.0, 0.0), metavar=("YAW", "PITCH", "ROLL"))
    g.add_argument("--scale", nargs=3, type=float, default=(1.0, 1.0, 1.0), metavar=("X", "Y", "Z"))
    g.add_argument("--workers", type=int, default=1)
    g.add_argument("--indexed", action="store_true", help="Use index-based axis stepping")
    g.add_argument("--name", default="ProbeGroup")
    g.add_argument("--out", help="Write accepted points to this JSON file")
    g.set_defaults(func=_cmd_grid)

    args = p.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return int(args.func(args))
    except (ValueError, FileNotFoundError, KeyError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
