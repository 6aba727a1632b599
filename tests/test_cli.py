from __future__ import annotations

import json
from pathlib import Path

from probeplacer.cli import main


def test_cli_estimate_prints_size(tmp_path: Path, capsys) -> None:
    pts = tmp_path / "pts.json"
    pts.write_text(json.dumps({"points": [[1.0, -2.0, 0.5], [0.0, 1.0, -1.0]]}), encoding="utf-8")
    assert main(["estimate", str(pts)]) == 0
    out = capsys.readouterr().out
    assert "Points: 2" in out
    assert "Size:   2 4 2" in out


def test_cli_estimate_empty_uses_default(tmp_path: Path, capsys) -> None:
    pts = tmp_path / "empty.json"
    pts.write_text("[]", encoding="utf-8")
    assert main(["estimate", str(pts), "--default", "3", "3", "3"]) == 0
    assert "Size:   3 3 3" in capsys.readouterr().out


def test_cli_grid_writes_points_with_room_colliders(tmp_path: Path, capsys) -> None:
    colliders = tmp_path / "scene.json"
    colliders.write_text(json.dumps([{"type": "room", "width": 4, "length": 4, "height": 3}]), encoding="utf-8")
    out_path = tmp_path / "out" / "probes.json"
    rc = main(
        [
            "grid",
            "--size", "4", "4", "3",
            "--spacing", "1",
            "--position", "2", "2", "1.5",
            "--colliders", str(colliders),
            "--out", str(out_path),
        ]
    )
    assert rc == 0
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["count"] == 18
    assert len(payload["points"]) == 18
    stdout = capsys.readouterr().out
    assert "Candidates: 100" in stdout
    assert "Accepted:   18" in stdout


def test_cli_grid_layer_names_filter_colliders(tmp_path: Path, capsys) -> None:
    colliders = tmp_path / "scene.json"
    colliders.write_text(json.dumps([{"type": "sphere", "center": [0, 0, 0], "radius": 5, "layer": 4}]), encoding="utf-8")
    rc = main(["grid", "--size", "2", "2", "2", "--colliders", str(colliders), "--layers", "Default"])
    assert rc == 0
    assert "Accepted:   27" in capsys.readouterr().out


def test_cli_grid_rejects_zero_spacing(capsys) -> None:
    assert main(["grid", "--spacing", "0"]) == 2
    assert "spacing" in capsys.readouterr().err


def test_cli_missing_file_is_an_error(tmp_path: Path, capsys) -> None:
    assert main(["estimate", str(tmp_path / "nope.json")]) == 2
    assert "File not found" in capsys.readouterr().err
