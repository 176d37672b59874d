from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from beaconmap.core.geometry import RigidTransform
from beaconmap.core.rotations import is_proper_rotation
from beaconmap.scans import Scanner

SCHEMA_VERSION = "beaconmap.resolution.v0"


def _to_int_matrix(x: Any, shape: tuple[int, ...]) -> np.ndarray:
    arr = np.asarray(x)
    if arr.size == 0 and int(np.prod(shape)) == 0:
        return np.zeros(shape, dtype=np.int64)
    if arr.size != int(np.prod(shape)) or not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"expected {shape} integer values")
    return arr.astype(np.int64).reshape(shape)


def save_resolution(path: Path, scanners: Sequence[Scanner]) -> Path:
    """
    Save placed scanners as JSON: per scanner its id, the rotation and
    translation into the global frame, and its local beacons.
    """
    path = Path(path)
    entries: list[dict[str, Any]] = []
    for s in scanners:
        if s.transform is None:
            raise ValueError(f"scanner {s.scanner_id} is not placed")
        entries.append(
            {
                "id": int(s.scanner_id),
                "rotation": s.transform.rotation.tolist(),
                "translation": s.transform.translation.tolist(),
                "beacons": s.beacon_array.tolist(),
            }
        )

    meta = {"schema_version": SCHEMA_VERSION, "scanners": entries}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(meta, indent=2), encoding="utf-8")
    return path


def load_resolution(path: Path) -> list[Scanner]:
    meta = json.loads(Path(path).read_text(encoding="utf-8"))
    if str(meta.get("schema_version")) != SCHEMA_VERSION:
        raise ValueError("unsupported resolution schema")

    out: list[Scanner] = []
    for entry in meta["scanners"]:
        rotation = _to_int_matrix(entry["rotation"], (3, 3))
        if not is_proper_rotation(rotation):
            raise ValueError(f"scanner {entry['id']}: rotation is not one of the 24 axis rotations")
        translation = _to_int_matrix(entry["translation"], (3,))
        beacons = entry["beacons"]
        scanner = Scanner.from_points(int(entry["id"]), _to_int_matrix(beacons, (len(beacons), 3)))
        scanner.place(RigidTransform(rotation, translation))
        out.append(scanner)
    return out
