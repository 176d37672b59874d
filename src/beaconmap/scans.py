from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import numpy as np

from beaconmap.core.geometry import Point, RigidTransform, as_point_array

_HEADER_RE = re.compile(r"^---\s*scanner\s+(-?\d+)\s*---$")


class ScanParseError(ValueError):
    pass


@dataclass(eq=False)
class Scanner:
    """
    One scanner report: an id, its beacons in local coordinates and, once
    placed, the transform taking local coordinates into the global frame.
    """

    scanner_id: int
    beacons: frozenset[Point]
    transform: RigidTransform | None = None
    _beacon_array: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.beacons = frozenset((int(x), int(y), int(z)) for x, y, z in self.beacons)
        arr = as_point_array(sorted(self.beacons))
        arr.setflags(write=False)
        self._beacon_array = arr

    @classmethod
    def from_points(cls, scanner_id: int, points: Iterable[Point] | np.ndarray) -> "Scanner":
        pts = as_point_array(points)
        return cls(scanner_id, frozenset((int(x), int(y), int(z)) for x, y, z in pts))

    @property
    def beacon_array(self) -> np.ndarray:
        """Beacons as a sorted (N,3) int64 array."""
        return self._beacon_array

    @property
    def is_placed(self) -> bool:
        return self.transform is not None

    def place(self, transform: RigidTransform) -> None:
        if self.transform is not None:
            raise ValueError(f"scanner {self.scanner_id} is already placed")
        self.transform = transform

    def __len__(self) -> int:
        return len(self.beacons)


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ScanParseError(msg)


def load_scanner_report(path: Path) -> list[Scanner]:
    return parse_scanner_report(Path(path).read_text(encoding="utf-8"))


def parse_scanner_report(text: str) -> list[Scanner]:
    """
    Parse blocks of the form

        --- scanner 0 ---
        404,-588,-901
        528,-643,409

    separated by blank lines. Scanners are returned in file order.
    """
    blocks: list[tuple[int, list[Point]]] = []
    current: list[Point] | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            current = None
            continue

        header = _HEADER_RE.match(line)
        if header is not None:
            sid = int(header.group(1))
            _require(all(sid != b[0] for b in blocks), f"line {lineno}: duplicate scanner id {sid}")
            current = []
            blocks.append((sid, current))
            continue

        _require(current is not None, f"line {lineno}: beacon outside a scanner block: {line!r}")
        parts = line.split(",")
        _require(len(parts) == 3, f"line {lineno}: expected x,y,z, got {line!r}")
        try:
            x, y, z = (int(p) for p in parts)
        except ValueError as e:
            raise ScanParseError(f"line {lineno}: non-integer coordinate in {line!r}") from e
        current.append((x, y, z))  # type: ignore[union-attr]

    return [Scanner(sid, frozenset(points)) for sid, points in blocks]


def format_scanner_report(scanners: Iterable[Scanner]) -> str:
    """Inverse of `parse_scanner_report` (beacons in sorted order)."""
    chunks = []
    for s in scanners:
        lines = [f"--- scanner {s.scanner_id} ---"]
        lines.extend(f"{x},{y},{z}" for x, y, z in sorted(s.beacons))
        chunks.append("\n".join(lines))
    return "\n\n".join(chunks) + "\n"
